'''
Add, remove and detect locale codes in URL paths.

A localized path has the locale's unique code as its first segment after the
application's path base, e.g. ``/shop/de/laptops?page=2`` for path base
``/shop``. All operations here are purely textual and work on the path and
query part of a URL; the caller keeps track of the scheme and host.
'''


def _split_query(path_qs):
    path, sep, query = path_qs.partition('?')
    return path, sep + query


def _remove_path_base(path, path_base):
    ''' Return ``path`` relative to ``path_base``. Paths outside of the path
    base are returned unchanged. '''
    if path_base and (path == path_base or path.startswith(path_base + '/')):
        return path[len(path_base):]
    return path


def _first_segment(relative_path):
    return relative_path.lstrip('/').split('/', 1)[0]


class UrlLocalizer:
    ''' Rewrites URL paths for a fixed set of locales. '''
    def __init__(self, locales):
        '''
        Constructor.

        :param list locales: The locales whose codes are recognized in paths.
        '''
        self._locales = {locale.unique_code.lower(): locale
            for locale in locales or ()}

    def __repr__(self):
        return '<UrlLocalizer codes={}>'.format(','.join(self._locales))

    def detect_locale(self, path_qs, path_base=''):
        '''
        Find the locale named by the first path segment after ``path_base``.

        :param str path_qs: A path, optionally followed by a query string.
        :param str path_base: The application's path base.
        :returns: The matching locale or None.
        :rtype: sitemapgen.entry.Locale
        '''
        if not path_qs:
            return None
        path, _ = _split_query(path_qs)
        segment = _first_segment(_remove_path_base(path, path_base))
        if not segment:
            return None
        return self._locales.get(segment.lower())

    def strip_locale_code(self, path_qs, path_base=''):
        '''
        Remove a locale code segment from a path, if it has one.

        :param str path_qs: A path, optionally followed by a query string.
        :param str path_base: The application's path base.
        :rtype: str
        '''
        path, query = _split_query(path_qs)
        relative = _remove_path_base(path, path_base)
        segment = _first_segment(relative)
        if segment and segment.lower() in self._locales:
            relative = relative.lstrip('/')[len(segment):]
            return path_base + relative + query
        return path + query

    def localize(self, path_qs, path_base, locale):
        '''
        Rewrite a path so that it is addressed to ``locale``: any existing
        locale code is removed and the code of ``locale`` is inserted right
        after ``path_base``.

        :param str path_qs: A path, optionally followed by a query string.
        :param str path_base: The application's path base.
        :param sitemapgen.entry.Locale locale:
        :rtype: str
        '''
        stripped = self.strip_locale_code(path_qs, path_base)
        path, query = _split_query(stripped)
        relative = _remove_path_base(path, path_base)
        if relative and not relative.startswith('/'):
            relative = '/' + relative
        return '{}/{}{}{}'.format(path_base, locale.unique_code, relative,
            query)
