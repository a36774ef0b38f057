import logging

from yarl import URL

from . import UnresolvableRouteError
from .entry import SitemapEntry, UpdateFrequency


logger = logging.getLogger(__name__)


def seo_route_params(slug_resolver, resource):
    '''
    Make a route parameters function for a resource that is addressed by its
    SEO name.

    Slugs are localized, so they are looked up separately for each locale.

    :param sitemapgen.catalog.SlugResolver slug_resolver:
    :param sitemapgen.catalog.Resource resource:
    :returns: A function that maps a locale ID (or None for the default
        locale) to route parameters.
    '''
    def params_for(locale_id):
        return {'SeName': slug_resolver.resolve_slug(resource, locale_id)}
    return params_for


class EntryBuilder:
    ''' Builds sitemap entries, with localized alternates, from routes. '''
    def __init__(self, resolver, localizer, protocol='http', path_base=''):
        '''
        Constructor.

        :param sitemapgen.routes.RouteResolver resolver:
        :param sitemapgen.localization.UrlLocalizer localizer:
        :param str protocol: ``http`` or ``https``.
        :param str path_base: The application's path base.
        '''
        self._resolver = resolver
        self._localizer = localizer
        self._protocol = protocol
        self._path_base = path_base

    def build_entry(self, route_name, route_params, locales, updated_on,
            frequency=UpdateFrequency.WEEKLY):
        '''
        Build the sitemap entry for one page.

        :param str route_name:
        :param route_params: A function that maps a locale ID to route
            parameters, or None if the route takes no parameters.
        :param list locales: Locales to generate alternates for. None or an
            empty list produces an entry without alternates.
        :param datetime updated_on:
        :param UpdateFrequency frequency:
        :rtype: SitemapEntry
        '''
        params = route_params(None) if route_params else None
        location = self._resolver.resolve(route_name, params, self._protocol)
        if not location:
            raise UnresolvableRouteError(route_name, params)

        alternates = list()
        for locale in locales or ():
            alternate = self._localized_url(route_name, route_params, locale)
            if alternate is None:
                logger.debug('No %s URL for route %s (params=%r)',
                    locale.unique_code, route_name, params)
                continue
            alternates.append(alternate)

        return SitemapEntry(location, alternates, frequency, updated_on)

    def _localized_url(self, route_name, route_params, locale):
        params = route_params(locale.id) if route_params else None
        url = self._resolver.resolve(route_name, params, self._protocol)
        if not url:
            return None
        url = URL(url)
        localized = self._localizer.localize(url.raw_path_qs,
            self._path_base, locale)
        return str(url.origin()) + localized
