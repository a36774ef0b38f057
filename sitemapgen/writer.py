'''
Serialize sitemaps and sitemap indexes as XML.

See https://www.sitemaps.org/protocol.html for the document format and
https://developers.google.com/search/docs/specialty/international/localized-versions
for the ``xhtml:link`` alternates.
'''
import logging
from xml.sax.saxutils import XMLGenerator

from yarl import URL

from . import UnresolvableRouteError
from .entry import format_lastmod, utc_now
from .routes import SITEMAP_SHARD_ROUTE


logger = logging.getLogger(__name__)
SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'
XHTML_NS = 'http://www.w3.org/1999/xhtml'
SCHEMA_LOCATION = SITEMAP_NS + \
    ' http://www.sitemaps.org/schemas/sitemap/0.9/sitemap.xsd'
ROOT_ATTRIBUTES = {
    'xmlns': SITEMAP_NS,
    'xmlns:xsi': XSI_NS,
    'xmlns:xhtml': XHTML_NS,
    'xsi:schemaLocation': SCHEMA_LOCATION,
}


class _IndentedXmlWriter:
    ''' Writes indented XML to a stream, one element at a time. '''
    def __init__(self, stream, indent='  '):
        self._xml = XMLGenerator(stream, encoding='utf-8',
            short_empty_elements=True)
        self._indent = indent
        # One flag per open element: does it have child elements?
        self._open = list()

    def start_document(self):
        self._xml.startDocument()

    def end_document(self):
        self._xml.endDocument()

    def start_element(self, name, attrs=None):
        self._break_line()
        self._xml.startElement(name, attrs or dict())
        self._open.append(False)

    def end_element(self, name):
        if self._open.pop():
            self._xml.ignorableWhitespace('\n' + self._indent *
                len(self._open))
        self._xml.endElement(name)

    def element(self, name, text=None, attrs=None):
        ''' Write an element that contains only text. '''
        self._break_line()
        self._xml.startElement(name, attrs or dict())
        if text:
            self._xml.characters(text)
        self._xml.endElement(name)

    def _break_line(self):
        if self._open:
            self._open[-1] = True
            self._xml.ignorableWhitespace('\n' + self._indent *
                len(self._open))


class SitemapWriter:
    ''' Writes sitemap documents to binary streams. '''
    def __init__(self, resolver, locale_detector, protocol='http',
            path_base='', clock=utc_now):
        '''
        Constructor.

        :param sitemapgen.routes.RouteResolver resolver: Resolves the
            locations of sitemap shards.
        :param locale_detector: An object with a ``detect_locale(path_qs,
            path_base)`` method, e.g. ``UrlLocalizer``.
        :param str protocol: ``http`` or ``https``.
        :param str path_base: The application's path base.
        :param clock: A function that returns the current UTC time.
        '''
        self._resolver = resolver
        self._locale_detector = locale_detector
        self._protocol = protocol
        self._path_base = path_base
        self._clock = clock

    def write_sitemap_index(self, stream, shard_count):
        '''
        Write a sitemap index that lists ``shard_count`` sitemaps.

        :param stream: A binary stream.
        :param int shard_count:
        '''
        lastmod = format_lastmod(self._clock())
        # Resolve every location first so a failure leaves the stream empty.
        locations = list()
        for id_ in range(1, shard_count + 1):
            params = {'Id': id_}
            location = self._resolver.resolve(SITEMAP_SHARD_ROUTE, params,
                self._protocol)
            if not location:
                raise UnresolvableRouteError(SITEMAP_SHARD_ROUTE, params)
            locations.append(location)

        xml = _IndentedXmlWriter(stream)
        xml.start_document()
        xml.start_element('sitemapindex', ROOT_ATTRIBUTES)

        for location in locations:
            xml.start_element('sitemap')
            xml.element('loc', location)
            xml.element('lastmod', lastmod)
            xml.end_element('sitemap')

        xml.end_element('sitemapindex')
        xml.end_document()
        logger.debug('Wrote sitemap index with %d sitemaps', shard_count)

    def write_sitemap(self, stream, entries):
        '''
        Write a sitemap containing ``entries``.

        Every alternate of an entry also gets its own ``<url>`` block that
        lists the same alternates, so each language variant of a page links to
        all of its siblings.

        :param stream: A binary stream.
        :param list entries: A list of ``SitemapEntry``.
        '''
        xml = _IndentedXmlWriter(stream)
        xml.start_document()
        xml.start_element('urlset', ROOT_ATTRIBUTES)
        url_count = 0

        for entry in entries:
            self._write_url(xml, entry)
            url_count += 1
            location = entry.location.casefold()
            for alternate in entry.alternate_locations:
                if alternate.casefold() == location:
                    continue
                self._write_url(xml, entry.with_location(alternate))
                url_count += 1

        xml.end_element('urlset')
        xml.end_document()
        logger.debug('Wrote sitemap with %d entries (%d urls)', len(entries),
            url_count)

    def _write_url(self, xml, entry):
        xml.start_element('url')
        xml.element('loc', entry.location)

        for alternate in entry.alternate_locations:
            if not alternate:
                continue
            locale = self._locale_detector.detect_locale(
                URL(alternate).raw_path_qs, self._path_base)
            if locale is None or not locale.unique_code:
                continue
            xml.element('xhtml:link', attrs={
                'rel': 'alternate',
                'hreflang': locale.unique_code,
                'href': alternate,
            })

        xml.element('changefreq', entry.update_frequency.value)
        xml.element('lastmod', format_lastmod(entry.updated_on))
        xml.end_element('url')
