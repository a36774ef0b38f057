from io import BytesIO
import logging

from .builder import EntryBuilder
from .catalog import ResourceSlugResolver
from .collector import EntryCollector
from .entry import utc_now
from .localization import UrlLocalizer
from .paginator import paginate
from .writer import SitemapWriter


logger = logging.getLogger(__name__)


class SitemapGenerator:
    '''
    Builds an XML sitemap for better indexing by search engines.

    Small sites get a single sitemap document. Once the number of entries
    reaches the per-shard maximum, the entries are split into numbered shards
    and the unnumbered request returns a sitemap index that points at them.
    See http://en.wikipedia.org/wiki/Sitemaps for more information.
    '''
    def __init__(self, settings, catalog, resolver, slug_resolver=None,
            clock=utc_now):
        '''
        Constructor.

        :param sitemapgen.config.SitemapSettings settings:
        :param sitemapgen.catalog.ResourceCatalog catalog:
        :param sitemapgen.routes.RouteResolver resolver:
        :param sitemapgen.catalog.SlugResolver slug_resolver: Defaults to
            ``ResourceSlugResolver``.
        :param clock: A function that returns the current UTC time.
        '''
        self._settings = settings
        self._catalog = catalog
        self._resolver = resolver
        self._slug_resolver = slug_resolver or ResourceSlugResolver()
        self._clock = clock

    def generate(self, stream, shard_id=None):
        '''
        Write a sitemap or a sitemap index to ``stream``.

        :param stream: A binary stream.
        :param int shard_id: The 1-based number of the shard to write, or None
            to write the whole sitemap (or an index if it has too many
            entries).
        :returns: False if nothing was written because the site has no entries
            or the requested shard does not exist.
        :rtype: bool
        '''
        settings = self._settings
        if settings.seo_friendly_urls_enabled:
            locales = self._catalog.list_active_locales()
        else:
            locales = None

        localizer = UrlLocalizer(locales)
        builder = EntryBuilder(self._resolver, localizer, settings.protocol,
            settings.path_base)
        collector = EntryCollector(settings, self._catalog, builder,
            self._resolver, self._slug_resolver, self._clock)
        writer = SitemapWriter(self._resolver, localizer, settings.protocol,
            settings.path_base, self._clock)

        entries = collector.collect_all(locales)
        shards = paginate(entries, settings.max_entries_per_shard)

        if not shards:
            logger.info('Sitemap has no entries')
            return False

        if shard_id is not None:
            if shard_id < 1 or shard_id > len(shards):
                logger.info('Sitemap shard %d does not exist (%d shards)',
                    shard_id, len(shards))
                return False
            writer.write_sitemap(stream, shards[shard_id - 1])
        elif len(entries) >= settings.max_entries_per_shard:
            writer.write_sitemap_index(stream, len(shards))
        else:
            writer.write_sitemap(stream, shards[0])
        return True

    def generate_string(self, shard_id=None):
        '''
        Generate a sitemap as text.

        :param int shard_id: See ``generate()``.
        :returns: The XML document, or an empty string if nothing was
            generated.
        :rtype: str
        '''
        stream = BytesIO()
        self.generate(stream, shard_id)
        return stream.getvalue().decode('utf-8')
