import logging

import w3lib.url

from .builder import seo_route_params
from .catalog import ORDER_BY_CREATED_ON
from .entry import SitemapEntry, UpdateFrequency, utc_now


logger = logging.getLogger(__name__)


class EntryCollector:
    '''
    Gathers the sitemap entries for every page of the site, in the order that
    they appear in the sitemap.
    '''
    def __init__(self, settings, catalog, builder, resolver, slug_resolver,
            clock=utc_now):
        '''
        Constructor.

        :param sitemapgen.config.SitemapSettings settings:
        :param sitemapgen.catalog.ResourceCatalog catalog:
        :param sitemapgen.builder.EntryBuilder builder:
        :param sitemapgen.routes.RouteResolver resolver: Used for the location
            of custom URLs.
        :param sitemapgen.catalog.SlugResolver slug_resolver:
        :param clock: A function that returns the current UTC time.
        '''
        self._settings = settings
        self._catalog = catalog
        self._builder = builder
        self._resolver = resolver
        self._slug_resolver = slug_resolver
        self._clock = clock

    def collect_all(self, locales=None):
        '''
        Collect all entries.

        :param list locales: Locales to generate alternates for, or None.
        :rtype: list[SitemapEntry]
        '''
        settings = self._settings
        now = self._clock()
        entries = [
            self._page('HomePage', locales, now),
            self._page('ProductSearch', locales, now),
            self._page('ContactUs', locales, now),
        ]

        if settings.news_enabled:
            entries.append(self._page('NewsArchive', locales, now))
        if settings.blog_enabled:
            entries.append(self._page('Blog', locales, now))
        if settings.forums_enabled:
            entries.append(self._page('Boards', locales, now))

        scope = settings.store_id
        if settings.include_categories:
            entries.extend(self._resources('Category',
                self._catalog.list_categories(scope), locales, now))
        if settings.include_manufacturers:
            entries.extend(self._resources('Manufacturer',
                self._catalog.list_manufacturers(scope), locales, now))
        if settings.include_products:
            entries.extend(self._resources('Product',
                self._catalog.list_visible_products(scope,
                order_by=ORDER_BY_CREATED_ON), locales, now))
        if settings.include_product_tags:
            entries.extend(self._resources('ProductsByTag',
                self._catalog.list_product_tags(), locales, now,
                use_updated_on=False))

        entries.extend(self._resources('Topic',
            self._catalog.list_sitemap_topics(scope), locales, now,
            use_updated_on=False))
        entries.extend(self._custom_urls(now))

        logger.info('Collected %d sitemap entries (store=%d, locales=%d)',
            len(entries), scope, len(locales or ()))
        return entries

    def _page(self, route_name, locales, now):
        return self._builder.build_entry(route_name, None, locales, now)

    def _resources(self, route_name, resources, locales, now,
            use_updated_on=True):
        for resource in resources:
            updated_on = resource.updated_on if use_updated_on else None
            yield self._builder.build_entry(route_name,
                seo_route_params(self._slug_resolver, resource), locales,
                updated_on or now)

    def _custom_urls(self, now):
        store_location = self._resolver.store_location(
            self._settings.protocol)
        for custom_url in self._settings.custom_urls:
            location = w3lib.url.safe_url_string(
                store_location + custom_url.lstrip('/'))
            yield SitemapEntry(location, (), UpdateFrequency.WEEKLY, now)
