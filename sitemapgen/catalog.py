from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
import json
import logging

import dateutil.parser

from . import SitemapError
from .entry import Locale, as_utc


logger = logging.getLogger(__name__)
ORDER_BY_CREATED_ON = 'created_on'


class CatalogError(SitemapError):
    ''' Indicates a malformed catalog document. '''


@dataclass
class Resource:
    '''
    A record from the site's catalog, e.g. a category, a product or a topic.
    '''
    id: int
    slug: str
    localized_slugs: dict = field(default_factory=dict)
    updated_on: datetime = field(default=None)
    created_on: datetime = field(default=None)
    store_ids: tuple = field(default_factory=tuple)
    visible_individually: bool = True
    include_in_sitemap: bool = True

    @classmethod
    def from_doc(cls, doc):
        '''
        Create a resource from a catalog document.

        :param dict doc: A catalog document.
        '''
        try:
            return cls(
                id=doc['id'],
                slug=doc['slug'],
                localized_slugs={int(k): v for k, v in
                    doc.get('localized_slugs', dict()).items()},
                updated_on=_parse_timestamp(doc.get('updated_on')),
                created_on=_parse_timestamp(doc.get('created_on')),
                store_ids=tuple(doc.get('store_ids', ())),
                visible_individually=doc.get('visible_individually', True),
                include_in_sitemap=doc.get('include_in_sitemap', True),
            )
        except KeyError as exc:
            raise CatalogError(f'Resource is missing field {exc}') from exc
        except (TypeError, ValueError, OverflowError) as exc:
            raise CatalogError(f'Invalid resource {doc!r}: {exc}') from exc

    def in_store(self, store_id):
        ''' Return True if this resource is available in ``store_id``. An
        empty store list means "all stores". '''
        return not self.store_ids or store_id in self.store_ids


def _parse_timestamp(value):
    if value is None:
        return None
    return as_utc(dateutil.parser.parse(value))


class SlugResolver(ABC):
    ''' Looks up the SEO-friendly name of a resource. '''
    @abstractmethod
    def resolve_slug(self, resource, locale_id=None):
        '''
        :param Resource resource:
        :param locale_id: A locale ID, or None for the default locale.
        :rtype: str
        '''


class ResourceSlugResolver(SlugResolver):
    ''' Uses the localized slug stored on the resource, falling back to its
    default slug. '''
    def resolve_slug(self, resource, locale_id=None):
        if locale_id is not None:
            localized = resource.localized_slugs.get(locale_id)
            if localized:
                return localized
        return resource.slug


class ResourceCatalog(ABC):
    '''
    The source of everything that goes into a sitemap.

    Each method returns a list in the order that the resources should appear.
    ``scope`` is the ID of the store that the sitemap is generated for.
    '''
    @abstractmethod
    def list_categories(self, scope):
        ''' All categories in the store. '''

    @abstractmethod
    def list_manufacturers(self, scope):
        ''' All manufacturers in the store. '''

    @abstractmethod
    def list_visible_products(self, scope, order_by=ORDER_BY_CREATED_ON):
        ''' Products that have their own page, oldest first. '''

    @abstractmethod
    def list_product_tags(self):
        ''' All product tags. '''

    @abstractmethod
    def list_sitemap_topics(self, scope):
        ''' Topics flagged for inclusion in the sitemap. '''

    @abstractmethod
    def list_active_locales(self):
        ''' The locales that the site is published in. '''


class JsonCatalog(ResourceCatalog):
    '''
    A catalog loaded from a JSON document shaped like::

        {
            "locales": [{"id": 1, "code": "en"}, {"id": 2, "code": "de"}],
            "categories": [{"id": 1, "slug": "laptops",
                            "localized_slugs": {"2": "notebooks"},
                            "updated_on": "2024-05-01T10:00:00Z"}],
            "manufacturers": [...],
            "products": [...],
            "product_tags": [...],
            "topics": [...]
        }
    '''
    def __init__(self, doc):
        '''
        Constructor.

        :param dict doc: The decoded catalog document.
        '''
        if not isinstance(doc, dict):
            raise CatalogError('Catalog document must be a JSON object')
        try:
            self._locales = [Locale(int(item['id']), item['code'])
                for item in doc.get('locales', [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f'Invalid locale: {exc}') from exc
        self._categories = self._load(doc, 'categories')
        self._manufacturers = self._load(doc, 'manufacturers')
        self._products = self._load(doc, 'products')
        self._product_tags = self._load(doc, 'product_tags')
        self._topics = self._load(doc, 'topics')
        logger.debug('Loaded catalog: %d locales, %d categories, '
            '%d manufacturers, %d products, %d tags, %d topics',
            len(self._locales), len(self._categories),
            len(self._manufacturers), len(self._products),
            len(self._product_tags), len(self._topics))

    @classmethod
    def from_path(cls, path):
        '''
        Load a catalog from a JSON file.

        :param path: Path to the file.
        :rtype: JsonCatalog
        '''
        with open(path, encoding='utf-8') as f:
            try:
                doc = json.load(f)
            except json.JSONDecodeError as exc:
                raise CatalogError(f'Cannot parse catalog {path}: {exc}') \
                    from exc
        return cls(doc)

    @staticmethod
    def _load(doc, key):
        items = doc.get(key, [])
        if not isinstance(items, list):
            raise CatalogError(f'Catalog "{key}" must be a list')
        return [Resource.from_doc(item) for item in items]

    def list_categories(self, scope):
        return [c for c in self._categories if c.in_store(scope)]

    def list_manufacturers(self, scope):
        return [m for m in self._manufacturers if m.in_store(scope)]

    def list_visible_products(self, scope, order_by=ORDER_BY_CREATED_ON):
        if order_by != ORDER_BY_CREATED_ON:
            raise ValueError(f'Unsupported product ordering: {order_by}')
        products = [p for p in self._products
            if p.visible_individually and p.in_store(scope)]
        # Products without a creation time sort first, in document order.
        products.sort(key=lambda p: (p.created_on is not None,
            p.created_on or datetime.min))
        return products

    def list_product_tags(self):
        return list(self._product_tags)

    def list_sitemap_topics(self, scope):
        return [t for t in self._topics
            if t.include_in_sitemap and t.in_store(scope)]

    def list_active_locales(self):
        return list(self._locales)
