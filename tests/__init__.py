from datetime import datetime, timezone
from io import BytesIO
from os.path import dirname
from sys import path
from xml.etree import ElementTree as ET


# Add this project to the Python path.
path.append(dirname(dirname(__file__)))

from sitemapgen.catalog import Resource, ResourceCatalog
from sitemapgen.entry import Locale
from sitemapgen.routes import RouteTable


FIXED_NOW = datetime(2026, 10, 18, 9, 30, 0, tzinfo=timezone.utc)
EN = Locale(1, 'en')
DE = Locale(2, 'de')
NS = {
    'sm': 'http://www.sitemaps.org/schemas/sitemap/0.9',
    'xhtml': 'http://www.w3.org/1999/xhtml',
    'xsi': 'http://www.w3.org/2001/XMLSchema-instance',
}
ROUTES = {
    'HomePage': '/',
    'ProductSearch': '/search',
    'ContactUs': '/contactus',
    'NewsArchive': '/news',
    'Blog': '/blog',
    'Boards': '/boards',
    'Category': '/{SeName}',
    'Manufacturer': '/{SeName}',
    'Product': '/{SeName}',
    'ProductsByTag': '/producttag/{SeName}',
    'Topic': '/{SeName}',
    'sitemap-indexed.xml': '/sitemap-{Id}.xml',
}


def fixed_clock():
    return FIXED_NOW


def make_routes(host='shop.example', path_base=''):
    ''' Make a route table with the standard routes. '''
    return RouteTable(host, ROUTES, path_base)


def make_resource(id_, slug, **kwargs):
    ''' Make a catalog resource. '''
    return Resource(id_, slug, **kwargs)


def parse_xml(data):
    '''
    Parse a generated document.

    :param bytes data:
    :rtype: xml.etree.ElementTree.Element
    '''
    return ET.parse(BytesIO(data)).getroot()


def url_locations(root):
    ''' Return the ``<loc>`` of each ``<url>`` in a sitemap. '''
    return [url.find('sm:loc', NS).text for url in root.findall('sm:url', NS)]


class FakeCatalog(ResourceCatalog):
    ''' A catalog that returns fixed lists and records how it was called. '''
    def __init__(self, categories=None, manufacturers=None, products=None,
            product_tags=None, topics=None, locales=None):
        self.categories = categories or []
        self.manufacturers = manufacturers or []
        self.products = products or []
        self.product_tags = product_tags or []
        self.topics = topics or []
        self.locales = locales or []
        self.calls = []

    def list_categories(self, scope):
        self.calls.append(('list_categories', scope))
        return list(self.categories)

    def list_manufacturers(self, scope):
        self.calls.append(('list_manufacturers', scope))
        return list(self.manufacturers)

    def list_visible_products(self, scope, order_by='created_on'):
        self.calls.append(('list_visible_products', scope, order_by))
        return list(self.products)

    def list_product_tags(self):
        self.calls.append(('list_product_tags',))
        return list(self.product_tags)

    def list_sitemap_topics(self, scope):
        self.calls.append(('list_sitemap_topics', scope))
        return list(self.topics)

    def list_active_locales(self):
        self.calls.append(('list_active_locales',))
        return list(self.locales)
