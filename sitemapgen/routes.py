from abc import ABC, abstractmethod
import logging

from yarl import URL


logger = logging.getLogger(__name__)
SITEMAP_SHARD_ROUTE = 'sitemap-indexed.xml'


class RouteResolver(ABC):
    ''' Turns named routes into absolute URLs. '''
    @abstractmethod
    def resolve(self, route_name, params=None, protocol='http'):
        '''
        Resolve a route.

        :param str route_name:
        :param dict params: Route parameters, e.g. ``{'SeName': 'laptops'}``.
        :param str protocol: ``http`` or ``https``.
        :returns: An absolute URL, or None if the route cannot be resolved
            with these parameters.
        :rtype: str
        '''

    @abstractmethod
    def store_location(self, protocol='http'):
        '''
        The absolute URL of the site root, always ending with ``/``.

        :param str protocol: ``http`` or ``https``.
        :rtype: str
        '''


class RouteTable(RouteResolver):
    '''
    Resolves routes from path templates such as ``/{SeName}`` or
    ``/sitemap-{Id}.xml``.
    '''
    def __init__(self, host, templates, path_base=''):
        '''
        Constructor.

        :param str host: The site's host name, optionally with a port.
        :param dict templates: Maps route names to path templates.
        :param str path_base: The application's path base, e.g. ``/shop``.
        '''
        self._host = host
        self._templates = dict(templates)
        self._path_base = path_base

    @classmethod
    def from_config(cls, config, settings):
        '''
        Create a route table from the ``[routes]`` configuration section.

        :param ConfigParser config:
        :param sitemapgen.config.SitemapSettings settings:
        '''
        templates = dict(config['routes']) if config.has_section('routes') \
            else dict()
        return cls(settings.host, templates, settings.path_base)

    def _origin(self, protocol):
        host, _, port = self._host.partition(':')
        return URL.build(scheme=protocol, host=host,
            port=int(port) if port else None)

    def resolve(self, route_name, params=None, protocol='http'):
        try:
            template = self._templates[route_name]
        except KeyError:
            logger.debug('No template for route %s', route_name)
            return None

        params = params or dict()
        if any(value is None or value == '' for value in params.values()):
            return None
        try:
            path_qs = template.format(**params)
        except (KeyError, IndexError):
            logger.debug('Missing parameters for route %s: %r', route_name,
                params)
            return None

        path, _, query = path_qs.partition('?')
        url = self._origin(protocol).with_path(self._path_base + path)
        if query:
            url = url.with_query(query)
        return str(url)

    def store_location(self, protocol='http'):
        return str(self._origin(protocol).with_path(self._path_base + '/'))
