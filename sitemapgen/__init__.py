import logging

from .version import __version__


logger = logging.getLogger(__name__)


class SitemapError(Exception):
    ''' Base class for errors raised while generating a sitemap. '''


class UnresolvableRouteError(SitemapError):
    ''' A route that must produce a URL did not resolve to one. '''
    def __init__(self, route_name, params=None):
        self.route_name = route_name
        self.params = params
        super().__init__('Cannot resolve route {!r} (params={!r})'.format(
            route_name, params))
