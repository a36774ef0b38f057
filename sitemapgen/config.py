from dataclasses import dataclass, field
import configparser
import pathlib

from . import SitemapError


_root = pathlib.Path(__file__).resolve().parent.parent
DEFAULT_MAX_ENTRIES_PER_SHARD = 50_000


class SettingsValidationError(SitemapError):
    ''' Custom error for settings validation. '''


def _invalid(message, location=None):
    ''' A helper for validating settings. '''
    if location is None:
        raise SettingsValidationError(f'{message}.')
    raise SettingsValidationError(f'{message} in {location}.')


def get_path(relpath):
    ''' Get absolute path to a project-relative path. '''
    return _root / relpath


def get_config(config_dir=None):
    '''
    Read the application configuration from the standard configuration files.

    :param config_dir: Directory holding ``system.ini`` and ``local.ini``. The
        project's ``conf`` directory is used if not specified.
    :rtype: ConfigParser
    '''
    if config_dir is None:
        config_dir = get_path("conf")
    config_dir = pathlib.Path(config_dir)
    config_files = [
        config_dir / "system.ini",
        config_dir / "local.ini",
    ]
    config = configparser.ConfigParser()
    config.optionxform = str
    config.read(config_files)
    return config


def _getboolean(config, section, option, fallback=False):
    try:
        return config.getboolean(section, option, fallback=fallback)
    except ValueError:
        _invalid(f'Option "{option}" must be a boolean', f'[{section}]')


def _split_lines(value):
    return tuple(line.strip() for line in value.splitlines() if line.strip())


@dataclass(frozen=True)
class SitemapSettings:
    '''
    Immutable settings that control which resources go into the sitemap and
    how it is addressed.
    '''
    store_id: int = 0
    host: str = 'localhost'
    path_base: str = ''
    force_ssl: bool = False
    seo_friendly_urls_enabled: bool = False
    news_enabled: bool = False
    blog_enabled: bool = False
    forums_enabled: bool = False
    include_categories: bool = True
    include_manufacturers: bool = True
    include_products: bool = True
    include_product_tags: bool = True
    custom_urls: tuple = field(default_factory=tuple)
    max_entries_per_shard: int = DEFAULT_MAX_ENTRIES_PER_SHARD

    def __post_init__(self):
        ''' Validate settings. '''
        if not self.host or not self.host.strip():
            _invalid('Store host cannot be blank')
        if self.path_base:
            if not self.path_base.startswith('/'):
                _invalid('Path base must start with "/"')
            if self.path_base.endswith('/'):
                _invalid('Path base must not end with "/"')
        if isinstance(self.max_entries_per_shard, bool) or \
           not isinstance(self.max_entries_per_shard, int) or \
           self.max_entries_per_shard < 1:
            _invalid('Maximum entries per shard must be a positive integer')

    @property
    def protocol(self):
        ''' The URL scheme used for every generated link. '''
        return 'https' if self.force_ssl else 'http'

    @classmethod
    def from_config(cls, config):
        '''
        Create settings from a parsed configuration.

        :param ConfigParser config:
        :rtype: SitemapSettings
        '''
        try:
            store_id = config.getint('store', 'id', fallback=0)
        except ValueError:
            _invalid('Store id must be an integer', '[store]')
        try:
            max_entries = config.getint('sitemap', 'max_entries_per_shard',
                fallback=DEFAULT_MAX_ENTRIES_PER_SHARD)
        except ValueError:
            _invalid('Maximum entries per shard must be a positive integer',
                '[sitemap]')

        return cls(
            store_id=store_id,
            host=config.get('store', 'host', fallback='localhost'),
            path_base=config.get('store', 'path_base', fallback=''),
            force_ssl=_getboolean(config, 'security', 'force_ssl'),
            seo_friendly_urls_enabled=_getboolean(config, 'localization',
                'seo_friendly_urls_enabled'),
            news_enabled=_getboolean(config, 'features', 'news_enabled'),
            blog_enabled=_getboolean(config, 'features', 'blog_enabled'),
            forums_enabled=_getboolean(config, 'features', 'forums_enabled'),
            include_categories=_getboolean(config, 'sitemap',
                'include_categories', fallback=True),
            include_manufacturers=_getboolean(config, 'sitemap',
                'include_manufacturers', fallback=True),
            include_products=_getboolean(config, 'sitemap',
                'include_products', fallback=True),
            include_product_tags=_getboolean(config, 'sitemap',
                'include_product_tags', fallback=True),
            custom_urls=_split_lines(config.get('sitemap', 'custom_urls',
                fallback='')),
            max_entries_per_shard=max_entries,
        )
