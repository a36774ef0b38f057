import argparse
import logging
import os
import sys

from .catalog import JsonCatalog
from .config import SitemapSettings, get_config
from .generator import SitemapGenerator
from .routes import RouteTable


logger = logging.getLogger('sitemapgen.main')
_log_handlers = list()


def configure_logging(log_level, error_log):
    '''
    Set default format and output stream for logging. Handlers installed by
    an earlier call are replaced, so each record is emitted once.
    '''
    log_format = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    log_date_format = '%Y-%m-%d %H:%M:%S'
    log_formatter = logging.Formatter(log_format, log_date_format)
    log_level = getattr(logging, log_level.upper())
    log_handler = logging.StreamHandler(sys.stderr)
    log_handler.setFormatter(log_formatter)
    log_handler.setLevel(log_level)
    logger = logging.getLogger()
    while _log_handlers:
        old_handler = _log_handlers.pop()
        logger.removeHandler(old_handler)
        old_handler.close()
    logger.addHandler(log_handler)
    _log_handlers.append(log_handler)
    logger.setLevel(log_level)

    if error_log is not None:
        exc_handler = logging.FileHandler(error_log)
        exc_handler.setFormatter(log_formatter)
        exc_handler.setLevel(logging.ERROR)
        logger.addHandler(exc_handler)
        _log_handlers.append(exc_handler)


def get_args(argv=None):
    ''' Parse command line arguments. '''
    arg_parser = argparse.ArgumentParser(description='Sitemap generator')
    arg_parser.add_argument(
        '--catalog',
        required=True,
        metavar='FILE',
        help='A JSON catalog of the site\'s resources.'
    )
    arg_parser.add_argument(
        '--shard',
        type=int,
        metavar='N',
        help='Write sitemap number N instead of the index.'
    )
    arg_parser.add_argument(
        '--output',
        metavar='FILE',
        help='Write the sitemap to a file (default: stdout)'
    )
    arg_parser.add_argument(
        '--config-dir',
        metavar='DIR',
        help='Directory containing system.ini and local.ini.'
    )
    arg_parser.add_argument(
        '--log-level',
        default='warning',
        metavar='LEVEL',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        help='Set logging verbosity (default: warning)'
    )
    arg_parser.add_argument(
        '--error-log',
        help='Copy error logs to the specified file.'
    )
    return arg_parser.parse_args(argv)


def main(argv=None):
    ''' Generate a sitemap. Returns the process exit status. '''
    args = get_args(argv)
    configure_logging(args.log_level, args.error_log)
    config = get_config(args.config_dir)
    settings = SitemapSettings.from_config(config)
    generator = SitemapGenerator(settings, JsonCatalog.from_path(args.catalog),
        RouteTable.from_config(config, settings))

    if args.output is None:
        written = generator.generate(sys.stdout.buffer, args.shard)
        sys.stdout.flush()
    else:
        # Don't leave an empty or partial file behind.
        try:
            with open(args.output, 'wb') as output:
                written = generator.generate(output, args.shard)
        except Exception:
            os.remove(args.output)
            raise
        if not written:
            os.remove(args.output)

    if not written:
        logger.error('Nothing to write (shard=%s)', args.shard)
        return 1
    return 0


def cli():
    ''' Console script entry point. '''
    sys.exit(main())


if __name__ == '__main__':
    cli()
