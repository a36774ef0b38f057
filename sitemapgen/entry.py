from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum


class UpdateFrequency(Enum):
    ''' How frequently a page is likely to change. '''
    ALWAYS = 'always'
    HOURLY = 'hourly'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'
    NEVER = 'never'


def utc_now():
    ''' The current time as an aware UTC datetime. '''
    return datetime.now(timezone.utc)


def as_utc(dt):
    '''
    Convert a datetime to UTC. Naive datetimes are assumed to be UTC already.

    :param datetime dt:
    :rtype: datetime
    '''
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_lastmod(dt):
    '''
    Format a timestamp for a ``<lastmod>`` element, e.g.
    ``2026-10-18T09:30:00+00:00``.

    Sitemap consumers parse this value, so the format must not change.

    :param datetime dt:
    :rtype: str
    '''
    return as_utc(dt).replace(microsecond=0).isoformat()


@dataclass(frozen=True)
class Locale:
    ''' A language variant of the site, addressed by a URL path segment. '''
    id: int
    unique_code: str


@dataclass(frozen=True)
class SitemapEntry:
    ''' One logical page in the sitemap and its localized variants. '''
    location: str
    alternate_locations: tuple = field(default_factory=tuple)
    update_frequency: UpdateFrequency = UpdateFrequency.WEEKLY
    updated_on: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not self.location:
            raise ValueError('Sitemap entry location cannot be empty')
        object.__setattr__(self, 'alternate_locations',
            tuple(self.alternate_locations))
        object.__setattr__(self, 'updated_on', as_utc(self.updated_on))

    def with_location(self, location):
        '''
        Return a copy of this entry at a different location. The copy keeps
        the same alternates, so every variant of a page lists all of its
        siblings.

        :param str location:
        :rtype: SitemapEntry
        '''
        return replace(self, location=location)
