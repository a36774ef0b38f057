import pytest

from . import DE, EN
from sitemapgen.entry import Locale
from sitemapgen.localization import UrlLocalizer


@pytest.fixture
def localizer():
    return UrlLocalizer([EN, DE])


def test_localize_inserts_code(localizer):
    assert localizer.localize('/laptops', '', DE) == '/de/laptops'


def test_localize_home_page(localizer):
    assert localizer.localize('/', '', DE) == '/de/'
    assert localizer.localize('', '', DE) == '/de'


def test_localize_replaces_existing_code(localizer):
    assert localizer.localize('/en/laptops?page=2', '', DE) == \
        '/de/laptops?page=2'


def test_localize_keeps_query(localizer):
    assert localizer.localize('/search?q=en', '', EN) == '/en/search?q=en'


def test_localize_with_path_base(localizer):
    assert localizer.localize('/shop/laptops', '/shop', DE) == \
        '/shop/de/laptops'
    assert localizer.localize('/shop/en/laptops', '/shop', DE) == \
        '/shop/de/laptops'
    assert localizer.localize('/shop', '/shop', DE) == '/shop/de'


def test_strip_locale_code(localizer):
    assert localizer.strip_locale_code('/en/laptops') == '/laptops'
    assert localizer.strip_locale_code('/EN/laptops') == '/laptops'
    assert localizer.strip_locale_code('/de') == ''
    assert localizer.strip_locale_code('/de/?x=1') == '/?x=1'


def test_strip_ignores_other_segments(localizer):
    assert localizer.strip_locale_code('/laptops') == '/laptops'
    assert localizer.strip_locale_code('/english/laptops') == \
        '/english/laptops'
    assert localizer.strip_locale_code('/fr/laptops') == '/fr/laptops'


def test_strip_with_path_base(localizer):
    assert localizer.strip_locale_code('/shop/en/laptops', '/shop') == \
        '/shop/laptops'
    # The path base itself is not a locale code.
    assert UrlLocalizer([Locale(3, 'shop')]).strip_locale_code(
        '/shop/laptops', '/shop') == '/shop/laptops'


@pytest.mark.parametrize('bare_path', [
    '/',
    '/laptops',
    '/laptops/gaming?page=3',
    '/search?q=de',
])
@pytest.mark.parametrize('path_base', ['', '/shop'])
def test_strip_then_localize_matches_localize(localizer, bare_path,
        path_base):
    for locale in (EN, DE):
        canonical = path_base + bare_path
        prefixed = localizer.localize(canonical, path_base, EN)
        expected = localizer.localize(canonical, path_base, locale)
        stripped = localizer.strip_locale_code(prefixed, path_base)
        assert localizer.localize(stripped, path_base, locale) == expected
        assert localizer.localize(prefixed, path_base, locale) == expected


def test_detect_locale(localizer):
    assert localizer.detect_locale('/de/laptops') is DE
    assert localizer.detect_locale('/DE/laptops') is DE
    assert localizer.detect_locale('/en/') is EN
    assert localizer.detect_locale('/en?page=1') is EN


def test_detect_locale_none(localizer):
    assert localizer.detect_locale('/laptops') is None
    assert localizer.detect_locale('/') is None
    assert localizer.detect_locale('') is None
    assert localizer.detect_locale(None) is None
    assert localizer.detect_locale('/?de') is None


def test_detect_locale_with_path_base(localizer):
    assert localizer.detect_locale('/shop/de/laptops', '/shop') is DE
    assert localizer.detect_locale('/shop/laptops', '/shop') is None


def test_no_locales():
    localizer = UrlLocalizer(None)
    assert localizer.detect_locale('/de/laptops') is None
    assert localizer.strip_locale_code('/de/laptops') == '/de/laptops'
