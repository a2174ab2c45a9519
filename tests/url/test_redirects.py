import pytest

from aliviral.infrastructure.url.redirects import (
    GATEWAY_PATTERNS,
    SHORT_LINK_PATTERNS,
    absolutize_gateway_target,
    absolutize_short_link_target,
    find_redirect,
    unescape_candidate,
)


# ──────────────────────────────────────────────────────────────────────────────
#                     🔗 Патерны коротких ссылок
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "body, expected_pattern",
    [
        ("<script>window.location.href = 'https://www.aliexpress.com/item/1.html'</script>", "location_href"),
        ('<script>window.location="https://www.aliexpress.com/item/1.html"</script>', "window_location"),
        ("<script>location.replace('https://www.aliexpress.com/item/1.html')</script>", "location_replace"),
        (
            '<meta http-equiv="refresh" content="0; url=https://www.aliexpress.com/item/1.html">',
            "meta_refresh",
        ),
        ("see https://www.aliexpress.com/item/1.html?spm=a2g0o for details", "item_html_url"),
        ('{"redirectUrl":"https://www.aliexpress.com/item/1.html"}', "json_redirect"),
    ],
)
def test_short_link_patterns(body, expected_pattern):
    found = find_redirect(body, SHORT_LINK_PATTERNS)
    assert found is not None
    name, target = found
    assert name == expected_pattern
    assert target.startswith("https://www.aliexpress.com/item/1.html")


def test_first_matching_pattern_wins():
    body = (
        "<script>window.location.href='https://a.example/first'</script>"
        '{"redirectUrl":"https://a.example/second"}'
    )
    assert find_redirect(body, SHORT_LINK_PATTERNS) == ("location_href", "https://a.example/first")


def test_no_match_returns_none():
    assert find_redirect("<html>nothing here</html>", SHORT_LINK_PATTERNS) is None
    assert find_redirect("", GATEWAY_PATTERNS) is None


def test_candidate_is_unescaped():
    assert unescape_candidate(r"https://www.aliexpress.com\/item\/1.html?a=1&amp;b=2") == (
        "https://www.aliexpress.com/item/1.html?a=1&b=2"
    )


# ──────────────────────────────────────────────────────────────────────────────
#                     🚪 Gateway и нормализация
# ──────────────────────────────────────────────────────────────────────────────

def test_gateway_item_anchor():
    body = '<a href="https://www.aliexpress.com/item/42.html">go</a>'
    assert find_redirect(body, GATEWAY_PATTERNS) == ("item_anchor", "https://www.aliexpress.com/item/42.html")


def test_gateway_bare_location():
    body = "<script>location = '/item/5.html'</script>"
    assert find_redirect(body, GATEWAY_PATTERNS) == ("bare_location", "/item/5.html")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("//www.aliexpress.com/item/1.html", "https://www.aliexpress.com/item/1.html"),
        ("/item/1.html", "https://www.aliexpress.com/item/1.html"),
        ("item/1.html", "https://www.aliexpress.com/item/1.html"),
        ("http://x.aliexpress.com/item/1.html", "http://x.aliexpress.com/item/1.html"),
    ],
)
def test_absolutize_gateway_target(raw, expected):
    assert absolutize_gateway_target(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("//www.aliexpress.com/item/1.html", "https://www.aliexpress.com/item/1.html"),
        ("www.aliexpress.com/item/1.html", "https://www.aliexpress.com/item/1.html"),
        ("https://www.aliexpress.com/item/1.html", "https://www.aliexpress.com/item/1.html"),
    ],
)
def test_absolutize_short_link_target(raw, expected):
    assert absolutize_short_link_target(raw) == expected
