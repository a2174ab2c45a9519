import httpx
import pytest

from aliviral.infrastructure.url.short_link_resolver import ShortLinkResolver, is_short_link
from aliviral.infrastructure.web._fetcher_options import FetcherOptions
from aliviral.infrastructure.web.proxy_backends import CODETABS, THINGPROXY

SHORT = "https://s.click.aliexpress.com/e/_DdAbCd"
ITEM_URL = "https://www.aliexpress.com/item/1005001.html"


@pytest.mark.parametrize(
    "url, expected",
    [
        (SHORT, True),
        ("https://a.aliexpress.com/_mKxyz", True),
        ("https://aliexpress.ru/e/_DxYz", True),
        (ITEM_URL, False),
        ("", False),
    ],
)
def test_is_short_link(url, expected):
    assert is_short_link(url) is expected


# ──────────────────────────────────────────────────────────────────────────────
#                           🔗 Разворачивание
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_regular_url_makes_no_network_calls(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(500))
    resolver = ShortLinkResolver(transport=transport.transport)

    outcome = await resolver.resolve(ITEM_URL)

    assert outcome.url == ITEM_URL
    assert outcome.resolved is False
    assert transport.calls == []


@pytest.mark.asyncio
async def test_json_contents_backend_resolves(recording_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"contents": f'<meta http-equiv="refresh" content="0;url={ITEM_URL}">'})

    transport = recording_transport(handler)
    outcome = await ShortLinkResolver(transport=transport.transport).resolve(SHORT)

    assert outcome.resolved is True
    assert outcome.url == ITEM_URL
    assert outcome.backend == "allorigins_json"
    assert outcome.pattern == "meta_refresh"
    assert transport.hosts == ["api.allorigins.win"]


@pytest.mark.asyncio
async def test_falls_back_to_codetabs_raw_body(recording_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.allorigins.win":
            return httpx.Response(502)
        # CodeTabs отдаёт тело как есть, без JSON-обёртки
        return httpx.Response(200, text=f"<script>location.replace('{ITEM_URL}')</script>")

    transport = recording_transport(handler)
    outcome = await ShortLinkResolver(transport=transport.transport).resolve(SHORT)

    assert outcome.url == ITEM_URL
    assert outcome.backend == "codetabs"
    assert transport.hosts == ["api.allorigins.win", "api.codetabs.com"]


@pytest.mark.asyncio
async def test_protocol_relative_target_gets_https(recording_transport):
    body = {"contents": "<script>window.location.href='//www.aliexpress.com/item/7.html'</script>"}
    transport = recording_transport(lambda request: httpx.Response(200, json=body))

    outcome = await ShortLinkResolver(transport=transport.transport).resolve(SHORT)

    assert outcome.url == "https://www.aliexpress.com/item/7.html"


@pytest.mark.asyncio
async def test_total_failure_keeps_original_url(recording_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.allorigins.win":
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200, text="<html>no redirect</html>")

    transport = recording_transport(handler)
    outcome = await ShortLinkResolver(transport=transport.transport).resolve(SHORT)

    # не бросает: возвращает исходную ссылку
    assert outcome.url == SHORT
    assert outcome.resolved is False
    assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_custom_backend_order_from_options(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(500))
    options = FetcherOptions(resolve_backends=("codetabs",))

    await ShortLinkResolver(options, transport=transport.transport).resolve(SHORT)

    assert transport.hosts == ["api.codetabs.com"]


@pytest.mark.asyncio
async def test_unencodable_link_on_raw_path_backend_is_skipped(recording_transport):
    short_with_tab = "https://s.click.aliexpress.com/e/_Dd\tAb"
    transport = recording_transport(
        lambda request: httpx.Response(200, text=f"<script>location.replace('{ITEM_URL}')</script>")
    )
    # ThingProxy кладёт URL в путь без кодирования, httpx отвечает InvalidURL ещё до транспорта
    resolver = ShortLinkResolver(backends=[THINGPROXY, CODETABS], transport=transport.transport)

    outcome = await resolver.resolve(short_with_tab)

    assert outcome.url == ITEM_URL
    assert outcome.backend == "codetabs"
    assert transport.hosts == ["api.codetabs.com"]
