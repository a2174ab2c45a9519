# tests/web/test_proxy_fetcher.py
import asyncio

import httpx
import pytest

from aliviral.errors import FetchExhausted, ProxyFailure
from aliviral.infrastructure.web._fetcher_options import FetcherOptions
from aliviral.infrastructure.web.proxy_backends import (
    ALLORIGINS_JSON,
    ALLORIGINS_RAW,
    CODETABS,
    THINGPROXY,
)
from aliviral.infrastructure.web.proxy_fetcher import ProxyFetcher, looks_like_product_page
from conftest import proxied_target

ITEM_URL = "https://www.aliexpress.com/item/123.html"
GATEWAY_HTML = f'<html><script>window.location.href = "{ITEM_URL}";</script></html>'


# ──────────────────────────────────────────────────────────────────────────────
#                               🧪 Вспомогалки
# ──────────────────────────────────────────────────────────────────────────────

def _fetcher(transport, *, backends=None, **overrides) -> ProxyFetcher:
    options = FetcherOptions().merge(**overrides)
    return ProxyFetcher(options, backends=backends, transport=transport.transport)


# ──────────────────────────────────────────────────────────────────────────────
#                               ✅ Цепочка бэкендов
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_third_backend_wins_after_two_bad_statuses(recording_transport, make_product_html):
    page = make_product_html()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "thingproxy.freeboard.io":
            return httpx.Response(200, text=page)
        return httpx.Response(503, text="unavailable")

    transport = recording_transport(handler)
    # четвёртый бэкенд существует, но не должен вызываться
    fetcher = _fetcher(transport, backends=[ALLORIGINS_RAW, CODETABS, THINGPROXY, ALLORIGINS_JSON])

    html = await fetcher.fetch(ITEM_URL)

    assert html == page
    assert transport.hosts == ["api.allorigins.win", "api.codetabs.com", "thingproxy.freeboard.io"]
    assert all(target == ITEM_URL for target in transport.targets)


@pytest.mark.asyncio
async def test_fetch_page_content_is_alias(recording_transport, make_product_html):
    page = make_product_html()
    transport = recording_transport(lambda request: httpx.Response(200, text=page))
    fetcher = _fetcher(transport)

    assert await fetcher.fetch_page_content(ITEM_URL) == page
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_all_backends_fail_raises_fetch_exhausted_chained(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(500, text="boom"))
    fetcher = _fetcher(transport)

    with pytest.raises(FetchExhausted) as exc_info:
        await fetcher.fetch(ITEM_URL)

    exhausted = exc_info.value
    assert [f.backend for f in exhausted.failures] == ["allorigins_raw", "codetabs", "thingproxy"]
    assert all(f.status_code == 500 for f in exhausted.failures)
    assert isinstance(exhausted.__cause__, ProxyFailure)
    assert exhausted.__cause__ is exhausted.failures[-1]
    assert "Status 500" in exhausted.message


@pytest.mark.asyncio
async def test_short_body_is_a_backend_failure(recording_transport, make_product_html):
    page = make_product_html()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.allorigins.win":
            # маркер товара есть, но тело короче 500 символов
            return httpx.Response(200, text='<meta property="og:title" content="x">')
        return httpx.Response(200, text=page)

    transport = recording_transport(handler)
    html = await _fetcher(transport).fetch(ITEM_URL)

    assert html == page
    assert transport.hosts == ["api.allorigins.win", "api.codetabs.com"]


@pytest.mark.asyncio
async def test_transport_error_advances_to_next_backend(recording_transport, make_product_html):
    page = make_product_html()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.allorigins.win":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, text=page)

    transport = recording_transport(handler)
    assert await _fetcher(transport).fetch(ITEM_URL) == page
    assert transport.hosts == ["api.allorigins.win", "api.codetabs.com"]


@pytest.mark.asyncio
async def test_attempt_deadline_aborts_only_that_backend(make_product_html):
    page = make_product_html()
    hosts = []

    async def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        if request.url.host == "api.allorigins.win":
            await asyncio.sleep(1)
        return httpx.Response(200, text=page)

    fetcher = ProxyFetcher(
        FetcherOptions(fetch_timeout_sec=0.05),
        transport=httpx.MockTransport(handler),
    )

    assert await fetcher.fetch(ITEM_URL) == page
    assert hosts == ["api.allorigins.win", "api.codetabs.com"]


# ──────────────────────────────────────────────────────────────────────────────
#                               🚪 Gateway-страницы
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_gateway_redirect_is_followed_exactly_once(recording_transport, make_product_html):
    page = make_product_html()
    start_url = "https://www.aliexpress.com/gateway?id=123"

    def handler(request: httpx.Request) -> httpx.Response:
        if proxied_target(request) == ITEM_URL:
            return httpx.Response(200, text=page)
        return httpx.Response(200, text=GATEWAY_HTML)

    transport = recording_transport(handler)
    html = await _fetcher(transport).fetch(start_url)

    assert html == page
    assert transport.targets == [start_url, ITEM_URL]
    assert transport.targets.count(ITEM_URL) == 1


@pytest.mark.asyncio
async def test_gateway_pointing_to_gateway_does_not_loop(recording_transport):
    # каждый ответ это gateway-страница; разрешён один хоп, дальше только отказ
    transport = recording_transport(lambda request: httpx.Response(200, text=GATEWAY_HTML))
    fetcher = _fetcher(transport)

    with pytest.raises(FetchExhausted) as exc_info:
        await fetcher.fetch("https://www.aliexpress.com/gateway?id=123")

    # 3 внешних попытки, каждая с одним хопом по 3 бэкендам
    assert len(transport.calls) == 3 + 3 * 3
    assert [f.message for f in exc_info.value.failures] == ["Gateway hop failed."] * 3


@pytest.mark.asyncio
async def test_retry_flag_disables_gateway_following(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(200, text=GATEWAY_HTML))

    with pytest.raises(FetchExhausted):
        await _fetcher(transport).fetch(ITEM_URL, is_retry=True)

    assert transport.targets == [ITEM_URL] * 3


@pytest.mark.asyncio
async def test_relative_gateway_target_is_absolutized(recording_transport, make_product_html):
    page = make_product_html()
    gateway = "<html><script>location.replace('/item/777.html')</script></html>"

    def handler(request: httpx.Request) -> httpx.Response:
        if proxied_target(request) == "https://www.aliexpress.com/item/777.html":
            return httpx.Response(200, text=page)
        return httpx.Response(200, text=gateway)

    transport = recording_transport(handler)
    assert await _fetcher(transport).fetch("https://example.com/start") == page


# ──────────────────────────────────────────────────────────────────────────────
#                               🔗 Короткие ссылки
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_short_link_is_resolved_before_first_hop(recording_transport, make_product_html):
    page = make_product_html()
    short = "https://s.click.aliexpress.com/e/_DmXyZ"

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/get":  # AllOrigins JSON отвечает резолверу
            body = {"contents": f"<script>window.location.href='{ITEM_URL}'</script>"}
            return httpx.Response(200, json=body)
        return httpx.Response(200, text=page)

    transport = recording_transport(handler)
    html = await _fetcher(transport).fetch(short)

    assert html == page
    assert transport.targets == [short, ITEM_URL]


def test_product_page_markers():
    assert looks_like_product_page('<span itemprop="name">Watch</span>')
    assert looks_like_product_page('<div class="product-title">')
    assert looks_like_product_page('<meta property="og:title" content="x">')
    assert not looks_like_product_page("<html><body>Redirecting…</body></html>")


@pytest.mark.asyncio
async def test_unencodable_url_on_raw_path_backend_becomes_proxy_failure(recording_transport):
    url_with_tab = "https://www.aliexpress.com/item/1\t23.html"
    transport = recording_transport(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(FetchExhausted) as exc_info:
        await _fetcher(transport).fetch(url_with_tab)

    failures = exc_info.value.failures
    assert [f.backend for f in failures] == ["allorigins_raw", "codetabs", "thingproxy"]
    # ThingProxy не дошёл до транспорта: httpx отверг URL ещё при сборке запроса
    assert transport.hosts == ["api.allorigins.win", "api.codetabs.com"]
    assert isinstance(failures[-1].__cause__, httpx.InvalidURL)


# ──────────────────────────────────────────────────────────────────────────────
#                               📄 Фактический URL страницы
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_fetch_page_reports_resolved_short_link_target(recording_transport, make_product_html):
    page = make_product_html()
    short = "https://s.click.aliexpress.com/e/_DmXyZ"

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/get":
            return httpx.Response(200, json={"contents": f"<script>window.location.href='{ITEM_URL}'</script>"})
        return httpx.Response(200, text=page)

    fetched = await _fetcher(recording_transport(handler)).fetch_page(short)

    assert fetched.html == page
    assert fetched.url == ITEM_URL


@pytest.mark.asyncio
async def test_fetch_page_reports_gateway_target(recording_transport, make_product_html):
    page = make_product_html()

    def handler(request: httpx.Request) -> httpx.Response:
        if proxied_target(request) == ITEM_URL:
            return httpx.Response(200, text=page)
        return httpx.Response(200, text=GATEWAY_HTML)

    fetched = await _fetcher(recording_transport(handler)).fetch_page("https://www.aliexpress.com/gateway?id=123")

    assert fetched.url == ITEM_URL
