# 🌍 aliviral/infrastructure/web/proxy_fetcher.py
"""
🌍 `ProxyFetcher` — завантажує сирий HTML сторінки товару через ланцюжок CORS-проксі.

🔹 Перед першим хопом розгортає короткі посилання (`ShortLinkResolver`).
🔹 Бекенди пробуються строго по черзі, кожна спроба має власний дедлайн (25 с).
🔹 Коротка відповідь без маркерів товару → шукаємо редирект gateway-сторінки
   і йдемо за ним (`is_retry=True`); глибина хопів не більше одного.
🔹 Тіло ≤ 500 символів — збій бекенда; якщо впали всі — `FetchExhausted`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🔠 Системні імпорти
import asyncio															# ⏳ Дедлайн спроби
import logging															# 🧾 Логування
import time															# ⏱️ Вимір тривалості
from typing import List, Optional, Sequence							# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.interfaces import FetchedPage			# 📄 HTML + фактичний URL
from aliviral.errors import FetchExhausted, ProxyFailure				# 🚨 Мережеві винятки
from aliviral.infrastructure.url.redirects import (					# 🔀 Gateway-редиректи
    GATEWAY_PATTERNS,
    absolutize_gateway_target,
    find_redirect,
)
from aliviral.infrastructure.url.short_link_resolver import ShortLinkResolver	# 🔗 Розгортання
from aliviral.shared.metrics import PAGE_FETCH_SECONDS, PROXY_ATTEMPTS	# 📊 Метрики
from aliviral.shared.utils.logger import LOG_NAME, LogTag, log_event	# 🧾 Логер і теги

from ._fetcher_options import DEFAULT_FETCHER_OPTIONS, FetcherOptions
from .proxy_backends import ProxyBackend, backends_by_name

# ================================
# 🧾 ЛОГЕР ТА КОНСТАНТИ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.fetcher")

PRODUCT_PAGE_MARKERS = ('itemprop="name"', "product-title", "og:title")	# ✅ Ознаки справжньої сторінки товару


def looks_like_product_page(html: str) -> bool:
    """✅ True, якщо у HTML є хоч один маркер сторінки товару."""
    return any(marker in html for marker in PRODUCT_PAGE_MARKERS)


# ================================
# 🌍 ФЕТЧЕР
# ================================
class ProxyFetcher:
    """
    🌍 Повертає HTML за URL, перебираючи проксі-бекенди.

    Спільний `httpx.AsyncClient` живе в межах одного ланцюжка `fetch`
    (включно з gateway-хопом); спроби ніколи не виконуються паралельно.
    """

    def __init__(
        self,
        options: FetcherOptions = DEFAULT_FETCHER_OPTIONS,
        *,
        resolver: Optional[ShortLinkResolver] = None,
        backends: Optional[Sequence[ProxyBackend]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.options = options
        self.backends: List[ProxyBackend] = list(backends) if backends is not None else backends_by_name(
            options.fetch_backends
        )
        self.resolver = resolver or ShortLinkResolver(options, transport=transport)
        self._transport = transport											# 🧪 Підміна транспорту в тестах
        self._headers = {"Accept": options.accept_header}

    # ================================
    # 🔄 ПУБЛІЧНИЙ API
    # ================================
    async def fetch(self, url: str, *, is_retry: bool = False) -> str:
        """
        🔄 Завантажує HTML сторінки.

        Лише HTML; фактичний URL сторінки повертає `fetch_page`.

        Args:
            url: Посилання на товар (може бути коротким).
            is_retry: True для gateway-хопу — вимикає розгортання і подальші хопи.

        Returns:
            str: HTML довжиною > `min_body_chars`.

        Raises:
            FetchExhausted: усі бекенди не дали придатного HTML.
        """
        page = await self._run(url, is_retry=is_retry)
        return page.html

    fetch_page_content = fetch											# 🔁 Історична назва

    async def fetch_page(self, url: str) -> FetchedPage:
        """📄 Як `fetch`, але разом з URL, який реально віддав сторінку (після розгортання і хопу)."""
        return await self._run(url, is_retry=False)

    async def _run(self, url: str, *, is_retry: bool) -> FetchedPage:
        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                headers=self._headers,
                follow_redirects=True,
            ) as client:
                return await self._fetch_with(client, url, is_retry=is_retry)
        finally:
            PAGE_FETCH_SECONDS.observe(time.perf_counter() - started)

    # ================================
    # 🔁 ЛАНЦЮЖОК БЕКЕНДІВ
    # ================================
    async def _fetch_with(self, client: httpx.AsyncClient, url: str, *, is_retry: bool) -> FetchedPage:
        if not is_retry:
            outcome = await self.resolver.resolve(url, client=client)
            url = outcome.url

        failures: List[ProxyFailure] = []
        for backend in self.backends:
            log_event(logger, LogTag.INFO, "Fetching via %s...", backend.label, backend=backend.name)
            try:
                html = await self._attempt(client, backend, url)
            except ProxyFailure as failure:
                failures.append(failure)
                PROXY_ATTEMPTS.labels(backend=backend.name, outcome="failure").inc()
                log_event(
                    logger,
                    LogTag.ERROR,
                    "Proxy failed: %s",
                    failure.message,
                    **failure.to_log_extra(),
                )
                continue

            gateway_target = None if is_retry else self._gateway_target(html)
            if gateway_target:
                PROXY_ATTEMPTS.labels(backend=backend.name, outcome="gateway").inc()
                log_event(logger, LogTag.INFO, "Gateway detected! Following to: %s", gateway_target[:80])
                try:
                    return await self._fetch_with(client, gateway_target, is_retry=True)
                except FetchExhausted as exhausted:	# 🚪 Хоп не вдався → наступний бекенд з вихідним URL
                    failure = ProxyFailure(
                        "Gateway hop failed.",
                        backend=backend.name,
                        url=gateway_target,
                        details=exhausted.message,
                    )
                    failures.append(failure)
                    log_event(logger, LogTag.ERROR, "Proxy failed: %s", failure.message, **failure.to_log_extra())
                    continue

            if len(html) > self.options.min_body_chars:
                PROXY_ATTEMPTS.labels(backend=backend.name, outcome="success").inc()
                log_event(logger, LogTag.SUCCESS, "Success! Fetched %d chars.", len(html), backend=backend.name)
                return FetchedPage(html=html, url=url)

            failure = ProxyFailure("Content too short.", backend=backend.name, url=url)
            failures.append(failure)
            PROXY_ATTEMPTS.labels(backend=backend.name, outcome="too_short").inc()
            log_event(logger, LogTag.ERROR, "Proxy failed: %s", failure.message, **failure.to_log_extra())

        exhausted = FetchExhausted(url, failures)
        logger.error("❌ %s", exhausted.message, extra=exhausted.to_log_extra())
        raise exhausted from (failures[-1] if failures else None)

    async def _attempt(self, client: httpx.AsyncClient, backend: ProxyBackend, url: str) -> str:
        """🔁 Одна спроба через бекенд; будь-яка мережева проблема → `ProxyFailure`."""
        timeout = self.options.fetch_timeout_sec
        proxy_url = backend.build_url(url)
        try:
            response = await asyncio.wait_for(
                client.get(proxy_url, timeout=httpx.Timeout(timeout)),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProxyFailure(
                f"Timed out after {timeout:g}s", backend=backend.name, url=url
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:	# 🧱 InvalidURL не наслідує HTTPError
            raise ProxyFailure(
                str(exc) or type(exc).__name__, backend=backend.name, url=url
            ) from exc

        if not response.is_success:
            raise ProxyFailure(
                f"Status {response.status_code}",
                backend=backend.name,
                url=url,
                status_code=response.status_code,
            )
        return backend.read_body(response.text)

    # ================================
    # 🚪 GATEWAY-СТОРІНКИ
    # ================================
    def _gateway_target(self, html: str) -> Optional[str]:
        """🚪 Для короткої сторінки без маркерів товару повертає URL редиректу."""
        if len(html) >= self.options.gateway_max_chars or looks_like_product_page(html):
            return None
        log_event(logger, LogTag.SYSTEM, "Short response (%d chars). Checking for redirects...", len(html))
        found = find_redirect(html, GATEWAY_PATTERNS)
        if found is None:
            return None
        pattern, raw_target = found
        logger.debug("🚪 Gateway-патерн '%s' → %s", pattern, raw_target)
        return absolutize_gateway_target(raw_target)


__all__ = ["ProxyFetcher", "PRODUCT_PAGE_MARKERS", "looks_like_product_page"]
