# 🔗 aliviral/infrastructure/url/short_link_resolver.py
"""
🔗 `ShortLinkResolver` — розгортає короткі/партнерські посилання AliExpress.

🔹 Розпізнає короткі посилання за доменом (`s.click.aliexpress.com`, `a.aliexpress.com`)
   або сегментом шляху `/e/_`.
🔹 Послідовно питає проксі-бекенди (таймаут на кожну спробу) і шукає редирект у тілі.
🔹 Ніколи не кидає: збій одного бекенда логується, за повної невдачі лишається оригінальний URL.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🔠 Системні імпорти
import asyncio															# ⏳ Дедлайн спроби
import logging															# 🧾 Логування
from dataclasses import dataclass										# 🧱 Результат розгортання
from typing import List, Optional, Sequence, Tuple							# 🧰 Типізація
from urllib.parse import urlparse										# 🌐 Розбір URL

# 🧩 Внутрішні модулі проєкту
from aliviral.errors import ResolutionFailure							# 🚨 Не фатальна помилка
from aliviral.infrastructure.web._fetcher_options import DEFAULT_FETCHER_OPTIONS, FetcherOptions
from aliviral.infrastructure.web.proxy_backends import ProxyBackend, backends_by_name
from aliviral.shared.metrics import SHORT_LINK_RESOLUTIONS				# 📊 Метрики
from aliviral.shared.utils.logger import LOG_NAME, LogTag, log_event	# 🧾 Логер і теги

from .redirects import SHORT_LINK_PATTERNS, absolutize_short_link_target, find_redirect

logger = logging.getLogger(f"{LOG_NAME}.resolver")

SHORT_LINK_HOSTS = ("s.click.aliexpress.com", "a.aliexpress.com")		# 🔗 Домени коротких посилань
SHORT_LINK_PATH_MARKER = "/e/_"											# 🔗 Маркер у шляху


def is_short_link(url: str) -> bool:
    """True, якщо URL схожий на коротке/партнерське посилання AliExpress."""
    if not url:
        return False
    parsed = urlparse(url if "://" in url else f"https://{url}")
    host = (parsed.netloc or "").lower().split(":", 1)[0]
    if host in SHORT_LINK_HOSTS:
        return True
    return SHORT_LINK_PATH_MARKER in url


# ================================
# 🧱 РЕЗУЛЬТАТ
# ================================
@dataclass(frozen=True)
class ResolutionOutcome:
    """Результат розгортання: фінальний URL і звідки він узявся."""

    url: str
    resolved: bool
    backend: Optional[str] = None
    pattern: Optional[str] = None


# ================================
# 🔗 РЕЗОЛВЕР
# ================================
class ShortLinkResolver:
    """Розгортає короткі посилання через ланцюжок проксі-бекендів."""

    def __init__(
        self,
        options: FetcherOptions = DEFAULT_FETCHER_OPTIONS,
        *,
        backends: Optional[Sequence[ProxyBackend]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.options = options
        self.backends: List[ProxyBackend] = list(backends) if backends is not None else backends_by_name(
            options.resolve_backends
        )
        self._transport = transport											# 🧪 Підміна транспорту в тестах

    async def resolve(self, url: str, *, client: Optional[httpx.AsyncClient] = None) -> ResolutionOutcome:
        """
        🔗 Повертає розгорнутий URL або оригінал.

        Args:
            url: Вхідне посилання.
            client: Спільний HTTP-клієнт фетчера (якщо None — створюється тимчасовий).
        """
        if not is_short_link(url):
            return ResolutionOutcome(url=url, resolved=False)

        log_event(logger, LogTag.INFO, "Detected shortened link. Resolving redirect...", url=url)
        if client is not None:
            return await self._resolve_with(client, url)
        async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as own_client:
            return await self._resolve_with(own_client, url)

    async def _resolve_with(self, client: httpx.AsyncClient, url: str) -> ResolutionOutcome:
        for backend in self.backends:
            try:
                candidate = await self._try_backend(client, backend, url)
            except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as exc:
                log_event(
                    logger,
                    LogTag.ERROR,
                    "Resolution proxy failed (%s): %s",
                    backend.label,
                    str(exc) or type(exc).__name__,
                    backend=backend.name,
                )
                continue
            if candidate is not None:
                pattern, target = candidate
                log_event(logger, LogTag.SUCCESS, "Resolved to: %s", target[:80], backend=backend.name)
                SHORT_LINK_RESOLUTIONS.labels(outcome="resolved").inc()
                return ResolutionOutcome(url=target, resolved=True, backend=backend.name, pattern=pattern)

        failure = ResolutionFailure(url, details=f"backends={[b.name for b in self.backends]}")
        logger.warning("⚠️ %s — продовжуємо з оригінальним URL.", failure.message, extra=failure.to_log_extra())
        SHORT_LINK_RESOLUTIONS.labels(outcome="unresolved").inc()
        return ResolutionOutcome(url=url, resolved=False)

    async def _try_backend(
        self, client: httpx.AsyncClient, backend: ProxyBackend, url: str
    ) -> Optional[Tuple[str, str]]:
        """🔁 Одна спроба: запит із дедлайном → пошук патерна у тілі."""
        timeout = self.options.resolve_timeout_sec
        response = await asyncio.wait_for(
            client.get(backend.build_url(url), timeout=httpx.Timeout(timeout)),
            timeout=timeout,
        )
        if not response.is_success:
            logger.debug("🔗 %s повернув статус %s.", backend.label, response.status_code)
            return None
        body = backend.read_body(response.text)
        found = find_redirect(body, SHORT_LINK_PATTERNS)
        if found is None:
            logger.debug("🔗 %s: редирект у відповіді не знайдено (%d символів).", backend.label, len(body))
            return None
        pattern, raw_target = found
        return pattern, absolutize_short_link_target(raw_target)


__all__ = ["ShortLinkResolver", "ResolutionOutcome", "is_short_link", "SHORT_LINK_HOSTS"]
