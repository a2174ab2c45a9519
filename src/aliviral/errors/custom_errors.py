# 🚨 aliviral/errors/custom_errors.py
"""
🚨 Ієрархія винятків пайплайна аналізу товару.

🔹 `ProxyFailure` — збій одного бекенда (відновлюється переходом до наступного).
🔹 `FetchExhausted` — усі бекенди впали; запускає ручний fallback.
🔹 `ResolutionFailure` — коротке посилання не розгорнуто (не фатально).
🔹 `ExtractionIncomplete` — запис без придатної назви; запускає ручний fallback.
🔹 `ParseFailure` — не вдалося розібрати state-обʼєкт або JSON-LD (локальне відновлення).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from typing import Dict, List, Optional, Sequence					# 📐 Типізація


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("aliviral.errors")						# 🧾 Локальний логер


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів і метрик."""

    PROXY = "proxy_failure"											# 🌐 Один бекенд
    FETCH_EXHAUSTED = "fetch_exhausted"								# 🧱 Усі бекенди
    RESOLUTION = "resolution_failure"								# 🔗 Коротке посилання
    EXTRACTION = "extraction_incomplete"							# 🏷️ Немає назви
    PARSE = "parse_failure"											# 📄 State/JSON-LD


# ================================
# 🧠 БАЗОВИЙ ВИНЯТОК
# ================================
class AppError(Exception):
    """🧠 Базовий виняток застосунку з повідомленням і деталями."""

    code: str = "app_error"

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 💬 Людське повідомлення
        self.details = details										# 🧾 Технічні деталі

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


# ================================
# 🌐 МЕРЕЖА
# ================================
class ProxyFailure(AppError):
    """🌐 Один проксі-бекенд недоступний, повернув не-2xx або закороткий вміст."""

    code = ErrorCode.PROXY

    def __init__(
        self,
        message: str,
        *,
        backend: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.backend = backend										# 🏷️ Назва бекенда
        self.url = url												# 🔗 Цільовий URL
        self.status_code = status_code								# 🔢 HTTP-код (якщо є)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["backend"] = self.backend
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        return extra


class FetchExhausted(AppError):
    """🧱 Жоден бекенд не повернув придатний HTML."""

    code = ErrorCode.FETCH_EXHAUSTED

    def __init__(self, url: str, failures: Sequence[ProxyFailure]) -> None:
        last = failures[-1].message if failures else "no backends configured"
        super().__init__(f"All proxies failed for {url}: {last}")
        self.url = url
        self.failures: List[ProxyFailure] = list(failures)			# 📜 Повна історія спроб
        logger.debug("🧱 FetchExhausted created", extra={"url": url, "attempts": len(self.failures)})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["url"] = self.url
        extra["backends"] = [f.backend for f in self.failures]
        return extra


class ResolutionFailure(AppError):
    """🔗 Коротке посилання не вдалося розгорнути (оригінальний URL зберігається)."""

    code = ErrorCode.RESOLUTION

    def __init__(self, url: str, *, details: Optional[str] = None) -> None:
        super().__init__(f"Could not resolve short link: {url}", details=details)
        self.url = url


# ================================
# 🧾 ПАРСИНГ
# ================================
class ExtractionIncomplete(AppError):
    """🏷️ Витягнутий запис не містить придатної назви."""

    code = ErrorCode.EXTRACTION

    def __init__(self, url: Optional[str] = None) -> None:
        super().__init__("Incomplete data extracted.")
        self.url = url


class ParseFailure(AppError):
    """📄 Джерело (state-обʼєкт / JSON-LD) не розібрано."""

    code = ErrorCode.PARSE

    def __init__(self, source: str, *, details: Optional[str] = None) -> None:
        super().__init__(f"Failed to parse {source}", details=details)
        self.source = source


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "ProxyFailure",
    "FetchExhausted",
    "ResolutionFailure",
    "ExtractionIncomplete",
    "ParseFailure",
]
