# 🚀 aliviral/infrastructure/services/analysis_service.py
"""
🚀 Пайплайн аналізу товару та сесія з «поточним» записом.

🔹 `ProductAnalysisService.analyze(url)`: fetch → extract → перевірка назви → `record.url`.
🔹 `AnalysisSession` тримає останній запис (останній запис перемагає) і замість
   винятків `FetchExhausted` / `ExtractionIncomplete` повертає прапорець
   «потрібен ручний ввід».
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn	# ⏳ Індикація завантаження

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from dataclasses import dataclass	# 🧱 Результат аналізу
from typing import Iterable, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.entities import ProductRecord	# 📦 Запис товару
from aliviral.domain.products.interfaces import FetchedPage, IPageFetcher, IProductExtractor	# 🤝 Контракти
from aliviral.errors import AppError, ExtractionIncomplete, FetchExhausted	# 🚨 Термінальні збої
from aliviral.infrastructure.images.display_fallback import (	# 🖼️ Показ зображень
    DEFAULT_IMAGE_PROXY_BASE,
    DisplayAttempt,
    resolve_display_url,
)
from aliviral.shared.utils.logger import LOG_NAME, LogTag, log_event	# 🧾 Логер і теги

from .manual_fallback import ManualEntry, build_manual_record

logger = logging.getLogger(f"{LOG_NAME}.service")


# ================================
# 🚀 СЕРВІС
# ================================
class ProductAnalysisService:
    """🚀 Склеює фетчер і екстрактор в один виклик."""

    def __init__(
        self,
        fetcher: IPageFetcher,
        extractor: IProductExtractor,
        *,
        enable_progress: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.enable_progress = bool(enable_progress)

    async def analyze(self, url: str) -> ProductRecord:
        """
        🚀 Повний аналіз URL.

        Raises:
            ValueError: порожній URL.
            FetchExhausted: жоден проксі не віддав сторінку.
            ExtractionIncomplete: у записі немає придатної назви.
        """
        url = (url or "").strip()
        if not url:
            raise ValueError("Please enter a valid AliExpress link.")

        log_event(logger, LogTag.INFO, "Starting analysis for URL: %s...", url[:40])
        log_event(logger, LogTag.INFO, "Fetching HTML content...")
        page = await self._fetch(url)

        log_event(logger, LogTag.INFO, "Extracting product data...")
        # 🔗 Фактичний URL сторінки; `record.url` лишається вхідним
        record = self.extractor.extract(page.html, page.url)
        if not record.has_usable_name():
            raise ExtractionIncomplete(url)

        record.url = url
        log_event(logger, LogTag.SUCCESS, "Extraction successful!")
        return record

    async def _fetch(self, url: str) -> FetchedPage:
        if not self.enable_progress:
            return await self.fetcher.fetch_page(url)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            transient=True,
        ) as progress:	# ⏳ Спінер на час мережевого ланцюжка
            progress.add_task(description=f"Fetching {url[:40]}...", total=None)
            return await self.fetcher.fetch_page(url)


# ================================
# 🧠 СЕСІЯ
# ================================
@dataclass(frozen=True)
class AnalysisOutcome:
    """📦 Результат спроби аналізу для UI-шару."""

    record: Optional[ProductRecord]
    needs_manual: bool = False
    error: Optional[AppError] = None


class AnalysisSession:
    """
    🧠 Власник «поточного» запису товару.

    Кожен успішний аналіз чи ручний ввід замінює запис цілком; частково він
    змінюється лише через `augment_images`.
    """

    def __init__(
        self,
        service: ProductAnalysisService,
        *,
        image_proxy_base: str = DEFAULT_IMAGE_PROXY_BASE,
    ) -> None:
        self.service = service
        self.image_proxy_base = image_proxy_base
        self.current: Optional[ProductRecord] = None
        self.last_url: Optional[str] = None

    async def analyze(self, url: str) -> AnalysisOutcome:
        """🔄 Аналіз із перемиканням на ручний ввід при термінальних збоях."""
        self.last_url = (url or "").strip() or None
        try:
            record = await self.service.analyze(url)
        except (FetchExhausted, ExtractionIncomplete) as exc:
            log_event(logger, LogTag.ERROR, "Auto-analysis failed: %s", exc.message, **exc.to_log_extra())
            log_event(logger, LogTag.SYSTEM, "Switching to Manual Fallback...")
            return AnalysisOutcome(record=None, needs_manual=True, error=exc)
        self.current = record
        return AnalysisOutcome(record=record)

    def submit_manual(self, entry: ManualEntry) -> ProductRecord:
        """✍️ Ручний ввід повністю замінює поточний запис."""
        record = build_manual_record(entry, self.service.extractor, source_url=self.last_url)
        self.current = record
        log_event(logger, LogTag.SUCCESS, "Manual product ready: %s", record.name[:60])
        return record

    def augment_images(self, urls: Iterable[str]) -> int:
        """🖼️ Доливає зображення в поточний запис; повертає кількість доданих."""
        if self.current is None:
            logger.warning("⚠️ Немає поточного товару для доповнення зображень.")
            return 0
        return self.current.merge_images(urls)

    def display_url(self, attempt: Optional[DisplayAttempt] = None) -> Optional[str]:
        """🖼️ URL зображення поточного товару для рендерера (проксі-база з конфігу)."""
        if self.current is None:
            return None
        return resolve_display_url(self.current, attempt, proxy_base=self.image_proxy_base)


__all__ = ["AnalysisOutcome", "AnalysisSession", "ProductAnalysisService"]
