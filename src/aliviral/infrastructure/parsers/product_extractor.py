# 🧠 aliviral/infrastructure/parsers/product_extractor.py
"""
🧠 `ProductExtractor` — збирає `ProductRecord` з HTML сторінки AliExpress.

🔹 Для кожного поля проганяє каскад джерел (`first_present`) у фіксованому порядку.
🔹 Ніколи не кидає: відсутні поля отримують дефолти. Перевірку назви робить викликач.
🔹 Знижка без явного поля обчислюється з поточної та старої ціни.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from typing import Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.entities import (	# 📦 Сутність і дефолти
    DEFAULT_DESCRIPTION,
    DEFAULT_RATING,
    DEFAULT_REVIEWS,
    DEFAULT_TITLE,
    PRICE_SENTINEL,
    ProductRecord,
)
from aliviral.domain.products.images import DEFAULT_IMAGES_LIMIT	# ✂️ Ліміт зображень
from aliviral.shared.metrics import EXTRACTIONS	# 📊 Метрики
from aliviral.shared.utils.logger import LOG_NAME, LogTag, log_event	# 🧾 Логер і теги

from .cascade import first_present
from .extractors import (
    CURRENT_PRICE_EXTRACTORS,
    DESCRIPTION_EXTRACTORS,
    DISCOUNT_EXTRACTORS,
    ORIGINAL_PRICE_EXTRACTORS,
    RATING_EXTRACTORS,
    REVIEWS_EXTRACTORS,
    TITLE_EXTRACTORS,
    ExtractionContext,
    clean_title,
    collect_images,
    collect_videos,
    compute_discount,
)

logger = logging.getLogger(f"{LOG_NAME}.parser")

DEFAULT_DISCOUNT_VALUE = "0"


class ProductExtractor:
    """🧠 HTML (+ URL джерела) → `ProductRecord`."""

    def __init__(self, *, images_limit: int = DEFAULT_IMAGES_LIMIT, prefer_product_images: bool = True) -> None:
        self.images_limit = images_limit
        self.prefer_product_images = prefer_product_images

    def extract(self, html: str, source_url: Optional[str] = None) -> ProductRecord:
        """
        🧠 Будує запис товару.

        Args:
            html: Сирий HTML сторінки.
            source_url: URL джерела (потрібен для розкодування `pdp_npi`).

        Returns:
            ProductRecord: завжди; поле `url` виставляє викликач.
        """
        log_event(logger, LogTag.INFO, "Analyzing HTML content...")
        ctx = ExtractionContext(html, source_url)

        raw_title = first_present(TITLE_EXTRACTORS, ctx, field="title")
        name = clean_title(raw_title) if raw_title is not None else DEFAULT_TITLE

        current_price = first_present(CURRENT_PRICE_EXTRACTORS, ctx, field="current_price") or PRICE_SENTINEL
        original_price = first_present(ORIGINAL_PRICE_EXTRACTORS, ctx, field="original_price") or ""
        discount = (
            first_present(DISCOUNT_EXTRACTORS, ctx, field="discount")
            or compute_discount(original_price, current_price)
            or DEFAULT_DISCOUNT_VALUE
        )

        images = collect_images(ctx, limit=self.images_limit, prefer_product_images=self.prefer_product_images)
        videos = collect_videos(ctx)

        record = ProductRecord(
            name=name,
            current_price=current_price,
            original_price=original_price,
            discount=f"{discount}%",
            description=first_present(DESCRIPTION_EXTRACTORS, ctx, field="description") or DEFAULT_DESCRIPTION,
            images=images,
            videos=videos,
            rating=first_present(RATING_EXTRACTORS, ctx, field="rating") or DEFAULT_RATING,
            reviews=first_present(REVIEWS_EXTRACTORS, ctx, field="reviews") or DEFAULT_REVIEWS,
        )

        EXTRACTIONS.labels(outcome="complete" if record.has_usable_name() else "incomplete").inc()
        log_event(logger, LogTag.SUCCESS, "First image URL: %s", record.image)
        logger.debug(
            "🧠 Запис: name=%r price=%s/%s discount=%s images=%d videos=%d",
            record.name[:60],
            record.current_price,
            record.original_price or "-",
            record.discount,
            len(record.images),
            len(record.videos),
        )
        return record


__all__ = ["ProductExtractor", "ExtractionContext"]
