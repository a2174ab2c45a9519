# ✍️ aliviral/infrastructure/services/manual_fallback.py
"""
✍️ Ручний fallback: запис товару з форми або зі вставленого HTML.

🔹 Якщо користувач вставив HTML — проганяємо звичайний екстрактор.
🔹 Інакше збираємо запис з полів форми з фіксованими дефолтами.
🔹 Список URL зображень приймає рядки через перенос або кому.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
import re	# 🧵 Розбір списку URL
from dataclasses import dataclass	# 🧱 Дані форми
from typing import List, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.entities import ProductRecord	# 📦 Запис товару
from aliviral.domain.products.images import PLACEHOLDER_IMAGE	# 🪧 Запасне зображення
from aliviral.domain.products.interfaces import IProductExtractor	# 🧩 Контракт екстрактора
from aliviral.shared.utils.logger import LOG_NAME, LogTag, log_event	# 🧾 Логер і теги

logger = logging.getLogger(f"{LOG_NAME}.manual")

MANUAL_DEFAULT_TITLE = "Manual Product"
MANUAL_DEFAULT_PRICE = "$0.00"
MANUAL_DEFAULT_DISCOUNT = "0"
MANUAL_DEFAULT_DESCRIPTION = "Manual description."
MANUAL_RATING = "N/A"
MANUAL_REVIEWS = "0"
MANUAL_FEATURES = ("Premium Quality", "Best Deal")

_SPLIT_RE = re.compile(r"[\n,]+")


@dataclass(frozen=True)
class ManualEntry:
    """🧾 Поля ручної форми (усе необовʼязкове)."""

    title: str = ""
    price: str = ""
    original_price: str = ""
    discount: str = ""
    description: str = ""
    image_urls: str = ""	# 🖼️ Через перенос рядка або кому
    source_html: str = ""	# 📄 Вставлений HTML сторінки


def parse_image_list(raw: Optional[str]) -> List[str]:
    """🖼️ Розбиває текст на непорожні URL (роздільники: перенос рядка, кома)."""
    return [part.strip() for part in _SPLIT_RE.split(raw or "") if part.strip()]


def _with_percent(value: str) -> str:
    value = value.strip()
    return value if value.endswith("%") else f"{value}%"


def build_manual_record(
    entry: ManualEntry,
    extractor: Optional[IProductExtractor] = None,
    *,
    source_url: Optional[str] = None,
) -> ProductRecord:
    """
    ✍️ Будує запис з ручного вводу.

    Args:
        entry: Дані форми.
        extractor: Екстрактор для вставленого HTML (None → HTML ігнорується).
        source_url: URL, який користувач аналізував (потрапляє у `record.url`).
    """
    image_urls = parse_image_list(entry.image_urls)

    if entry.source_html.strip() and extractor is not None:
        log_event(logger, LogTag.INFO, "Analyzing pasted HTML...")
        record = extractor.extract(entry.source_html, source_url)
        if record.has_usable_name():
            record.merge_images(image_urls)
            record.url = source_url
            return record
        log_event(logger, LogTag.ERROR, "Parse failed. Using manual fields.")

    record = ProductRecord(
        name=entry.title.strip() or MANUAL_DEFAULT_TITLE,
        current_price=entry.price.strip() or MANUAL_DEFAULT_PRICE,
        original_price=entry.original_price.strip(),
        discount=_with_percent(entry.discount or MANUAL_DEFAULT_DISCOUNT),
        description=entry.description.strip() or MANUAL_DEFAULT_DESCRIPTION,
        images=[PLACEHOLDER_IMAGE],
        videos=[],
        rating=MANUAL_RATING,
        reviews=MANUAL_REVIEWS,
        features=list(MANUAL_FEATURES),
        url=source_url,
    )
    added = record.merge_images(image_urls)
    logger.debug("✍️ Ручний запис: %r, зображень додано: %d", record.name, added)
    return record


__all__ = ["ManualEntry", "build_manual_record", "parse_image_list"]
