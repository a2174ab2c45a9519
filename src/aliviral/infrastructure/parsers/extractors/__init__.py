# 🧩 aliviral/infrastructure/parsers/extractors/__init__.py
"""
🧩 Екстрактори полів товару.

🔹 `ExtractionContext` — лінивий DOM/JSON-LD/state для одного виклику.
🔹 Кортежі `*_EXTRACTORS` задають пріоритет джерел для кожного поля.
🔹 `collect_images` / `collect_videos` — медіа сторінки.
"""

from .context import ExtractionContext
from .images import collect_images, collect_videos
from .price import (
    CURRENT_PRICE_EXTRACTORS,
    DISCOUNT_EXTRACTORS,
    ORIGINAL_PRICE_EXTRACTORS,
    compute_discount,
    decode_pdp_npi,
    format_price,
)
from .state_object import find_state_object, scan_object_literal
from .text_fields import (
    DESCRIPTION_EXTRACTORS,
    RATING_EXTRACTORS,
    REVIEWS_EXTRACTORS,
    TITLE_EXTRACTORS,
    clean_title,
)

__all__ = [
    "ExtractionContext",
    "collect_images",
    "collect_videos",
    "CURRENT_PRICE_EXTRACTORS",
    "DISCOUNT_EXTRACTORS",
    "ORIGINAL_PRICE_EXTRACTORS",
    "compute_discount",
    "decode_pdp_npi",
    "format_price",
    "find_state_object",
    "scan_object_literal",
    "DESCRIPTION_EXTRACTORS",
    "RATING_EXTRACTORS",
    "REVIEWS_EXTRACTORS",
    "TITLE_EXTRACTORS",
    "clean_title",
]
