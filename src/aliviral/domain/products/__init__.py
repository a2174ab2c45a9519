# 📦 aliviral/domain/products/__init__.py
"""
📦 Доменний пакет товарів: сутність, правила зображень, контракти.
"""

from .entities import (
    DEFAULT_FEATURES,
    DEFAULT_TITLE,
    PRICE_SENTINEL,
    ProductRecord,
)
from .images import PLACEHOLDER_IMAGE, ImageSet, clean_image_url, is_ignored_image, normalize_image_url
from .interfaces import FetchedPage, IPageFetcher, IProductExtractor

__all__ = [
    "DEFAULT_FEATURES",
    "DEFAULT_TITLE",
    "PRICE_SENTINEL",
    "PLACEHOLDER_IMAGE",
    "ProductRecord",
    "ImageSet",
    "clean_image_url",
    "is_ignored_image",
    "normalize_image_url",
    "FetchedPage",
    "IPageFetcher",
    "IProductExtractor",
]
