# 🧠 aliviral/infrastructure/parsers/__init__.py
"""
🧠 Парсинг сторінки товару: каскад джерел і збірка `ProductRecord`.
"""

from .cascade import first_present, is_present
from .extractors import ExtractionContext
from .product_extractor import ProductExtractor

__all__ = ["ExtractionContext", "ProductExtractor", "first_present", "is_present"]
