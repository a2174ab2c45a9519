# 🚀 aliviral/infrastructure/services/__init__.py
"""🚀 Сервіси застосунку: пайплайн аналізу, сесія, ручний fallback."""

from .analysis_service import AnalysisOutcome, AnalysisSession, ProductAnalysisService
from .manual_fallback import ManualEntry, build_manual_record, parse_image_list

__all__ = [
    "AnalysisOutcome",
    "AnalysisSession",
    "ManualEntry",
    "ProductAnalysisService",
    "build_manual_record",
    "parse_image_list",
]
