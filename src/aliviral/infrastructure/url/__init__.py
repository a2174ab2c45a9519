# 🔗 aliviral/infrastructure/url/__init__.py
"""
🔗 Пакет роботи з URL: розгортання коротких посилань і пошук редиректів.
"""

from __future__ import annotations

from .redirects import GATEWAY_PATTERNS, SHORT_LINK_PATTERNS, find_redirect
from .short_link_resolver import ResolutionOutcome, ShortLinkResolver, is_short_link

__all__ = [
    "GATEWAY_PATTERNS",
    "SHORT_LINK_PATTERNS",
    "find_redirect",
    "ResolutionOutcome",
    "ShortLinkResolver",
    "is_short_link",
]
