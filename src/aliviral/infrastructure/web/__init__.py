# 🌍 aliviral/infrastructure/web/__init__.py
"""
🌍 Мережевий шар: проксі-бекенди, опції та фетчер HTML.
"""

from typing import TYPE_CHECKING

from ._fetcher_options import DEFAULT_FETCHER_OPTIONS, FetcherOptions
from .proxy_backends import BACKENDS, ProxyBackend, backends_by_name

if TYPE_CHECKING:  # фетчер імпортує резолвер, а той імпортує опції цього пакета
    from .proxy_fetcher import ProxyFetcher

__all__ = [
    "BACKENDS",
    "DEFAULT_FETCHER_OPTIONS",
    "FetcherOptions",
    "ProxyBackend",
    "ProxyFetcher",
    "backends_by_name",
]


def __getattr__(name: str):
    if name == "ProxyFetcher":
        from .proxy_fetcher import ProxyFetcher  # локальний імпорт → немає циклу

        return ProxyFetcher
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
