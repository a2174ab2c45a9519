# 🤝 aliviral/domain/products/interfaces.py
"""🤝 Контракти між шарами пайплайна (fetcher / extractor)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .entities import ProductRecord


@dataclass(frozen=True)
class FetchedPage:
    """🌐 HTML разом з URL, з якого його реально віддали (після розгортання і хопу)."""

    html: str
    url: str


class IPageFetcher(Protocol):
    """🌐 Повертає сирий HTML сторінки товару."""

    async def fetch(self, url: str, *, is_retry: bool = False) -> str:
        ...

    async def fetch_page(self, url: str) -> FetchedPage:
        ...


class IProductExtractor(Protocol):
    """🧾 Перетворює HTML на `ProductRecord` (ніколи не кидає)."""

    def extract(self, html: str, source_url: Optional[str] = None) -> ProductRecord:
        ...
