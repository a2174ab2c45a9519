# 🧠 aliviral/infrastructure/parsers/extractors/context.py
"""
🧠 `ExtractionContext` — спільний стан одного виклику екстракції.

DOM (BeautifulSoup + lxml), JSON-LD Product і state-обʼєкт розбираються
ліниво й рівно один раз, навіть якщо ними користуються кілька каскадів.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 DOM-дерево

# 🔠 Системні імпорти
import re	# 🧵 Regex-пошук у сирому HTML
from functools import cached_property	# 🧠 Лінивий розбір
from typing import Any, Dict, Optional, Pattern, Union	# 🧰 Типізація
from urllib.parse import parse_qs, urlparse	# 🌐 Query-параметри

from .base import _norm_ws, _scalar_to_str, deep_get, find_key
from .json_ld import find_json_ld_product
from .state_object import find_state_object

_STATE_WRAPPER_PREFIXES = ("", "data.")	# 🗂️ `runParams = {data: {...}}`


class ExtractionContext:
    """🧠 HTML сторінки + URL джерела з лінивими розборами."""

    def __init__(self, html: Optional[str], source_url: Optional[str] = None) -> None:
        self.html = html or ""
        self.source_url = source_url

    # ================================
    # 🧠 ЛІНИВІ РОЗБОРИ
    # ================================
    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "lxml")

    @cached_property
    def json_ld_product(self) -> Optional[Dict[str, Any]]:
        return find_json_ld_product(self.soup)

    @cached_property
    def state(self) -> Optional[Dict[str, Any]]:
        return find_state_object(self.html)

    # ================================
    # 🔍 ДОСТУП ДО ДЖЕРЕЛ
    # ================================
    def meta(self, *keys: str) -> Optional[str]:
        """🏷️ `content` першого meta з `property`/`name`/`itemprop` із переліку."""
        for key in keys:
            for attr in ("property", "name", "itemprop"):
                tag = self.soup.find("meta", attrs={attr: key})
                if tag is None:
                    continue
                content = _norm_ws(str(tag.get("content") or ""))
                if content:
                    return content
        return None

    def select_text(self, *selectors: str) -> Optional[str]:
        """🔎 Текст першого непорожнього елемента (для `<meta>` — атрибут `content`)."""
        for selector in selectors:
            for element in self.soup.select(selector):
                if element.name == "meta":
                    text = str(element.get("content") or "")
                else:
                    text = element.get_text(" ", strip=True) or str(element.get("content") or "")
                text = _norm_ws(text)
                if text:
                    return text
        return None

    def search(self, pattern: Union[str, Pattern[str]], group: int = 1) -> Optional[str]:
        """🧵 Regex по сирому HTML; повертає групу першого збігу."""
        match = re.search(pattern, self.html)
        if not match:
            return None
        value = _norm_ws(match.group(group))
        return value or None

    def state_value(self, *paths: str) -> Optional[Any]:
        """🧭 Перше непорожнє значення state за шляхами (з та без обгортки `data.`)."""
        if not self.state:
            return None
        for path in paths:
            for prefix in _STATE_WRAPPER_PREFIXES:
                value = deep_get(self.state, f"{prefix}{path}")
                if value not in (None, "", [], {}):
                    return value
        return None

    def state_text(self, *paths: str) -> Optional[str]:
        return _scalar_to_str(self.state_value(*paths))

    def state_key(self, *keys: str) -> Optional[str]:
        """🔎 Перший скаляр під будь-яким із ключів у всьому state."""
        if not self.state:
            return None
        return _scalar_to_str(find_key(self.state, keys))

    def query_param(self, name: str) -> Optional[str]:
        """🌐 Значення query-параметра URL джерела (вже URL-декодоване)."""
        if not self.source_url:
            return None
        values = parse_qs(urlparse(self.source_url).query).get(name)
        return values[0] if values else None


__all__ = ["ExtractionContext"]
