# 🔀 aliviral/infrastructure/url/redirects.py
"""
🔀 Пошук інструкцій перенаправлення у тілі відповіді.

🔹 Два впорядковані набори патернів: для розгортання коротких посилань і для gateway-сторінок.
🔹 Перший збіг виграє; кандидат чиститься від екранування та `&amp;`.
🔹 Нормалізація до абсолютного `https://` відрізняється для двох сценаріїв.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re															# 🧪 Регулярні вирази
from dataclasses import dataclass									# 🧱 Опис патерна
from typing import Optional, Pattern, Sequence, Tuple				# 🧰 Типізація

# ================================
# 🧱 МОДЕЛЬ ПАТЕРНА
# ================================
@dataclass(frozen=True)
class RedirectPattern:
    """Регулярка та номер групи, що містить цільовий URL (0 — увесь збіг)."""

    name: str
    regex: Pattern[str]
    group: int = 1


def _p(name: str, pattern: str, group: int = 1) -> RedirectPattern:
    return RedirectPattern(name=name, regex=re.compile(pattern, re.IGNORECASE), group=group)


# ================================
# 📜 НАБОРИ ПАТЕРНІВ
# ================================
SHORT_LINK_PATTERNS: Tuple[RedirectPattern, ...] = (
    _p("location_href", r"window\.location\.href\s*=\s*[\"']([^\"']+)[\"']"),
    _p("window_location", r"window\.location\s*=\s*[\"']([^\"']+)[\"']"),
    _p("location_replace", r"location\.replace\(\s*[\"']([^\"']+)[\"']\s*\)"),
    _p(
        "meta_refresh",
        r"<meta[^>]*http-equiv=[\"']refresh[\"'][^>]*content=[\"'][^;]*;\s*url=([^\"']+)[\"']",
    ),
    _p("item_html_url", r"https?://[^/\s\"'<>]*aliexpress\.com/item/\d+\.html[^\s\"'<>]*", 0),
    _p("item_url", r"https?://[^/\s\"'<>]*aliexpress\.com/item/[^\s\"'<>]+", 0),
    _p("json_redirect", r"\"redirectUrl\"\s*:\s*\"([^\"]+)\""),
)																	# 🔗 Розгортання s.click / a.aliexpress

GATEWAY_PATTERNS: Tuple[RedirectPattern, ...] = (
    _p("location_href", r"window\.location\.href\s*=\s*[\"']([^\"']+)[\"']"),
    _p("window_location", r"window\.location\s*=\s*[\"']([^\"']+)[\"']"),
    _p("bare_location_href", r"location\.href\s*=\s*[\"']([^\"']+)[\"']"),
    _p("bare_location", r"location\s*=\s*[\"']([^\"']+)[\"']"),
    _p("location_replace", r"location\.replace\(\s*[\"']([^\"']+)[\"']\s*\)"),
    _p("meta_refresh", r"url=([^\"']+)[\"']"),
    _p("item_anchor", r"href=[\"'](https?://[^\"']*aliexpress\.com/item/[^\"']+)[\"']"),
)																	# 🚪 Проміжні gateway-сторінки

GATEWAY_BASE_URL = "https://www.aliexpress.com"						# 🌐 База для відносних шляхів


# ================================
# 🔎 ПОШУК
# ================================
def find_redirect(text: str, patterns: Sequence[RedirectPattern]) -> Optional[Tuple[str, str]]:
    """
    🔎 Повертає (назва патерна, очищений кандидат) для першого збігу або None.
    """
    if not text:
        return None
    for pattern in patterns:
        match = pattern.regex.search(text)
        if not match:
            continue
        candidate = match.group(pattern.group)
        if candidate:
            return pattern.name, unescape_candidate(candidate)
    return None


def unescape_candidate(raw: str) -> str:
    """🧼 `\\u002F` → `/`, прибирає зворотні слеші, `&amp;` → `&`."""
    cleaned = re.sub(r"\\u002[fF]", "/", raw)
    cleaned = cleaned.replace("\\", "")
    return cleaned.replace("&amp;", "&").strip()


# ================================
# 🌐 НОРМАЛІЗАЦІЯ
# ================================
def absolutize_short_link_target(url: str) -> str:
    """🌐 Будь-який не-http кандидат → `https://...` (протокол-відносний або голий хост)."""
    if url.lower().startswith("http"):
        return url
    return "https:" + ("" if url.startswith("//") else "//") + url


def absolutize_gateway_target(url: str) -> str:
    """🌐 `//host/...` → https; відносний шлях → на www.aliexpress.com."""
    if url.startswith("//"):
        return f"https:{url}"
    if url.lower().startswith("http"):
        return url
    return GATEWAY_BASE_URL + ("" if url.startswith("/") else "/") + url


__all__ = [
    "RedirectPattern",
    "SHORT_LINK_PATTERNS",
    "GATEWAY_PATTERNS",
    "GATEWAY_BASE_URL",
    "find_redirect",
    "unescape_candidate",
    "absolutize_short_link_target",
    "absolutize_gateway_target",
]
