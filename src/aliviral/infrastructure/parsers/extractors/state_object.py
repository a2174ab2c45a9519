# 🧩 aliviral/infrastructure/parsers/extractors/state_object.py
"""
🧩 Пошук вбудованого state-обʼєкта сторінки (`window.runParams` та родичі).

🔹 Знаходить одне з відомих глобальних імен у тексті HTML.
🔹 Від першої `{` після імені рахує глибину дужок, пропускаючи рядкові літерали
   (`"` / `'`, з урахуванням `\\`-екранування), і вирізає обʼєкт-літерал.
🔹 Розбирає його як строгий JSON, а якщо не вийшло — толерантним `json5`
   (ключі без лапок, хвостові коми, одинарні лапки). Код сторінки не виконується.

⚠️ Сканер не знає про template- та regex-літерали JS: `{`/`}` усередині них
   рахуються як дужки. Це відоме обмеження евристики.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import json5	# 🧾 Толерантний парсер JS-обʼєктів

# 🔠 Системні імпорти
import json	# 🧾 Строгий JSON
import re	# 🧵 Пошук імен
from typing import Any, Dict, Iterator, Optional, Sequence	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from aliviral.errors import ParseFailure	# 🚨 Локально відновлювана помилка

from .base import logger

# ================================
# 📦 КОНСТАНТИ
# ================================
STATE_OBJECT_NAMES: Sequence[str] = (
    "window.runParams",
    "window._d_c_.DCData",
    "window.__INIT_DATA__",
    "window._dida_config_._init_data_",
    "window.__AER_DATA__",
    "runParams",
)	# 🗂️ Кандидати у порядку пріоритету

_MAX_OCCURRENCES_PER_NAME = 5	# 🔁 Скільки входжень імені перевіряти


# ================================
# 🔍 СКАНЕР ДУЖОК
# ================================
def scan_object_literal(text: str, start: int = 0) -> Optional[str]:
    """
    🔍 Повертає підрядок від першої `{` після `start` до парної `}`.

    Дужки всередині рядкових літералів ігноруються. None — якщо `{` немає
    або обʼєкт не закрито до кінця тексту.
    """
    open_idx = text.find("{", start)
    if open_idx < 0:
        return None

    depth = 0
    quote: Optional[str] = None
    escaped = False
    for idx in range(open_idx, len(text)):
        ch = text[idx]
        if quote is not None:	# 🧵 Усередині рядка
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ('"', "'"):
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[open_idx : idx + 1]
    return None


def parse_object_literal(raw: str, source: str = "state object") -> Any:
    """
    🧾 Строгий JSON → `json5` як запасний шлях.

    Raises:
        ParseFailure: жоден парсер не впорався.
    """
    try:
        return json.loads(raw)
    except ValueError:
        pass	# ↪️ Далі толерантний парсер
    try:
        return json5.loads(raw)
    except ValueError as exc:
        raise ParseFailure(source, details=str(exc)[:200]) from exc


# ================================
# 🧩 ПОШУК STATE-ОБʼЄКТА
# ================================
def _occurrences(html: str, name: str) -> Iterator[int]:
    pattern = re.compile(rf"(?<![\w.$]){re.escape(name)}(?![\w$])")
    for count, match in enumerate(pattern.finditer(html)):
        if count >= _MAX_OCCURRENCES_PER_NAME:
            return
        yield match.end()


def find_state_object(html: str, names: Sequence[str] = STATE_OBJECT_NAMES) -> Optional[Dict[str, Any]]:
    """
    🧩 Перший успішно розібраний state-обʼєкт серед кандидатів.

    `ParseFailure` для окремого входження логуються на debug і пропускаються.
    """
    if not html:
        return None
    for name in names:
        for end in _occurrences(html, name):
            raw = scan_object_literal(html, end)
            if raw is None:
                continue
            try:
                parsed = parse_object_literal(raw, source=name)
            except ParseFailure as failure:
                logger.debug("🧩 %s", failure.message, extra=failure.to_log_extra())
                continue
            if isinstance(parsed, dict) and parsed:
                logger.debug("🧩 State-обʼєкт знайдено: %s (%d ключів).", name, len(parsed))
                return parsed
    logger.debug("🧩 State-обʼєкт не знайдено.")
    return None


__all__ = [
    "STATE_OBJECT_NAMES",
    "find_state_object",
    "parse_object_literal",
    "scan_object_literal",
]
