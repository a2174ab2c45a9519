# 🧾 aliviral/infrastructure/parsers/extractors/base.py
"""
🧾 Спільні утиліти екстракторів: нормалізація тексту, безпечний JSON, доступ до вкладених структур.

🔹 `_norm_ws`, `_as_list`, `_try_json_loads` — дрібні помічники для всіх джерел.
🔹 `deep_get` — читає значення за крапковим шляхом (`a.b.0.c`).
🔹 `find_key` — DFS-пошук першого непорожнього значення за ключем.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json	# 🧾 Десеріалізація JSON
import logging	# 🧾 Логування подій
import re	# 🧵 Регулярні вирази
from typing import Any, Iterable, List, Optional	# 🧰 Типи для статичного аналізу

# 🧩 Внутрішні модулі проєкту
from aliviral.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")	# 🧾 Логер для екстракторів парсера

_MAX_DFS_DEPTH = 40	# 🧱 Захист від надто глибоких структур


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _norm_ws(text: Optional[str]) -> str:
    """Нормалізує пробіли у переданому рядку."""
    if not text:	# 🚫 Порожній або None рядок
        return ""	# 🪣 Повертаємо порожній результат
    return re.sub(r"\s+", " ", text).strip()	# 🧹 Стискаємо та обрізаємо пробіли


def _as_list(x: Any) -> List[Any]:
    """Гарантує отримання списку елементів."""
    if x is None:	# 🚫 Значення відсутнє
        return []	# 📦 Повертаємо порожній список
    if isinstance(x, list):	# 📚 Вже список
        return x	# 🔁 Використовуємо як є
    if isinstance(x, tuple):
        return list(x)
    return [x]	# 📦 Загортаємо значення у список


def _try_json_loads(raw: Optional[str]) -> Optional[Any]:
    """Безпечно десеріалізує JSON, повертаючи None у разі помилок."""
    raw_clean = (raw or "").strip()	# 🧼 Прибираємо зайві пробіли
    if not raw_clean:	# 🚫 Порожній рядок
        return None	# 🪣 Немає що парсити
    try:	# 🧪 Пробуємо розібрати JSON
        return json.loads(raw_clean)	# 📥 Десеріалізуємо у Python-структуру
    except ValueError as exc:	# ⚠️ Некоректний формат JSON
        logger.debug("🐛 Помилка декодування JSON: %s", exc)	# 🐛 Логуємо причину відмови
        return None	# 🪣 Повертаємо значення за замовчуванням


def _scalar_to_str(value: Any) -> Optional[str]:
    """Перетворює скаляр (рядок/число) на очищений рядок; інше → None."""
    if isinstance(value, bool) or value is None:	# 🚫 bool теж int, але це не ціна/рейтинг
        return None
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)	# 🔢 20.0 → "20", 19.99 → "19.99"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        cleaned = _norm_ws(value)
        return cleaned or None
    return None


# ================================
# 🧭 ДОСТУП ДО ВКЛАДЕНИХ СТРУКТУР
# ================================
def deep_get(obj: Any, path: str) -> Any:
    """
    🧭 Повертає значення за крапковим шляхом або None.

    Числові сегменти індексують списки: `skuPriceList.0.skuVal`.
    """
    current = obj
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def find_key(obj: Any, keys: Iterable[str]) -> Optional[Any]:
    """
    🔎 DFS по dict/list: перше непорожнє значення під будь-яким із ключів.

    Ключі перевіряються у порядку пріоритету на кожному рівні вкладеності.
    """
    wanted = tuple(keys)

    def _walk(node: Any, depth: int) -> Optional[Any]:
        if depth > _MAX_DFS_DEPTH:
            return None
        if isinstance(node, dict):
            for key in wanted:
                value = node.get(key)
                if value not in (None, "", [], {}):
                    return value
            children: Iterable[Any] = node.values()
        elif isinstance(node, list):
            children = node
        else:
            return None
        for child in children:
            if isinstance(child, (dict, list)):
                found = _walk(child, depth + 1)
                if found is not None:
                    return found
        return None

    return _walk(obj, 0)


__all__ = [
    "logger",
    "_norm_ws",
    "_as_list",
    "_try_json_loads",
    "_scalar_to_str",
    "deep_get",
    "find_key",
]
