# 🪜 aliviral/infrastructure/parsers/cascade.py
"""
🪜 Каскад джерел: впорядкований список екстракторів, перше присутнє значення перемагає.

Кожен екстрактор — маленька функція `ctx -> Optional[value]`. Порядок у кортежі
і є пріоритетом; помилка одного джерела логується та передає хід наступному.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from typing import Any, Callable, Iterable, Optional, TypeVar	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

logger = logging.getLogger(f"{LOG_NAME}.parser.cascade")

S = TypeVar("S")
V = TypeVar("V")

Extractor = Callable[[S], Optional[V]]


def is_present(value: Any) -> bool:
    """✅ None, порожні рядки (після trim) та порожні колекції — відсутні значення."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return bool(value)
    return True


def first_present(
    extractors: Iterable[Callable[[S], Optional[V]]],
    subject: S,
    *,
    field: str = "value",
) -> Optional[V]:
    """
    🪜 Лівий fold: викликає екстрактори по черзі й повертає перше присутнє значення.

    Args:
        extractors: Джерела у порядку пріоритету.
        subject: Спільний контекст (зазвичай `ExtractionContext`).
        field: Назва поля для діагностики.
    """
    for extractor in extractors:
        name = getattr(extractor, "__name__", repr(extractor))
        try:
            value = extractor(subject)
        except Exception as exc:	# ⚠️ Зламане джерело не валить увесь каскад
            logger.debug("🪜 %s: джерело %s впало (%s) → далі.", field, name, exc)
            continue
        if is_present(value):
            logger.debug("🪜 %s ← %s", field, name)
            return value
    logger.debug("🪜 %s: жодне джерело не дало значення.", field)
    return None


__all__ = ["Extractor", "first_present", "is_present"]
