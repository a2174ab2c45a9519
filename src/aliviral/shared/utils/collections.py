# ♻️ aliviral/shared/utils/collections.py
"""♻️ Дрібні утиліти для колекцій."""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Hashable, Iterable, Iterator, TypeVar	# 🧰 Типізація

T = TypeVar("T", bound=Hashable)


def uniq_keep_order(items: Iterable[T]) -> Iterator[T]:
    """Повертає унікальні елементи у порядку першої появи."""
    seen: set = set()
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        yield item


__all__ = ["uniq_keep_order"]
