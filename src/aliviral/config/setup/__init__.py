# ⚙️ aliviral/config/setup/__init__.py
"""
⚙️ Пакет для 'збирання' всіх компонентів пайплайна перед використанням.

Надає доступ до контейнера залежностей та bootstrap логування.
"""

from .container import Container, bootstrap_logging

__all__ = [
    "Container",
    "bootstrap_logging",
]
