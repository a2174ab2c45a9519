# 🛍️ aliviral/__init__.py
"""
🛍️ aliviral — аналізатор сторінок товарів AliExpress.

Пайплайн: розгортання коротких посилань → завантаження HTML через CORS-проксі
→ каскадна екстракція полів → `ProductRecord` для рендерера та генератора постів.
"""

__version__ = "0.1.0"
