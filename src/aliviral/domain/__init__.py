# 🏛️ aliviral/domain/__init__.py
"""🏛️ Доменний шар: сутності та контракти без мережі й парсингу."""
