# 🧱 aliviral/infrastructure/__init__.py
"""🧱 Інфраструктура: мережа, парсинг, зображення, сервіси."""
