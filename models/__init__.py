# models/__init__.py
# Инициализация моделей

from .submission import Submission
