# routes/__init__.py
# Blueprints приложения
