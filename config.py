# config.py
# Конфигурация приложения Flask

import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # Абсолютный путь к папке instance (SQLite и локальное хранилище PDF)
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    INSTANCE_DIR = os.path.join(BASE_DIR, 'instance')

    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-me')  # Замени в продакшене
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', f'sqlite:///{os.path.join(INSTANCE_DIR, "submissions.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Базовый URL и сервисный ключ хранилища (Supabase)
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')
    PDF_BUCKET = os.environ.get('PDF_BUCKET', 'pdf-storage')
    # Используется, только если ключи Supabase не заданы
    PDF_STORAGE_DIR = os.environ.get('PDF_STORAGE_DIR', os.path.join(INSTANCE_DIR, 'pdf-storage'))
    STORAGE_TIMEOUT = float(os.environ.get('STORAGE_TIMEOUT', '30'))

    VALIDATE_SUBMISSION_STRUCTURE = _env_flag('VALIDATE_SUBMISSION_STRUCTURE', True)

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE = os.environ.get('LOG_FILE')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SUPABASE_URL = None
    SUPABASE_SERVICE_ROLE_KEY = None
    VALIDATE_SUBMISSION_STRUCTURE = True
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None
