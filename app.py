# app.py
# Основной файл Flask-приложения с использованием паттерна Application Factory

from flask import Flask
from config import Config
from extensions import db, migrate, pdf_storage
from logging_config import setup_logging

# Важно импортировать модели здесь, чтобы Alembic (Migrate) мог их видеть
from models import Submission
import logic


def create_app(config_class=Config, storage_backend=None):
    # Создаем экземпляр приложения
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app.config['LOG_LEVEL'], app.config.get('LOG_FILE'))

    @app.context_processor
    def inject_scale():
        IMPORTANCE_LABELS = {
            1: 'equally important',
            3: 'moderately more important',
            5: 'strongly more important',
            7: 'very strongly more important',
            9: 'extremely more important',
        }
        # Шкала важности доступна во всех шаблонах
        return dict(
            IMPORTANCE_VALUES=logic.IMPORTANCE_VALUES,
            IMPORTANCE_LABELS=IMPORTANCE_LABELS,
        )

    # --- Инициализируем расширения С ПРИЛОЖЕНИЕМ ---
    db.init_app(app)
    migrate.init_app(app, db)
    pdf_storage.init_app(app, backend=storage_backend)

    # --- Регистрируем наши Blueprints (маршруты) ---
    from routes.main import main_bp
    from routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    from commands import register_commands
    register_commands(app)

    return app
