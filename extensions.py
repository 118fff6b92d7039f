# extensions.py
# Файл для хранения экземпляров расширений Flask

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

from storage import PdfStorage

db = SQLAlchemy()
migrate = Migrate()
pdf_storage = PdfStorage()
