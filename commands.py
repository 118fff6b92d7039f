# commands.py
# Команды Flask CLI: `flask init-db`, `flask reupload-pdf <id>`

import click
from flask import Flask

from exceptions import PdfStorageError
from extensions import db
from submissions import reupload_pdf


def register_commands(app: Flask):
    @app.cli.command('init-db')
    def init_db():
        """Создает таблицы в базе данных."""
        db.create_all()
        click.echo('Таблицы созданы.')

    @app.cli.command('reupload-pdf')
    @click.argument('submission_id', type=int)
    def reupload_pdf_command(submission_id):
        """Заново генерирует и загружает PDF для сохраненной записи."""
        try:
            key = reupload_pdf(submission_id)
        except LookupError as e:
            raise click.ClickException(str(e))
        except PdfStorageError as e:
            raise click.ClickException(f'PDF storage failed: {e.message}')
        click.echo(f'PDF загружен: {key}')
