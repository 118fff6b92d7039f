# storage.py
# Приватное хранилище PDF-отчетов.
# Подключается как обычное расширение Flask: pdf_storage.init_app(app)

import os

import requests
from flask import current_app
from loguru import logger

from exceptions import PdfStorageError

PDF_CONTENT_TYPE = 'application/pdf'


class SupabaseStorageBackend:
    """
    Загрузка в приватный бакет Supabase Storage через REST API.
    Перезапись запрещена (x-upsert: false).
    """

    def __init__(self, base_url, service_key, bucket, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.service_key = service_key
        self.bucket = bucket
        self.timeout = timeout

    def object_url(self, key):
        return f'{self.base_url}/storage/v1/object/{self.bucket}/{key}'

    def upload(self, key, data, content_type=PDF_CONTENT_TYPE):
        headers = {
            'Authorization': f'Bearer {self.service_key}',
            'apikey': self.service_key,
            'Content-Type': content_type,
            'x-upsert': 'false',
        }
        try:
            response = requests.post(self.object_url(key), data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise PdfStorageError(str(e)) from e

        if not response.ok:
            raise PdfStorageError(self._error_message(response))

    @staticmethod
    def _error_message(response):
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get('message') or body.get('error')
            if message:
                return str(message)
        return f'HTTP {response.status_code}'


class LocalStorageBackend:
    """Папка на диске вместо бакета, для разработки без Supabase."""

    def __init__(self, directory):
        self.directory = directory

    def upload(self, key, data, content_type=PDF_CONTENT_TYPE):
        if os.path.basename(key) != key:
            raise PdfStorageError(f'Invalid object key "{key}"')
        try:
            os.makedirs(self.directory, exist_ok=True)
            # Режим 'xb' не дает перезаписать существующий файл
            with open(os.path.join(self.directory, key), 'xb') as f:
                f.write(data)
        except FileExistsError as e:
            raise PdfStorageError('The resource already exists') from e
        except OSError as e:
            raise PdfStorageError(str(e)) from e


def backend_from_config(config):
    if config.get('SUPABASE_URL') and config.get('SUPABASE_SERVICE_ROLE_KEY'):
        return SupabaseStorageBackend(
            config['SUPABASE_URL'],
            config['SUPABASE_SERVICE_ROLE_KEY'],
            config.get('PDF_BUCKET', 'pdf-storage'),
            timeout=config.get('STORAGE_TIMEOUT', 30),
        )
    return LocalStorageBackend(config['PDF_STORAGE_DIR'])


class PdfStorage:
    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app, backend=None):
        # Бэкенд можно передать явно (например, в тестах)
        if backend is None:
            backend = backend_from_config(app.config)
        app.extensions['pdf_storage'] = backend
        logger.debug('PDF storage backend: {}', type(backend).__name__)

    @property
    def backend(self):
        return current_app.extensions['pdf_storage']

    def upload(self, key, data):
        self.backend.upload(key, data)
