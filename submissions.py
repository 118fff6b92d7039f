# submissions.py
# Сохранение результатов: запись в БД -> PDF -> приватное хранилище.
# Используется и JSON-эндпоинтом, и формой.

from dataclasses import dataclass
from typing import Optional

from flask import current_app
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from exceptions import PdfStorageError, PersistenceError
from extensions import db, pdf_storage
from models import Submission
from report import pdf_object_key, render_submission_pdf
from validation import validate_payload

SAVED_MESSAGE = 'Data saved successfully. PDF stored privately.'
PDF_FAILED_MESSAGE = 'Data saved but PDF storage failed: '
DUPLICATE_MESSAGE = 'Submission already saved.'


@dataclass
class SubmissionResult:
    submission_id: int
    message: str
    pdf_stored: bool = False
    duplicate: bool = False

    def to_dict(self):
        return {'success': True, 'message': self.message}


def _find_by_token(token):
    if not token:
        return None
    return Submission.query.filter_by(request_token=token).first()


def _duplicate_result(existing):
    logger.info('Submission {} already saved, ignoring repeated request', existing.id)
    return SubmissionResult(submission_id=existing.id, message=DUPLICATE_MESSAGE, duplicate=True)


def store_pdf(submission):
    """
    Рендерит PDF для сохраненной записи и загружает его в хранилище.
    Любая ошибка превращается в PdfStorageError.
    """
    try:
        pdf_bytes = render_submission_pdf(submission.ranked_criteria, submission.comparisons, submission.id)
    except Exception as e:
        raise PdfStorageError(f'PDF rendering failed: {e}') from e
    pdf_storage.upload(pdf_object_key(submission.id), pdf_bytes)


def save_submission(data):
    """
    Полный цикл сохранения одной отправки.

    Ошибки проверки и записи в БД пробрасываются наверх,
    ошибка хранения PDF только логируется.
    """
    strict = current_app.config.get('VALIDATE_SUBMISSION_STRUCTURE', True)
    ranked_criteria, comparisons, token = validate_payload(data, strict=strict)

    # Повторная отправка с тем же токеном не создает новую запись
    existing = _find_by_token(token)
    if existing is not None:
        return _duplicate_result(existing)

    submission = Submission(ranked_criteria=ranked_criteria, comparisons=comparisons, request_token=token)
    db.session.add(submission)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        existing = _find_by_token(token)
        if existing is not None:
            return _duplicate_result(existing)
        logger.error('Database error: {}', e)
        raise PersistenceError(f'Failed to save data: {e.orig}') from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error('Database error: {}', e)
        raise PersistenceError(f'Failed to save data: {e}') from e

    logger.info('Submission {} saved', submission.id)

    try:
        store_pdf(submission)
    except PdfStorageError as e:
        logger.error('PDF upload error for submission {}: {}', submission.id, e.message)
        return SubmissionResult(submission_id=submission.id, message=PDF_FAILED_MESSAGE + e.message)

    return SubmissionResult(submission_id=submission.id, message=SAVED_MESSAGE, pdf_stored=True)


def reupload_pdf(submission_id):
    """Повторная генерация и загрузка PDF для уже сохраненной записи."""
    submission = db.session.get(Submission, submission_id)
    if submission is None:
        raise LookupError(f'Submission {submission_id} not found')
    store_pdf(submission)
    return pdf_object_key(submission.id)
