# routes/api.py
# JSON-эндпоинт сохранения результатов

from flask import Blueprint, jsonify, request
from loguru import logger

from exceptions import MethodNotAllowed, SubmissionError, UnexpectedError
from submissions import save_submission

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.errorhandler(SubmissionError)
def handle_submission_error(error):
    return jsonify(error.to_dict()), error.status_code


# Принимаем все методы, чтобы на не-POST ответить JSON с кодом 405
@api_bp.route('/save-submission', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
def save_submission_view():
    if request.method != 'POST':
        raise MethodNotAllowed()

    data = request.get_json(silent=True)
    try:
        result = save_submission(data)
    except SubmissionError:
        raise
    except Exception as e:
        logger.exception('API Error: {}', e)
        raise UnexpectedError(f'Server error: {e}') from e

    return jsonify(result.to_dict()), 200
