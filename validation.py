# validation.py
# Проверка тела запроса на сохранение результатов

from exceptions import ValidationError
from logic import CRITERIA_BY_ID, IMPORTANCE_MIN, IMPORTANCE_MAX

MAX_TOKEN_LENGTH = 64


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_absent(value):
    # Пустой список считается переданным, остальные "ложные" значения - нет
    return value is None or (not value and not isinstance(value, list))


def require_fields(data):
    """
    Минимальная проверка: оба поля должны присутствовать.
    """
    if not isinstance(data, dict):
        raise ValidationError()
    if _is_absent(data.get('ranked_criteria')) or _is_absent(data.get('comparisons')):
        raise ValidationError()


def check_structure(ranked_criteria, comparisons):
    """
    Полная проверка структуры: набор критериев, уникальность рангов,
    шкала важности и соседство пар в сравнениях.
    """
    if not isinstance(ranked_criteria, list) or not isinstance(comparisons, list):
        raise ValidationError('ranked_criteria and comparisons must be lists')

    ids = []
    for item in ranked_criteria:
        if (not isinstance(item, dict) or not isinstance(item.get('id'), str)
                or item['id'] not in CRITERIA_BY_ID):
            raise ValidationError('ranked_criteria contains an unknown criterion')
        ids.append(item['id'])
    if sorted(ids) != sorted(CRITERIA_BY_ID) or len(set(ids)) != len(ids):
        raise ValidationError('ranked_criteria must contain every criterion exactly once')

    ranks = [item.get('rank') for item in ranked_criteria]
    if any(r is not None for r in ranks):
        if not all(_is_int(r) for r in ranks) or sorted(ranks) != list(range(1, len(ids) + 1)):
            raise ValidationError('ranks must be unique whole numbers from 1 to 5')
        if ranks != sorted(ranks):
            raise ValidationError('ranked_criteria must be ordered by rank')

    if len(comparisons) != len(ranked_criteria) - 1:
        raise ValidationError('comparisons must cover each adjacent pair of ranked criteria')

    for i, comp in enumerate(comparisons):
        if not isinstance(comp, dict):
            raise ValidationError('comparisons must be objects')
        first = comp.get('criterion1')
        second = comp.get('criterion2')
        if (not isinstance(first, dict) or not isinstance(second, dict)
                or first.get('id') != ids[i] or second.get('id') != ids[i + 1]):
            raise ValidationError(f'comparison {i + 1} does not match adjacent ranked criteria')
        importance = comp.get('importance')
        if not _is_int(importance) or not IMPORTANCE_MIN <= importance <= IMPORTANCE_MAX:
            raise ValidationError(f'importance must be a whole number from {IMPORTANCE_MIN} to {IMPORTANCE_MAX}')


def check_request_token(token):
    if token is None:
        return None
    if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
        raise ValidationError('request_token must be a non-empty string of at most 64 characters')
    return token


def validate_payload(data, strict=True):
    """
    Возвращает кортеж (ranked_criteria, comparisons, request_token).
    """
    require_fields(data)
    ranked_criteria = data['ranked_criteria']
    comparisons = data['comparisons']
    if strict:
        check_structure(ranked_criteria, comparisons)
    token = check_request_token(data.get('request_token'))
    return ranked_criteria, comparisons, token
