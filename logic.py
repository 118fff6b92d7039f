# logic.py
# Машина состояний мастера: ранжирование -> попарные сравнения -> отправка.
# Все переходы - чистые функции: принимают состояние и возвращают новое.

import uuid
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from exceptions import WizardError

RANKING = 'ranking'
COMPARING = 'comparing'
SUBMITTED = 'submitted'

RANK_VALUES = (1, 2, 3, 4, 5)
IMPORTANCE_MIN = 1
IMPORTANCE_MAX = 9
IMPORTANCE_VALUES = tuple(range(IMPORTANCE_MIN, IMPORTANCE_MAX + 1))


@dataclass(frozen=True)
class Criterion:
    id: str
    name: str
    rank: Optional[int] = None

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'rank': self.rank}


# Пять фиксированных критериев выбора ноутбука
CRITERIA = (
    Criterion('C-1', 'Performance'),
    Criterion('C-2', 'Battery Life'),
    Criterion('C-3', 'Display Quality'),
    Criterion('C-4', 'Portability'),
    Criterion('C-5', 'Price'),
)
CRITERIA_BY_ID = {c.id: c for c in CRITERIA}


@dataclass(frozen=True)
class Comparison:
    criterion1: Criterion
    criterion2: Criterion
    importance: int = 1

    def to_dict(self):
        return {
            'criterion1': self.criterion1.to_dict(),
            'criterion2': self.criterion2.to_dict(),
            'importance': self.importance,
        }


@dataclass(frozen=True)
class RankingState:
    criteria: Tuple[Criterion, ...] = CRITERIA
    status: str = field(default=RANKING, init=False)


@dataclass(frozen=True)
class ComparingState:
    ranked_criteria: Tuple[Criterion, ...]
    comparisons: Tuple[Comparison, ...]
    current: int = 0
    request_token: str = ''
    status: str = field(default=COMPARING, init=False)

    @property
    def current_comparison(self):
        return self.comparisons[self.current] if self.comparisons else None

    @property
    def is_last(self):
        return self.current >= len(self.comparisons) - 1


@dataclass(frozen=True)
class SubmittedState:
    submission_id: Optional[int] = None
    message: str = ''
    status: str = field(default=SUBMITTED, init=False)


def initial_state():
    return RankingState()


def reset():
    """Полный сброс: все ранги снова пустые."""
    return initial_state()


def _expect(state, state_type):
    if not isinstance(state, state_type):
        raise WizardError(f'Action is not available in the "{state.status}" step.')


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def set_rank(state, criterion_id, value):
    """
    Перезаписывает ранг одного критерия. Дубликаты на этом шаге не проверяются.
    """
    _expect(state, RankingState)
    if criterion_id not in CRITERIA_BY_ID:
        raise WizardError(f'Unknown criterion "{criterion_id}".')
    if value is not None and (not _is_int(value) or value not in RANK_VALUES):
        raise WizardError('Rank must be a whole number from 1 to 5.')

    criteria = tuple(replace(c, rank=value) if c.id == criterion_id else c for c in state.criteria)
    return replace(state, criteria=criteria)


def derive_comparisons(ranked_criteria):
    """Одно сравнение на каждую соседнюю пару, важность по умолчанию 1."""
    if len(ranked_criteria) != len(CRITERIA):
        return ()
    return tuple(
        Comparison(criterion1=ranked_criteria[i - 1], criterion2=ranked_criteria[i])
        for i in range(1, len(ranked_criteria))
    )


def confirm_ranks(state, request_token=None):
    _expect(state, RankingState)
    ranked = sorted((c for c in state.criteria if c.rank is not None), key=lambda c: c.rank)
    if len(ranked) != len(CRITERIA):
        raise WizardError('Please rank all criteria')

    ranks = [c.rank for c in ranked]
    if len(set(ranks)) != len(ranks):
        raise WizardError('Each rank can only be used once')

    ranked = tuple(ranked)
    return ComparingState(
        ranked_criteria=ranked,
        comparisons=derive_comparisons(ranked),
        current=0,
        request_token=request_token or uuid.uuid4().hex,
    )


def set_importance(state, index, value):
    _expect(state, ComparingState)
    if not _is_int(index) or not 0 <= index < len(state.comparisons):
        raise WizardError('No such comparison.')
    if not _is_int(value) or not IMPORTANCE_MIN <= value <= IMPORTANCE_MAX:
        raise WizardError(f'Importance must be a whole number from {IMPORTANCE_MIN} to {IMPORTANCE_MAX}.')

    comparisons = list(state.comparisons)
    comparisons[index] = replace(comparisons[index], importance=value)
    return replace(state, comparisons=tuple(comparisons))


def next_comparison(state):
    _expect(state, ComparingState)
    return replace(state, current=min(state.current + 1, max(len(state.comparisons) - 1, 0)))


def previous_comparison(state):
    _expect(state, ComparingState)
    return replace(state, current=max(state.current - 1, 0))


def submission_payload(state, current_importance=None):
    """
    Собирает тело запроса для обработчика отправки.

    Если передано значение с текущего экрана, оно сначала записывается
    в текущее сравнение, чтобы не потерять несохраненную правку.
    Возвращает пару (новое состояние, payload).
    """
    _expect(state, ComparingState)
    if current_importance is not None:
        state = set_importance(state, state.current, current_importance)

    payload = {
        'ranked_criteria': [c.to_dict() for c in state.ranked_criteria],
        'comparisons': [comp.to_dict() for comp in state.comparisons],
        'request_token': state.request_token,
    }
    return state, payload


def mark_submitted(state, submission_id=None, message=''):
    _expect(state, ComparingState)
    return SubmittedState(submission_id=submission_id, message=message)


# --- Сериализация для хранения в сессии Flask ---

def _criterion_from_dict(data):
    return Criterion(id=data['id'], name=data['name'], rank=data.get('rank'))


def state_to_dict(state):
    if isinstance(state, RankingState):
        return {'status': RANKING, 'ranks': {c.id: c.rank for c in state.criteria}}
    if isinstance(state, ComparingState):
        return {
            'status': COMPARING,
            'ranked_criteria': [c.to_dict() for c in state.ranked_criteria],
            'importances': [comp.importance for comp in state.comparisons],
            'current': state.current,
            'request_token': state.request_token,
        }
    return {'status': SUBMITTED, 'submission_id': state.submission_id, 'message': state.message}


def state_from_dict(data):
    """
    Восстанавливает состояние из сессии. Поврежденные данные дают начальное состояние.
    """
    if not isinstance(data, dict):
        return initial_state()

    try:
        status = data.get('status')
        if status == RANKING:
            ranks = data.get('ranks') or {}
            return RankingState(criteria=tuple(replace(c, rank=ranks.get(c.id)) for c in CRITERIA))

        if status == COMPARING:
            ranked = tuple(_criterion_from_dict(c) for c in data['ranked_criteria'])
            comparisons = derive_comparisons(ranked)
            importances = data.get('importances') or []
            comparisons = tuple(
                replace(comp, importance=importances[i]) if i < len(importances) else comp
                for i, comp in enumerate(comparisons)
            )
            current = data.get('current', 0)
            if not comparisons or not 0 <= current < len(comparisons):
                current = 0
            return ComparingState(
                ranked_criteria=ranked,
                comparisons=comparisons,
                current=current,
                request_token=data.get('request_token', ''),
            )

        if status == SUBMITTED:
            return SubmittedState(submission_id=data.get('submission_id'), message=data.get('message', ''))
    except (KeyError, TypeError):
        pass

    return initial_state()
