# routes/main.py
# Страницы мастера: ранжирование, сравнения, итог

from flask import Blueprint, render_template, session, redirect, url_for, flash, request
from loguru import logger

import logic
from exceptions import SubmissionError, WizardError
from submissions import save_submission

main_bp = Blueprint('main', __name__)

SESSION_KEY = 'wizard'


def load_state():
    return logic.state_from_dict(session.get(SESSION_KEY))


def save_state(state):
    session[SESSION_KEY] = logic.state_to_dict(state)


def _form_int(name):
    # None, если поле пустое или не число
    return request.form.get(name, type=int)


@main_bp.route('/')
def index():
    state = load_state()

    if state.status == logic.COMPARING:
        return render_template('comparing.html', state=state)
    if state.status == logic.SUBMITTED:
        return render_template('submitted.html', state=state)
    return render_template('ranking.html', state=state, rank_values=logic.RANK_VALUES)


@main_bp.route('/rank', methods=['POST'])
def rank():
    state = load_state()
    if state.status != logic.RANKING:
        return redirect(url_for('main.index'))

    try:
        for criterion in logic.CRITERIA:
            state = logic.set_rank(state, criterion.id, _form_int(f'rank-{criterion.id}'))
        # Сохраняем выбранные ранги, даже если подтверждение не пройдет
        save_state(state)
        state = logic.confirm_ranks(state)
    except WizardError as e:
        flash(str(e), 'error')
        return redirect(url_for('main.index'))

    save_state(state)
    return redirect(url_for('main.index'))


@main_bp.route('/compare', methods=['POST'])
def compare():
    state = load_state()
    if state.status != logic.COMPARING:
        return redirect(url_for('main.index'))

    action = request.form.get('action', 'next')
    importance = _form_int('importance')

    try:
        if importance is None:
            raise WizardError(f'Importance must be a whole number from {logic.IMPORTANCE_MIN} to {logic.IMPORTANCE_MAX}.')
        state = logic.set_importance(state, state.current, importance)
    except WizardError as e:
        flash(str(e), 'error')
        return redirect(url_for('main.index'))

    if action == 'previous':
        state = logic.previous_comparison(state)
    elif action == 'submit':
        state, payload = logic.submission_payload(state)
        # Состояние с последней правкой сохраняем до отправки
        save_state(state)
        try:
            result = save_submission(payload)
        except SubmissionError as e:
            logger.error('Server error: {}', e.message)
            flash(f'Failed to save: {e.message}', 'error')
            return redirect(url_for('main.index'))
        except Exception as e:
            logger.exception('Unexpected error while saving: {}', e)
            flash(f'Failed to save data. Server error: {e}', 'error')
            return redirect(url_for('main.index'))
        state = logic.mark_submitted(state, result.submission_id, result.message)
    else:
        state = logic.next_comparison(state)

    save_state(state)
    return redirect(url_for('main.index'))


@main_bp.route('/reset', methods=['POST'])
def reset():
    save_state(logic.reset())
    return redirect(url_for('main.index'))
