# models/submission.py

from datetime import datetime, timezone

from extensions import db


def _utcnow():
    return datetime.now(timezone.utc)


class Submission(db.Model):
    __tablename__ = 'submissions'
    id = db.Column(db.Integer, primary_key=True)
    ranked_criteria = db.Column(db.JSON, nullable=False)
    comparisons = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    # Токен повторной отправки из формы (может отсутствовать у внешних клиентов)
    request_token = db.Column(db.String(64), unique=True, nullable=True, index=True)

    def __repr__(self):
        return f'<Submission {self.id}>'
