from __future__ import annotations

from datetime import datetime

from flask_login import UserMixin

from app.extensions import db, login_manager


class User(UserMixin, db.Model):
    """A Codeforces handle that has signed in, with its last known max rating."""

    __tablename__ = 'local_users'

    handle = db.Column(db.String(64), primary_key=True)
    max_rating = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow,
    )

    def get_id(self) -> str:
        return self.handle

    def __repr__(self) -> str:
        return f'<User {self.handle!r} max_rating={self.max_rating}>'


@login_manager.user_loader
def load_user(handle: str) -> User | None:
    """Flask-Login user loader callback."""
    return db.session.get(User, handle)
