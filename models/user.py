# models/user.py
from datetime import datetime

from flask_login import UserMixin

from extensions import db


class User(UserMixin, db.Model):
    __tablename__ = 'user'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(150), nullable=True)

    # Preferences
    currency = db.Column(db.String(3), nullable=False, default="IDR")
    budget_limit = db.Column(db.Integer, nullable=False, default=0)  # 0 means no budget
    start_day = db.Column(db.Integer, nullable=False, default=1)  # first day of the financial month

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    accounts = db.relationship('Account', backref='user', lazy=True, cascade="all, delete-orphan")
    categories = db.relationship('Category', backref='user', lazy=True, cascade="all, delete-orphan")
    transactions = db.relationship('Transaction', backref='user', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "currency": self.currency,
            "budget_limit": self.budget_limit,
            "start_day": self.start_day,
        }

    def __repr__(self):
        return f"<User {self.email}>"
