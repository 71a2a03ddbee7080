# models/account.py
from datetime import datetime

from extensions import db

# type -> display label and sort order on the accounts overview
ACCOUNT_TYPES = {
    "bank": {"label": "Bank Accounts", "order": 1},
    "wallet": {"label": "E-Wallets", "order": 2},
    "cash": {"label": "Cash", "order": 3},
    "investment": {"label": "Investments", "order": 4},
}


class Account(db.Model):
    __tablename__ = 'account'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    type = db.Column(db.String(20), nullable=False)  # bank, wallet, cash, investment
    balance = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    transactions = db.relationship('Transaction', backref='account', lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "balance": self.balance,
        }

    def __repr__(self):
        return f"<Account {self.name} ({self.type}) {self.balance}>"
