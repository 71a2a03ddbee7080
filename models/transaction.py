# models/transaction.py
from datetime import datetime

from extensions import db


class Transaction(db.Model):
    __tablename__ = 'transaction'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    description = db.Column(db.String(255), nullable=False, default="No description")
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    category_id = db.Column(db.Integer, db.ForeignKey('category.id'), nullable=True)
    # detached (NULL) once its account is deleted
    account_id = db.Column(db.Integer, db.ForeignKey('account.id'), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def category_type(self):
        return self.category.type if self.category else None

    def to_dict(self):
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "category_id": self.category_id,
            "account_id": self.account_id,
            "category": self.category.to_dict() if self.category else None,
            "account": {"id": self.account.id, "name": self.account.name} if self.account else None,
        }

    def __repr__(self):
        return f"<Transaction {self.amount} {self.description}>"
