# models/category.py
from datetime import datetime

from extensions import db

CATEGORY_TYPES = ("income", "expense")
DEFAULT_COLOR = "#64748B"


def icon_for(category_type):
    return "trending-up" if category_type == "income" else "shopping-bag"


class Category(db.Model):
    __tablename__ = 'category'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(10), nullable=False)  # "income" or "expense"
    color = db.Column(db.String(20), nullable=False, default=DEFAULT_COLOR)
    icon = db.Column(db.String(50), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    transactions = db.relationship('Transaction', backref='category', lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "icon": self.icon,
        }

    def __repr__(self):
        return f"<Category {self.name} ({self.type})>"
