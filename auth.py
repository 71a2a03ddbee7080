# auth.py
import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db, login_manager
from models import Category, User
from models.category import icon_for

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

DEFAULT_CATEGORIES = [
    {"name": "Salary", "type": "income", "color": "#10B981"},
    {"name": "Food", "type": "expense", "color": "#F59E0B"},
    {"name": "Rent", "type": "expense", "color": "#6366F1"},
    {"name": "Transport", "type": "expense", "color": "#3B82F6"},
    {"name": "Other", "type": "expense", "color": "#64748B"},
]


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(success=False, error="Unauthorized"), 401


def seed_default_categories(user):
    for cat in DEFAULT_CATEGORIES:
        db.session.add(Category(
            user_id=user.id,
            name=cat["name"],
            type=cat["type"],
            color=cat["color"],
            icon=icon_for(cat["type"]),
        ))


@auth_bp.route('/register', methods=['POST'])
def register():
    email = (request.form.get('email') or '').strip().lower()
    password = request.form.get('password') or ''
    full_name = (request.form.get('full_name') or '').strip() or None

    if not email or not password:
        return jsonify(success=False, error="Email and password are required"), 400

    # Check if user already exists
    if User.query.filter_by(email=email).first():
        return jsonify(success=False, error="Email already registered."), 409

    user = User(email=email, password=generate_password_hash(password), full_name=full_name)
    try:
        db.session.add(user)
        db.session.flush()
        seed_default_categories(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(success=False, error="Email already registered."), 409

    login_user(user)
    logger.info("registered user %s", user.id)
    return jsonify(success=True, user=user.to_dict()), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    email = (request.form.get('email') or '').strip().lower()
    password = request.form.get('password') or ''

    user = User.query.filter_by(email=email).first()
    if not user or not check_password_hash(user.password, password):
        logger.warning("failed login for %s", email)
        return jsonify(success=False, error="Invalid email or password."), 401

    login_user(user)
    return jsonify(success=True, user=user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logger.info("user %s logged out", current_user.id)
    logout_user()
    return jsonify(success=True)
