# actions/categories.py
import logging

from flask import Blueprint, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

import ledger
from extensions import db
from models import Category, Transaction, CATEGORY_TYPES
from models.category import DEFAULT_COLOR, icon_for
from utils import parse_int

from . import database_failure, failure, success

logger = logging.getLogger(__name__)

categories_bp = Blueprint('categories', __name__, url_prefix='/actions/categories')


def _owned_category(category_id):
    return Category.query.filter_by(id=parse_int(category_id), user_id=current_user.id).first()


@categories_bp.route('/create', methods=['POST'])
@login_required
def create_category():
    name = (request.form.get('name') or '').strip()
    c_type = request.form.get('type')
    color = request.form.get('color') or DEFAULT_COLOR

    if not name or not c_type:
        return failure("Name and Type are required")
    if c_type not in CATEGORY_TYPES:
        return failure(f"Unknown category type: {c_type}")

    # check if category already exists
    existing = Category.query.filter_by(name=name, type=c_type, user_id=current_user.id).first()
    if existing:
        return failure("Category already exists!", 409)

    category = Category(
        user_id=current_user.id,
        name=name,
        type=c_type,
        color=color,
        icon=icon_for(c_type),
    )
    try:
        db.session.add(category)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("create_category", err)

    return success(201, category=category.to_dict())


@categories_bp.route('/update', methods=['POST'])
@login_required
def update_category():
    name = (request.form.get('name') or '').strip()
    c_type = request.form.get('type')
    color = request.form.get('color')

    if not request.form.get('id') or not name or not c_type:
        return failure("Missing required fields")
    if c_type not in CATEGORY_TYPES:
        return failure(f"Unknown category type: {c_type}")

    category = _owned_category(request.form['id'])
    if not category:
        return failure("Category not found", 404)

    clash = (
        Category.query
        .filter_by(name=name, type=c_type, user_id=current_user.id)
        .filter(Category.id != category.id)
        .first()
    )
    if clash:
        return failure("Category already exists!", 409)

    old_type = category.type
    try:
        # Switching income <-> expense flips the effect of every booked transaction
        rebooked = ledger.retype_category(category, old_type, c_type)
        category.name = name
        category.type = c_type
        category.icon = icon_for(c_type)
        if color:
            category.color = color
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("update_category", err)

    if rebooked:
        logger.info("category %s retyped %s -> %s, %d transactions rebooked",
                    category.id, old_type, c_type, rebooked)
    return success(category=category.to_dict(), rebooked_transactions=rebooked)


@categories_bp.route('/delete', methods=['POST'])
@login_required
def delete_category():
    if not request.form.get('id'):
        return failure("ID is missing")

    category = _owned_category(request.form['id'])
    if not category:
        return failure("Category not found", 404)

    in_use = Transaction.query.filter_by(category_id=category.id).count()
    if in_use:
        return failure(f"Category is used by {in_use} transaction(s)", 409)

    try:
        db.session.delete(category)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("delete_category", err)

    return success()
