# actions/settings.py
from flask import Blueprint, current_app, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from utils import parse_int

from . import database_failure, failure, success

settings_bp = Blueprint('settings', __name__, url_prefix='/actions/settings')

# Later days don't exist in every month
MAX_START_DAY = 28


@settings_bp.route('/preferences', methods=['POST'])
@login_required
def update_preferences():
    currency = (request.form.get('currency') or '').strip().upper()
    budget_input = (request.form.get('budget_limit') or '').strip()
    start_input = (request.form.get('start_day') or '').strip()

    # Defaults only apply to empty fields
    budget_limit = parse_int(budget_input) if budget_input else 0
    start_day = parse_int(start_input) if start_input else 1

    if currency and len(currency) != 3:
        return failure("Currency must be a 3-letter code")
    if budget_limit is None:
        return failure("Budget limit must be a whole number")
    if budget_limit < 0:
        return failure("Budget limit cannot be negative")
    if start_day is None or not 1 <= start_day <= MAX_START_DAY:
        return failure(f"Start day must be between 1 and {MAX_START_DAY}")

    current_user.currency = currency or current_app.config["DEFAULT_CURRENCY"]
    current_user.budget_limit = budget_limit
    current_user.start_day = start_day
    try:
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("update_preferences", err)

    return success(user=current_user.to_dict())


@settings_bp.route('/profile', methods=['POST'])
@login_required
def update_profile():
    full_name = (request.form.get('full_name') or '').strip()
    if not full_name:
        return failure("Name cannot be empty")

    current_user.full_name = full_name
    try:
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("update_profile", err)

    return success(user=current_user.to_dict())
