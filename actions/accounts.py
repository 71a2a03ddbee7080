# actions/accounts.py
from flask import Blueprint, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Account, Transaction, ACCOUNT_TYPES
from utils import parse_int

from . import database_failure, failure, success

accounts_bp = Blueprint('accounts', __name__, url_prefix='/actions/accounts')


def _owned_account(account_id):
    return Account.query.filter_by(id=parse_int(account_id), user_id=current_user.id).first()


@accounts_bp.route('/create', methods=['POST'])
@login_required
def create_account():
    name = (request.form.get('name') or '').strip()
    a_type = request.form.get('type')
    balance_str = request.form.get('balance')

    if not name or not a_type:
        return failure("Name and Type are required")
    if a_type not in ACCOUNT_TYPES:
        return failure(f"Unknown account type: {a_type}")

    # Opening balance defaults to 0 when left empty
    balance = parse_int(balance_str) if balance_str else 0
    if balance is None:
        return failure("Balance must be a whole number")

    account = Account(user_id=current_user.id, name=name, type=a_type, balance=balance)
    try:
        db.session.add(account)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("create_account", err)

    return success(201, account=account.to_dict())


@accounts_bp.route('/update', methods=['POST'])
@login_required
def update_account():
    name = (request.form.get('name') or '').strip()
    a_type = request.form.get('type')
    balance = parse_int(request.form.get('balance'))

    if not request.form.get('id') or not name or not a_type or balance is None:
        return failure("Invalid data provided")
    if a_type not in ACCOUNT_TYPES:
        return failure(f"Unknown account type: {a_type}")

    account = _owned_account(request.form['id'])
    if not account:
        return failure("Account not found", 404)

    account.name = name
    account.type = a_type
    account.balance = balance
    try:
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("update_account", err)

    return success(account=account.to_dict())


@accounts_bp.route('/delete', methods=['POST'])
@login_required
def delete_account():
    if not request.form.get('id'):
        return failure("Invalid ID")

    account = _owned_account(request.form['id'])
    if not account:
        return failure("Account not found", 404)

    try:
        # Keep the history, just detach it from the account
        detached = (
            Transaction.query
            .filter_by(account_id=account.id, user_id=current_user.id)
            .update({Transaction.account_id: None}, synchronize_session=False)
        )
        db.session.delete(account)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("delete_account", err)

    return success(detached_transactions=detached)
