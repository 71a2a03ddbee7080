# actions/transactions.py
from datetime import datetime

from flask import Blueprint, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

import ledger
from extensions import db
from models import Account, Category, Transaction
from utils import parse_amount, parse_date, parse_int

from . import database_failure, failure, success

transactions_bp = Blueprint('transactions', __name__, url_prefix='/actions/transactions')


def _owned_transaction(tx_id):
    return Transaction.query.filter_by(id=parse_int(tx_id), user_id=current_user.id).first()


def _read_transaction_form(form):
    """Validate the shared create/update fields.

    Returns ``(values, None)`` or ``(None, (message, status))``.
    """
    amount_input = form.get('amount')
    date_input = form.get('date')
    category_id = form.get('category_id')
    account_id = form.get('account_id')

    if not amount_input or not date_input or not category_id or not account_id:
        return None, ("Please complete all required fields.", 400)

    amount = parse_amount(amount_input)
    if amount <= 0:
        return None, ("Amount must be greater than 0.", 400)

    date = parse_date(date_input)
    if date is None:
        return None, ("Invalid date.", 400)

    category = Category.query.filter_by(id=parse_int(category_id), user_id=current_user.id).first()
    if not category:
        return None, ("Category not found.", 404)

    account = Account.query.filter_by(id=parse_int(account_id), user_id=current_user.id).first()
    if not account:
        return None, ("Account not found.", 404)

    return {
        "amount": amount,
        "description": (form.get('description') or '').strip() or "No description",
        "date": date,
        "category": category,
        "account": account,
    }, None


@transactions_bp.route('/create', methods=['POST'])
@login_required
def create_transaction():
    values, error = _read_transaction_form(request.form)
    if error:
        return failure(*error)

    category = values["category"]
    tx = Transaction(
        user_id=current_user.id,
        amount=values["amount"],
        description=values["description"],
        date=values["date"],
        category_id=category.id,
        account_id=values["account"].id,
    )
    try:
        db.session.add(tx)
        account = ledger.apply_transaction(tx, category.type)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("create_transaction", err)

    return success(201, transaction=tx.to_dict(), balance=account.balance if account else None)


@transactions_bp.route('/update', methods=['POST'])
@login_required
def update_transaction():
    if not request.form.get('id'):
        return failure("Transaction ID is required.")

    try:
        tx = ledger.lock_transaction(parse_int(request.form['id']), current_user.id)
    except SQLAlchemyError as err:
        return database_failure("update_transaction", err)
    if not tx:
        return failure("Transaction not found", 404)

    values, error = _read_transaction_form(request.form)
    if error:
        db.session.rollback()
        return failure(*error)

    category = values["category"]
    try:
        ledger.lock_accounts([tx.account_id, values["account"].id], current_user.id)
        # Take the old booking off the old account, then book the new values.
        # A detached transaction has nothing to revert and is booked onto the chosen account.
        ledger.revert_transaction(tx)
        tx.amount = values["amount"]
        tx.description = values["description"]
        tx.date = values["date"]
        tx.category_id = category.id
        tx.account_id = values["account"].id
        account = ledger.apply_transaction(tx, category.type)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("update_transaction", err)

    return success(transaction=tx.to_dict(), balance=account.balance if account else None)


@transactions_bp.route('/delete', methods=['POST'])
@login_required
def delete_transaction():
    if not request.form.get('id'):
        return failure("Transaction ID is required.")

    try:
        tx = ledger.lock_transaction(parse_int(request.form['id']), current_user.id)
        if not tx:
            db.session.rollback()
            return failure("Transaction not found", 404)
        account = ledger.revert_transaction(tx)
        db.session.delete(tx)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("delete_transaction", err)

    return success(balance=account.balance if account else None)


@transactions_bp.route('/duplicate', methods=['POST'])
@login_required
def duplicate_transaction():
    if not request.form.get('id'):
        return failure("Transaction ID is required.")

    original = _owned_transaction(request.form['id'])
    if not original:
        return failure("Transaction not found", 404)

    copy = Transaction(
        user_id=original.user_id,
        amount=original.amount,
        description=f"{original.description} (Copy)",
        date=datetime.now(),
        category_id=original.category_id,
        account_id=original.account_id,
    )
    try:
        db.session.add(copy)
        account = ledger.apply_transaction(copy, original.category_type)
        db.session.commit()
    except SQLAlchemyError as err:
        return database_failure("duplicate_transaction", err)

    return success(201, transaction=copy.to_dict(), balance=account.balance if account else None)
