# pages.py
"""Read-only endpoints returning the data behind each page as JSON."""
from datetime import datetime

from dateutil.relativedelta import relativedelta
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import false, func
from sqlalchemy.orm import joinedload

import reports
from extensions import db
from models import Account, Category, Transaction
from utils import parse_int, parse_month

pages_bp = Blueprint('pages', __name__)

TRANSACTION_LIMIT = 200
SORT_ORDERS = {
    "newest": (Transaction.date.desc(), Transaction.created_at.desc()),
    "oldest": (Transaction.date.asc(), Transaction.created_at.asc()),
    "highest": (Transaction.amount.desc(),),
    "lowest": (Transaction.amount.asc(),),
}


def _transactions_between(start, end):
    return (
        Transaction.query
        .options(joinedload(Transaction.category))
        .filter(
            Transaction.user_id == current_user.id,
            Transaction.date >= start,
            Transaction.date < end,
        )
        .all()
    )


def _range_bounds(range_name, now):
    """Datetime bounds ``[start, end)`` for a named range, None for "all"."""
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_name == "this-month":
        start = today.replace(day=1)
        return start, start + relativedelta(months=1)
    if range_name == "last-month":
        start = today.replace(day=1) - relativedelta(months=1)
        return start, start + relativedelta(months=1)
    if range_name == "this-year":
        start = today.replace(month=1, day=1)
        return start, start + relativedelta(years=1)
    return None


# Dashboard Page (Summary + Budget + Comparison)
@pages_bp.route('/dashboard')
@login_required
def dashboard():
    now = datetime.now()
    start_day = current_user.start_day or 1

    selected = parse_month(request.args.get('month'))
    target = selected.replace(day=start_day) if selected else now.date()

    period = reports.financial_period(target, start_day)
    previous_period = reports.financial_period(period["start"] - relativedelta(months=1), start_day)

    period_transactions = _transactions_between(*reports.period_bounds(period))
    previous_transactions = _transactions_between(*reports.period_bounds(previous_period))
    accounts = Account.query.filter_by(user_id=current_user.id).all()

    recent = (
        Transaction.query
        .filter_by(user_id=current_user.id)
        .order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .limit(reports.RECENT_LIMIT)
        .all()
    )

    summary = reports.dashboard(current_user, period, period_transactions, previous_transactions, accounts, now)
    summary["recent_transactions"] = [tx.to_dict() for tx in recent]
    return jsonify(summary)


@pages_bp.route('/transactions')
@login_required
def transactions_page():
    now = datetime.now()
    range_name = request.args.get('range', 'this-month')
    t_type = request.args.get('type', 'all')
    category_id = request.args.get('category', 'all')
    account_id = request.args.get('account', 'all')
    sort = request.args.get('sort', 'newest')
    search = (request.args.get('search') or '').strip()

    query = (
        Transaction.query
        .options(joinedload(Transaction.category), joinedload(Transaction.account))
        .filter(Transaction.user_id == current_user.id)
    )

    bounds = _range_bounds(range_name, now)
    if bounds:
        start, end = bounds
        query = query.filter(Transaction.date >= start, Transaction.date < end)

    if t_type != 'all':
        query = query.join(Category, Transaction.category_id == Category.id).filter(Category.type == t_type)
    # an id that isn't a number matches nothing
    if category_id != 'all':
        parsed = parse_int(category_id)
        query = query.filter(Transaction.category_id == parsed if parsed is not None else false())
    if account_id != 'all':
        parsed = parse_int(account_id)
        query = query.filter(Transaction.account_id == parsed if parsed is not None else false())
    if search:
        query = query.filter(Transaction.description.ilike(f"%{search}%"))

    transactions = query.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"])).limit(TRANSACTION_LIMIT).all()
    totals = reports.summarize(transactions)

    groups = reports.group_by_day(transactions, now)
    for group in groups:
        group["transactions"] = [tx.to_dict() for tx in group["transactions"]]

    return jsonify(
        count=len(transactions),
        income=totals["income"],
        expense=totals["expense"],
        net_flow=totals["net_flow"],
        groups=groups,
        has_filters=any(v != 'all' for v in (t_type, category_id, account_id)) or bool(search),
    )


@pages_bp.route('/accounts')
@login_required
def accounts_page():
    accounts = Account.query.filter_by(user_id=current_user.id).all()
    overview = reports.accounts_overview(accounts)

    overview["accounts"] = [a.to_dict() for a in overview["accounts"]]
    for group in overview["groups"]:
        group["accounts"] = [a.to_dict() for a in group["accounts"]]
    return jsonify(overview)


@pages_bp.route('/categories')
@login_required
def categories_page():
    counts = dict(
        db.session.query(Transaction.category_id, func.count(Transaction.id))
        .filter(Transaction.user_id == current_user.id)
        .group_by(Transaction.category_id)
        .all()
    )
    categories = Category.query.filter_by(user_id=current_user.id).order_by(Category.name).all()

    def rows(c_type):
        return [
            dict(c.to_dict(), transaction_count=counts.get(c.id, 0))
            for c in categories if c.type == c_type
        ]

    return jsonify(
        total=len(categories),
        income=rows("income"),
        expense=rows("expense"),
    )


@pages_bp.route('/settings')
@login_required
def settings_page():
    return jsonify(user=current_user.to_dict())
