# ledger.py
"""Account balance bookkeeping.

An account's ``balance`` is a running total: income transactions add their
amount, expense transactions subtract it. Callers adjust balances inside the
same session as the transaction row change and commit once, so a failure
leaves neither written.
"""
import logging

from extensions import db
from models import Account, Transaction

logger = logging.getLogger(__name__)


def signed_amount(amount, category_type):
    # Anything that isn't an expense (including a missing category) counts as income
    return -amount if category_type == "expense" else amount


def lock_account(account_id, user_id):
    """Load one of the user's accounts with a row lock held until commit."""
    if account_id is None:
        return None
    return (
        db.session.query(Account)
        .filter_by(id=account_id, user_id=user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def lock_accounts(account_ids, user_id):
    """Lock several of the user's accounts, always in ascending id order."""
    ids = sorted({account_id for account_id in account_ids if account_id is not None})
    if not ids:
        return []
    return (
        db.session.query(Account)
        .filter(Account.id.in_(ids), Account.user_id == user_id)
        .order_by(Account.id)
        .with_for_update()
        .populate_existing()
        .all()
    )


def lock_transaction(tx_id, user_id):
    """Load one of the user's transactions with a row lock held until commit.

    Must be taken before its amount or account is read.
    """
    if tx_id is None:
        return None
    return (
        db.session.query(Transaction)
        .filter_by(id=tx_id, user_id=user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def apply(account, amount, category_type):
    if account is None:
        return
    account.balance += signed_amount(amount, category_type)
    logger.debug("account %s balance -> %s", account.id, account.balance)


def revert(account, amount, category_type):
    if account is None:
        return
    account.balance -= signed_amount(amount, category_type)
    logger.debug("account %s balance -> %s", account.id, account.balance)


def apply_transaction(tx, category_type=None):
    """Add the effect of ``tx`` to its account's balance."""
    account = lock_account(tx.account_id, tx.user_id)
    apply(account, tx.amount, category_type or tx.category_type)
    return account


def revert_transaction(tx, category_type=None):
    """Remove the effect of ``tx`` from its account's balance."""
    account = lock_account(tx.account_id, tx.user_id)
    revert(account, tx.amount, category_type or tx.category_type)
    return account


def retype_category(category, old_type, new_type):
    """Re-book every transaction of ``category`` after its type changed."""
    if old_type == new_type:
        return 0
    transactions = category.transactions
    lock_accounts([tx.account_id for tx in transactions], category.user_id)
    moved = 0
    for tx in transactions:
        if tx.account_id is None:
            continue
        account = lock_account(tx.account_id, tx.user_id)
        revert(account, tx.amount, old_type)
        apply(account, tx.amount, new_type)
        moved += 1
    return moved
