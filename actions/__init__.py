# actions/__init__.py
"""Form actions.

Each action validates ``request.form``, writes the current user's rows and
answers with a result object: ``{"success": true, ...}`` or
``{"success": false, "error": "..."}``.
"""
import logging

from flask import jsonify

from extensions import db

logger = logging.getLogger(__name__)


def success(status=200, **data):
    return jsonify(success=True, **data), status


def failure(error, status=400):
    return jsonify(success=False, error=error), status


def database_failure(tag, err):
    """Roll back the session and turn a database error into a 500 result."""
    db.session.rollback()
    logger.error("[%s] %s", tag, err)
    return failure(str(getattr(err, "orig", None) or err), 500)


from .accounts import accounts_bp  # noqa: E402
from .categories import categories_bp  # noqa: E402
from .transactions import transactions_bp  # noqa: E402
from .settings import settings_bp  # noqa: E402

blueprints = (accounts_bp, categories_bp, transactions_bp, settings_bp)
