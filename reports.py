# reports.py
"""Dashboard and overview figures.

Everything here works on already-loaded rows (anything with ``amount``,
``date`` and ``category`` attributes), so it can be used without a database.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from models.account import ACCOUNT_TYPES
from utils import format_currency, month_param

RECENT_LIMIT = 5


def financial_period(target, start_day=1):
    """Return the financial month containing ``target``.

    A financial month runs from ``start_day`` up to the day before
    ``start_day`` of the following month.
    """
    if isinstance(target, datetime):
        target = target.date()

    if target.day >= start_day:
        start = date(target.year, target.month, start_day)
    else:
        start = date(target.year, target.month, start_day) - relativedelta(months=1)
    end = start + relativedelta(months=1) - timedelta(days=1)

    return {
        "start": start,
        "end": end,
        "label": start.strftime("%B %Y"),
        "prev": month_param(start - relativedelta(months=1)),
        "next": month_param(start + relativedelta(months=1)),
    }


def period_bounds(period):
    """Datetime bounds ``[start, end)`` for filtering on ``Transaction.date``."""
    start = datetime.combine(period["start"], datetime.min.time())
    end = datetime.combine(period["end"] + timedelta(days=1), datetime.min.time())
    return start, end


def category_type(tx):
    return tx.category.type if tx.category else None


def summarize(transactions):
    income = 0
    expense = 0
    by_category = defaultdict(int)

    for tx in transactions:
        if category_type(tx) == "expense":
            expense += tx.amount
            by_category[tx.category.name or "Uncategorized"] += tx.amount
        else:
            income += tx.amount

    return {
        "income": income,
        "expense": expense,
        "net_flow": income - expense,
        "count": len(transactions),
        "by_category": dict(by_category),
    }


def expense_breakdown(by_category):
    """Chart rows, biggest expense first."""
    rows = [{"name": name, "value": value} for name, value in by_category.items()]
    return sorted(rows, key=lambda r: r["value"], reverse=True)


def savings_rate(income, expense):
    return (income - expense) / income * 100 if income > 0 else 0


def burn_rate(income, expense):
    if income > 0:
        return expense / income * 100
    return 100 if expense > 0 else 0


def percent_change(current, previous):
    return (current - previous) / previous * 100 if previous > 0 else 0


def net_flow_change(current, previous):
    # net flow can be negative, so compare against its magnitude
    return (current - previous) / abs(previous) * 100 if previous != 0 else 0


def spending_pace(period, expense, today):
    if isinstance(today, datetime):
        today = today.date()

    days_in_period = (period["end"] - period["start"]).days + 1
    days_passed = (today - period["start"]).days + 1
    days_passed = max(1, min(days_passed, days_in_period))
    daily_average = expense / days_passed

    return {
        "days_in_period": days_in_period,
        "days_passed": days_passed,
        "days_remaining": max(0, days_in_period - days_passed),
        "daily_average": daily_average,
        "projected_expense": daily_average * days_in_period,
    }


def budget_progress(income, expense, budget_limit, currency="IDR"):
    """Spending against the user's budget, or against income when none is set."""
    base = budget_limit if budget_limit > 0 else income
    percent = expense / base * 100 if base > 0 else 0

    if budget_limit > 0:
        status = f"of {format_currency(budget_limit, currency)} Budget"
    else:
        status = "of Income (No budget set)"

    return {
        "limit": base,
        "percent": percent,
        "over_budget": percent > 100,
        "status": status,
    }


def quick_stats(transactions, days_passed):
    expenses = [tx.amount for tx in transactions if category_type(tx) == "expense"]
    count = len(transactions)
    return {
        "count": count,
        "avg_daily_expense": sum(expenses) / days_passed if days_passed else 0,
        "avg_transaction": sum(tx.amount for tx in transactions) / count if count else 0,
        "largest_expense": max(expenses, default=0),
    }


def insight(income, expense, top_category=None, currency="IDR"):
    """One-line comment on the month, with a tone of positive, warning or neutral."""
    rate = savings_rate(income, expense)

    if income == 0 and expense > 0:
        return {
            "message": f"You've spent {format_currency(expense, currency)} with no income recorded this month.",
            "type": "warning",
        }
    if income == 0 and expense == 0:
        return {
            "message": "No transactions recorded this month. Start tracking to see insights.",
            "type": "neutral",
        }
    if rate < 0:
        return {
            "message": f"Spending exceeds income by {format_currency(expense - income, currency)}. "
                       "Consider reducing expenses.",
            "type": "warning",
        }
    if rate >= 30:
        return {
            "message": f"Excellent! You're saving {rate:.0f}% of your income this month.",
            "type": "positive",
        }
    if rate >= 20:
        message = f"Good progress! {rate:.0f}% savings rate."
        if top_category:
            message += f" {top_category} is your top expense."
        return {"message": message, "type": "positive"}
    if top_category:
        return {
            "message": f"{top_category} is your biggest expense category this month.",
            "type": "neutral",
        }
    return {
        "message": "Track more transactions to unlock detailed insights.",
        "type": "neutral",
    }


def month_over_month(current, previous):
    return {
        "current_income": current["income"],
        "current_expense": current["expense"],
        "prev_income": previous["income"],
        "prev_expense": previous["expense"],
        "income_change": percent_change(current["income"], previous["income"]),
        "expense_change": percent_change(current["expense"], previous["expense"]),
        "net_flow_change": net_flow_change(current["net_flow"], previous["net_flow"]),
        "has_data": previous["income"] > 0 or previous["expense"] > 0,
    }


def dashboard(user, period, period_transactions, previous_transactions, accounts, today):
    """Assemble every figure the dashboard shows for one financial period."""
    current = summarize(period_transactions)
    previous = summarize(previous_transactions)
    chart = expense_breakdown(current["by_category"])
    top = chart[0] if chart else None
    pace = spending_pace(period, current["expense"], today)

    return {
        "period": {
            "start": period["start"].isoformat(),
            "end": period["end"].isoformat(),
            "label": period["label"],
            "prev": period["prev"],
            "next": period["next"],
        },
        "currency": user.currency,
        "net_worth": sum(a.balance for a in accounts),
        "income": current["income"],
        "expense": current["expense"],
        "net_flow": current["net_flow"],
        "savings_rate": savings_rate(current["income"], current["expense"]),
        "burn_rate": burn_rate(current["income"], current["expense"]),
        "budget": budget_progress(current["income"], current["expense"], user.budget_limit, user.currency),
        "chart": chart,
        "top_category": top,
        "pace": pace,
        "stats": quick_stats(period_transactions, pace["days_passed"]),
        "comparison": month_over_month(current, previous),
        "insight": insight(current["income"], current["expense"], top["name"] if top else None, user.currency),
    }


def accounts_overview(accounts):
    """Net worth split into assets and liabilities, grouped by account type."""
    accounts = sorted(accounts, key=lambda a: a.balance, reverse=True)
    total_assets = sum(a.balance for a in accounts if a.balance >= 0)
    total_liabilities = sum(abs(a.balance) for a in accounts if a.balance < 0)

    groups = {}
    for account in accounts:
        a_type = account.type or "cash"
        group = groups.setdefault(a_type, {"accounts": [], "total": 0})
        group["accounts"].append(account)
        if account.balance > 0:
            group["total"] += account.balance

    allocation = sorted(
        (
            {
                "type": a_type,
                "label": ACCOUNT_TYPES.get(a_type, {}).get("label", a_type),
                "amount": group["total"],
                "percentage": group["total"] / total_assets * 100 if total_assets > 0 else 0,
            }
            for a_type, group in groups.items()
            if group["total"] > 0
        ),
        key=lambda row: row["amount"],
        reverse=True,
    )

    ordered = sorted(groups.items(), key=lambda item: ACCOUNT_TYPES.get(item[0], {}).get("order", 99))

    return {
        "accounts": accounts,
        "count": len(accounts),
        "total_balance": sum(a.balance for a in accounts),
        "total_assets": total_assets,
        "total_liabilities": total_liabilities,
        "groups": [
            {
                "type": a_type,
                "label": ACCOUNT_TYPES.get(a_type, {}).get("label", a_type),
                "accounts": group["accounts"],
                "total": group["total"],
            }
            for a_type, group in ordered
        ],
        "allocation": allocation,
    }


def relative_date_label(day, today):
    if isinstance(day, datetime):
        day = day.date()
    if isinstance(today, datetime):
        today = today.date()

    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"

    label = f"{day.strftime('%a')}, {day.day} {day.strftime('%b')}"
    if day.year != today.year:
        label += f" {day.year}"
    return label


def group_by_day(transactions, today):
    """Group transactions by calendar day, keeping the order they came in."""
    groups = {}
    for tx in transactions:
        key = tx.date.date().isoformat()
        group = groups.get(key)
        if group is None:
            group = groups[key] = {
                "date": key,
                "label": relative_date_label(tx.date, today),
                "transactions": [],
                "income": 0,
                "expense": 0,
            }
        group["transactions"].append(tx)
        if category_type(tx) == "expense":
            group["expense"] += tx.amount
        else:
            group["income"] += tx.amount
    return list(groups.values())
