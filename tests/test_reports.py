"""Tests for dashboard and overview calculations (no database)."""

from datetime import date, datetime
from types import SimpleNamespace

import pytest

import reports

SALARY = SimpleNamespace(name="Salary", type="income")
FOOD = SimpleNamespace(name="Food", type="expense")
RENT = SimpleNamespace(name="Rent", type="expense")


def tx(amount, category, when=datetime(2025, 1, 10, 12, 0)):
    return SimpleNamespace(amount=amount, category=category, date=when)


def account(balance, type="bank"):
    return SimpleNamespace(balance=balance, type=type)


class TestFinancialPeriod:
    def test_calendar_month(self):
        period = reports.financial_period(date(2025, 2, 14))
        assert period["start"] == date(2025, 2, 1)
        assert period["end"] == date(2025, 2, 28)
        assert period["label"] == "February 2025"
        assert period["prev"] == "2025-01"
        assert period["next"] == "2025-03"

    def test_on_or_after_start_day(self):
        period = reports.financial_period(date(2025, 1, 25), start_day=25)
        assert period["start"] == date(2025, 1, 25)
        assert period["end"] == date(2025, 2, 24)

    def test_before_start_day_belongs_to_previous_month(self):
        period = reports.financial_period(date(2025, 1, 10), start_day=25)
        assert period["start"] == date(2024, 12, 25)
        assert period["end"] == date(2025, 1, 24)
        assert period["label"] == "December 2024"

    def test_accepts_datetime(self):
        period = reports.financial_period(datetime(2025, 3, 5, 23, 59))
        assert period["start"] == date(2025, 3, 1)

    def test_bounds_cover_last_day(self):
        period = reports.financial_period(date(2025, 2, 14))
        start, end = reports.period_bounds(period)
        assert start == datetime(2025, 2, 1)
        assert end == datetime(2025, 3, 1)


class TestSummaries:
    def test_summarize(self):
        summary = reports.summarize([tx(5000, SALARY), tx(1200, FOOD), tx(300, FOOD), tx(2000, RENT)])
        assert summary["income"] == 5000
        assert summary["expense"] == 3500
        assert summary["net_flow"] == 1500
        assert summary["count"] == 4
        assert summary["by_category"] == {"Food": 1500, "Rent": 2000}

    def test_missing_category_counts_as_income(self):
        summary = reports.summarize([tx(700, None)])
        assert summary["income"] == 700
        assert summary["expense"] == 0

    def test_breakdown_sorted_descending(self):
        rows = reports.expense_breakdown({"Food": 1500, "Rent": 2000, "Fun": 100})
        assert [r["name"] for r in rows] == ["Rent", "Food", "Fun"]


class TestRates:
    def test_savings_rate(self):
        assert reports.savings_rate(1000, 700) == pytest.approx(30)
        assert reports.savings_rate(0, 700) == 0

    def test_burn_rate(self):
        assert reports.burn_rate(1000, 250) == pytest.approx(25)
        assert reports.burn_rate(0, 10) == 100
        assert reports.burn_rate(0, 0) == 0

    def test_percent_change(self):
        assert reports.percent_change(150, 100) == pytest.approx(50)
        assert reports.percent_change(150, 0) == 0

    def test_net_flow_change_uses_magnitude(self):
        assert reports.net_flow_change(100, -200) == pytest.approx(150)
        assert reports.net_flow_change(100, 0) == 0


class TestSpendingPace:
    def test_mid_period(self):
        period = reports.financial_period(date(2025, 1, 10))
        pace = reports.spending_pace(period, 1000, date(2025, 1, 10))
        assert pace["days_in_period"] == 31
        assert pace["days_passed"] == 10
        assert pace["days_remaining"] == 21
        assert pace["daily_average"] == pytest.approx(100)
        assert pace["projected_expense"] == pytest.approx(3100)

    def test_past_period_is_clamped(self):
        period = reports.financial_period(date(2024, 12, 1))
        pace = reports.spending_pace(period, 310, date(2025, 6, 1))
        assert pace["days_passed"] == 31
        assert pace["days_remaining"] == 0

    def test_future_period_counts_one_day(self):
        period = reports.financial_period(date(2025, 6, 1))
        pace = reports.spending_pace(period, 0, date(2025, 1, 1))
        assert pace["days_passed"] == 1


class TestBudgetProgress:
    def test_against_budget(self):
        budget = reports.budget_progress(income=0, expense=1500, budget_limit=1000, currency="USD")
        assert budget["percent"] == pytest.approx(150)
        assert budget["over_budget"] is True
        assert budget["status"] == "of $1,000 Budget"

    def test_against_income_without_budget(self):
        budget = reports.budget_progress(income=2000, expense=500, budget_limit=0)
        assert budget["limit"] == 2000
        assert budget["percent"] == pytest.approx(25)
        assert budget["status"] == "of Income (No budget set)"

    def test_nothing_to_compare(self):
        assert reports.budget_progress(0, 0, 0)["percent"] == 0


class TestInsight:
    def test_spending_without_income(self):
        result = reports.insight(0, 5000, currency="IDR")
        assert result["type"] == "warning"
        assert "Rp 5.000" in result["message"]

    def test_empty_month(self):
        assert reports.insight(0, 0)["type"] == "neutral"

    def test_overspending(self):
        result = reports.insight(1000, 1500, currency="USD")
        assert result["type"] == "warning"
        assert "$500" in result["message"]

    def test_excellent_saver(self):
        result = reports.insight(1000, 600)
        assert result == {"message": "Excellent! You're saving 40% of your income this month.", "type": "positive"}

    def test_good_progress_mentions_top_category(self):
        result = reports.insight(1000, 750, top_category="Food")
        assert result["type"] == "positive"
        assert result["message"] == "Good progress! 25% savings rate. Food is your top expense."

    def test_low_savings_names_top_category(self):
        result = reports.insight(1000, 950, top_category="Rent")
        assert result["message"] == "Rent is your biggest expense category this month."

    def test_fallback(self):
        assert reports.insight(1000, 950)["message"].startswith("Track more transactions")


class TestDashboard:
    def test_assembles_figures(self):
        user = SimpleNamespace(currency="IDR", budget_limit=0, start_day=1)
        period = reports.financial_period(date(2025, 1, 10))
        current = [tx(10000, SALARY), tx(2000, FOOD), tx(3000, RENT)]
        previous = [tx(8000, SALARY), tx(4000, FOOD)]

        summary = reports.dashboard(user, period, current, previous, [account(50000), account(-5000)],
                                    datetime(2025, 1, 10, 9, 0))

        assert summary["net_worth"] == 45000
        assert summary["net_flow"] == 5000
        assert summary["top_category"] == {"name": "Rent", "value": 3000}
        assert summary["stats"]["largest_expense"] == 3000
        assert summary["stats"]["count"] == 3
        assert summary["comparison"]["income_change"] == pytest.approx(25)
        assert summary["comparison"]["expense_change"] == pytest.approx(25)
        assert summary["comparison"]["has_data"] is True
        assert summary["insight"]["type"] == "positive"
        assert summary["period"]["label"] == "January 2025"


class TestAccountsOverview:
    def test_assets_and_liabilities(self):
        overview = reports.accounts_overview([
            account(3000, "bank"),
            account(1000, "cash"),
            account(-500, "bank"),
            account(1000, "wallet"),
        ])
        assert overview["total_balance"] == 4500
        assert overview["total_assets"] == 5000
        assert overview["total_liabilities"] == 500
        assert [a.balance for a in overview["accounts"]] == [3000, 1000, 1000, -500]

    def test_groups_follow_type_order(self):
        overview = reports.accounts_overview([
            account(100, "investment"),
            account(100, "crypto"),
            account(100, "cash"),
            account(100, "bank"),
        ])
        assert [g["type"] for g in overview["groups"]] == ["bank", "cash", "investment", "crypto"]

    def test_allocation_only_counts_positive_balances(self):
        overview = reports.accounts_overview([account(3000, "bank"), account(-500, "bank"), account(1000, "cash")])
        allocation = {row["type"]: row for row in overview["allocation"]}
        assert allocation["bank"]["amount"] == 3000
        assert allocation["bank"]["percentage"] == pytest.approx(75)
        assert allocation["cash"]["label"] == "Cash"
        assert overview["allocation"][0]["type"] == "bank"


class TestGrouping:
    TODAY = date(2025, 3, 12)

    def test_relative_labels(self):
        assert reports.relative_date_label(date(2025, 3, 12), self.TODAY) == "Today"
        assert reports.relative_date_label(date(2025, 3, 11), self.TODAY) == "Yesterday"
        assert reports.relative_date_label(date(2025, 3, 3), self.TODAY) == "Mon, 3 Mar"
        assert reports.relative_date_label(date(2024, 12, 31), self.TODAY) == "Tue, 31 Dec 2024"

    def test_group_by_day(self):
        groups = reports.group_by_day([
            tx(100, FOOD, datetime(2025, 3, 12, 9)),
            tx(500, SALARY, datetime(2025, 3, 12, 8)),
            tx(40, FOOD, datetime(2025, 3, 11, 20)),
        ], self.TODAY)

        assert [g["date"] for g in groups] == ["2025-03-12", "2025-03-11"]
        assert groups[0]["label"] == "Today"
        assert groups[0]["income"] == 500
        assert groups[0]["expense"] == 100
        assert len(groups[1]["transactions"]) == 1
