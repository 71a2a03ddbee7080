# utils.py
import re
from datetime import date, datetime

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%d-%m-%Y", "%d/%m/%Y"]

# currency -> (prefix, suffix, thousands separator)
CURRENCY_FORMATS = {
    "IDR": ("Rp ", "", "."),
    "USD": ("$", "", ","),
    "EUR": ("", " €", "."),
    "JPY": ("¥", "", ","),
}


def parse_amount(value):
    """Extract a whole amount from a formatted string, e.g. "Rp 10.000" -> 10000.

    Every non-digit character is dropped, so the result is never negative.
    Returns 0 when nothing numeric is left.
    """
    if value is None:
        return 0
    digits = re.sub(r"[^0-9]", "", str(value))
    return int(digits) if digits else 0


def parse_int(value):
    """Parse a signed integer field, returning None when it isn't one."""
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_date(s):
    """Try multiple date formats, then ISO 8601. Returns a datetime or None."""
    if not s:
        return None
    s = str(s).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def parse_month(value):
    """Parse a "YYYY-MM" query parameter into the first day of that month."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m").date()
    except ValueError:
        return None


def month_param(d: date) -> str:
    return f"{d.year}-{d.month:02d}"


def format_currency(amount, currency="IDR"):
    amount = int(round(amount))
    prefix, suffix, sep = CURRENCY_FORMATS.get(currency, (f"{currency} ", "", ","))
    grouped = f"{abs(amount):,}".replace(",", sep)
    sign = "-" if amount < 0 else ""
    return f"{sign}{prefix}{grouped}{suffix}"
