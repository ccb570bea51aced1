"""Parsing helpers for amounts and quantities coming from requests."""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation


def parse_amount(value, field_name: str = 'amount', allow_negative: bool = False) -> Decimal:
    """
    Parse a monetary value (number or string, "1,500.50" accepted) to Decimal.

    Raises:
        ValueError: if the value is empty, not a number, or negative when not allowed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f'{field_name} is required')

    if isinstance(value, bool):
        raise ValueError(f'{field_name} must be a number')

    cleaned = value.strip().replace(',', '') if isinstance(value, str) else value
    try:
        amount = Decimal(str(cleaned))
    except (InvalidOperation, ValueError):
        raise ValueError(f'{field_name} must be a number')

    if not amount.is_finite():
        raise ValueError(f'{field_name} must be a number')

    if amount < 0 and not allow_negative:
        raise ValueError(f'{field_name} cannot be negative')

    return amount


def parse_quantity(value, field_name: str = 'quantity') -> int:
    """Parse a whole unit count of at least 1."""
    try:
        quantity = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f'{field_name} must be a whole number')

    if quantity < 1:
        raise ValueError(f'{field_name} must be at least 1')

    return quantity


def parse_date(value, field_name: str = 'date') -> date:
    """Parse a date given as a date, a datetime or an ISO string (time part ignored)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValueError(f'{field_name} is required')
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise ValueError(f'{field_name} must be a date (YYYY-MM-DD)')
