"""
Formatting helpers for documents and outbound messages.
Numbers use Indian digit grouping (1,23,456.00) and dates DD/MM/YYYY.
"""
from decimal import Decimal, InvalidOperation
from datetime import date, datetime
from typing import Union, Optional

CURRENCY_SYMBOL = '₹'


def _group_indian(integer_part: str) -> str:
    """Group digits as lakh/crore: last three, then pairs."""
    if len(integer_part) <= 3:
        return integer_part
    head, tail = integer_part[:-3], integer_part[-3:]
    reversed_head = head[::-1]
    groups = [reversed_head[i:i+2] for i in range(0, len(reversed_head), 2)]
    return ','.join(groups)[::-1] + ',' + tail


def num_in(value: Union[int, float, Decimal, str, None], decimals: Optional[int] = 2) -> str:
    """
    Format a number with Indian digit grouping.

    Examples:
        num_in(1500) -> "1,500.00"
        num_in(123456.5) -> "1,23,456.50"
        num_in(1500, decimals=0) -> "1,500"
        num_in(None) -> "-"
    """
    if value is None or value == "":
        return "-"

    try:
        num = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    if decimals is not None:
        num = num.quantize(Decimal(10) ** -decimals)

    sign = "-" if num < 0 else ""
    num_str = f"{abs(num):f}"

    if '.' in num_str:
        integer_part, decimal_part = num_str.split('.')
    else:
        integer_part, decimal_part = num_str, ""

    integer_formatted = _group_indian(integer_part)
    if decimal_part:
        return f"{sign}{integer_formatted}.{decimal_part}"
    return f"{sign}{integer_formatted}"


def money_in(value: Union[int, float, Decimal, str, None]) -> str:
    """
    Format a rupee amount with exactly two decimals.

    Examples:
        money_in(1500) -> "₹1,500.00"
        money_in(-250.5) -> "-₹250.50"
    """
    formatted = num_in(value, decimals=2)
    if formatted == "-":
        return formatted
    if formatted.startswith("-"):
        return f"-{CURRENCY_SYMBOL}{formatted[1:]}"
    return f"{CURRENCY_SYMBOL}{formatted}"


def date_in(value: Union[date, datetime, None]) -> str:
    """
    Format a date as DD/MM/YYYY.

    Examples:
        date_in(date(2026, 1, 12)) -> "12/01/2026"
    """
    if value is None:
        return "-"

    if isinstance(value, datetime):
        value = value.date()

    if not isinstance(value, date):
        return "-"

    return value.strftime("%d/%m/%Y")
