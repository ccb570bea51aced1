"""
Unit tests for Indian number, money and date formatting.
"""
from datetime import date, datetime
from decimal import Decimal

from tailorshop.utils.formatters import date_in, money_in, num_in


class TestNumberFormatting:

    def test_indian_grouping(self):
        assert num_in(123456.5) == '1,23,456.50'
        assert num_in(Decimal('12345678')) == '1,23,45,678.00'
        assert num_in(999) == '999.00'

    def test_no_decimals(self):
        assert num_in(1500, decimals=0) == '1,500'

    def test_missing_values(self):
        assert num_in(None) == '-'
        assert num_in('abc') == '-'


class TestMoneyFormatting:

    def test_rupees(self):
        assert money_in(1500) == '₹1,500.00'
        assert money_in(Decimal('0')) == '₹0.00'

    def test_negative(self):
        assert money_in(-250.5) == '-₹250.50'


class TestDateFormatting:

    def test_dates(self):
        assert date_in(date(2026, 1, 12)) == '12/01/2026'
        assert date_in(datetime(2026, 1, 12, 18, 30)) == '12/01/2026'
        assert date_in(None) == '-'
