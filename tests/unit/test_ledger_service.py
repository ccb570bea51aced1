"""
Unit tests for employee/customer ledgers and the statement window.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tailorshop.exceptions import NotFoundError
from tailorshop.services import assignment_service, employee_service, ledger_service, order_service
from tailorshop.services.assignment_service import AssignmentGroup
from tailorshop.services.ledger_service import LedgerEntry

T0 = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


def _entries(*amounts):
    """Positive amounts are credits, negative ones debits, one day apart."""
    entries = []
    for day, amount in enumerate(amounts):
        amount = Decimal(str(amount))
        entries.append(LedgerEntry(
            date=T0 + timedelta(days=day),
            type='work' if amount > 0 else 'payment',
            particulars=f'entry {day}',
            credit=amount if amount > 0 else Decimal('0'),
            debit=-amount if amount < 0 else Decimal('0'),
        ))
    return entries


class TestStatementWindow:
    """Tests for the zero-crossing statement window."""

    def test_window_after_last_settlement(self):
        """credit 100, debit 100, credit 50: only the open credit is shown."""
        entries = _entries(100, -100, 50)

        window, summary = ledger_service.statement_window(entries)

        assert window == entries[2:]
        assert summary.total_earned == Decimal('50')
        assert summary.total_paid == Decimal('0')
        assert summary.balance == Decimal('50')

    def test_just_settled_run_is_shown_in_full(self):
        """When the last entry settles, the window starts after the previous settlement."""
        entries = _entries(100, -100, 50, -50)

        window, summary = ledger_service.statement_window(entries)

        assert window == entries[2:]
        assert summary.balance == Decimal('0')
        assert summary.total_earned == Decimal('50')

    def test_single_settlement_at_end_shows_everything(self):
        entries = _entries(100, 50, -150)
        window, summary = ledger_service.statement_window(entries)
        assert window == entries
        assert summary.total_earned == Decimal('150')
        assert summary.total_paid == Decimal('150')

    def test_never_settled_shows_everything(self):
        entries = _entries(100, -40, 30)
        window, summary = ledger_service.statement_window(entries)
        assert window == entries
        assert summary.balance == Decimal('90')

    def test_empty_ledger(self):
        window, summary = ledger_service.statement_window([])
        assert window == []
        assert summary.balance == 0

    def test_statement_rows_running_balance(self):
        rows = ledger_service.statement_rows(_entries(100, -30, 20))
        assert [row['balance'] for row in rows] == [Decimal('100'), Decimal('70'), Decimal('90')]


class TestEmployeeLedger:
    """Tests for building an employee ledger from orders and payouts."""

    def test_work_and_payment_entries(self, store, order, employee):
        shirt = order.items[0]
        assignment_service.save_item_assignments(store, order.id, shirt.id, [
            AssignmentGroup(employee_id=employee.id, quantity=2, payment=Decimal('100')),
        ])
        employee_service.record_employee_payment(
            store, employee.id, '150', date=order.order_date + timedelta(days=2),
        )

        entries, summary = ledger_service.employee_ledger(store.state, employee.id)

        assert [e.type for e in entries] == ['work', 'work', 'payment']
        assert entries[0].date == order.order_date
        assert entries[0].particulars == f"Shirt for Ravi Kumar (Order {order.order_number})"
        assert entries[0].order_id == order.id
        assert entries[2].particulars == 'Payment Received'
        assert summary.total_earned == Decimal('200')
        assert summary.total_paid == Decimal('150')
        assert summary.balance == Decimal('50')

    def test_zero_payment_units_are_not_earnings(self, store, order, employee):
        assignment_service.save_item_assignments(store, order.id, order.items[0].id, [
            AssignmentGroup(employee_id=employee.id, quantity=3, payment=Decimal('0')),
        ])
        entries, summary = ledger_service.employee_ledger(store.state, employee.id)
        assert entries == []
        assert summary.total_earned == 0

    def test_payment_notes_used_as_particulars(self, store, employee):
        employee_service.record_employee_payment(store, employee.id, 500, notes='Diwali advance')
        entries, summary = ledger_service.employee_ledger(store.state, employee.id)
        assert entries[0].particulars == 'Diwali advance'
        assert summary.balance == Decimal('-500')

    def test_unknown_employee(self, store):
        with pytest.raises(NotFoundError):
            ledger_service.employee_ledger(store.state, 'E-NOPE')


class TestCustomerLedger:

    def test_totals(self, store, order, customer):
        order_service.add_payment(store, order.id, 800)

        ledger = ledger_service.customer_ledger(store.state, customer.id)

        assert [o.id for o in ledger['orders']] == [order.id]
        assert ledger['total_billed'] == Decimal('3800')
        assert ledger['total_paid'] == Decimal('1800')
        assert ledger['total_balance'] == Decimal('2000')
