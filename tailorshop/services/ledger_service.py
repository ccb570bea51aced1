"""
Ledger service - customer and employee ledgers.

Employee ledger entries are credits for stitching work (one per paid unit)
and debits for payouts. A statement covers the entries since the balance
last returned to zero.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional, Sequence, Tuple

from tailorshop.models import ZERO, AppState, DomainModel
from tailorshop.services.customer_service import get_customer
from tailorshop.services.employee_service import get_employee


class LedgerEntry(DomainModel):
    """One line of an employee ledger."""

    date: datetime
    type: Literal['work', 'payment']
    particulars: str
    credit: Decimal = ZERO
    debit: Decimal = ZERO
    order_id: Optional[str] = None


class LedgerSummary(DomainModel):
    total_earned: Decimal = ZERO
    total_paid: Decimal = ZERO
    balance: Decimal = ZERO


def summarize(entries: Sequence[LedgerEntry]) -> LedgerSummary:
    earned = sum((e.credit for e in entries), ZERO)
    paid = sum((e.debit for e in entries), ZERO)
    return LedgerSummary(total_earned=earned, total_paid=paid, balance=earned - paid)


def employee_ledger(state: AppState, employee_id: str) -> Tuple[List[LedgerEntry], LedgerSummary]:
    """
    Build the full chronological ledger of an employee.

    Work entries are dated by the order date and only count assignments
    with a positive payment. The sort is stable, so entries with the same
    timestamp keep work-before-payment order.

    Returns:
        (entries, summary) over the whole ledger.
    """
    employee = get_employee(state, employee_id)
    customer_names = {c.id: c.full_name for c in state.customers}

    work_entries = []
    for order in state.orders:
        customer_name = customer_names.get(order.customer_id) or 'Unknown'
        for item in order.items:
            for assignment in item.assignments:
                if assignment.employee_id != employee.id or assignment.payment <= 0:
                    continue
                work_entries.append(LedgerEntry(
                    date=order.order_date,
                    type='work',
                    particulars=f"{item.garment_type} for {customer_name} (Order {order.order_number})",
                    credit=assignment.payment,
                    order_id=order.id,
                ))

    payment_entries = [
        LedgerEntry(
            date=payment.date,
            type='payment',
            particulars=payment.notes or 'Payment Received',
            debit=payment.amount,
        )
        for payment in employee.payments
    ]

    entries = sorted(work_entries + payment_entries, key=lambda e: e.date)
    return entries, summarize(entries)


def statement_window(entries: Sequence[LedgerEntry]) -> Tuple[List[LedgerEntry], LedgerSummary]:
    """
    Select the currently open part of a ledger.

    The window starts right after the last point where the running balance
    was exactly zero. If that point is the final entry, the window starts
    after the previous zero point instead, or covers the whole ledger when
    there is none, so a just-settled run is still shown in full.
    """
    if not entries:
        return [], LedgerSummary()

    zero_indexes = []
    running = ZERO
    for index, entry in enumerate(entries):
        running += entry.credit - entry.debit
        if running == 0:
            zero_indexes.append(index)

    start = 0
    last_index = len(entries) - 1
    if zero_indexes:
        if zero_indexes[-1] == last_index:
            start = zero_indexes[-2] + 1 if len(zero_indexes) > 1 else 0
        else:
            start = zero_indexes[-1] + 1

    window = list(entries[start:])
    return window, summarize(window)


def statement_rows(entries: Sequence[LedgerEntry]) -> List[dict]:
    """Entries as printable rows with a running balance column."""
    rows = []
    running = ZERO
    for entry in entries:
        running += entry.credit - entry.debit
        rows.append({
            'date': entry.date,
            'particulars': entry.particulars,
            'credit': entry.credit,
            'debit': entry.debit,
            'balance': running,
        })
    return rows


def customer_ledger(state: AppState, customer_id: str) -> dict:
    """
    Orders of a customer, newest first, with billed/paid/balance totals.

    Paid is taken as ``total - balance`` per order.
    """
    customer = get_customer(state, customer_id)
    orders = sorted(
        (o for o in state.orders if o.customer_id == customer.id),
        key=lambda o: o.order_date,
        reverse=True,
    )
    total_billed = sum((o.total for o in orders), ZERO)
    total_paid = sum((o.total - o.balance for o in orders), ZERO)
    return {
        'customer': customer,
        'orders': orders,
        'total_billed': total_billed,
        'total_paid': total_paid,
        'total_balance': total_billed - total_paid,
    }
