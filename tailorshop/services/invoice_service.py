"""
Printable documents: customer invoices and employee statements.

These are plain data; ``pdf_service`` lays them out on paper and the API
returns them as JSON.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from tailorshop.models import ZERO, Customer, DomainModel, Employee, Order, ShopInfo
from tailorshop.services.ledger_service import LedgerEntry, LedgerSummary, statement_rows


class InvoiceLine(DomainModel):
    description: str
    quantity: int
    rate: Decimal
    amount: Decimal


class InvoiceDocument(DomainModel):
    shop: ShopInfo
    order_number: str
    order_date: datetime
    due_date: date
    customer_name: str
    customer_address: str = ''
    customer_phone: str = ''
    lines: List[InvoiceLine]
    subtotal: Decimal
    discount: Decimal = ZERO
    total: Decimal
    amount_paid: Decimal
    balance: Decimal
    footer: str = 'Thank you for your business!'


class StatementRow(DomainModel):
    date: datetime
    particulars: str
    credit: Decimal = ZERO
    debit: Decimal = ZERO
    balance: Decimal


class StatementDocument(DomainModel):
    shop: ShopInfo
    issued_on: date
    employee_name: str
    employee_role: str = ''
    rows: List[StatementRow]
    total_earned: Decimal
    total_paid: Decimal
    balance: Decimal
    footer: str = 'This is a computer-generated statement and does not require a signature.'


def build_invoice(order: Order, customer: Customer, shop_info: ShopInfo) -> InvoiceDocument:
    """Invoice for one order. Amount paid is ``total - balance``."""
    return InvoiceDocument(
        shop=shop_info,
        order_number=order.order_number,
        order_date=order.order_date,
        due_date=order.due_date,
        customer_name=customer.full_name,
        customer_address=customer.address,
        customer_phone=customer.phone,
        lines=[
            InvoiceLine(
                description=item.garment_type,
                quantity=item.quantity,
                rate=item.unit_price,
                amount=item.line_total,
            )
            for item in order.items
        ],
        subtotal=order.subtotal,
        discount=order.discount,
        total=order.total,
        amount_paid=order.total - order.balance,
        balance=order.balance,
    )


def build_statement(
    employee: Employee,
    entries: List[LedgerEntry],
    summary: LedgerSummary,
    shop_info: ShopInfo,
    issued_on: Optional[date] = None,
) -> StatementDocument:
    """Statement for the given (usually windowed) ledger entries."""
    return StatementDocument(
        shop=shop_info,
        issued_on=issued_on or date.today(),
        employee_name=employee.name,
        employee_role=employee.role,
        rows=[StatementRow(**row) for row in statement_rows(entries)],
        total_earned=summary.total_earned,
        total_paid=summary.total_paid,
        balance=summary.balance,
    )
