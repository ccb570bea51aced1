"""Employee and payroll payment records."""
from decimal import Decimal
from typing import Optional

from pydantic import Field

from tailorshop.models.base import DomainModel, Timestamp, utcnow


class EmployeePayment(DomainModel):
    """Money paid out to an employee (a debit on their ledger)."""

    id: str
    amount: Decimal
    date: Timestamp = Field(default_factory=utcnow)
    notes: Optional[str] = None


class Employee(DomainModel):
    """Employee doing the stitching work."""

    id: str
    name: str
    role: str = ''
    phone: str = ''
    payments: tuple[EmployeePayment, ...] = ()
    created_at: Timestamp = Field(default_factory=utcnow)
