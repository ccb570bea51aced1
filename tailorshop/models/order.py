"""Order, line item, work assignment and payment records."""
import enum
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field, model_validator

from tailorshop.models.base import ZERO, DomainModel, Timestamp, utcnow


class OrderStatus(str, enum.Enum):
    """Order status enum."""
    NEW = 'New'
    IN_PROGRESS = 'In Progress'
    COMPLETED = 'Completed'
    DELIVERED = 'Delivered'
    CANCELLED = 'Cancelled'


# Orders in these states are closed for item and assignment edits
CLOSED_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class PaymentMethod(str, enum.Enum):
    """Customer payment method."""
    CASH = 'Cash'
    UPI = 'UPI'
    CARD = 'Card'


class FabricSource(str, enum.Enum):
    """Who supplies the fabric for a line item."""
    CUSTOMER = 'Customer'
    SHOP = 'Shop'


class WorkAssignment(DomainModel):
    """
    One physical garment unit of a line item.

    ``employee_id`` is None while the unit is unassigned; ``payment`` is what
    the employee earns for this single unit.
    """

    id: str
    employee_id: Optional[str] = None
    payment: Decimal = ZERO
    work_photo: Optional[str] = None


class LineItem(DomainModel):
    """A garment ordered in some quantity at a unit price."""

    id: str
    garment_type: str
    quantity: int = Field(ge=1)
    unit_price: Decimal = ZERO
    fabric_source: FabricSource = FabricSource.CUSTOMER
    notes: Optional[str] = None
    measurement_snapshot: dict[str, float] = Field(default_factory=dict)
    photo: Optional[str] = None
    assignments: tuple[WorkAssignment, ...] = ()

    @model_validator(mode='after')
    def _one_assignment_per_unit(self):
        if len(self.assignments) != self.quantity:
            raise ValueError(
                f'line item {self.id} has {len(self.assignments)} assignments for quantity {self.quantity}'
            )
        return self

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def labor_cost(self) -> Decimal:
        """Sum of the per-unit payments owed to employees."""
        return sum((a.payment for a in self.assignments), ZERO)


class Payment(DomainModel):
    """Customer payment against an order."""

    id: str
    amount: Decimal
    method: PaymentMethod = PaymentMethod.CASH
    date: Timestamp = Field(default_factory=utcnow)


class Order(DomainModel):
    """
    Customer order.

    ``subtotal``, ``total``, ``advance`` and ``balance`` are stored on the
    record; every mutation path recomputes them through
    ``order_service.compute_totals``.
    """

    id: str
    order_number: str
    customer_id: str
    order_date: Timestamp = Field(default_factory=utcnow)
    due_date: date
    status: OrderStatus = OrderStatus.IN_PROGRESS
    items: tuple[LineItem, ...] = ()
    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    total: Decimal = ZERO
    advance: Decimal = ZERO
    payments: tuple[Payment, ...] = ()
    balance: Decimal = ZERO
    notes: Optional[str] = None

    @property
    def amount_paid(self) -> Decimal:
        return sum((p.amount for p in self.payments), ZERO)

    def __repr__(self):
        return f"<Order(id={self.id}, number={self.order_number}, status={self.status.value}, total={self.total})>"
