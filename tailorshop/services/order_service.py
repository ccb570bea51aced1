"""
Order service - order lifecycle, totals and payments.
Every path that changes items, discount or payments stores recomputed totals.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from tailorshop.exceptions import BusinessLogicError, NotFoundError
from tailorshop.models import (
    ZERO, CLOSED_STATUSES, AppState, FabricSource, LineItem, Order, OrderStatus,
    Payment, PaymentMethod, new_id, utcnow,
)
from tailorshop.services.assignment_service import resize_assignments, unassigned_unit
from tailorshop.services.customer_service import get_customer, latest_measurement_for
from tailorshop.store import serialized
from tailorshop.store.actions import AddOrder, UpdateOrder
from tailorshop.utils.number_format import parse_amount, parse_date, parse_quantity

logger = logging.getLogger(__name__)

NEW_BADGE_WINDOW = timedelta(hours=24)

# Allowed user-triggered status changes. Nothing ever moves backwards.
STATUS_TRANSITIONS = {
    OrderStatus.NEW: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.IN_PROGRESS: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def compute_totals(order: Order) -> Order:
    """Return ``order`` with subtotal, total, advance and balance recomputed."""
    subtotal = sum((item.line_total for item in order.items), ZERO)
    total = subtotal - order.discount
    paid = order.amount_paid
    return order.model_copy(update={
        'subtotal': subtotal,
        'total': total,
        'advance': paid,
        'balance': total - paid,
    })


def is_order_active(order: Order) -> bool:
    """Items and assignments may only be edited while this is true."""
    return order.status not in CLOSED_STATUSES


def require_active(order: Order) -> None:
    if not is_order_active(order):
        raise BusinessLogicError(f'Order {order.order_number} is {order.status.value} and can no longer be edited.')


def is_new(order: Order, now: Optional[datetime] = None) -> bool:
    """Display-only "New" badge: the order is less than a day old."""
    now = now or utcnow()
    return now - order.order_date < NEW_BADGE_WINDOW


def get_order(state: AppState, order_id: str) -> Order:
    order = state.find_order(order_id)
    if order is None:
        raise NotFoundError('Order not found.')
    return order


def list_orders(state: AppState, status: Optional[str] = None) -> List[Order]:
    """Orders newest-first, optionally restricted to one status."""
    orders = sorted(state.orders, key=lambda o: o.order_date, reverse=True)
    if status and status != 'All':
        try:
            wanted = OrderStatus(status)
        except ValueError:
            raise BusinessLogicError(f'Unknown order status: {status}')
        orders = [o for o in orders if o.status == wanted]
    return orders


def status_counts(state: AppState) -> Dict[str, int]:
    """Order count per status tab, plus 'All'."""
    counts = {status.value: 0 for status in OrderStatus if status != OrderStatus.NEW}
    for order in state.orders:
        counts[order.status.value] = counts.get(order.status.value, 0) + 1
    counts['All'] = len(state.orders)
    return counts


def generate_order_number(order_id: str, now: datetime, prefix: str = 'DT') -> str:
    return f"{prefix}-{now.strftime('%Y%m%d')}-{order_id[-4:]}"


def _parse_discount(value, subtotal: Decimal) -> Decimal:
    discount = parse_amount(value if value not in (None, '') else 0, 'Discount')
    if discount > subtotal:
        raise BusinessLogicError('Discount cannot be greater than the subtotal.')
    return discount


def _build_items(
    state: AppState,
    customer_id: str,
    drafts: List[Dict[str, Any]],
    existing: Optional[Order] = None,
) -> tuple:
    """
    Turn item drafts (wire field names) into line items.

    Measurements are snapshotted from the customer's latest measurement for
    the garment type. Items of ``existing`` keep their assignments, resized
    to the new quantity; new items start with every unit unassigned.
    """
    if not drafts:
        raise BusinessLogicError('Please add at least one item.')

    previous = {item.id: item for item in existing.items} if existing else {}
    items = []
    for draft in drafts:
        garment_type = (draft.get('garmentType') or '').strip()
        if not garment_type:
            raise BusinessLogicError('Every item needs a garment type.')
        try:
            quantity = parse_quantity(draft.get('quantity', 1), 'Quantity')
            unit_price = parse_amount(draft.get('unitPrice', 0), 'Unit price')
        except ValueError as e:
            raise BusinessLogicError(str(e))

        try:
            fabric_source = FabricSource(draft.get('fabricSource') or FabricSource.CUSTOMER.value)
        except ValueError:
            raise BusinessLogicError(f"Unknown fabric source: {draft.get('fabricSource')}")

        item_id = draft.get('id') or new_id('L')
        if item_id in previous:
            assignments = resize_assignments(item_id, previous[item_id].assignments, quantity)
        else:
            assignments = tuple(unassigned_unit(item_id, position) for position in range(1, quantity + 1))

        measurement = latest_measurement_for(state, customer_id, garment_type)
        items.append(LineItem(
            id=item_id,
            garment_type=garment_type,
            quantity=quantity,
            unit_price=unit_price,
            fabric_source=fabric_source,
            notes=draft.get('notes') or None,
            measurement_snapshot=dict(measurement.measurements) if measurement else {},
            photo=draft.get('photo') or None,
            assignments=assignments,
        ))
    return tuple(items)


@serialized
def create_order(
    store,
    customer_id: str,
    due_date,
    items: List[Dict[str, Any]],
    discount=0,
    advance=0,
    notes: Optional[str] = None,
    prefix: str = 'DT',
    now: Optional[datetime] = None,
) -> Order:
    """
    Create an order in the In Progress state.

    An advance greater than zero is recorded as the first Cash payment.
    """
    state = store.state
    now = now or utcnow()
    if not customer_id:
        raise BusinessLogicError('Please select a customer.')
    get_customer(state, customer_id)

    try:
        due = parse_date(due_date, 'Due date')
        advance_amount = parse_amount(advance if advance not in (None, '') else 0, 'Advance')
    except ValueError as e:
        raise BusinessLogicError(str(e))

    line_items = _build_items(state, customer_id, items)
    subtotal = sum((item.line_total for item in line_items), ZERO)
    try:
        discount_amount = _parse_discount(discount, subtotal)
    except ValueError as e:
        raise BusinessLogicError(str(e))

    payments = ()
    if advance_amount > 0:
        if advance_amount > subtotal - discount_amount:
            raise BusinessLogicError('Advance cannot be greater than the order total.')
        payments = (Payment(id=new_id('P'), amount=advance_amount, method=PaymentMethod.CASH, date=now),)

    order_id = new_id('O')
    order = compute_totals(Order(
        id=order_id,
        order_number=generate_order_number(order_id, now, prefix),
        customer_id=customer_id,
        order_date=now,
        due_date=due,
        status=OrderStatus.IN_PROGRESS,
        items=line_items,
        discount=discount_amount,
        payments=payments,
        notes=notes or None,
    ))

    store.dispatch(AddOrder(payload=order))
    logger.info(f"[ORDER] Created {order.order_number} total={order.total} balance={order.balance}")
    return order


@serialized
def update_order(
    store,
    order_id: str,
    customer_id: str,
    due_date,
    items: List[Dict[str, Any]],
    discount=0,
    notes: Optional[str] = None,
) -> Order:
    """Edit an active order. Payments are kept; totals are recomputed."""
    state = store.state
    order = get_order(state, order_id)
    require_active(order)
    if not customer_id:
        raise BusinessLogicError('Please select a customer.')
    get_customer(state, customer_id)

    try:
        due = parse_date(due_date, 'Due date')
    except ValueError as e:
        raise BusinessLogicError(str(e))

    line_items = _build_items(state, customer_id, items, existing=order)
    subtotal = sum((item.line_total for item in line_items), ZERO)
    try:
        discount_amount = _parse_discount(discount, subtotal)
    except ValueError as e:
        raise BusinessLogicError(str(e))

    updated = compute_totals(order.model_copy(update={
        'customer_id': customer_id,
        'due_date': due,
        'items': line_items,
        'discount': discount_amount,
        'notes': notes or None,
    }))

    store.dispatch(UpdateOrder(payload=updated))
    logger.info(f"[ORDER] Updated {updated.order_number} total={updated.total} balance={updated.balance}")
    return updated


@serialized
def add_payment(store, order_id: str, amount, method: str = 'Cash', now: Optional[datetime] = None) -> Order:
    """Record a customer payment. The amount must be positive and at most the balance."""
    order = get_order(store.state, order_id)

    try:
        value = parse_amount(amount, 'Payment amount')
    except ValueError as e:
        raise BusinessLogicError(str(e))
    if value <= 0 or value > order.balance:
        raise BusinessLogicError('Invalid payment amount')

    try:
        payment_method = PaymentMethod(method or PaymentMethod.CASH.value)
    except ValueError:
        raise BusinessLogicError(f'Unknown payment method: {method}')

    payment = Payment(id=new_id('P'), amount=value, method=payment_method, date=now or utcnow())
    updated = compute_totals(order.model_copy(update={'payments': order.payments + (payment,)}))

    store.dispatch(UpdateOrder(payload=updated))
    logger.info(f"[ORDER] Payment {value} ({payment_method.value}) on {order.order_number}, balance={updated.balance}")
    return updated


@serialized
def change_status(store, order_id: str, new_status) -> Order:
    """
    Move an order along In Progress -> Completed -> Delivered, or cancel it.

    Asking for the current status is a no-op.
    """
    order = get_order(store.state, order_id)
    try:
        target = OrderStatus(new_status)
    except ValueError:
        raise BusinessLogicError(f'Unknown order status: {new_status}')

    if target == order.status:
        return order

    if target not in STATUS_TRANSITIONS.get(order.status, set()):
        raise BusinessLogicError(f'Cannot change status from {order.status.value} to {target.value}.')

    updated = order.model_copy(update={'status': target})
    store.dispatch(UpdateOrder(payload=updated))
    logger.info(f"[ORDER] {order.order_number}: {order.status.value} -> {target.value}")
    return updated
