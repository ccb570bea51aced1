"""
Work assignment reconciler.

A line item keeps one ``WorkAssignment`` per physical unit. For editing, the
units are shown grouped into rows of (employee, units, payment per unit);
saving the rows expands them back into per-unit assignments.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from tailorshop.exceptions import AssignmentValidationError, BusinessLogicError, NotFoundError
from tailorshop.models import ZERO, DomainModel, LineItem, WorkAssignment
from tailorshop.store import serialized
from tailorshop.store.actions import UpdateOrder

logger = logging.getLogger(__name__)


class AssignmentGroup(DomainModel):
    """One editing row: ``quantity`` units for an employee at a per-unit rate."""

    employee_id: Optional[str] = None
    quantity: int = 0
    payment: Decimal = ZERO


def unassigned_unit(item_id: str, position: int) -> WorkAssignment:
    return WorkAssignment(id=f"{item_id}-A{position}", employee_id=None, payment=ZERO)


def resize_assignments(item_id: str, assignments: Iterable[WorkAssignment], quantity: int) -> Tuple[WorkAssignment, ...]:
    """Keep the first ``quantity`` units and pad with unassigned ones."""
    kept = list(assignments)[:quantity]
    for position in range(len(kept) + 1, quantity + 1):
        kept.append(unassigned_unit(item_id, position))
    return tuple(kept)


def group_assignments(item: LineItem) -> List[AssignmentGroup]:
    """
    Group the assigned units of ``item`` into editing rows.

    Rows are keyed by (employee, per-unit payment) in first-seen order.
    An employee paid one rate gets exactly one row; units of the same
    employee at different rates stay in separate rows so no rate is lost.
    Unassigned units are not part of any row.
    """
    counts: Dict[Tuple[str, Decimal], int] = {}
    for assignment in item.assignments:
        if not assignment.employee_id:
            continue
        key = (assignment.employee_id, assignment.payment)
        counts[key] = counts.get(key, 0) + 1

    return [
        AssignmentGroup(employee_id=employee_id, quantity=quantity, payment=payment)
        for (employee_id, payment), quantity in counts.items()
    ]


def expand_groups(item: LineItem, groups: Iterable[AssignmentGroup]) -> Tuple[WorkAssignment, ...]:
    """
    Expand editing rows into exactly ``item.quantity`` per-unit assignments.

    Raises:
        AssignmentValidationError: the rows ask for more units than ordered.
        BusinessLogicError: a row has a negative unit count or payment.
    """
    groups = list(groups)

    for group in groups:
        if group.quantity < 0:
            raise BusinessLogicError('Units cannot be negative.')
        if group.payment < 0:
            raise BusinessLogicError('Payment per unit cannot be negative.')

    total_assigned = sum(group.quantity for group in groups)
    if total_assigned > item.quantity:
        raise AssignmentValidationError(total_assigned, item.quantity)

    assignments: List[WorkAssignment] = []
    per_employee: Dict[str, int] = {}
    for group in groups:
        if not group.employee_id or group.quantity <= 0:
            continue
        for _ in range(group.quantity):
            index = per_employee.get(group.employee_id, 0)
            per_employee[group.employee_id] = index + 1
            assignments.append(WorkAssignment(
                id=f"{item.id}-{group.employee_id}-{index}",
                employee_id=group.employee_id,
                payment=group.payment,
            ))

    for index in range(item.quantity - len(assignments)):
        assignments.append(WorkAssignment(id=f"{item.id}-unassigned-{index}", payment=ZERO))

    return tuple(assignments)


def assignment_summary(item: LineItem) -> dict:
    """Unit counts shown above the assignment rows."""
    assigned = sum(1 for a in item.assignments if a.employee_id)
    return {
        'total': item.quantity,
        'assigned': assigned,
        'unassigned': item.quantity - assigned,
        'labor_cost': item.labor_cost,
    }


def _find_item(order, item_id: str) -> LineItem:
    item = next((i for i in order.items if i.id == item_id), None)
    if item is None:
        raise NotFoundError(f'Item {item_id} not found in order {order.order_number}')
    return item


@serialized
def save_item_assignments(store, order_id: str, item_id: str, groups: Iterable[AssignmentGroup]):
    """
    Replace the assignments of one line item from editing rows.

    Validation happens before anything is dispatched, so a rejected save
    leaves the state untouched.

    Returns:
        The updated Order.
    """
    from tailorshop.services.order_service import get_order, require_active

    state = store.state
    order = get_order(state, order_id)
    require_active(order)
    item = _find_item(order, item_id)
    groups = list(groups)

    for group in groups:
        if group.employee_id and state.find_employee(group.employee_id) is None:
            raise BusinessLogicError(f'Employee {group.employee_id} not found')

    new_assignments = expand_groups(item, groups)
    updated_items = tuple(
        i.model_copy(update={'assignments': new_assignments}) if i.id == item_id else i
        for i in order.items
    )
    updated_order = order.model_copy(update={'items': updated_items})
    store.dispatch(UpdateOrder(payload=updated_order))

    logger.info(f"[ASSIGN] Order {order.order_number} item {item_id}: {len(groups)} group(s) saved")
    return updated_order


@serialized
def remove_group(store, order_id: str, item_id: str, index: int):
    """Drop one editing row and save immediately."""
    from tailorshop.services.order_service import get_order

    order = get_order(store.state, order_id)
    groups = group_assignments(_find_item(order, item_id))
    if index < 0 or index >= len(groups):
        raise NotFoundError(f'Assignment row {index} not found')
    del groups[index]
    return save_item_assignments(store, order_id, item_id, groups)
