"""Employee service - employees and payroll payments."""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from tailorshop.exceptions import BusinessLogicError, NotFoundError
from tailorshop.models import AppState, Employee, EmployeePayment, new_id, utcnow
from tailorshop.store import serialized
from tailorshop.store.actions import AddEmployee, UpdateEmployee
from tailorshop.utils.number_format import parse_amount

logger = logging.getLogger(__name__)


def get_employee(state: AppState, employee_id: str) -> Employee:
    employee = state.find_employee(employee_id)
    if employee is None:
        raise NotFoundError('Employee not found.')
    return employee


def list_employees(state: AppState):
    return sorted(state.employees, key=lambda e: e.name.lower())


@serialized
def save_employee(store, data: Dict[str, Any], employee_id: Optional[str] = None) -> Employee:
    """Create or update an employee. Name and role are required; payments are never touched here."""
    name = (data.get('name') or '').strip()
    role = (data.get('role') or '').strip()
    if not name or not role:
        raise BusinessLogicError('Name and role are required.')

    fields = {'name': name, 'role': role, 'phone': (data.get('phone') or '').strip()}

    if employee_id:
        employee = get_employee(store.state, employee_id).model_copy(update=fields)
        store.dispatch(UpdateEmployee(payload=employee))
    else:
        employee = Employee(id=new_id('E'), created_at=utcnow(), **fields)
        store.dispatch(AddEmployee(payload=employee))

    logger.info(f"[EMPLOYEE] Saved {employee.id} ({employee.name})")
    return employee


@serialized
def record_employee_payment(
    store,
    employee_id: str,
    amount,
    notes: Optional[str] = None,
    date: Optional[datetime] = None,
) -> Employee:
    """Append a payout to the employee's payments."""
    employee = get_employee(store.state, employee_id)
    try:
        value = parse_amount(amount, 'Payment amount')
    except ValueError as e:
        raise BusinessLogicError(str(e))
    if value <= 0:
        raise BusinessLogicError('Payment amount must be greater than zero.')

    payment = EmployeePayment(id=new_id('EP'), amount=value, date=date or utcnow(), notes=(notes or '').strip() or None)
    updated = employee.model_copy(update={'payments': employee.payments + (payment,)})
    store.dispatch(UpdateEmployee(payload=updated))

    logger.info(f"[EMPLOYEE] Paid {value} to {employee.name}")
    return updated
