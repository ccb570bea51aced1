"""
Persistence service - keeps the application state in the key/value table.

The whole state (minus theme and the auth flag) is one JSON text under the
state key. Old snapshots are brought to the current shape by
``upgrade_snapshot`` before validation. Storage problems are logged and
never interrupt the caller.
"""
import copy
import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from tailorshop.models import AppState, Theme
from tailorshop.models.storage import StorageEntry
from tailorshop.seed import default_state

logger = logging.getLogger(__name__)


class StateStorage:
    """
    Key/value access to the ``app_storage`` table.

    Usage:
        storage = StateStorage(init_db(app))
        storage.set('tailorShopTheme', 'dark')
        storage.get('tailorShopTheme')  # 'dark'
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        session = self._session_factory()
        try:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"[STORAGE] ⚠ Read of '{key}' failed: {e}")
            return None

    def set(self, key: str, value: str) -> bool:
        session = self._session_factory()
        try:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
            return True
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"[STORAGE] ⚠ Write of '{key}' failed: {e}")
            return False

    def remove(self, key: str) -> bool:
        session = self._session_factory()
        try:
            entry = session.get(StorageEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()
            return True
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"[STORAGE] ⚠ Delete of '{key}' failed: {e}")
            return False


# Snapshot upgrade steps. Each takes and returns a raw (wire-format) dict.
# Entries that are not objects are left for validation to reject.

def _records(value) -> list:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _quantity(item: dict) -> int:
    try:
        quantity = int(item.get('quantity') or 1)
    except (TypeError, ValueError):
        quantity = 1
    return max(quantity, 1)


def _backfill_assignments(snapshot: dict) -> dict:
    """Items saved before per-unit assignments get one unassigned unit per quantity."""
    for order in _records(snapshot.get('orders')):
        for item in _records(order.get('items')):
            if item.get('assignments') is None:
                item['assignments'] = [
                    {'id': f"{item.get('id')}-A{i + 1}", 'payment': 0}
                    for i in range(_quantity(item))
                ]
    return snapshot


def _default_assignment_payment(snapshot: dict) -> dict:
    """Assignments without a payment earn 0; item-level employee fields are dropped."""
    for order in _records(snapshot.get('orders')):
        for item in _records(order.get('items')):
            for assignment in _records(item.get('assignments')):
                if assignment.get('payment') is None:
                    assignment['payment'] = 0
            item.pop('employeeId', None)
            item.pop('workPhoto', None)
    return snapshot


def _default_employee_payments(snapshot: dict) -> dict:
    for employee in _records(snapshot.get('employees')):
        if employee.get('payments') is None:
            employee['payments'] = []
    return snapshot


def _default_employee_phone(snapshot: dict) -> dict:
    for employee in _records(snapshot.get('employees')):
        if employee.get('phone') is None:
            employee['phone'] = ''
    return snapshot


def _date_only_due_dates(snapshot: dict) -> dict:
    """Due dates were once stored as full ISO timestamps."""
    for order in _records(snapshot.get('orders')):
        due_date = order.get('dueDate')
        if isinstance(due_date, str) and len(due_date) > 10:
            order['dueDate'] = due_date[:10]
    return snapshot


def _fit_assignments_to_quantity(snapshot: dict) -> dict:
    """Quantity is at least 1 and there is exactly one assignment per unit."""
    for order in _records(snapshot.get('orders')):
        for item in _records(order.get('items')):
            quantity = _quantity(item)
            item['quantity'] = quantity
            assignments = _records(item.get('assignments'))[:quantity]
            for i in range(len(assignments), quantity):
                assignments.append({'id': f"{item.get('id')}-A{i + 1}", 'payment': 0})
            item['assignments'] = assignments
    return snapshot


UPGRADE_STEPS = (
    _backfill_assignments,
    _default_assignment_payment,
    _default_employee_payments,
    _default_employee_phone,
    _date_only_due_dates,
    _fit_assignments_to_quantity,
)


def upgrade_snapshot(raw: dict) -> dict:
    """
    Bring a stored or imported snapshot to the current shape.

    Pure: ``raw`` is not modified. Applying it to an already current
    snapshot returns an equal dict.
    """
    snapshot = copy.deepcopy(raw)
    for step in UPGRADE_STEPS:
        snapshot = step(snapshot)
    return snapshot


def load_initial_state(storage: StateStorage, config) -> AppState:
    """
    Read the persisted state, upgrade it and merge it over the defaults.

    A missing or unreadable snapshot falls back to the built-in dataset.
    Theme and the remember-me flag come from their own keys.
    """
    seed = default_state(config)
    state = seed

    text = storage.get(config.get('STATE_STORAGE_KEY', 'tailorShopState'))
    if text:
        try:
            stored = json.loads(text)
            if not isinstance(stored, dict):
                raise ValueError('stored state is not an object')
            merged = {**seed.persisted_dict(), **upgrade_snapshot(stored)}
            state = AppState.model_validate(merged)
            logger.info(f"[STORAGE] ✓ State loaded: {len(state.orders)} orders, {len(state.customers)} customers")
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.warning(f"[STORAGE] ⚠ Stored state unreadable, using defaults: {e}")
            state = seed
    else:
        logger.info("[STORAGE] No stored state, using defaults")

    theme = Theme.DARK if storage.get(config.get('THEME_STORAGE_KEY', 'tailorShopTheme')) == Theme.DARK.value else Theme.LIGHT
    is_authenticated = storage.get(config.get('AUTH_STORAGE_KEY', 'tailorShopAuth')) == 'true'
    return state.model_copy(update={'theme': theme, 'is_authenticated': is_authenticated})


def attach_persistence(store, storage: StateStorage, config) -> Callable[[], None]:
    """
    Subscribe a writer that saves the state after every change.

    Returns:
        Callable that detaches the writer.
    """
    state_key = config.get('STATE_STORAGE_KEY', 'tailorShopState')
    theme_key = config.get('THEME_STORAGE_KEY', 'tailorShopTheme')

    def write_state(previous: AppState, new: AppState, action) -> None:
        if new is previous:
            return
        try:
            storage.set(state_key, json.dumps(new.persisted_dict()))
        except (TypeError, ValueError) as e:
            logger.warning(f"[STORAGE] ⚠ State could not be serialized: {e}")
        if new.theme != previous.theme:
            storage.set(theme_key, new.theme.value)

    return store.subscribe(write_state)
