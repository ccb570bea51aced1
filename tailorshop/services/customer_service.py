"""Customer service - customers and their measurement sets."""
import logging
from typing import Any, Dict, Iterable, List, Optional

from tailorshop.exceptions import BusinessLogicError, NotFoundError
from tailorshop.models import AppState, Customer, Measurement, new_id, utcnow
from tailorshop.store import serialized
from tailorshop.store.actions import AddCustomer, AddMeasurement, UpdateCustomer, UpdateMeasurement

logger = logging.getLogger(__name__)


def get_customer(state: AppState, customer_id: str) -> Customer:
    customer = state.find_customer(customer_id)
    if customer is None:
        raise NotFoundError('Customer not found.')
    return customer


def list_customers(state: AppState, q: Optional[str] = None) -> List[Customer]:
    """Customers sorted by full name, optionally filtered by name or phone."""
    customers = sorted(state.customers, key=lambda c: c.full_name.lower())
    if q:
        needle = q.strip().lower()
        customers = [c for c in customers if needle in c.full_name.lower() or needle in c.phone]
    return customers


def latest_measurements(state: AppState, customer_id: str) -> Dict[str, Measurement]:
    """Most recent measurement of the customer for every garment type, keyed by garment type."""
    latest: Dict[str, Measurement] = {}
    for measurement in state.measurements:
        if measurement.customer_id != customer_id:
            continue
        current = latest.get(measurement.garment_type)
        if current is None or measurement.created_at > current.created_at:
            latest[measurement.garment_type] = measurement
    return latest


def latest_measurement_for(state: AppState, customer_id: str, garment_type: str) -> Optional[Measurement]:
    return latest_measurements(state, customer_id).get(garment_type)


def _clean_values(values: Dict[str, Any]) -> Dict[str, float]:
    """Measurement inputs are numbers; blanks and junk become 0."""
    cleaned = {}
    for field, value in (values or {}).items():
        try:
            cleaned[field] = float(value)
        except (TypeError, ValueError):
            cleaned[field] = 0.0
    return cleaned


@serialized
def save_customer(
    store,
    data: Dict[str, Any],
    measurement_sets: Iterable[Dict[str, Any]] = (),
    customer_id: Optional[str] = None,
) -> Customer:
    """
    Create or update a customer together with measurement sets.

    Args:
        store: application Store
        data: ``fullName``, ``phone`` and ``address``
        measurement_sets: dicts with ``garmentType`` and ``measurements``;
            a set carrying an ``id`` updates that measurement, otherwise a
            new measurement is added
        customer_id: id of the customer to update, None to create

    Returns:
        The saved Customer.
    """
    full_name = (data.get('fullName') or '').strip()
    if not full_name:
        raise BusinessLogicError('Full name is required.')

    fields = {
        'full_name': full_name,
        'phone': (data.get('phone') or '').strip(),
        'address': (data.get('address') or '').strip(),
    }

    state = store.state
    if customer_id:
        customer = get_customer(state, customer_id).model_copy(update=fields)
        store.dispatch(UpdateCustomer(payload=customer))
    else:
        customer = Customer(id=new_id('C'), created_at=utcnow(), **fields)
        store.dispatch(AddCustomer(payload=customer))

    for measurement_set in measurement_sets:
        values = _clean_values(measurement_set.get('measurements'))
        measurement_id = measurement_set.get('id')
        if measurement_id:
            existing = store.state.find_measurement(measurement_id)
            if existing is None or existing.customer_id != customer.id:
                raise NotFoundError('Measurement not found.')
            store.dispatch(UpdateMeasurement(payload=existing.model_copy(update={'measurements': values})))
            continue

        garment_type = (measurement_set.get('garmentType') or '').strip()
        if not garment_type:
            raise BusinessLogicError('Every measurement set needs a garment type.')
        store.dispatch(AddMeasurement(payload=Measurement(
            id=new_id('M'),
            customer_id=customer.id,
            garment_type=garment_type,
            measurements=values,
            created_at=utcnow(),
        )))

    logger.info(f"[CUSTOMER] Saved {customer.id} ({customer.full_name})")
    return customer
