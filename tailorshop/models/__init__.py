"""Models package - exports the domain records."""
from tailorshop.models.base import DomainModel, Timestamp, new_id, utcnow, ZERO
from tailorshop.models.customer import Customer, GarmentTypeDefinition, Measurement
from tailorshop.models.employee import Employee, EmployeePayment
from tailorshop.models.order import (
    Order, OrderStatus, CLOSED_STATUSES, LineItem, WorkAssignment,
    Payment, PaymentMethod, FabricSource,
)
from tailorshop.models.shop import ShopInfo, Language, Theme
from tailorshop.models.app_state import AppState, DataSnapshot

__all__ = [
    'DomainModel', 'Timestamp', 'new_id', 'utcnow', 'ZERO',
    'Customer', 'GarmentTypeDefinition', 'Measurement',
    'Employee', 'EmployeePayment',
    'Order', 'OrderStatus', 'CLOSED_STATUSES', 'LineItem', 'WorkAssignment',
    'Payment', 'PaymentMethod', 'FabricSource',
    'ShopInfo', 'Language', 'Theme',
    'AppState', 'DataSnapshot',
]
