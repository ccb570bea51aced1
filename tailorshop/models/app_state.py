"""Root application state and the persisted/exported snapshot shape."""
from pydantic import Field

from tailorshop.models.base import DomainModel
from tailorshop.models.customer import Customer, GarmentTypeDefinition, Measurement
from tailorshop.models.employee import Employee
from tailorshop.models.order import Order
from tailorshop.models.shop import Language, ShopInfo, Theme


class DataSnapshot(DomainModel):
    """
    The data collections of the application.

    This is what a backup file contains and what ``RESTORE_STATE`` replaces.
    """

    customers: tuple[Customer, ...] = ()
    measurements: tuple[Measurement, ...] = ()
    orders: tuple[Order, ...] = ()
    garment_types: tuple[GarmentTypeDefinition, ...] = ()
    employees: tuple[Employee, ...] = ()
    shop_info: ShopInfo


class AppState(DataSnapshot):
    """Single root of all application state."""

    language: Language = Language.EN
    theme: Theme = Theme.LIGHT
    is_authenticated: bool = False

    def data_snapshot(self) -> DataSnapshot:
        return DataSnapshot(
            customers=self.customers,
            measurements=self.measurements,
            orders=self.orders,
            garment_types=self.garment_types,
            employees=self.employees,
            shop_info=self.shop_info,
        )

    def persisted_dict(self) -> dict:
        """Wire form stored under the state key (no theme, no auth flag)."""
        return self.model_dump(mode='json', by_alias=True, exclude={'theme', 'is_authenticated'})

    # Lookups used by services and blueprints

    def find_customer(self, customer_id):
        return next((c for c in self.customers if c.id == customer_id), None)

    def find_order(self, order_id):
        return next((o for o in self.orders if o.id == order_id), None)

    def find_employee(self, employee_id):
        return next((e for e in self.employees if e.id == employee_id), None)

    def find_measurement(self, measurement_id):
        return next((m for m in self.measurements if m.id == measurement_id), None)
