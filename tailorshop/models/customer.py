"""Customer, measurement and garment type records."""
from pydantic import Field

from tailorshop.models.base import DomainModel, Timestamp, utcnow


class Customer(DomainModel):
    """Customer (cliente) of the shop."""

    id: str
    full_name: str
    phone: str = ''
    address: str = ''
    created_at: Timestamp = Field(default_factory=utcnow)


class GarmentTypeDefinition(DomainModel):
    """A garment type and the ordered list of measurements it needs."""

    name: str
    measurement_fields: tuple[str, ...] = ()


class Measurement(DomainModel):
    """One measurement set of a customer for a garment type."""

    id: str
    customer_id: str
    garment_type: str
    measurements: dict[str, float] = Field(default_factory=dict)
    created_at: Timestamp = Field(default_factory=utcnow)
