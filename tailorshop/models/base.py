"""Shared base for the immutable domain records."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ZERO = Decimal('0')


def _ensure_aware(value: datetime) -> datetime:
    """Naive timestamps from old snapshots are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, AfterValidator(_ensure_aware)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Generate a record id such as ``C3F9A1B2C4D5E``."""
    return f"{prefix}{uuid4().hex[:12].upper()}"


class DomainModel(BaseModel):
    """
    Base class for every record held in the application state.

    Records are frozen: a change always produces a new instance via
    ``model_copy(update=...)`` so untouched sub-trees are shared between
    state versions. Field names are snake_case in Python and camelCase in
    the persisted snapshot and the JSON API.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra='ignore',
    )

    def to_dict(self) -> dict:
        """Serialize with wire (camelCase) names and JSON-safe values."""
        return self.model_dump(mode='json', by_alias=True)
