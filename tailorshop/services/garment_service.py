"""Garment type catalogue."""
import logging
from typing import Iterable

from tailorshop.exceptions import BusinessLogicError
from tailorshop.models import GarmentTypeDefinition
from tailorshop.store import serialized
from tailorshop.store.actions import AddGarmentType

logger = logging.getLogger(__name__)


@serialized
def add_garment_type(store, name: str, measurement_fields: Iterable[str]) -> bool:
    """
    Add a garment type with its measurement fields.

    Returns:
        True if the type was added, False if a type with the same name
        (case-insensitive) already exists and nothing changed.
    """
    name = (name or '').strip()
    fields = tuple(f.strip() for f in measurement_fields if f and f.strip())
    if not name or not fields:
        raise BusinessLogicError('Garment name and at least one measurement field are required.')

    before = store.state
    after = store.dispatch(AddGarmentType(payload=GarmentTypeDefinition(name=name, measurement_fields=fields)))
    added = after is not before
    if not added:
        logger.info(f"[GARMENT] '{name}' already exists, ignored")
    return added


def parse_fields(text: str) -> list:
    """Split a comma separated field list such as "Length, Chest, Waist"."""
    return [part.strip() for part in (text or '').split(',') if part.strip()]
