"""
Backup service - export and import of the shop data as a JSON file.
"""
import json
import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from tailorshop.exceptions import ImportSchemaError
from tailorshop.models import AppState, DataSnapshot
from tailorshop.services.persistence_service import upgrade_snapshot
from tailorshop.store import serialized
from tailorshop.store.actions import RestoreState

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ('customers', 'orders', 'measurements', 'garmentTypes')


def export_backup(state: AppState) -> str:
    """Serialize the data collections (no language, theme or auth flag)."""
    return json.dumps(state.data_snapshot().to_dict(), indent=2, ensure_ascii=False)


def backup_filename(prefix: str = 'deepak-tailor', today: Optional[date] = None) -> str:
    """e.g. ``deepak-tailor-backup-2026-10-18.json``"""
    today = today or date.today()
    return f"{prefix}-backup-{today.isoformat()}.json"


@serialized
def import_backup(store, text: str) -> AppState:
    """
    Replace all data collections with the contents of a backup file.

    Language, theme and authentication are kept. Nothing is dispatched
    unless the whole file parses and validates.

    Raises:
        ImportSchemaError: unparsable file, a required collection missing or
            not a list, or records that do not validate.
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning(f"[BACKUP] ⚠ Import rejected, not JSON: {e}")
        raise ImportSchemaError('Failed to import backup file. It might be corrupted or in the wrong format.')

    if not isinstance(raw, dict):
        raise ImportSchemaError()

    missing = [key for key in REQUIRED_KEYS if raw.get(key) is None]
    if missing:
        logger.warning(f"[BACKUP] ⚠ Import rejected, missing: {', '.join(missing)}")
        raise ImportSchemaError(missing=missing)

    not_lists = [
        key for key in REQUIRED_KEYS + ('employees',)
        if raw.get(key) is not None and not isinstance(raw[key], list)
    ]
    if not_lists:
        logger.warning(f"[BACKUP] ⚠ Import rejected, not lists: {', '.join(not_lists)}")
        raise ImportSchemaError(f"Invalid backup file format. Expected a list for: {', '.join(not_lists)}")

    try:
        upgraded = upgrade_snapshot(raw)
    except (AttributeError, TypeError) as e:
        logger.warning(f"[BACKUP] ⚠ Import rejected, unreadable records: {e}")
        raise ImportSchemaError('Failed to import backup file. It might be corrupted or in the wrong format.')

    if not upgraded.get('shopInfo'):
        upgraded['shopInfo'] = store.state.shop_info.to_dict()

    try:
        snapshot = DataSnapshot.model_validate(upgraded)
    except ValidationError as e:
        logger.warning(f"[BACKUP] ⚠ Import rejected, invalid records: {e.error_count()} error(s)")
        raise ImportSchemaError('Failed to import backup file. It might be corrupted or in the wrong format.')

    new_state = store.dispatch(RestoreState(payload=snapshot))
    logger.info(
        f"[BACKUP] ✓ Restored {len(snapshot.customers)} customers, "
        f"{len(snapshot.orders)} orders, {len(snapshot.employees)} employees"
    )
    return new_state
