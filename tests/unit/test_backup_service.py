"""
Unit tests for export and import of backups.
"""
import json
from datetime import date

import pytest

from tailorshop.exceptions import ImportSchemaError
from tailorshop.models import Language
from tailorshop.seed import default_state
from tailorshop.services import backup_service
from tailorshop.store import Store
from tailorshop.store.actions import SetLanguage


class TestExport:

    def test_export_contains_data_collections_only(self, store, order):
        exported = json.loads(backup_service.export_backup(store.state))

        assert set(exported) == {'customers', 'measurements', 'orders', 'garmentTypes', 'employees', 'shopInfo'}
        assert exported['orders'][0]['orderNumber'] == order.order_number

    def test_filename(self):
        assert backup_service.backup_filename('deepak-tailor', date(2026, 10, 18)) == 'deepak-tailor-backup-2026-10-18.json'


class TestImport:
    """Tests for restoring a backup."""

    def test_round_trip_into_fresh_store(self, store, order, config):
        text = backup_service.export_backup(store.state)
        target = Store(default_state(config))
        target.dispatch(SetLanguage(payload=Language.HI))

        restored = backup_service.import_backup(target, text)

        assert restored.orders == store.state.orders
        assert restored.customers == store.state.customers
        assert restored.measurements == store.state.measurements
        assert restored.language == Language.HI

    def test_missing_collection_rejected_without_change(self, store, order):
        before = store.state
        raw = json.loads(backup_service.export_backup(store.state))
        del raw['garmentTypes']
        raw['customers'] = []

        with pytest.raises(ImportSchemaError) as exc:
            backup_service.import_backup(store, json.dumps(raw))

        assert exc.value.payload == {'missing': ['garmentTypes']}
        assert store.state is before

    @pytest.mark.parametrize('overrides', [
        {'orders': ['x']},
        {'orders': {}},
        {'orders': 5},
        {'customers': 'C1'},
        {'employees': {'E1': {}}},
        {'orders': [{'id': 'O1', 'items': 'Shirt'}]},
    ])
    def test_wrongly_shaped_collection_rejected_without_change(self, store, order, overrides):
        before = store.state
        raw = {'customers': [], 'orders': [], 'measurements': [], 'garmentTypes': [], **overrides}

        with pytest.raises(ImportSchemaError):
            backup_service.import_backup(store, json.dumps(raw))

        assert store.state is before

    def test_unparsable_file_rejected(self, store):
        before = store.state
        with pytest.raises(ImportSchemaError):
            backup_service.import_backup(store, 'this is not json')
        assert store.state is before

    def test_invalid_records_rejected(self, store):
        before = store.state
        text = json.dumps({'customers': [{'id': 'C1'}], 'orders': [], 'measurements': [], 'garmentTypes': []})
        with pytest.raises(ImportSchemaError):
            backup_service.import_backup(store, text)
        assert store.state is before

    def test_missing_employees_and_shop_info_defaulted(self, store, employee):
        text = json.dumps({'customers': [], 'orders': [], 'measurements': [], 'garmentTypes': []})

        restored = backup_service.import_backup(store, text)

        assert restored.employees == ()
        assert restored.shop_info == store.state.shop_info
        assert restored.garment_types == ()
