"""
Unit tests for snapshot upgrades, loading and the persistence observer.
"""
import copy
import json

import pytest

from tailorshop.models import Language, Theme
from tailorshop.services.persistence_service import (
    attach_persistence, load_initial_state, upgrade_snapshot,
)
from tailorshop.store import Store
from tailorshop.store.actions import SetLanguage, SetTheme


def _legacy_snapshot():
    return {
        'language': 'hi',
        'customers': [{'id': 'C1', 'fullName': 'Ravi Kumar', 'phone': '9876543210', 'address': '',
                       'createdAt': '2024-01-01T09:00:00.000Z'}],
        'measurements': [],
        'garmentTypes': [{'name': 'Shirt', 'measurementFields': ['Chest']}],
        'employees': [{'id': 'E1', 'name': 'Suresh', 'role': 'Tailor', 'createdAt': '2024-01-01T09:00:00.000Z'}],
        'shopInfo': {'name': 'Deepak Tailor', 'tagline': '', 'address': 'Pune', 'phone': '1234567890'},
        'orders': [{
            'id': 'O1',
            'orderNumber': 'DT-20240101-0001',
            'customerId': 'C1',
            'orderDate': '2024-01-01T10:00:00.000Z',
            'dueDate': '2024-01-10T00:00:00.000Z',
            'status': 'In Progress',
            'items': [
                {'id': 'I1', 'garmentType': 'Shirt', 'quantity': 2, 'unitPrice': 500,
                 'fabricSource': 'Customer', 'measurementSnapshot': {}, 'employeeId': 'E1', 'workPhoto': 'x.jpg'},
                {'id': 'I2', 'garmentType': 'Shirt', 'quantity': 1, 'unitPrice': 300,
                 'fabricSource': 'Shop', 'measurementSnapshot': {},
                 'assignments': [{'id': 'I2-A1', 'employeeId': 'E1'}]},
            ],
            'subtotal': 1300, 'discount': 0, 'total': 1300, 'advance': 0, 'payments': [], 'balance': 1300,
        }],
    }


class TestUpgradeSnapshot:
    """Tests for the upgrade pipeline."""

    def test_backfills_assignments(self):
        upgraded = upgrade_snapshot(_legacy_snapshot())
        item = upgraded['orders'][0]['items'][0]

        assert item['assignments'] == [{'id': 'I1-A1', 'payment': 0}, {'id': 'I1-A2', 'payment': 0}]
        assert 'employeeId' not in item
        assert 'workPhoto' not in item

    def test_defaults_missing_payment(self):
        upgraded = upgrade_snapshot(_legacy_snapshot())
        assert upgraded['orders'][0]['items'][1]['assignments'] == [{'id': 'I2-A1', 'employeeId': 'E1', 'payment': 0}]

    def test_defaults_employee_fields(self):
        employee = upgrade_snapshot(_legacy_snapshot())['employees'][0]
        assert employee['payments'] == []
        assert employee['phone'] == ''

    def test_trims_due_date(self):
        assert upgrade_snapshot(_legacy_snapshot())['orders'][0]['dueDate'] == '2024-01-10'

    def test_fits_assignments_to_quantity(self):
        snapshot = _legacy_snapshot()
        snapshot['orders'][0]['items'][1]['quantity'] = 3
        snapshot['orders'][0]['items'][0]['quantity'] = 0

        items = upgrade_snapshot(snapshot)['orders'][0]['items']

        assert items[0]['quantity'] == 1
        assert len(items[0]['assignments']) == 1
        assert [a['id'] for a in items[1]['assignments']] == ['I2-A1', 'I2-A2', 'I2-A3']

    def test_skips_entries_that_are_not_objects(self):
        upgraded = upgrade_snapshot({
            'orders': ['x', {'id': 'O1', 'items': [{'id': 'I1', 'quantity': 2}, 7]}],
            'employees': {'E1': {}},
        })

        assert upgraded['orders'][0] == 'x'
        assert len(upgraded['orders'][1]['items'][0]['assignments']) == 2
        assert upgraded['orders'][1]['items'][1] == 7
        assert upgraded['employees'] == {'E1': {}}

    def test_pure_and_idempotent(self):
        raw = _legacy_snapshot()
        original = copy.deepcopy(raw)

        once = upgrade_snapshot(raw)

        assert raw == original
        assert upgrade_snapshot(once) == once


class TestLoadInitialState:
    """Tests for reading the persisted state."""

    def test_empty_storage_uses_defaults(self, storage, config):
        state = load_initial_state(storage, config)
        assert state.customers == ()
        assert any(g.name == 'Shirt' for g in state.garment_types)
        assert state.shop_info.name == 'Deepak Tailor'
        assert state.is_authenticated is False

    def test_unreadable_snapshot_uses_defaults(self, storage, config):
        storage.set('tailorShopState', '{not json')
        state = load_initial_state(storage, config)
        assert state.orders == ()

    def test_invalid_records_use_defaults(self, storage, config):
        storage.set('tailorShopState', json.dumps({'orders': [{'id': 'broken'}]}))
        assert load_initial_state(storage, config).orders == ()

    def test_legacy_snapshot_is_upgraded(self, storage, config):
        storage.set('tailorShopState', json.dumps(_legacy_snapshot()))
        storage.set('tailorShopTheme', 'dark')
        storage.set('tailorShopAuth', 'true')

        state = load_initial_state(storage, config)

        order = state.orders[0]
        assert len(order.items[0].assignments) == 2
        assert order.due_date.isoformat() == '2024-01-10'
        assert state.employees[0].payments == ()
        assert state.language == Language.HI
        assert state.theme == Theme.DARK
        assert state.is_authenticated is True

    @pytest.mark.parametrize('stored', [
        {'orders': {'a': 1}},
        {'orders': ['x']},
        {'orders': [{'id': 'O1', 'items': 5}]},
        {'employees': 'E1', 'customers': [{'id': 'C1', 'fullName': 'Ravi'}]},
    ])
    def test_wrongly_shaped_snapshot_uses_defaults(self, storage, config, stored):
        storage.set('tailorShopState', json.dumps(stored))

        state = load_initial_state(storage, config)

        assert state.orders == ()
        assert state.customers == ()
        assert state.employees == ()

    def test_missing_collections_come_from_defaults(self, storage, config):
        storage.set('tailorShopState', json.dumps({'customers': []}))
        state = load_initial_state(storage, config)
        assert len(state.garment_types) > 0
        assert state.shop_info.name == 'Deepak Tailor'


class TestAttachPersistence:
    """Tests for the write-after-dispatch observer."""

    def test_state_written_without_theme_and_auth(self, store, storage, config):
        attach_persistence(store, storage, config)

        store.dispatch(SetLanguage(payload=Language.MR))

        saved = json.loads(storage.get('tailorShopState'))
        assert saved['language'] == 'mr'
        assert 'theme' not in saved
        assert 'isAuthenticated' not in saved
        assert storage.get('tailorShopTheme') is None

    def test_theme_written_to_own_key(self, store, storage, config):
        attach_persistence(store, storage, config)
        store.dispatch(SetTheme(payload=Theme.DARK))
        assert storage.get('tailorShopTheme') == 'dark'

    def test_round_trip_through_storage(self, store, storage, config, order):
        attach_persistence(store, storage, config)
        store.dispatch(SetLanguage(payload=Language.HI))

        reloaded = load_initial_state(storage, config)

        assert reloaded.orders == store.state.orders
        assert reloaded.customers == store.state.customers

    def test_detach(self, store, storage, config):
        detach = attach_persistence(store, storage, config)
        detach()
        store.dispatch(SetLanguage(payload=Language.HI))
        assert storage.get('tailorShopState') is None
