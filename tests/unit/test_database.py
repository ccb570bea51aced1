"""
Unit tests for database initialization.
"""
from flask import Flask

from tailorshop.database import init_db
from tailorshop.services.persistence_service import StateStorage


def _app():
    app = Flask(__name__)
    app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
    return app


class TestInitDb:

    def test_each_app_gets_its_own_database(self):
        first = StateStorage(init_db(_app()))
        second = StateStorage(init_db(_app()))

        assert first.set('tailorShopTheme', 'dark') is True

        assert first.get('tailorShopTheme') == 'dark'
        assert second.get('tailorShopTheme') is None

    def test_storage_entry_can_be_replaced_and_removed(self):
        storage = StateStorage(init_db(_app()))

        storage.set('tailorShopAuth', 'true')
        storage.set('tailorShopAuth', 'false')
        assert storage.get('tailorShopAuth') == 'false'

        storage.remove('tailorShopAuth')
        assert storage.get('tailorShopAuth') is None
