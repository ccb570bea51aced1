import pytest
from datetime import datetime, timezone

from tailorshop import create_app
from tailorshop.seed import default_state
from tailorshop.store import Store
from tailorshop.services import customer_service, employee_service, order_service


class MemoryStorage:
    """In-memory stand-in for StateStorage."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def remove(self, key):
        self.data.pop(key, None)
        return True


TEST_CONFIG = {
    'STATE_STORAGE_KEY': 'tailorShopState',
    'AUTH_STORAGE_KEY': 'tailorShopAuth',
    'THEME_STORAGE_KEY': 'tailorShopTheme',
    'DEFAULT_SHOP_NAME': 'Deepak Tailor',
    'APP_USERNAME': 'Deepak@123',
    'APP_PASSWORD': '3344',
}

ORDER_TIME = datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh in-memory database)."""
    app = create_app('config.TestConfig')
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Test client logged in with the shop account."""
    response = client.post('/auth/login', json={'username': 'Deepak@123', 'password': '3344'})
    assert response.status_code == 200
    return client


@pytest.fixture(scope='function')
def app_store(app):
    """Store of the test application."""
    return app.extensions['tailorshop']['store']


@pytest.fixture(scope='function')
def config():
    return dict(TEST_CONFIG)


@pytest.fixture(scope='function')
def storage():
    return MemoryStorage()


@pytest.fixture(scope='function')
def store(config):
    """Store over the built-in dataset, no persistence attached."""
    return Store(default_state(config))


@pytest.fixture(scope='function')
def customer(store):
    """Customer with a shirt measurement on file."""
    return customer_service.save_customer(
        store,
        {'fullName': 'Ravi Kumar', 'phone': '9876543210', 'address': 'MG Road, Pune'},
        [{'garmentType': 'Shirt', 'measurements': {'Chest': 40, 'Length': 29.5}}],
    )


@pytest.fixture(scope='function')
def employee(store):
    return employee_service.save_employee(store, {'name': 'Suresh', 'role': 'Tailor', 'phone': '9123456780'})


@pytest.fixture(scope='function')
def second_employee(store):
    return employee_service.save_employee(store, {'name': 'Anil', 'role': 'Cutter'})


@pytest.fixture(scope='function')
def order(store, customer):
    """In Progress order: 5 shirts at 500 and 2 pants at 700, discount 100, advance 1000."""
    return order_service.create_order(
        store,
        customer.id,
        '2026-10-25',
        [
            {'garmentType': 'Shirt', 'quantity': 5, 'unitPrice': '500'},
            {'garmentType': 'Pant', 'quantity': 2, 'unitPrice': '700', 'fabricSource': 'Shop'},
        ],
        discount=100,
        advance=1000,
        now=ORDER_TIME,
    )
