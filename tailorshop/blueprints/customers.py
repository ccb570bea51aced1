from flask import Blueprint, jsonify, request

from tailorshop.middleware import get_store, json_body, require_login
from tailorshop.services import customer_service
from tailorshop.services.ledger_service import customer_ledger
from tailorshop.blueprints.orders import order_summary

customers_bp = Blueprint('customers', __name__, url_prefix='/customers')


def _customer_detail(state, customer_id) -> dict:
    """Customer with latest measurements and order ledger."""
    ledger = customer_ledger(state, customer_id)
    measurements = customer_service.latest_measurements(state, customer_id)
    return {
        'customer': ledger['customer'].to_dict(),
        'measurements': [m.to_dict() for m in measurements.values()],
        'orders': [order_summary(o, state) for o in ledger['orders']],
        'totalBilled': str(ledger['total_billed']),
        'totalPaid': str(ledger['total_paid']),
        'totalBalance': str(ledger['total_balance']),
    }


@customers_bp.route('/', methods=['GET'])
@require_login
def list_customers():
    """Customers in alphabetical order; ``q`` searches name and phone."""
    customers = customer_service.list_customers(get_store().state, request.args.get('q'))
    return jsonify({'customers': [c.to_dict() for c in customers]})


@customers_bp.route('/', methods=['POST'])
@require_login
def create_customer():
    data = json_body()
    store = get_store()
    customer = customer_service.save_customer(store, data.get('customer') or {}, data.get('measurements') or [])
    return jsonify(_customer_detail(store.state, customer.id)), 201


@customers_bp.route('/<customer_id>', methods=['GET'])
@require_login
def get_customer(customer_id):
    return jsonify(_customer_detail(get_store().state, customer_id))


@customers_bp.route('/<customer_id>', methods=['PUT'])
@require_login
def update_customer(customer_id):
    data = json_body()
    store = get_store()
    customer_service.save_customer(
        store, data.get('customer') or {}, data.get('measurements') or [], customer_id=customer_id
    )
    return jsonify(_customer_detail(store.state, customer_id))
