from flask import Blueprint, current_app, jsonify, request, send_file

from tailorshop.exceptions import BusinessLogicError
from tailorshop.middleware import get_store, json_body, require_login
from tailorshop.services import assignment_service, order_service
from tailorshop.services.assignment_service import AssignmentGroup
from tailorshop.services.customer_service import get_customer
from tailorshop.services.invoice_service import build_invoice
from tailorshop.services.messaging_service import customer_share_link
from tailorshop.services.pdf_service import render_invoice_pdf

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')


def order_summary(order, state) -> dict:
    """List row: the order plus customer name and badge flags."""
    customer = state.find_customer(order.customer_id)
    data = order.to_dict()
    data['customerName'] = customer.full_name if customer else 'Unknown'
    data['isNew'] = order_service.is_new(order)
    data['isActive'] = order_service.is_order_active(order)
    return data


def order_detail(order, state) -> dict:
    """Order with the assignment rows and unit counts of every item."""
    data = order_summary(order, state)
    for item_data, item in zip(data['items'], order.items):
        summary = assignment_service.assignment_summary(item)
        item_data['assignmentGroups'] = [g.to_dict() for g in assignment_service.group_assignments(item)]
        item_data['assignmentSummary'] = {
            'total': summary['total'],
            'assigned': summary['assigned'],
            'unassigned': summary['unassigned'],
            'laborCost': str(summary['labor_cost']),
        }
    return data


def _order_fields(data: dict) -> dict:
    return {
        'customer_id': data.get('customerId'),
        'due_date': data.get('dueDate'),
        'items': data.get('items') or [],
        'discount': data.get('discount', 0),
        'notes': data.get('notes'),
    }


@orders_bp.route('/', methods=['GET'])
@require_login
def list_orders():
    """Orders newest first, filtered by the ``status`` tab."""
    state = get_store().state
    orders = order_service.list_orders(state, request.args.get('status'))
    return jsonify({
        'orders': [order_summary(o, state) for o in orders],
        'counts': order_service.status_counts(state),
    })


@orders_bp.route('/', methods=['POST'])
@require_login
def create_order():
    data = json_body()
    store = get_store()
    order = order_service.create_order(
        store,
        advance=data.get('advance', 0),
        prefix=current_app.config.get('ORDER_NUMBER_PREFIX', 'DT'),
        **_order_fields(data),
    )
    current_app.logger.info(f"Order {order.order_number} created via API")
    return jsonify(order_detail(order, store.state)), 201


@orders_bp.route('/<order_id>', methods=['GET'])
@require_login
def get_order(order_id):
    state = get_store().state
    return jsonify(order_detail(order_service.get_order(state, order_id), state))


@orders_bp.route('/<order_id>', methods=['PUT'])
@require_login
def update_order(order_id):
    store = get_store()
    order = order_service.update_order(store, order_id, **_order_fields(json_body()))
    return jsonify(order_detail(order, store.state))


@orders_bp.route('/<order_id>/payments', methods=['POST'])
@require_login
def add_payment(order_id):
    data = json_body()
    store = get_store()
    order = order_service.add_payment(store, order_id, data.get('amount'), data.get('method') or 'Cash')
    return jsonify(order_detail(order, store.state)), 201


@orders_bp.route('/<order_id>/status', methods=['POST'])
@require_login
def change_status(order_id):
    data = json_body()
    store = get_store()
    order = order_service.change_status(store, order_id, data.get('status'))
    return jsonify(order_detail(order, store.state))


@orders_bp.route('/<order_id>/items/<item_id>/assignments', methods=['PUT'])
@require_login
def save_assignments(order_id, item_id):
    """Replace the assignment rows of one item: ``{"groups": [{employeeId, quantity, payment}]}``."""
    data = json_body()
    raw_groups = data.get('groups')
    if not isinstance(raw_groups, list):
        raise BusinessLogicError('groups must be a list.')
    groups = [AssignmentGroup.model_validate(g) for g in raw_groups]

    store = get_store()
    order = assignment_service.save_item_assignments(store, order_id, item_id, groups)
    return jsonify(order_detail(order, store.state))


@orders_bp.route('/<order_id>/items/<item_id>/assignments/<int:index>', methods=['DELETE'])
@require_login
def remove_assignment_group(order_id, item_id, index):
    store = get_store()
    order = assignment_service.remove_group(store, order_id, item_id, index)
    return jsonify(order_detail(order, store.state))


def _invoice_for(order_id):
    state = get_store().state
    order = order_service.get_order(state, order_id)
    customer = get_customer(state, order.customer_id)
    return build_invoice(order, customer, state.shop_info)


@orders_bp.route('/<order_id>/invoice', methods=['GET'])
@require_login
def invoice(order_id):
    return jsonify(_invoice_for(order_id).to_dict())


@orders_bp.route('/<order_id>/invoice.pdf', methods=['GET'])
@require_login
def invoice_pdf(order_id):
    document = _invoice_for(order_id)
    return send_file(
        render_invoice_pdf(document),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=f"invoice-{document.order_number}.pdf",
    )


@orders_bp.route('/<order_id>/share-link', methods=['GET'])
@require_login
def share_link(order_id):
    """WhatsApp link with the invoice (default) or order confirmation (``kind=order``) text."""
    state = get_store().state
    order = order_service.get_order(state, order_id)
    customer = get_customer(state, order.customer_id)
    url = customer_share_link(
        order, customer, state.shop_info,
        kind=request.args.get('kind', 'invoice'),
        country_code=current_app.config.get('WHATSAPP_COUNTRY_CODE', '91'),
    )
    return jsonify({'url': url})
