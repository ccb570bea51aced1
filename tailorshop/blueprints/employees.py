from flask import Blueprint, current_app, jsonify, send_file

from tailorshop.middleware import get_store, json_body, require_login
from tailorshop.services import employee_service, ledger_service
from tailorshop.services.dashboard_service import employee_workload
from tailorshop.services.invoice_service import build_statement
from tailorshop.services.messaging_service import employee_share_link
from tailorshop.services.pdf_service import render_statement_pdf

employees_bp = Blueprint('employees', __name__, url_prefix='/employees')


def _employee_detail(state, employee_id) -> dict:
    employee = employee_service.get_employee(state, employee_id)
    entries, summary = ledger_service.employee_ledger(state, employee_id)
    window, window_summary = ledger_service.statement_window(entries)
    return {
        'employee': employee.to_dict(),
        'ledger': [e.to_dict() for e in entries],
        'summary': summary.to_dict(),
        'statementSummary': window_summary.to_dict(),
        'statementEntries': len(window),
    }


def _statement_for(employee_id):
    state = get_store().state
    employee = employee_service.get_employee(state, employee_id)
    entries, _ = ledger_service.employee_ledger(state, employee_id)
    window, summary = ledger_service.statement_window(entries)
    return employee, summary, build_statement(employee, window, summary, state.shop_info)


@employees_bp.route('/', methods=['GET'])
@require_login
def list_employees():
    """Employees with their open workload and ledger balance."""
    state = get_store().state
    workload = employee_workload(state)
    rows = []
    for employee in employee_service.list_employees(state):
        _, summary = ledger_service.employee_ledger(state, employee.id)
        row = employee.to_dict()
        row['workload'] = workload.get(employee.id, 0)
        row['balance'] = str(summary.balance)
        rows.append(row)
    return jsonify({'employees': rows})


@employees_bp.route('/', methods=['POST'])
@require_login
def create_employee():
    store = get_store()
    employee = employee_service.save_employee(store, json_body())
    return jsonify(_employee_detail(store.state, employee.id)), 201


@employees_bp.route('/<employee_id>', methods=['GET'])
@require_login
def get_employee(employee_id):
    return jsonify(_employee_detail(get_store().state, employee_id))


@employees_bp.route('/<employee_id>', methods=['PUT'])
@require_login
def update_employee(employee_id):
    store = get_store()
    employee_service.save_employee(store, json_body(), employee_id=employee_id)
    return jsonify(_employee_detail(store.state, employee_id))


@employees_bp.route('/<employee_id>/payments', methods=['POST'])
@require_login
def record_payment(employee_id):
    data = json_body()
    store = get_store()
    employee_service.record_employee_payment(store, employee_id, data.get('amount'), data.get('notes'))
    return jsonify(_employee_detail(store.state, employee_id)), 201


@employees_bp.route('/<employee_id>/statement', methods=['GET'])
@require_login
def statement(employee_id):
    _, _, document = _statement_for(employee_id)
    return jsonify(document.to_dict())


@employees_bp.route('/<employee_id>/statement.pdf', methods=['GET'])
@require_login
def statement_pdf(employee_id):
    employee, _, document = _statement_for(employee_id)
    slug = employee.name.lower().replace(' ', '-')
    return send_file(
        render_statement_pdf(document),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=f"statement-{slug}.pdf",
    )


@employees_bp.route('/<employee_id>/share-link', methods=['GET'])
@require_login
def share_link(employee_id):
    """WhatsApp link with the open statement totals."""
    employee, summary, _ = _statement_for(employee_id)
    url = employee_share_link(
        employee, summary, get_store().state.shop_info,
        country_code=current_app.config.get('WHATSAPP_COUNTRY_CODE', '91'),
    )
    return jsonify({'url': url})
