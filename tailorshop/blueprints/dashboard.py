from flask import Blueprint, current_app, jsonify

from tailorshop.middleware import get_store, require_login
from tailorshop.services.dashboard_service import employee_workload, get_dashboard_data
from tailorshop.blueprints.orders import order_summary

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


@dashboard_bp.route('/', methods=['GET'])
@require_login
def index():
    """KPIs, the most recent orders and the workload per employee."""
    state = get_store().state
    data = get_dashboard_data(state, tz_name=current_app.config.get('SHOP_TIMEZONE', 'Asia/Kolkata'))
    workload = employee_workload(state)

    return jsonify({
        'activeOrders': data['active_orders'],
        'dueToday': data['due_today'],
        'revenueThisMonth': str(data['revenue_this_month']),
        'completedThisMonth': data['completed_this_month'],
        'recentOrders': [order_summary(order, state) for order, _ in data['recent_orders']],
        'workload': [
            {'employeeId': e.id, 'name': e.name, 'units': workload.get(e.id, 0)}
            for e in state.employees
        ],
    })
