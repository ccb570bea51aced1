"""
Dashboard service.
Provides the KPIs, recent orders and employee workload for the dashboard view.
"""
from datetime import datetime
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from tailorshop.models import ZERO, AppState, OrderStatus, utcnow

RECENT_ORDERS_LIMIT = 5

_NOT_ACTIVE = {OrderStatus.COMPLETED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
_FINISHED = {OrderStatus.COMPLETED, OrderStatus.DELIVERED}
# Legacy "New" orders are worked on like In Progress ones
_IN_WORK = {OrderStatus.IN_PROGRESS, OrderStatus.NEW}


def _month_bounds(now_local: datetime) -> Tuple[datetime, datetime]:
    """First instant of the calendar month of ``now_local`` and of the next one."""
    start = now_local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


def get_dashboard_data(state: AppState, now: Optional[datetime] = None, tz_name: str = 'Asia/Kolkata') -> dict:
    """
    Get all dashboard data.

    Args:
        state: current AppState
        now: reference instant (defaults to the current time)
        tz_name: shop time zone used for "today" and "this month"

    Returns:
        dict with keys:
            - active_orders: int, orders not Completed/Delivered/Cancelled
            - due_today: int, orders due today and not Delivered
            - revenue_this_month: Decimal, payments of orders opened this month
            - completed_this_month: int, orders opened this month that are Completed or Delivered
            - recent_orders: list of (Order, customer name) pairs, newest first
    """
    tz = ZoneInfo(tz_name)
    now_local = (now or utcnow()).astimezone(tz)
    today = now_local.date()
    month_start, next_month_start = _month_bounds(now_local)

    active_orders = sum(1 for o in state.orders if o.status not in _NOT_ACTIVE)
    due_today = sum(1 for o in state.orders if o.due_date == today and o.status != OrderStatus.DELIVERED)

    this_month = [o for o in state.orders if month_start <= o.order_date < next_month_start]
    revenue_this_month = sum((o.amount_paid for o in this_month), ZERO)
    completed_this_month = sum(1 for o in this_month if o.status in _FINISHED)

    customer_names = {c.id: c.full_name for c in state.customers}
    recent = sorted(state.orders, key=lambda o: o.order_date, reverse=True)[:RECENT_ORDERS_LIMIT]

    return {
        'active_orders': active_orders,
        'due_today': due_today,
        'revenue_this_month': revenue_this_month,
        'completed_this_month': completed_this_month,
        'recent_orders': [(o, customer_names.get(o.customer_id, 'Unknown')) for o in recent],
    }


def employee_workload(state: AppState) -> Dict[str, int]:
    """Units assigned to each employee on In Progress orders (every employee listed, zero included)."""
    workload = {e.id: 0 for e in state.employees}
    for order in state.orders:
        if order.status not in _IN_WORK:
            continue
        for item in order.items:
            for assignment in item.assignments:
                if assignment.employee_id in workload:
                    workload[assignment.employee_id] += 1
    return workload
