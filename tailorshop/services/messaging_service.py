"""
Outbound WhatsApp messages.

Only builds the ``wa.me`` link with a pre-filled text; nothing is sent.
"""
from urllib.parse import quote

from tailorshop.exceptions import BusinessLogicError
from tailorshop.utils.formatters import date_in, money_in


def whatsapp_link(phone: str, message: str, country_code: str = '91') -> str:
    """Build ``https://wa.me/<cc><phone>?text=<message>``."""
    digits = ''.join(ch for ch in (phone or '') if ch.isdigit())
    if not digits:
        raise BusinessLogicError('Phone number is not available.')
    return f"https://wa.me/{country_code}{digits}?text={quote(message, safe='')}"


def order_confirmation_message(order, customer, shop_info) -> str:
    lines = [
        f"Hello {customer.full_name},",
        f"Here is your order summary from {shop_info.name}:",
        f"*Order No:* {order.order_number}",
        f"*Total Amount:* {money_in(order.total)}",
        f"*Amount Paid:* {money_in(order.advance)}",
        f"*Balance Due:* {money_in(order.balance)}",
        f"*Due Date:* {date_in(order.due_date)}",
        "",
        "Thank you!",
    ]
    return "\n".join(lines)


def invoice_message(order, customer, shop_info) -> str:
    lines = [
        f"Hello {customer.full_name},",
        f"Here is your invoice summary from {shop_info.name}:",
        f"*Order No:* {order.order_number}",
        f"*Total Amount:* {money_in(order.total)}",
        f"*Amount Paid:* {money_in(order.total - order.balance)}",
        f"*Balance Due:* {money_in(order.balance)}",
        f"*Due Date:* {date_in(order.due_date)}",
        "",
        "Thank you!",
    ]
    return "\n".join(lines)


def statement_message(employee, summary, shop_info) -> str:
    lines = [
        f"Hello {employee.name},",
        f"Here is your payment summary from {shop_info.name}:",
        "",
        f"*Total Earned:* {money_in(summary.total_earned)}",
        f"*Total Paid:* {money_in(summary.total_paid)}",
        f"*Balance Due:* {money_in(summary.balance)}",
        "",
        "Thank you for your work!",
    ]
    return "\n".join(lines)


def customer_share_link(order, customer, shop_info, kind: str = 'invoice', country_code: str = '91') -> str:
    """Link for an order confirmation (``kind='order'``) or an invoice summary."""
    if not customer.phone:
        raise BusinessLogicError('Customer phone number is not available.')
    builder = order_confirmation_message if kind == 'order' else invoice_message
    return whatsapp_link(customer.phone, builder(order, customer, shop_info), country_code)


def employee_share_link(employee, summary, shop_info, country_code: str = '91') -> str:
    if not employee.phone:
        raise BusinessLogicError(
            'Employee phone number is not available. Please add it first by editing employee details.'
        )
    return whatsapp_link(employee.phone, statement_message(employee, summary, shop_info), country_code)
