"""PDF rendering of invoices and employee statements (reportlab)."""
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from xml.sax.saxutils import escape

from tailorshop.services.invoice_service import InvoiceDocument, StatementDocument
from tailorshop.utils.formatters import date_in, num_in

# Helvetica has no rupee glyph
CURRENCY_PREFIX = 'Rs. '


def _money(value) -> str:
    return f"{CURRENCY_PREFIX}{num_in(value)}"


def _styles():
    styles = getSampleStyleSheet()
    title = ParagraphStyle(
        'ShopTitle',
        parent=styles['Heading1'],
        fontSize=22,
        textColor=colors.HexColor('#2C3E50'),
        spaceAfter=6,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold',
    )
    header = ParagraphStyle(
        'ShopHeader',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#7F8C8D'),
        alignment=TA_CENTER,
        spaceAfter=4,
    )
    heading = ParagraphStyle(
        'DocHeading',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=colors.HexColor('#34495E'),
        alignment=TA_CENTER,
        spaceBefore=6,
    )
    footer = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=9,
        textColor=colors.HexColor('#95A5A6'),
        alignment=TA_CENTER,
    )
    return title, header, heading, footer


def _document(buffer: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=0.75*inch,
        leftMargin=0.75*inch,
        topMargin=0.75*inch,
        bottomMargin=0.75*inch,
    )


def _shop_header(shop, title_style, header_style) -> list:
    elements = [Paragraph(escape(shop.name), title_style)]
    if shop.tagline:
        elements.append(Paragraph(escape(shop.tagline), header_style))
    if shop.address:
        elements.append(Paragraph(escape(shop.address), header_style))
    if shop.phone:
        elements.append(Paragraph(f"Ph: {escape(shop.phone)}", header_style))
    elements.append(Spacer(1, 0.2*inch))
    return elements


def _info_table(rows) -> Table:
    table = Table(rows, colWidths=[1.6*inch, 4.4*inch])
    table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('ALIGN', (1, 0), (1, -1), 'LEFT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#34495E')),
    ]))
    return table


def _grid_style(numeric_from: int) -> TableStyle:
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498DB')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
        ('ALIGN', (numeric_from, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#ECF0F1')]),
    ])


def _totals_table(rows, highlight_last: bool = True) -> Table:
    table = Table(rows, colWidths=[4.9*inch, 1.5*inch])
    style = [
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#34495E')),
    ]
    if highlight_last:
        style += [
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, -1), (-1, -1), 13),
            ('TEXTCOLOR', (0, -1), (-1, -1), colors.HexColor('#27AE60')),
            ('BACKGROUND', (0, -1), (-1, -1), colors.HexColor('#E8F8F5')),
            ('BOX', (0, -1), (-1, -1), 1.5, colors.HexColor('#27AE60')),
        ]
    table.setStyle(TableStyle(style))
    return table


def render_invoice_pdf(invoice: InvoiceDocument) -> BytesIO:
    """Render an invoice as an A4 PDF."""
    buffer = BytesIO()
    doc = _document(buffer)
    title_style, header_style, heading_style, footer_style = _styles()

    elements = _shop_header(invoice.shop, title_style, header_style)
    elements.append(Paragraph('INVOICE', heading_style))
    elements.append(Spacer(1, 0.15*inch))

    info = [
        ['Invoice No:', invoice.order_number],
        ['Date:', date_in(invoice.order_date)],
        ['Due Date:', date_in(invoice.due_date)],
        ['Bill To:', invoice.customer_name],
    ]
    if invoice.customer_address:
        info.append(['Address:', invoice.customer_address])
    if invoice.customer_phone:
        info.append(['Phone:', invoice.customer_phone])
    elements.append(_info_table(info))
    elements.append(Spacer(1, 0.3*inch))

    table_data = [['Item Description', 'Qty', 'Rate', 'Amount']]
    for line in invoice.lines:
        table_data.append([line.description, str(line.quantity), _money(line.rate), _money(line.amount)])
    items_table = Table(table_data, colWidths=[3.4*inch, 0.8*inch, 1.1*inch, 1.1*inch])
    items_table.setStyle(_grid_style(numeric_from=1))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2*inch))

    elements.append(_totals_table([
        ['Subtotal', _money(invoice.subtotal)],
        ['Discount', f"- {_money(invoice.discount)}"],
        ['Total', _money(invoice.total)],
        ['Amount Paid', _money(invoice.amount_paid)],
        ['Balance Due', _money(invoice.balance)],
    ]))
    elements.append(Spacer(1, 0.4*inch))
    elements.append(Paragraph(escape(invoice.footer), footer_style))

    doc.build(elements)
    buffer.seek(0)
    return buffer


def render_statement_pdf(statement: StatementDocument) -> BytesIO:
    """Render an employee statement as an A4 PDF."""
    buffer = BytesIO()
    doc = _document(buffer)
    title_style, header_style, heading_style, footer_style = _styles()

    elements = _shop_header(statement.shop, title_style, header_style)
    elements.append(Paragraph('EMPLOYEE STATEMENT', heading_style))
    elements.append(Spacer(1, 0.15*inch))

    info = [['Statement For:', statement.employee_name], ['Date:', date_in(statement.issued_on)]]
    if statement.employee_role:
        info.insert(1, ['Role:', statement.employee_role])
    elements.append(_info_table(info))
    elements.append(Spacer(1, 0.3*inch))

    table_data = [['Date', 'Particulars', 'Credit (+)', 'Debit (-)', 'Balance']]
    for row in statement.rows:
        table_data.append([
            date_in(row.date),
            Paragraph(escape(row.particulars), getSampleStyleSheet()['BodyText']),
            _money(row.credit) if row.credit > 0 else '',
            _money(row.debit) if row.debit > 0 else '',
            _money(row.balance),
        ])
    if not statement.rows:
        table_data.append(['', 'No transactions to display for this period.', '', '', ''])
    ledger_table = Table(table_data, colWidths=[0.9*inch, 2.5*inch, 1*inch, 1*inch, 1*inch], repeatRows=1)
    ledger_table.setStyle(_grid_style(numeric_from=2))
    elements.append(ledger_table)
    elements.append(Spacer(1, 0.2*inch))

    elements.append(_totals_table([
        ['Total Earned', _money(statement.total_earned)],
        ['Total Paid', f"- {_money(statement.total_paid)}"],
        ['Balance Due', _money(statement.balance)],
    ]))
    elements.append(Spacer(1, 0.4*inch))
    elements.append(Paragraph(f"{escape(statement.footer)}<br/>Thank you for your hard work!", footer_style))

    doc.build(elements)
    buffer.seek(0)
    return buffer
