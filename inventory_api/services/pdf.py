import io
import logging
from typing import List, Optional
from xml.sax.saxutils import escape

# ReportLab Imports
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter, landscape, portrait
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet

from inventory_api.models.purchase_order import PurchaseOrder
from inventory_api.models.sale import Sale
from inventory_api.models.settings import BusinessSettings, Orientation, PageSize
from inventory_api.models.supplier import Supplier

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
    ('ALIGN', (2, 1), (-1, -1), 'RIGHT'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
])


def _page_size(business: BusinessSettings):
    pdf = business.pdf_settings
    size = letter if pdf.page_size == PageSize.LETTER else A4
    return landscape(size) if pdf.orientation == Orientation.LANDSCAPE else portrait(size)


def _money(value: Optional[float]) -> str:
    return f"{(value or 0.0):,.2f}"


class DocumentRenderer:
    """Purchase order and sale invoice PDFs, formatted per business settings."""

    def _build(self, business: BusinessSettings, title: str, meta: List[str], rows: List[List[str]], total: float) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=_page_size(business), title=title)
        styles = getSampleStyleSheet()
        story = []

        story.append(Paragraph(escape(business.business_name), styles['Title']))
        if business.business_address:
            story.append(Paragraph(escape(business.business_address), styles['Normal']))
        story.append(Spacer(1, 12))

        story.append(Paragraph(escape(title), styles['Heading2']))
        for line in meta:
            story.append(Paragraph(escape(line), styles['Normal']))
        story.append(Spacer(1, 12))

        table = Table(rows, repeatRows=1)
        table.setStyle(TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 12))
        story.append(Paragraph(f"<b>Total:</b> {_money(total)}", styles['Normal']))

        footer = business.pdf_settings.footer_text
        if footer:
            story.append(Spacer(1, 24))
            story.append(Paragraph(escape(footer), styles['Italic']))

        doc.build(story)
        return buffer.getvalue()

    def render_purchase_order(self,
                              order: PurchaseOrder,
                              business: BusinessSettings,
                              supplier: Optional[Supplier] = None) -> bytes:
        meta = [
            f"Status: {order.status.value}",
            f"Order date: {order.order_date:%Y-%m-%d}",
        ]
        if supplier:
            meta.insert(0, f"Supplier: {supplier.name}" + (f" ({supplier.company})" if supplier.company else ""))
        if order.expected_date:
            meta.append(f"Expected: {order.expected_date:%Y-%m-%d}")
        if order.received_date:
            meta.append(f"Received: {order.received_date:%Y-%m-%d}")
        if order.notes:
            meta.append(f"Notes: {order.notes}")

        rows = [["Product", "Variant", "Qty", "Unit cost", "Subtotal"]]
        for item in order.items:
            rows.append([
                item.product_name or item.product_id,
                item.variant or "-",
                str(item.quantity),
                _money(item.unit_cost),
                _money(item.subtotal),
            ])

        logger.debug(f"Rendering PDF for {order.po_number}")
        return self._build(business, f"Purchase Order {order.po_number}", meta, rows, order.total_amount)

    def render_sale_invoice(self, sale: Sale, business: BusinessSettings) -> bytes:
        meta = [f"Date: {sale.date:%Y-%m-%d %H:%M}"]
        if sale.customer_name:
            meta.append(f"Customer: {sale.customer_name}")
        for contact in (sale.customer_email, sale.customer_phone):
            if contact:
                meta.append(contact)

        rows = [["Product", "Variant", "Qty", "Price", "Line total"]]
        for item in sale.items:
            rows.append([
                item.product_name or item.product_id,
                item.variant or "-",
                str(item.quantity),
                _money(item.price_at_sale),
                _money(item.line_total),
            ])

        return self._build(business, f"Invoice {sale.invoice_number}", meta, rows, sale.total_amount)

document_renderer = DocumentRenderer()
