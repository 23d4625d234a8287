"""
Order and Invoice PDF Generator
Branded letter-size documents built with reportlab platypus
"""

import io
import logging
from datetime import datetime
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..email_templates import SHOP_NAME
from .order_totals import billable_items, calculate_order_totals

logger = logging.getLogger(__name__)


def _fmt_money(value) -> str:
    return f"${(value or 0):,.2f}"


def _fmt_date(value: Optional[datetime]) -> str:
    return value.strftime("%m/%d/%Y") if value else ""


class DocumentPDFGenerator:
    """Shared layout: title block, party block, line item table, totals table"""

    title = "Document"

    def __init__(self):
        self.page_width, self.page_height = letter
        self.margin = 0.75 * inch
        self.content_width = self.page_width - (2 * self.margin)

        self.brand_color = colors.HexColor("#4f46e5")
        self.dark_gray = colors.HexColor("#1e293b")
        self.light_gray = colors.HexColor("#f1f5f9")

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "DocTitle",
            parent=styles["Heading1"],
            fontSize=22,
            textColor=self.brand_color,
            spaceAfter=6,
        )
        self.heading_style = ParagraphStyle(
            "DocHeading",
            parent=styles["Heading2"],
            fontSize=13,
            textColor=self.dark_gray,
            spaceBefore=14,
            spaceAfter=6,
        )
        self.body_style = ParagraphStyle(
            "DocBody", parent=styles["Normal"], fontSize=10, textColor=self.dark_gray, leading=14
        )

    def header_lines(self) -> list[str]:
        return []

    def party_lines(self) -> list[str]:
        return []

    def line_items(self) -> list[list[str]]:
        return []

    def totals_rows(self) -> list[tuple[str, str]]:
        return []

    def notes(self) -> Optional[str]:
        return None

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=self.title,
        )

        story = [Paragraph(SHOP_NAME, self.body_style), Paragraph(self.title, self.title_style)]
        for line in self.header_lines():
            story.append(Paragraph(line, self.body_style))

        party = self.party_lines()
        if party:
            story.append(Paragraph("Bill To", self.heading_style))
            story.extend(Paragraph(line, self.body_style) for line in party)

        story.append(Spacer(1, 0.25 * inch))
        story.append(self._items_table())
        story.append(Spacer(1, 0.2 * inch))
        story.append(self._totals_table())

        notes = self.notes()
        if notes:
            story.append(Paragraph("Notes", self.heading_style))
            story.append(Paragraph(notes, self.body_style))

        doc.build(story)
        return buffer.getvalue()

    def _items_table(self) -> Table:
        rows = [["Description", "Qty", "Unit Price", "Amount"]]
        rows += [
            [Paragraph(desc, self.body_style), qty, unit, amount]
            for desc, qty, unit, amount in self.line_items()
        ]
        table = Table(
            rows,
            colWidths=[
                self.content_width * 0.55,
                self.content_width * 0.1,
                self.content_width * 0.175,
                self.content_width * 0.175,
            ],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), self.brand_color),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, self.light_gray]),
                    ("LINEBELOW", (0, -1), (-1, -1), 0.5, self.dark_gray),
                ]
            )
        )
        return table

    def _totals_table(self) -> Table:
        rows = [[label, value] for label, value in self.totals_rows()]
        table = Table(rows, colWidths=[self.content_width * 0.8, self.content_width * 0.2])
        table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ]
            )
        )
        return table


class OrderPDFGenerator(DocumentPDFGenerator):
    """Order confirmation document"""

    def __init__(self, order):
        super().__init__()
        self.order = order
        self.title = f"Order {order.order_number}"

    def header_lines(self) -> list[str]:
        lines = [f"Date: {_fmt_date(self.order.created_at)}", f"Status: {self.order.status}"]
        if self.order.purchase_order_number:
            lines.append(f"PO Number: {self.order.purchase_order_number}")
        if self.order.expected_date:
            lines.append(f"In Hands: {_fmt_date(self.order.expected_date)}")
        return lines

    def party_lines(self) -> list[str]:
        office = self.order.office
        lines = []
        if self.order.walk_in_customer:
            lines.append(self.order.walk_in_customer.name)
        elif office:
            lines += [office.company.name, office.name]
        if self.order.contact_person:
            lines.append(f"Attn: {self.order.contact_person.name or self.order.contact_person.email}")
        return lines

    def line_items(self) -> list[list[str]]:
        rows = []
        for item in billable_items(self.order.items):
            quantity = item.quantity or 1
            rows.append(
                [
                    item.description or "",
                    str(item.quantity or 0),
                    _fmt_money((item.amount or 0) / quantity),
                    _fmt_money(item.amount),
                ]
            )
        return rows

    def totals_rows(self) -> list[tuple[str, str]]:
        totals = calculate_order_totals(self.order)
        return [
            ("Items", _fmt_money(totals["totalItemAmount"])),
            ("Shipping", _fmt_money(totals["totalShippingAmount"])),
            ("Sales Tax", _fmt_money(totals["calculatedSalesTax"])),
            ("Paid", _fmt_money(totals["totalPaid"])),
            ("Balance", _fmt_money(totals["balance"])),
        ]

    def notes(self) -> Optional[str]:
        return self.order.special_instructions


class InvoicePDFGenerator(DocumentPDFGenerator):
    """Invoice document with payment history"""

    def __init__(self, invoice):
        super().__init__()
        self.invoice = invoice
        self.title = f"Invoice {invoice.invoice_number}"

    def header_lines(self) -> list[str]:
        order = self.invoice.order
        return [
            f"Issued: {_fmt_date(self.invoice.date_issued)}",
            f"Due: {_fmt_date(self.invoice.date_due)}",
            f"Order: {order.order_number}" if order else "",
        ]

    def party_lines(self) -> list[str]:
        order = self.invoice.order
        if not order or not order.office:
            return []
        return [order.office.company.name, order.office.name]

    def line_items(self) -> list[list[str]]:
        return [
            [item.description, str(item.quantity), _fmt_money(item.unit_price), _fmt_money(item.total)]
            for item in self.invoice.items
        ]

    def totals_rows(self) -> list[tuple[str, str]]:
        paid = sum(p.amount for p in self.invoice.payments)
        return [
            ("Subtotal", _fmt_money(self.invoice.subtotal)),
            (f"Tax ({(self.invoice.tax_rate or 0) * 100:.2f}%)", _fmt_money(self.invoice.tax_amount)),
            ("Total", _fmt_money(self.invoice.total)),
            ("Paid", _fmt_money(paid)),
            ("Balance Due", _fmt_money(self.invoice.total - paid)),
        ]

    def notes(self) -> Optional[str]:
        return self.invoice.notes
