"""Invoice service - Business logic for invoices, payments and invoice emails"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...email_service import EmailDeliveryError, send_invoice_email
from ...models import User
from ...models_invoice import Invoice, InvoiceItem, InvoicePayment
from ...models_work import Order, OrderItem
from ...services.numbering import generate_invoice_number
from ...services.order_totals import billable_items
from ...services.pdf_generator import InvoicePDFGenerator
from ...services.status_transitions import apply_status_change, check_transition
from ...statuses import InvoiceStatus, OrderStatus
from .repository import InvoiceRepository
from .schemas import InvoiceCreate, InvoicePaymentCreate, InvoiceUpdate, SendInvoiceEmailRequest

logger = logging.getLogger(__name__)

INVOICE_FIELDS = {
    "dateIssued": "date_issued",
    "dateDue": "date_due",
    "subtotal": "subtotal",
    "taxRate": "tax_rate",
    "taxAmount": "tax_amount",
    "total": "total",
    "notes": "notes",
}

PROCESSING_LABELS = ("binding_type", "cutting", "drilling", "folding", "padding", "stitching")


def _paper_label(item: OrderItem) -> Optional[str]:
    if not item.stocks:
        return None
    product = item.stocks[0].paper_product
    if product is None:
        return "N/A"
    if product.custom_description:
        return product.custom_description
    parts = [product.brand, product.paper_type, product.finish, product.size]
    return " ".join(p for p in parts if p and p != "Other") or "N/A"


def _processing_label(item: OrderItem) -> Optional[str]:
    if not item.processing_options:
        return None
    options = item.processing_options[0]
    parts = [getattr(options, name) for name in PROCESSING_LABELS]
    return ", ".join(p for p in parts if p) or options.other or "N/A"


def _typesetting_label(item: OrderItem) -> Optional[str]:
    if not item.typesettings:
        return None
    typesetting = item.typesettings[0]
    return typesetting.plate_ran or typesetting.status or "N/A"


def format_item_description(item: OrderItem) -> str:
    """Invoice line text: the item description plus paper, processing, typesetting and quantity"""
    description = item.description or ""
    for label, value in (
        ("Paper", _paper_label(item)),
        ("Processing", _processing_label(item)),
        ("Typesetting", _typesetting_label(item)),
    ):
        if value is not None:
            description += f" | {label}: {value}"
    if item.quantity:
        description += f" | Quantity: {item.quantity}"
    return description


def build_invoice_items(order: Order) -> list[InvoiceItem]:
    items = []
    for item in billable_items(order.items):
        amount = item.amount or 0
        items.append(
            InvoiceItem(
                order_item_id=item.id,
                description=format_item_description(item),
                quantity=item.quantity or 0,
                unit_price=round(amount / (item.quantity or 1), 2),
                total=amount,
            )
        )
    return items


def amount_paid(invoice: Invoice) -> float:
    return round(sum(p.amount or 0 for p in invoice.payments), 2)


class InvoiceService:
    """Service layer for invoice business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InvoiceRepository()

    def get_invoices(self) -> list[Invoice]:
        return self.repo.get_invoices(self.db)

    def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.repo.get_invoice_by_id(self.db, invoice_id)
        if not invoice:
            raise HTTPException(status_code=404, detail="Invoice not found")
        return invoice

    def get_order(self, order_id: int) -> Order:
        order = self.repo.get_order_for_invoicing(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    def build_invoice(self, order: Order, data: InvoiceCreate, user: User) -> Invoice:
        """
        Stage an invoice for `order` and move the order to Invoicing.

        Nothing is committed; callers decide the transaction boundary.
        """
        invoice = Invoice(
            invoice_number=generate_invoice_number(self.db),
            order_id=order.id,
            status=data.status.value,
            created_by_id=user.id,
            **{column: getattr(data, key) for key, column in INVOICE_FIELDS.items()},
        )
        invoice.items = build_invoice_items(order)
        self.db.add(invoice)
        apply_status_change(self.db, order, "Order", OrderStatus.INVOICING, user)
        self.db.flush()
        return invoice

    def create_invoice(self, data: InvoiceCreate, user: User) -> Invoice:
        order = self.get_order(data.orderId)
        logger.info(f"📥 Creating invoice for order {order.order_number}")
        invoice = self.build_invoice(order, data, user)
        self.db.commit()
        logger.info(f"✅ Invoice {invoice.invoice_number} created for order {order.order_number}")
        return self.get_invoice(invoice.id)

    def update_invoice(self, invoice_id: int, data: InvoiceUpdate, user: User) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        values = data.model_dump(exclude_unset=True)
        status = values.pop("status", None)

        for key, value in values.items():
            setattr(invoice, INVOICE_FIELDS[key], value)
        if status is not None:
            apply_status_change(self.db, invoice, "Invoice", status, user)

        self.db.commit()
        return self.get_invoice(invoice.id)

    def delete_invoice(self, invoice_id: int) -> dict:
        invoice = self.get_invoice(invoice_id)
        self.db.delete(invoice)
        self.db.commit()
        logger.info(f"🗑️ Invoice {invoice.invoice_number} deleted")
        return {"message": "Invoice deleted"}

    def add_payment(self, invoice_id: int, data: InvoicePaymentCreate, user: User) -> InvoicePayment:
        """
        Record a payment, then mark the invoice Paid once fully covered,
        otherwise Sent. A Draft invoice passes through Sent on its way to Paid.
        """
        invoice = self.get_invoice(invoice_id)
        paid = amount_paid(invoice) + data.amount
        target = InvoiceStatus.PAID if paid >= (invoice.total or 0) else InvoiceStatus.SENT

        if invoice.status == InvoiceStatus.DRAFT.value and target == InvoiceStatus.PAID:
            apply_status_change(self.db, invoice, "Invoice", InvoiceStatus.SENT, user)
        apply_status_change(self.db, invoice, "Invoice", target, user)

        payment = InvoicePayment(
            invoice_id=invoice.id,
            amount=data.amount,
            payment_date=data.paymentDate,
            payment_method=data.paymentMethod.value,
            created_by_id=user.id,
        )
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        logger.info(
            f"💰 Payment {payment.id} on invoice {invoice.invoice_number}: "
            f"{paid:.2f} of {invoice.total:.2f} paid, status {invoice.status}"
        )
        return payment

    async def send_invoice_email(self, invoice_id: int, data: SendInvoiceEmailRequest, user: User) -> dict:
        invoice = self.get_invoice(invoice_id)
        result = check_transition("Invoice", invoice.status, InvoiceStatus.SENT)
        if not result.allowed:
            raise HTTPException(status_code=409, detail=result.reason)

        office = invoice.order.office if invoice.order else None
        company_name = office.company.name if office and office.company else ""
        pdf_bytes = InvoicePDFGenerator(invoice).generate()

        try:
            await send_invoice_email(
                to=data.recipientEmail,
                invoice_number=invoice.invoice_number,
                company_name=company_name,
                total=invoice.total,
                balance_due=round(invoice.total - amount_paid(invoice), 2),
                due_date=invoice.date_due.strftime("%m/%d/%Y") if invoice.date_due else "",
                pdf=pdf_bytes,
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Invoice email for {invoice.invoice_number} failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to send invoice email") from e

        apply_status_change(self.db, invoice, "Invoice", InvoiceStatus.SENT, user)
        self.db.commit()
        logger.info(f"📧 Invoice {invoice.invoice_number} sent to {data.recipientEmail}")
        return {"message": "Invoice sent successfully"}
