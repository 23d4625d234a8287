"""Invoice router - FastAPI endpoints for invoices and invoice payments"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_permission
from ...database import get_db
from ...models import User
from ...schemas import MessageResponse
from ...services.pdf_generator import InvoicePDFGenerator
from .schemas import (
    InvoiceCreate,
    InvoicePaymentCreate,
    InvoicePaymentResponse,
    InvoiceResponse,
    InvoiceUpdate,
    SendInvoiceEmailRequest,
)
from .service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def get_invoice_service(db: Session = Depends(get_db)) -> InvoiceService:
    """Dependency injection for InvoiceService"""
    return InvoiceService(db)


@router.get("", response_model=list[InvoiceResponse])
async def get_invoices(
    current_user: User = Depends(require_permission("invoice_read")),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.get_invoices()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    current_user: User = Depends(require_permission("invoice_read")),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.get_invoice(invoice_id)


@router.get("/{invoice_id}/pdf")
async def get_invoice_pdf(
    invoice_id: int,
    current_user: User = Depends(require_permission("invoice_read")),
    service: InvoiceService = Depends(get_invoice_service),
):
    invoice = service.get_invoice(invoice_id)
    return Response(
        content=InvoicePDFGenerator(invoice).generate(),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{invoice.invoice_number}.pdf"'},
    )


@router.post("", response_model=InvoiceResponse, status_code=201)
async def create_invoice(
    data: InvoiceCreate,
    current_user: User = Depends(require_permission("invoice_create")),
    service: InvoiceService = Depends(get_invoice_service),
):
    """Invoice an order: items are built from the order items and the order moves to Invoicing"""
    return service.create_invoice(data, current_user)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: int,
    data: InvoiceUpdate,
    current_user: User = Depends(require_permission("invoice_update")),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.update_invoice(invoice_id, data, current_user)


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: int,
    current_user: User = Depends(require_permission("invoice_delete")),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.delete_invoice(invoice_id)


@router.post("/{invoice_id}/payments", response_model=InvoicePaymentResponse, status_code=201)
async def add_invoice_payment(
    invoice_id: int,
    data: InvoicePaymentCreate,
    current_user: User = Depends(require_permission("invoice_update")),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.add_payment(invoice_id, data, current_user)


@router.post("/{invoice_id}/send", response_model=MessageResponse)
async def send_invoice_email(
    invoice_id: int,
    data: SendInvoiceEmailRequest,
    current_user: User = Depends(get_current_user),
    service: InvoiceService = Depends(get_invoice_service),
):
    """Email the invoice PDF and mark the invoice Sent"""
    return await service.send_invoice_email(invoice_id, data, current_user)
