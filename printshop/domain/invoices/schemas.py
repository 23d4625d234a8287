"""Invoice domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ResponseModel
from ...statuses import InvoiceStatus, PaymentMethod
from ..work_orders.schemas import OfficeSummary


class InvoiceCreate(BaseModel):
    orderId: int
    dateIssued: datetime
    dateDue: datetime
    subtotal: float = Field(..., ge=0)
    taxRate: float = Field(0, ge=0, le=1)  # fraction, 0.07 for 7%
    taxAmount: float = Field(0, ge=0)
    total: float = Field(..., ge=0)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = None


class InvoiceUpdate(BaseModel):
    dateIssued: Optional[datetime] = None
    dateDue: Optional[datetime] = None
    subtotal: Optional[float] = Field(None, ge=0)
    taxRate: Optional[float] = Field(None, ge=0, le=1)
    taxAmount: Optional[float] = Field(None, ge=0)
    total: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    notes: Optional[str] = None


class InvoicePaymentCreate(BaseModel):
    amount: float = Field(..., gt=0)
    paymentDate: datetime
    paymentMethod: PaymentMethod


class SendInvoiceEmailRequest(BaseModel):
    recipientEmail: str


class InvoiceItemResponse(ResponseModel):
    id: int
    order_item_id: Optional[int] = None
    description: str
    quantity: int
    unit_price: float
    total: float


class InvoicePaymentResponse(ResponseModel):
    id: int
    invoice_id: int
    amount: float
    payment_date: datetime
    payment_method: str
    created_at: Optional[datetime] = None


class InvoiceOrderRef(ResponseModel):
    id: int
    order_number: int
    status: str
    office: Optional[OfficeSummary] = None


class InvoiceResponse(ResponseModel):
    id: int
    invoice_number: str
    order_id: int
    date_issued: datetime
    date_due: datetime
    subtotal: float
    tax_rate: Optional[float] = None
    tax_amount: Optional[float] = None
    total: float
    status: str
    notes: Optional[str] = None
    quickbooks_id: Optional[str] = None
    created_by_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    order: Optional[InvoiceOrderRef] = None
    items: list[InvoiceItemResponse] = []
    payments: list[InvoicePaymentResponse] = []
