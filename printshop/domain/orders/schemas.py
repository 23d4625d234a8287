"""Order domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ResponseModel, UserSummary
from ...statuses import OrderItemStatus, OrderStatus, PaymentMethod, ShippingMethod
from ..contacts.schemas import WalkInCustomerResponse
from ..shipping.schemas import ShippingInfoResponse
from ..work_orders.schemas import LineItemFields, LineItemResponse, NoteResponse, OfficeSummary

# ============================================================================
# ORDERS
# ============================================================================


class OrderCreate(BaseModel):
    officeId: int
    contactPersonId: Optional[int] = None
    walkInCustomerId: Optional[int] = None
    purchaseOrderNumber: Optional[str] = None
    deposit: float = Field(0, ge=0)
    description: Optional[str] = None
    expectedDate: Optional[datetime] = None
    specialInstructions: Optional[str] = None
    notes: Optional[str] = None
    totalCost: Optional[float] = None
    shippingInfoId: Optional[int] = None
    items: list[LineItemFields] = []


class OrderUpdate(BaseModel):
    purchaseOrderNumber: Optional[str] = None
    description: Optional[str] = None
    expectedDate: Optional[datetime] = None
    specialInstructions: Optional[str] = None
    totalCost: Optional[float] = None


class ShippingDetails(BaseModel):
    trackingNumber: list[str] = []
    shippingMethod: Optional[ShippingMethod] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    sendEmail: bool = False
    emailOverride: Optional[str] = None
    shippingDetails: Optional[ShippingDetails] = None
    override: bool = False


class TransferOwnershipRequest(BaseModel):
    companyId: int
    officeId: int
    contactPersonId: Optional[int] = None


class DepositUpdate(BaseModel):
    deposit: float = Field(..., ge=0)


class ContactPersonUpdate(BaseModel):
    contactPersonId: Optional[int] = None


class NotesUpdate(BaseModel):
    notes: Optional[str] = None


class SendOrderEmailRequest(BaseModel):
    recipientEmail: str
    pdfContent: Optional[str] = None  # base64; generated server-side when absent


# ============================================================================
# ORDER ITEMS
# ============================================================================


class OrderItemCreate(LineItemFields):
    orderId: int
    status: OrderItemStatus = OrderItemStatus.PENDING


class DescriptionUpdate(BaseModel):
    description: Optional[str] = None


class SpecialInstructionsUpdate(BaseModel):
    specialInstructions: Optional[str] = None


class OrderItemStatusUpdate(BaseModel):
    status: OrderItemStatus
    sendEmail: bool = False
    emailOverride: Optional[str] = None
    override: bool = False


# ============================================================================
# NOTES AND PAYMENTS
# ============================================================================


class OrderNoteCreate(BaseModel):
    orderId: int
    note: str = Field(..., min_length=1)


class OrderPaymentCreate(BaseModel):
    orderId: int
    amount: float = Field(..., gt=0)
    paymentDate: datetime
    paymentMethod: PaymentMethod


# ============================================================================
# RESPONSES
# ============================================================================


class OrderItemResponse(LineItemResponse):
    order_id: int


class OrderNoteResponse(NoteResponse):
    order_id: int


class OrderPaymentResponse(ResponseModel):
    id: int
    order_id: int
    amount: float
    payment_date: datetime
    payment_method: str
    created_by_id: Optional[int] = None
    created_at: Optional[datetime] = None


class OrderResponse(ResponseModel):
    id: int
    order_number: int
    office_id: int
    contact_person_id: Optional[int] = None
    walk_in_customer_id: Optional[int] = None
    work_order_id: Optional[int] = None
    status: str
    purchase_order_number: Optional[str] = None
    deposit: Optional[float] = None
    description: Optional[str] = None
    expected_date: Optional[datetime] = None
    special_instructions: Optional[str] = None
    notes: Optional[str] = None
    version: int
    shipping_info_id: Optional[int] = None
    quickbooks_invoice_id: Optional[str] = None
    created_by_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    office: Optional[OfficeSummary] = None
    contact_person: Optional[UserSummary] = None
    walk_in_customer: Optional[WalkInCustomerResponse] = None

    # derived from non-cancelled items and payments
    total_cost: Optional[float] = None
    total_item_amount: float = 0
    total_shipping_amount: float = 0
    calculated_sub_total: float = 0
    calculated_sales_tax: float = 0
    total_amount: float = 0
    total_paid: float = 0
    balance: float = 0


class OrderDetailResponse(OrderResponse):
    shipping_info: Optional[ShippingInfoResponse] = None
    items: list[OrderItemResponse] = []
    order_notes: list[OrderNoteResponse] = []
    payments: list[OrderPaymentResponse] = []


class OrderDashboardRow(ResponseModel):
    id: int
    order_number: int
    status: str
    company_name: Optional[str] = None
    office_name: Optional[str] = None
    walk_in_customer_name: Optional[str] = None
    purchase_order_number: Optional[str] = None
    description: Optional[str] = None
    order_item_status: Optional[str] = None
    in_hands_date: Optional[datetime] = None
    total_amount: float = 0
    created_at: Optional[datetime] = None


class OrderItemDashboardRow(ResponseModel):
    id: int
    order_id: int
    order_number: int
    order_status: str
    company_name: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    status: str
    expected_date: Optional[datetime] = None
    position: int
    total_items: int
