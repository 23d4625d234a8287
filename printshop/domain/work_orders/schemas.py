"""Work order schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ArtworkInput, ArtworkResponse, ResponseModel, UserSummary
from ...statuses import WorkOrderItemStatus, WorkOrderStatus
from ..offices.schemas import CompanyRef
from ..production.schemas import ProcessingOptionsResponse, TypesettingResponse
from ..shipping.schemas import ShippingInfoResponse
from ..stocks.schemas import StockResponse

# ============================================================================
# REQUESTS
# ============================================================================


class LineItemFields(BaseModel):
    """Fields shared by work order items and order items"""

    productTypeId: Optional[int] = None
    description: Optional[str] = None
    quantity: int = Field(0, ge=0)
    cost: float = 0
    amount: float = 0
    shippingAmount: float = 0
    ink: Optional[str] = None
    size: Optional[str] = None
    other: Optional[str] = None
    specialInstructions: Optional[str] = None
    expectedDate: Optional[datetime] = None


class LineItemUpdate(BaseModel):
    productTypeId: Optional[int] = None
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    cost: Optional[float] = None
    amount: Optional[float] = None
    shippingAmount: Optional[float] = None
    ink: Optional[str] = None
    size: Optional[str] = None
    other: Optional[str] = None
    specialInstructions: Optional[str] = None
    expectedDate: Optional[datetime] = None


class WorkOrderCreate(BaseModel):
    officeId: int
    contactPersonId: Optional[int] = None
    status: WorkOrderStatus = WorkOrderStatus.DRAFT
    purchaseOrderNumber: Optional[str] = None
    deposit: float = 0
    description: Optional[str] = None
    expectedDate: Optional[datetime] = None
    specialInstructions: Optional[str] = None
    totalCost: Optional[float] = None
    shippingInfoId: Optional[int] = None
    items: list[LineItemFields] = []


class WorkOrderUpdate(BaseModel):
    contactPersonId: Optional[int] = None
    purchaseOrderNumber: Optional[str] = None
    deposit: Optional[float] = None
    description: Optional[str] = None
    expectedDate: Optional[datetime] = None
    specialInstructions: Optional[str] = None
    totalCost: Optional[float] = None
    shippingInfoId: Optional[int] = None


class WorkOrderStatusUpdate(BaseModel):
    status: WorkOrderStatus
    override: bool = False


class ConvertWorkOrderRequest(BaseModel):
    officeId: Optional[int] = None


class WorkOrderItemCreate(LineItemFields):
    workOrderId: int
    status: WorkOrderItemStatus = WorkOrderItemStatus.DRAFT


class WorkOrderItemStatusUpdate(BaseModel):
    status: WorkOrderItemStatus
    override: bool = False


class ArtworkUpdate(BaseModel):
    artwork: list[ArtworkInput] = []


class WorkOrderNoteCreate(BaseModel):
    workOrderId: int
    note: str = Field(..., min_length=1)


class NoteUpdate(BaseModel):
    note: str = Field(..., min_length=1)


# ============================================================================
# RESPONSES
# ============================================================================


class OfficeSummary(ResponseModel):
    id: int
    name: str
    company: Optional[CompanyRef] = None


class LineItemResponse(ResponseModel):
    id: int
    product_type_id: Optional[int] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    cost: Optional[float] = None
    amount: Optional[float] = None
    shipping_amount: Optional[float] = None
    ink: Optional[str] = None
    size: Optional[str] = None
    other: Optional[str] = None
    special_instructions: Optional[str] = None
    expected_date: Optional[datetime] = None
    status: str
    artwork: list[ArtworkResponse] = []
    stocks: list[StockResponse] = []
    processing_options: list[ProcessingOptionsResponse] = []
    typesettings: list[TypesettingResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkOrderItemResponse(LineItemResponse):
    work_order_id: int


class NoteResponse(ResponseModel):
    id: int
    note: str
    created_by_id: Optional[int] = None
    created_by: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkOrderNoteResponse(NoteResponse):
    work_order_id: int


class WorkOrderResponse(ResponseModel):
    id: int
    work_order_number: int
    office_id: int
    contact_person_id: Optional[int] = None
    status: str
    purchase_order_number: Optional[str] = None
    deposit: Optional[float] = None
    description: Optional[str] = None
    expected_date: Optional[datetime] = None
    special_instructions: Optional[str] = None
    total_cost: Optional[float] = None
    version: int
    shipping_info_id: Optional[int] = None
    order_id: Optional[int] = None
    created_by_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    office: Optional[OfficeSummary] = None
    contact_person: Optional[UserSummary] = None


class WorkOrderDetailResponse(WorkOrderResponse):
    shipping_info: Optional[ShippingInfoResponse] = None
    items: list[WorkOrderItemResponse] = []
    notes: list[WorkOrderNoteResponse] = []


class WorkOrderDashboardRow(ResponseModel):
    id: int
    work_order_number: int
    status: str
    company_name: Optional[str] = None
    office_name: Optional[str] = None
    description: Optional[str] = None
    purchase_order_number: Optional[str] = None
    expected_date: Optional[datetime] = None
    total_amount: float = 0
    created_at: Optional[datetime] = None
