"""Stock schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ResponseModel
from ...statuses import StockStatus
from ..catalog.schemas import PaperProductResponse


class StockInput(BaseModel):
    paperProductId: Optional[int] = None
    stockQty: int = Field(0, ge=0)
    stockStatus: StockStatus = StockStatus.ON_HAND
    costPerM: Optional[float] = None
    totalCost: Optional[float] = None
    supplier: Optional[str] = None
    suppliedFrom: Optional[str] = None
    notes: Optional[str] = None
    orderedDate: Optional[datetime] = None
    expectedDate: Optional[datetime] = None
    received: bool = False
    receivedDate: Optional[datetime] = None


class OrderItemStockCreate(StockInput):
    orderItemId: int


class WorkOrderItemStockCreate(StockInput):
    workOrderItemId: int


class StockUpdate(BaseModel):
    paperProductId: Optional[int] = None
    stockQty: Optional[int] = Field(None, ge=0)
    stockStatus: Optional[StockStatus] = None
    costPerM: Optional[float] = None
    totalCost: Optional[float] = None
    supplier: Optional[str] = None
    suppliedFrom: Optional[str] = None
    notes: Optional[str] = None
    orderedDate: Optional[datetime] = None
    expectedDate: Optional[datetime] = None
    received: Optional[bool] = None
    receivedDate: Optional[datetime] = None


class StockResponse(ResponseModel):
    id: int
    paper_product_id: Optional[int] = None
    stock_qty: Optional[int] = None
    stock_status: Optional[str] = None
    cost_per_m: Optional[float] = None
    total_cost: Optional[float] = None
    supplier: Optional[str] = None
    supplied_from: Optional[str] = None
    notes: Optional[str] = None
    ordered_date: Optional[datetime] = None
    expected_date: Optional[datetime] = None
    received: Optional[bool] = None
    received_date: Optional[datetime] = None
    paper_product: Optional[PaperProductResponse] = None


class OrderItemStockResponse(StockResponse):
    order_item_id: int


class WorkOrderItemStockResponse(StockResponse):
    work_order_item_id: int
