"""Stock router - FastAPI endpoints for order item and work order item stock"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    OrderItemStockCreate,
    OrderItemStockResponse,
    StockUpdate,
    WorkOrderItemStockCreate,
    WorkOrderItemStockResponse,
)
from .service import StockService, order_item_stock_service, work_order_item_stock_service

order_item_stocks_router = APIRouter(prefix="/order-item-stocks", tags=["Stock"])
work_order_item_stocks_router = APIRouter(prefix="/work-order-item-stocks", tags=["Stock"])


def get_order_item_stock_service(db: Session = Depends(get_db)) -> StockService:
    """Dependency injection for order item StockService"""
    return order_item_stock_service(db)


def get_work_order_item_stock_service(db: Session = Depends(get_db)) -> StockService:
    """Dependency injection for work order item StockService"""
    return work_order_item_stock_service(db)


# ============================================================================
# ORDER ITEM STOCK
# ============================================================================


@order_item_stocks_router.get("/order-item/{order_item_id}", response_model=list[OrderItemStockResponse])
async def get_stocks_by_order_item(
    order_item_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_order_item_stock_service),
):
    return service.get_stocks_by_parent(order_item_id)


@order_item_stocks_router.get("/{stock_id}", response_model=OrderItemStockResponse)
async def get_order_item_stock(
    stock_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_order_item_stock_service),
):
    return service.get_stock(stock_id)


@order_item_stocks_router.post("", response_model=OrderItemStockResponse, status_code=201)
async def create_order_item_stock(
    data: OrderItemStockCreate,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_order_item_stock_service),
):
    return service.create_stock(data.orderItemId, data, current_user)


@order_item_stocks_router.put("/{stock_id}", response_model=OrderItemStockResponse)
async def update_order_item_stock(
    stock_id: int,
    data: StockUpdate,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_order_item_stock_service),
):
    """Update stock; a status change must follow the stock transition table"""
    return service.update_stock(stock_id, data, current_user)


@order_item_stocks_router.delete("/{stock_id}")
async def delete_order_item_stock(
    stock_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_order_item_stock_service),
):
    return service.delete_stock(stock_id)


# ============================================================================
# WORK ORDER ITEM STOCK
# ============================================================================


@work_order_item_stocks_router.get(
    "/work-order-item/{work_order_item_id}", response_model=list[WorkOrderItemStockResponse]
)
async def get_stocks_by_work_order_item(
    work_order_item_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_work_order_item_stock_service),
):
    return service.get_stocks_by_parent(work_order_item_id)


@work_order_item_stocks_router.get("/{stock_id}", response_model=WorkOrderItemStockResponse)
async def get_work_order_item_stock(
    stock_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_work_order_item_stock_service),
):
    return service.get_stock(stock_id)


@work_order_item_stocks_router.post("", response_model=WorkOrderItemStockResponse, status_code=201)
async def create_work_order_item_stock(
    data: WorkOrderItemStockCreate,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_work_order_item_stock_service),
):
    return service.create_stock(data.workOrderItemId, data, current_user)


@work_order_item_stocks_router.put("/{stock_id}", response_model=WorkOrderItemStockResponse)
async def update_work_order_item_stock(
    stock_id: int,
    data: StockUpdate,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_work_order_item_stock_service),
):
    return service.update_stock(stock_id, data, current_user)


@work_order_item_stocks_router.delete("/{stock_id}")
async def delete_work_order_item_stock(
    stock_id: int,
    current_user: User = Depends(get_current_user),
    service: StockService = Depends(get_work_order_item_stock_service),
):
    return service.delete_stock(stock_id)
