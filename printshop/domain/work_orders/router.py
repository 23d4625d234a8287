"""Work order router - FastAPI endpoints for work orders, items and notes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..orders.schemas import OrderDetailResponse
from ..orders.service import OrderService
from .schemas import (
    ArtworkUpdate,
    ConvertWorkOrderRequest,
    LineItemUpdate,
    NoteUpdate,
    WorkOrderCreate,
    WorkOrderDashboardRow,
    WorkOrderDetailResponse,
    WorkOrderItemCreate,
    WorkOrderItemResponse,
    WorkOrderItemStatusUpdate,
    WorkOrderNoteCreate,
    WorkOrderNoteResponse,
    WorkOrderResponse,
    WorkOrderStatusUpdate,
    WorkOrderUpdate,
)
from .service import WorkOrderItemService, WorkOrderNoteService, WorkOrderService

router = APIRouter(prefix="/work-orders", tags=["Work Orders"])
items_router = APIRouter(prefix="/work-order-items", tags=["Work Order Items"])
notes_router = APIRouter(prefix="/work-order-notes", tags=["Work Order Notes"])


def get_work_order_service(db: Session = Depends(get_db)) -> WorkOrderService:
    """Dependency injection for WorkOrderService"""
    return WorkOrderService(db)


def get_work_order_item_service(db: Session = Depends(get_db)) -> WorkOrderItemService:
    """Dependency injection for WorkOrderItemService"""
    return WorkOrderItemService(db)


def get_work_order_note_service(db: Session = Depends(get_db)) -> WorkOrderNoteService:
    return WorkOrderNoteService(db)


# ============================================================================
# WORK ORDERS
# ============================================================================


@router.get("", response_model=list[WorkOrderResponse])
async def get_work_orders(
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    return service.get_work_orders()


@router.get("/dashboard", response_model=list[WorkOrderDashboardRow])
async def work_order_dashboard(
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    """Work orders still awaiting approval"""
    return service.dashboard()


@router.get("/{work_order_id}", response_model=WorkOrderDetailResponse)
async def get_work_order(
    work_order_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    return service.get_work_order(work_order_id)


@router.post("", response_model=WorkOrderDetailResponse, status_code=201)
async def create_work_order(
    data: WorkOrderCreate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    """Create a work order and its items under the next work order number"""
    return service.create_work_order(data, current_user)


@router.put("/{work_order_id}", response_model=WorkOrderDetailResponse)
async def update_work_order(
    work_order_id: int,
    data: WorkOrderUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    return service.update_work_order(work_order_id, data)


@router.patch("/{work_order_id}/status", response_model=WorkOrderDetailResponse)
async def update_work_order_status(
    work_order_id: int,
    data: WorkOrderStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_order_service),
):
    return service.update_status(work_order_id, data, current_user)


@router.post("/{work_order_id}/convert", response_model=OrderDetailResponse, status_code=201)
async def convert_work_order_to_order(
    work_order_id: int,
    data: ConvertWorkOrderRequest = ConvertWorkOrderRequest(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an order from a work order; a work order converts only once"""
    order = WorkOrderService(db).convert_to_order(work_order_id, current_user, data.officeId)
    return OrderService(db).get_order_with_totals(order.id)


# ============================================================================
# WORK ORDER ITEMS
# ============================================================================


@items_router.get("", response_model=list[WorkOrderItemResponse])
async def get_work_order_items(
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.get_items()


@items_router.get("/work-order/{work_order_id}", response_model=list[WorkOrderItemResponse])
async def get_items_by_work_order(
    work_order_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    """Items of one work order, newest first"""
    return service.get_items_by_work_order(work_order_id)


@items_router.get("/{item_id}", response_model=WorkOrderItemResponse)
async def get_work_order_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.get_item(item_id)


@items_router.post("", response_model=WorkOrderItemResponse, status_code=201)
async def create_work_order_item(
    data: WorkOrderItemCreate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.create_item(data, current_user)


@items_router.put("/{item_id}", response_model=WorkOrderItemResponse)
async def update_work_order_item(
    item_id: int,
    data: LineItemUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.update_item(item_id, data)


@items_router.patch("/{item_id}/status", response_model=WorkOrderItemResponse)
async def update_work_order_item_status(
    item_id: int,
    data: WorkOrderItemStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.update_status(item_id, data, current_user)


@items_router.put("/{item_id}/artwork", response_model=WorkOrderItemResponse)
async def update_work_order_item_artwork(
    item_id: int,
    data: ArtworkUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    """Replace the item's artwork"""
    return service.update_artwork(item_id, data)


@items_router.delete("/artwork/{artwork_id}")
async def delete_work_order_item_artwork(
    artwork_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderItemService = Depends(get_work_order_item_service),
):
    return service.delete_artwork(artwork_id)


# ============================================================================
# NOTES
# ============================================================================


@notes_router.get("/work-order/{work_order_id}", response_model=list[WorkOrderNoteResponse])
async def get_work_order_notes(
    work_order_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderNoteService = Depends(get_work_order_note_service),
):
    return service.get_notes(work_order_id)


@notes_router.get("/{note_id}", response_model=WorkOrderNoteResponse)
async def get_work_order_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderNoteService = Depends(get_work_order_note_service),
):
    return service.get_note(note_id)


@notes_router.post("", response_model=WorkOrderNoteResponse, status_code=201)
async def create_work_order_note(
    data: WorkOrderNoteCreate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderNoteService = Depends(get_work_order_note_service),
):
    return service.create_note(data, current_user)


@notes_router.put("/{note_id}", response_model=WorkOrderNoteResponse)
async def update_work_order_note(
    note_id: int,
    data: NoteUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkOrderNoteService = Depends(get_work_order_note_service),
):
    return service.update_note(note_id, data)


@notes_router.delete("/{note_id}")
async def delete_work_order_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkOrderNoteService = Depends(get_work_order_note_service),
):
    return service.delete_note(note_id)
