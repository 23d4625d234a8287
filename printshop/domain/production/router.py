"""Production router - FastAPI endpoints for typesetting and processing options"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    ProcessingOptionsCreate,
    ProcessingOptionsFields,
    ProcessingOptionsResponse,
    TypesettingCreate,
    TypesettingOptionCreate,
    TypesettingOptionResponse,
    TypesettingOptionUpdate,
    TypesettingProofCreate,
    TypesettingProofResponse,
    TypesettingProofUpdate,
    TypesettingResponse,
    TypesettingStatusUpdate,
    TypesettingUpdate,
)
from .service import ProcessingOptionsService, TypesettingService

typesetting_router = APIRouter(prefix="/typesetting", tags=["Typesetting"])
options_router = APIRouter(prefix="/typesetting-options", tags=["Typesetting"])
proofs_router = APIRouter(prefix="/typesetting-proofs", tags=["Typesetting"])
processing_router = APIRouter(prefix="/processing-options", tags=["Processing Options"])


def get_typesetting_service(db: Session = Depends(get_db)) -> TypesettingService:
    """Dependency injection for TypesettingService"""
    return TypesettingService(db)


def get_processing_service(db: Session = Depends(get_db)) -> ProcessingOptionsService:
    """Dependency injection for ProcessingOptionsService"""
    return ProcessingOptionsService(db)


# ============================================================================
# TYPESETTING
# ============================================================================


@typesetting_router.get("", response_model=list[TypesettingResponse])
async def get_all_typesetting(
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_all()


@typesetting_router.get("/order-item/{order_item_id}", response_model=list[TypesettingResponse])
async def get_typesetting_by_order_item(
    order_item_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_by_order_item(order_item_id)


@typesetting_router.get(
    "/work-order-item/{work_order_item_id}", response_model=list[TypesettingResponse]
)
async def get_typesetting_by_work_order_item(
    work_order_item_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_by_work_order_item(work_order_item_id)


@typesetting_router.get("/{typesetting_id}", response_model=TypesettingResponse)
async def get_typesetting(
    typesetting_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_typesetting(typesetting_id)


@typesetting_router.post("", response_model=TypesettingResponse, status_code=201)
async def create_typesetting(
    data: TypesettingCreate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    """Create typesetting for exactly one order item or work order item"""
    return service.create_typesetting(data, current_user)


@typesetting_router.put("/{typesetting_id}", response_model=TypesettingResponse)
async def update_typesetting(
    typesetting_id: int,
    data: TypesettingUpdate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.update_typesetting(typesetting_id, data)


@typesetting_router.patch("/{typesetting_id}/status", response_model=TypesettingResponse)
async def update_typesetting_status(
    typesetting_id: int,
    data: TypesettingStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.update_status(typesetting_id, data, current_user)


@typesetting_router.delete("/{typesetting_id}")
async def delete_typesetting(
    typesetting_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.delete_typesetting(typesetting_id)


# ============================================================================
# TYPESETTING OPTIONS
# ============================================================================


@options_router.get("", response_model=list[TypesettingOptionResponse])
async def get_typesetting_options(
    typesettingId: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_options(typesettingId)


@options_router.get("/{option_id}", response_model=TypesettingOptionResponse)
async def get_typesetting_option(
    option_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_option(option_id)


@options_router.post("", response_model=TypesettingOptionResponse, status_code=201)
async def create_typesetting_option(
    data: TypesettingOptionCreate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.create_option(data)


@options_router.put("/{option_id}", response_model=TypesettingOptionResponse)
async def update_typesetting_option(
    option_id: int,
    data: TypesettingOptionUpdate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.update_option(option_id, data)


@options_router.delete("/{option_id}")
async def delete_typesetting_option(
    option_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.delete_option(option_id)


# ============================================================================
# TYPESETTING PROOFS
# ============================================================================


@proofs_router.get("", response_model=list[TypesettingProofResponse])
async def get_typesetting_proofs(
    typesettingId: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_proofs(typesettingId)


@proofs_router.get("/{proof_id}", response_model=TypesettingProofResponse)
async def get_typesetting_proof(
    proof_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.get_proof(proof_id)


@proofs_router.post("", response_model=TypesettingProofResponse, status_code=201)
async def create_typesetting_proof(
    data: TypesettingProofCreate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    """Record a proof round, with the proof artwork file references"""
    return service.create_proof(data, current_user)


@proofs_router.put("/{proof_id}", response_model=TypesettingProofResponse)
async def update_typesetting_proof(
    proof_id: int,
    data: TypesettingProofUpdate,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.update_proof(proof_id, data)


@proofs_router.delete("/{proof_id}")
async def delete_typesetting_proof(
    proof_id: int,
    current_user: User = Depends(get_current_user),
    service: TypesettingService = Depends(get_typesetting_service),
):
    return service.delete_proof(proof_id)


# ============================================================================
# PROCESSING OPTIONS
# ============================================================================


@processing_router.get("", response_model=list[ProcessingOptionsResponse])
async def get_all_processing_options(
    current_user: User = Depends(get_current_user),
    service: ProcessingOptionsService = Depends(get_processing_service),
):
    return service.get_all()


@processing_router.get("/{options_id}", response_model=ProcessingOptionsResponse)
async def get_processing_options(
    options_id: int,
    current_user: User = Depends(get_current_user),
    service: ProcessingOptionsService = Depends(get_processing_service),
):
    return service.get_options(options_id)


@processing_router.post("", response_model=ProcessingOptionsResponse, status_code=201)
async def create_processing_options(
    data: ProcessingOptionsCreate,
    current_user: User = Depends(get_current_user),
    service: ProcessingOptionsService = Depends(get_processing_service),
):
    return service.create_options(data, current_user)


@processing_router.put("/{options_id}", response_model=ProcessingOptionsResponse)
async def update_processing_options(
    options_id: int,
    data: ProcessingOptionsFields,
    current_user: User = Depends(get_current_user),
    service: ProcessingOptionsService = Depends(get_processing_service),
):
    return service.update_options(options_id, data)


@processing_router.delete("/{options_id}")
async def delete_processing_options(
    options_id: int,
    current_user: User = Depends(get_current_user),
    service: ProcessingOptionsService = Depends(get_processing_service),
):
    return service.delete_options(options_id)
