"""Production schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ArtworkInput, ArtworkResponse, ResponseModel
from ...statuses import ProofMethod, TypesettingStatus

# ============================================================================
# TYPESETTING
# ============================================================================


class TypesettingCreate(BaseModel):
    orderItemId: Optional[int] = None
    workOrderItemId: Optional[int] = None
    approved: bool = False
    cost: Optional[float] = None
    dateIn: Optional[datetime] = None
    timeIn: Optional[str] = None
    plateRan: Optional[str] = None
    prepTime: Optional[int] = Field(None, ge=0)
    status: TypesettingStatus = TypesettingStatus.IN_PROGRESS


class TypesettingUpdate(BaseModel):
    orderItemId: Optional[int] = None
    workOrderItemId: Optional[int] = None
    approved: Optional[bool] = None
    cost: Optional[float] = None
    dateIn: Optional[datetime] = None
    timeIn: Optional[str] = None
    plateRan: Optional[str] = None
    prepTime: Optional[int] = Field(None, ge=0)


class TypesettingStatusUpdate(BaseModel):
    status: TypesettingStatus
    override: bool = False


class TypesettingOptionCreate(BaseModel):
    typesettingId: int
    option: str = Field(..., min_length=1, max_length=255)
    selected: bool = False


class TypesettingOptionUpdate(BaseModel):
    option: Optional[str] = Field(None, min_length=1, max_length=255)
    selected: Optional[bool] = None


class TypesettingProofCreate(BaseModel):
    typesettingId: int
    proofNumber: int = Field(..., ge=1)
    dateSubmitted: Optional[datetime] = None
    approved: bool = False
    notes: Optional[str] = None
    proofMethod: ProofMethod = ProofMethod.DIGITAL
    artwork: list[ArtworkInput] = []


class TypesettingProofUpdate(BaseModel):
    proofNumber: Optional[int] = Field(None, ge=1)
    dateSubmitted: Optional[datetime] = None
    approved: Optional[bool] = None
    notes: Optional[str] = None
    proofMethod: Optional[ProofMethod] = None
    artwork: Optional[list[ArtworkInput]] = None


class TypesettingOptionResponse(ResponseModel):
    id: int
    typesetting_id: int
    option: str
    selected: bool = False


class TypesettingProofResponse(ResponseModel):
    id: int
    typesetting_id: int
    proof_number: int
    date_submitted: Optional[datetime] = None
    approved: bool = False
    notes: Optional[str] = None
    proof_method: Optional[str] = None
    artwork: list[ArtworkResponse] = []
    created_at: Optional[datetime] = None


class TypesettingResponse(ResponseModel):
    id: int
    order_item_id: Optional[int] = None
    work_order_item_id: Optional[int] = None
    approved: bool = False
    cost: Optional[float] = None
    date_in: Optional[datetime] = None
    time_in: Optional[str] = None
    plate_ran: Optional[str] = None
    prep_time: Optional[int] = None
    status: str
    options: list[TypesettingOptionResponse] = []
    proofs: list[TypesettingProofResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# PROCESSING OPTIONS
# ============================================================================


class ProcessingOptionsFields(BaseModel):
    bindingType: Optional[str] = None
    cutting: Optional[str] = None
    drilling: Optional[str] = None
    folding: Optional[str] = None
    padding: Optional[str] = None
    stitching: Optional[str] = None
    numberingColor: Optional[str] = None
    numberingStart: Optional[int] = None
    numberingEnd: Optional[int] = None
    other: Optional[str] = None


class ProcessingOptionsCreate(ProcessingOptionsFields):
    orderItemId: Optional[int] = None
    workOrderItemId: Optional[int] = None


class ProcessingOptionsResponse(ResponseModel):
    id: int
    order_item_id: Optional[int] = None
    work_order_item_id: Optional[int] = None
    binding_type: Optional[str] = None
    cutting: Optional[str] = None
    drilling: Optional[str] = None
    folding: Optional[str] = None
    padding: Optional[str] = None
    stitching: Optional[str] = None
    numbering_color: Optional[str] = None
    numbering_start: Optional[int] = None
    numbering_end: Optional[int] = None
    other: Optional[str] = None
