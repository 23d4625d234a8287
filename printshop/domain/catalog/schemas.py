"""Catalog schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ResponseModel
from ...statuses import PaperBrand, PaperFinish, PaperType


class PaperProductCreate(BaseModel):
    brand: PaperBrand = PaperBrand.OTHER
    paperType: PaperType = PaperType.OTHER
    finish: PaperFinish = PaperFinish.OTHER
    customDescription: Optional[str] = None
    size: Optional[str] = None
    weightLb: Optional[float] = None
    caliper: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    mWeight: Optional[float] = None
    sheetsPerUnit: Optional[int] = None


class PaperProductUpdate(BaseModel):
    brand: Optional[PaperBrand] = None
    paperType: Optional[PaperType] = None
    finish: Optional[PaperFinish] = None
    customDescription: Optional[str] = None
    size: Optional[str] = None
    weightLb: Optional[float] = None
    caliper: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    mWeight: Optional[float] = None
    sheetsPerUnit: Optional[int] = None


class PaperProductResponse(ResponseModel):
    id: int
    reference_id: str
    brand: Optional[str] = None
    paper_type: Optional[str] = None
    finish: Optional[str] = None
    custom_description: Optional[str] = None
    size: Optional[str] = None
    weight_lb: Optional[float] = None
    caliper: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    m_weight: Optional[float] = None
    sheets_per_unit: Optional[int] = None


class ProductTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class ProductTypeResponse(ResponseModel):
    id: int
    name: str
    description: Optional[str] = None
