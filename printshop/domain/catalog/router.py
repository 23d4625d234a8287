"""Catalog router - FastAPI endpoints for paper products and product types"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    PaperProductCreate,
    PaperProductResponse,
    PaperProductUpdate,
    ProductTypeCreate,
    ProductTypeResponse,
)
from .service import CatalogService

paper_router = APIRouter(prefix="/paper-products", tags=["Paper Products"])
product_types_router = APIRouter(prefix="/product-types", tags=["Product Types"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@paper_router.get("", response_model=list[PaperProductResponse])
async def get_paper_products(
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_paper_products()


@paper_router.get("/{product_id}", response_model=PaperProductResponse)
async def get_paper_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_paper_product(product_id)


@paper_router.post("", response_model=PaperProductResponse, status_code=201)
async def create_paper_product(
    data: PaperProductCreate,
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a custom paper product; blank dimensions are stored as 0"""
    return service.create_paper_product(data)


@paper_router.put("/{product_id}", response_model=PaperProductResponse)
async def update_paper_product(
    product_id: int,
    data: PaperProductUpdate,
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_paper_product(product_id, data)


@product_types_router.get("", response_model=list[ProductTypeResponse])
async def get_product_types(
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_product_types()


@product_types_router.post("", response_model=ProductTypeResponse, status_code=201)
async def create_product_type(
    data: ProductTypeCreate,
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_product_type(data)
