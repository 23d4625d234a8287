"""Catalog service - Business logic for paper stock and product types"""

import logging
import time

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models_work import PaperProduct, ProductType
from .repository import CatalogRepository
from .schemas import PaperProductCreate, PaperProductUpdate, ProductTypeCreate

logger = logging.getLogger(__name__)

PAPER_FIELDS = {
    "brand": "brand",
    "paperType": "paper_type",
    "finish": "finish",
    "customDescription": "custom_description",
    "size": "size",
    "weightLb": "weight_lb",
    "caliper": "caliper",
    "width": "width",
    "height": "height",
    "mWeight": "m_weight",
    "sheetsPerUnit": "sheets_per_unit",
}

# Dimensions stored as 0 rather than NULL when the form leaves them blank
ZERO_DEFAULTS = ("width", "height", "mWeight", "sheetsPerUnit")


def _paper_columns(values: dict) -> dict:
    columns = {}
    for key, value in values.items():
        if hasattr(value, "value"):
            value = value.value
        columns[PAPER_FIELDS[key]] = value
    return columns


class CatalogService:
    """Service layer for the paper stock catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def get_paper_products(self) -> list[PaperProduct]:
        return self.repo.get_paper_products(self.db)

    def get_paper_product(self, product_id: int) -> PaperProduct:
        product = self.repo.get_paper_product_by_id(self.db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Paper product not found")
        return product

    def create_paper_product(self, data: PaperProductCreate) -> PaperProduct:
        values = data.model_dump()
        for key in ZERO_DEFAULTS:
            if values[key] is None:
                values[key] = 0

        reference_id = f"custom-{int(time.time() * 1000)}"
        product = self.repo.create_paper_product(
            self.db, reference_id=reference_id, **_paper_columns(values)
        )
        logger.info(f"✅ Paper product created: {product.reference_id}")
        return product

    def update_paper_product(self, product_id: int, data: PaperProductUpdate) -> PaperProduct:
        product = self.get_paper_product(product_id)
        for column, value in _paper_columns(data.model_dump(exclude_unset=True)).items():
            setattr(product, column, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def get_product_types(self) -> list[ProductType]:
        return self.repo.get_product_types(self.db)

    def create_product_type(self, data: ProductTypeCreate) -> ProductType:
        if self.repo.get_product_type_by_name(self.db, data.name):
            raise HTTPException(status_code=409, detail="Product type already exists")
        product_type = ProductType(name=data.name, description=data.description)
        self.db.add(product_type)
        self.db.commit()
        self.db.refresh(product_type)
        return product_type
