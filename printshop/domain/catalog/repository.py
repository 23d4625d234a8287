"""Catalog repository - Database operations for paper products and product types"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_work import PaperProduct, ProductType


class CatalogRepository:
    """Repository for catalog database operations"""

    @staticmethod
    def get_paper_products(db: Session) -> list[PaperProduct]:
        return db.query(PaperProduct).order_by(PaperProduct.brand, PaperProduct.id).all()

    @staticmethod
    def get_paper_product_by_id(db: Session, product_id: int) -> Optional[PaperProduct]:
        return db.query(PaperProduct).filter(PaperProduct.id == product_id).first()

    @staticmethod
    def create_paper_product(db: Session, **fields) -> PaperProduct:
        product = PaperProduct(**fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def get_product_types(db: Session) -> list[ProductType]:
        return db.query(ProductType).order_by(ProductType.name).all()

    @staticmethod
    def get_product_type_by_name(db: Session, name: str) -> Optional[ProductType]:
        return db.query(ProductType).filter(ProductType.name == name).first()
