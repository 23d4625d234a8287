"""Stock service - Business logic shared by order item and work order item stock"""

import logging
from datetime import datetime

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from ...models import User
from ...models_work import OrderItem, OrderItemStock, WorkOrderItem, WorkOrderItemStock
from ...services.status_transitions import apply_status_change
from ...statuses import StockStatus
from .schemas import StockInput, StockUpdate

logger = logging.getLogger(__name__)

STOCK_FIELDS = {
    "paperProductId": "paper_product_id",
    "stockQty": "stock_qty",
    "costPerM": "cost_per_m",
    "totalCost": "total_cost",
    "supplier": "supplier",
    "suppliedFrom": "supplied_from",
    "notes": "notes",
    "orderedDate": "ordered_date",
    "expectedDate": "expected_date",
    "received": "received",
    "receivedDate": "received_date",
}


def stock_columns(stock) -> dict:
    """Column values of a stock row, for copying onto another item"""
    columns = {column: getattr(stock, column) for column in STOCK_FIELDS.values()}
    columns["stock_status"] = stock.stock_status
    return columns


class StockService:
    """
    Stock rows for one parent kind.

    `model` is the stock table, `parent_model` the line item table it hangs
    off and `parent_column` the foreign key between them.
    """

    def __init__(self, db: Session, model, parent_model, parent_column: str):
        self.db = db
        self.model = model
        self.parent_model = parent_model
        self.parent_column = parent_column

    def _query(self):
        return self.db.query(self.model).options(selectinload(self.model.paper_product))

    def get_stock(self, stock_id: int):
        stock = self._query().filter(self.model.id == stock_id).first()
        if not stock:
            raise HTTPException(status_code=404, detail="Stock not found")
        return stock

    def get_stocks_by_parent(self, parent_id: int) -> list:
        return (
            self._query()
            .filter(getattr(self.model, self.parent_column) == parent_id)
            .order_by(self.model.id)
            .all()
        )

    def create_stock(self, parent_id: int, data: StockInput, user: User):
        parent = self.db.query(self.parent_model).filter(self.parent_model.id == parent_id).first()
        if not parent:
            raise HTTPException(status_code=404, detail="Item not found")

        values = data.model_dump()
        stock = self.model(
            created_by_id=user.id,
            stock_status=data.stockStatus.value,
            **{self.parent_column: parent_id},
            **{column: values[key] for key, column in STOCK_FIELDS.items()},
        )
        if stock.stock_status == StockStatus.RECEIVED.value:
            self._mark_received(stock)
        self.db.add(stock)
        self.db.commit()
        logger.info(f"✅ Stock {stock.id} created for {self.parent_column}={parent_id}")
        return self.get_stock(stock.id)

    def update_stock(self, stock_id: int, data: StockUpdate, user: User):
        stock = self.get_stock(stock_id)
        values = data.model_dump(exclude_unset=True)
        target = values.pop("stockStatus", None)

        for key, value in values.items():
            setattr(stock, STOCK_FIELDS[key], value)

        if target is not None:
            changed = apply_status_change(
                self.db, stock, "Stock", target, user, field="stock_status"
            )
            if changed and stock.stock_status == StockStatus.RECEIVED.value:
                self._mark_received(stock)

        self.db.commit()
        return self.get_stock(stock.id)

    def delete_stock(self, stock_id: int) -> dict:
        stock = self.get_stock(stock_id)
        self.db.delete(stock)
        self.db.commit()
        return {"message": "Stock deleted"}

    @staticmethod
    def _mark_received(stock) -> None:
        stock.received = True
        if stock.received_date is None:
            stock.received_date = datetime.utcnow()


def order_item_stock_service(db: Session) -> StockService:
    return StockService(db, OrderItemStock, OrderItem, "order_item_id")


def work_order_item_stock_service(db: Session) -> StockService:
    return StockService(db, WorkOrderItemStock, WorkOrderItem, "work_order_item_id")
