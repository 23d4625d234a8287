"""Order money totals, derived from items and payments rather than stored"""

from decimal import ROUND_HALF_UP, Decimal

from ..config import SALES_TAX_RATE
from ..statuses import OrderItemStatus

CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0))


def _round(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def billable_items(items) -> list:
    return [item for item in items if item.status != OrderItemStatus.CANCELLED.value]


def calculate_order_totals(order, tax_rate: float = SALES_TAX_RATE) -> dict:
    """Totals over non-cancelled items; tax applies to item amounts only, not shipping"""
    items = billable_items(order.items)
    total_cost = sum((_money(i.cost) for i in items), Decimal("0"))
    item_amount = sum((_money(i.amount) for i in items), Decimal("0"))
    shipping_amount = sum((_money(i.shipping_amount) for i in items), Decimal("0"))
    total_paid = sum((_money(p.amount) for p in order.payments), Decimal("0"))

    sales_tax = (item_amount * _money(tax_rate)).quantize(CENT, rounding=ROUND_HALF_UP)
    subtotal = item_amount + shipping_amount
    total_amount = subtotal + sales_tax

    return {
        "totalCost": _round(total_cost),
        "totalItemAmount": _round(item_amount),
        "totalShippingAmount": _round(shipping_amount),
        "calculatedSubTotal": _round(subtotal),
        "calculatedSalesTax": _round(sales_tax),
        "totalAmount": _round(total_amount),
        "totalPaid": _round(total_paid),
        "balance": _round(total_amount - total_paid),
    }
