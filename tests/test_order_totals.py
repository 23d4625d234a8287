from __future__ import annotations

import unittest
from datetime import datetime
from types import SimpleNamespace

from printshop.models_invoice import Invoice
from printshop.models_work import Order
from printshop.services.numbering import generate_invoice_number, next_sequence_number
from printshop.services.order_totals import calculate_order_totals

from support import DatabaseTestCase


def item(amount, cost=0, shipping_amount=0, status='Pending'):
    return SimpleNamespace(amount=amount, cost=cost, shipping_amount=shipping_amount, status=status)


class OrderTotalsTests(unittest.TestCase):
    def test_tax_applies_to_item_amounts_only(self) -> None:
        order = SimpleNamespace(
            items=[item(100, cost=40, shipping_amount=10), item(50, cost=20, shipping_amount=5)],
            payments=[SimpleNamespace(amount=60)],
        )

        totals = calculate_order_totals(order, tax_rate=0.07)

        self.assertEqual(totals['totalCost'], 60.0)
        self.assertEqual(totals['totalItemAmount'], 150.0)
        self.assertEqual(totals['totalShippingAmount'], 15.0)
        self.assertEqual(totals['calculatedSubTotal'], 165.0)
        self.assertEqual(totals['calculatedSalesTax'], 10.5)
        self.assertEqual(totals['totalAmount'], 175.5)
        self.assertEqual(totals['totalPaid'], 60.0)
        self.assertEqual(totals['balance'], 115.5)

    def test_cancelled_items_are_excluded(self) -> None:
        order = SimpleNamespace(items=[item(100), item(900, status='Cancelled')], payments=[])

        totals = calculate_order_totals(order, tax_rate=0)

        self.assertEqual(totals['totalItemAmount'], 100.0)
        self.assertEqual(totals['balance'], 100.0)

    def test_missing_amounts_count_as_zero(self) -> None:
        order = SimpleNamespace(items=[item(None, cost=None, shipping_amount=None)], payments=[])

        totals = calculate_order_totals(order)

        self.assertEqual(totals['totalAmount'], 0.0)

    def test_sales_tax_rounds_half_up(self) -> None:
        order = SimpleNamespace(items=[item(0.5)], payments=[])

        self.assertEqual(calculate_order_totals(order, tax_rate=0.07)['calculatedSalesTax'], 0.04)


class NumberingTests(DatabaseTestCase):
    def test_sequence_starts_at_floor(self) -> None:
        self.assertEqual(next_sequence_number(self.db, Order.order_number, 1000), 1000)

    def test_invoice_numbers_count_per_year(self) -> None:
        now = datetime(2024, 3, 1)
        self.assertEqual(generate_invoice_number(self.db, now), 'INV-2024-00001')

        user = self.make_user()
        office = self.make_office()
        order = Order(order_number=1000, office_id=office.id, status='Pending', version=1, created_by_id=user.id)
        self.db.add(order)
        self.db.flush()
        for number in ('INV-2024-00001', 'INV-2024-00007', 'INV-2023-00042'):
            self.db.add(
                Invoice(
                    invoice_number=number, order_id=order.id, date_issued=now, date_due=now,
                    subtotal=0, total=0,
                )
            )
        self.db.commit()

        self.assertEqual(generate_invoice_number(self.db, now), 'INV-2024-00008')
        self.assertEqual(generate_invoice_number(self.db, datetime(2025, 1, 2)), 'INV-2025-00001')


if __name__ == '__main__':
    unittest.main()
