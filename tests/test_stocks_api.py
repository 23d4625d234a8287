from __future__ import annotations

import unittest

from printshop.models import StatusChange
from printshop.models_work import Order, OrderItem, OrderItemStock, WorkOrder, WorkOrderItem

from support import APITestCase


class OrderItemStockApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        office = self.make_office()
        order = Order(order_number=1000, office_id=office.id, status='Pending', version=1)
        order.items = [OrderItem(description='Rack cards', quantity=5000, status='Pending')]
        self.db.add(order)
        self.db.commit()
        self.item_id = order.items[0].id

    def create_stock(self, **fields) -> dict:
        response = self.client.post(
            '/order-item-stocks', json={'orderItemId': self.item_id, 'stockQty': 20, 'supplier': 'Veritiv', **fields}
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_new_stock_defaults_to_on_hand(self) -> None:
        stock = self.create_stock()

        self.assertEqual(stock['stockStatus'], 'OnHand')
        self.assertEqual(stock['orderItemId'], self.item_id)
        self.assertFalse(stock['received'])

    def test_stock_for_unknown_item_is_not_found(self) -> None:
        response = self.client.post('/order-item-stocks', json={'orderItemId': 999})

        self.assertEqual(response.status_code, 404)

    def test_ordered_stock_is_received_through_the_table(self) -> None:
        stock = self.create_stock()
        url = f"/order-item-stocks/{stock['id']}"

        ordered = self.client.put(url, json={'stockStatus': 'Ordered'})
        received = self.client.put(url, json={'stockStatus': 'Received'})

        self.assertEqual(ordered.json()['stockStatus'], 'Ordered')
        body = received.json()
        self.assertEqual(body['stockStatus'], 'Received')
        self.assertTrue(body['received'])
        self.assertIsNotNone(body['receivedDate'])
        self.refresh()
        audit = self.db.query(StatusChange).filter(StatusChange.entity_type == 'Stock').order_by(StatusChange.id).all()
        self.assertEqual([(a.from_status, a.to_status) for a in audit], [('OnHand', 'Ordered'), ('Ordered', 'Received')])

    def test_illegal_stock_move_conflicts_without_writing(self) -> None:
        stock = self.create_stock()

        response = self.client.put(
            f"/order-item-stocks/{stock['id']}", json={'stockStatus': 'Received', 'stockQty': 40}
        )

        self.assertEqual(response.status_code, 409)
        self.refresh()
        stored = self.db.get(OrderItemStock, stock['id'])
        self.assertEqual((stored.stock_status, stored.stock_qty), ('OnHand', 20))

    def test_unknown_stock_status_is_rejected(self) -> None:
        stock = self.create_stock()

        response = self.client.put(f"/order-item-stocks/{stock['id']}", json={'stockStatus': 'Lost'})

        self.assertEqual(response.status_code, 422)

    def test_list_and_delete(self) -> None:
        first = self.create_stock()
        self.create_stock(supplier='Lindenmeyr')

        listed = self.client.get(f'/order-item-stocks/order-item/{self.item_id}').json()
        deleted = self.client.delete(f"/order-item-stocks/{first['id']}")

        self.assertEqual([s['supplier'] for s in listed], ['Veritiv', 'Lindenmeyr'])
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(self.client.get(f"/order-item-stocks/{first['id']}").status_code, 404)


class WorkOrderItemStockApiTests(APITestCase):
    def test_stock_created_received_is_marked_received(self) -> None:
        office = self.make_office()
        work_order = WorkOrder(work_order_number=1000, office_id=office.id, status='Draft', version=1)
        work_order.items = [WorkOrderItem(description='Envelopes', quantity=500, status='Draft')]
        self.db.add(work_order)
        self.db.commit()
        item_id = work_order.items[0].id

        response = self.client.post(
            '/work-order-item-stocks', json={'workOrderItemId': item_id, 'stockStatus': 'Received'}
        )

        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual((body['workOrderItemId'], body['stockStatus'], body['received']), (item_id, 'Received', True))
        listed = self.client.get(f'/work-order-item-stocks/work-order-item/{item_id}').json()
        self.assertEqual([s['id'] for s in listed], [body['id']])


if __name__ == '__main__':
    unittest.main()
