from __future__ import annotations

import unittest

from printshop.models import StatusChange
from printshop.models_work import Order, WorkOrder

from support import APITestCase


class WorkOrderApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.office = self.make_office()

    def create_work_order(self, **overrides) -> dict:
        payload = {
            'officeId': self.office.id,
            'description': 'Spring catalog',
            'purchaseOrderNumber': 'PO-77',
            'items': [
                {'description': 'Catalog', 'quantity': 500, 'cost': 400, 'amount': 900, 'shippingAmount': 25},
                {'description': 'Envelopes', 'quantity': 500, 'cost': 60, 'amount': 120},
            ],
        }
        payload.update(overrides)
        response = self.client.post('/work-orders', json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_new_work_orders_are_numbered_from_the_floor(self) -> None:
        first = self.create_work_order()
        second = self.create_work_order()

        self.assertEqual(first['workOrderNumber'], 1000)
        self.assertEqual(second['workOrderNumber'], 1001)
        self.assertEqual(first['status'], 'Draft')
        self.assertEqual(len(first['items']), 2)

    def test_status_change_leaves_other_fields_alone(self) -> None:
        work_order = self.create_work_order(status='Pending')

        response = self.client.patch(f"/work-orders/{work_order['id']}/status", json={'status': 'Approved'})

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body['status'], 'Approved')
        for field in ('workOrderNumber', 'officeId', 'description', 'purchaseOrderNumber', 'version'):
            self.assertEqual(body[field], work_order[field])

        self.refresh()
        audit = self.db.query(StatusChange).filter(StatusChange.entity_type == 'WorkOrder').one()
        self.assertEqual((audit.from_status, audit.to_status), ('Pending', 'Approved'))
        self.assertEqual(audit.changed_by_id, self.user_id)

    def test_illegal_status_change_conflicts(self) -> None:
        work_order = self.create_work_order()

        response = self.client.patch(f"/work-orders/{work_order['id']}/status", json={'status': 'Approved'})

        self.assertEqual(response.status_code, 409)
        self.refresh()
        self.assertEqual(self.db.get(WorkOrder, work_order['id']).status, 'Draft')

    def test_invalid_status_value_is_rejected_without_a_write(self) -> None:
        work_order = self.create_work_order()

        response = self.client.patch(f"/work-orders/{work_order['id']}/status", json={'status': 'Shipped'})

        self.assertEqual(response.status_code, 422)
        self.refresh()
        self.assertEqual(self.db.query(StatusChange).count(), 0)

    def test_convert_copies_items_into_a_pending_order(self) -> None:
        work_order = self.create_work_order()

        response = self.client.post(f"/work-orders/{work_order['id']}/convert")

        self.assertEqual(response.status_code, 201, response.text)
        order = response.json()
        self.assertEqual(order['orderNumber'], 1000)
        self.assertEqual(order['status'], 'Pending')
        self.assertEqual(order['workOrderId'], work_order['id'])
        self.assertEqual(order['purchaseOrderNumber'], 'PO-77')
        self.assertEqual([i['description'] for i in order['items']], ['Catalog', 'Envelopes'])
        self.assertTrue(all(i['status'] == 'Pending' for i in order['items']))
        self.assertEqual(order['totalItemAmount'], 1020.0)
        self.assertEqual(order['totalShippingAmount'], 25.0)

        self.refresh()
        self.assertEqual(self.db.get(WorkOrder, work_order['id']).order_id, order['id'])

    def test_work_order_converts_only_once(self) -> None:
        work_order = self.create_work_order()
        self.client.post(f"/work-orders/{work_order['id']}/convert")

        response = self.client.post(f"/work-orders/{work_order['id']}/convert")

        self.assertEqual(response.status_code, 409)
        self.refresh()
        self.assertEqual(self.db.query(Order).count(), 1)

    def test_unknown_work_order_is_not_found(self) -> None:
        self.assertEqual(self.client.get('/work-orders/999').status_code, 404)


class OrderApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.office = self.make_office()

    def create_order(self) -> dict:
        response = self.client.post(
            '/orders',
            json={
                'officeId': self.office.id,
                'description': 'Business cards',
                'items': [
                    {'description': 'Cards', 'quantity': 1000, 'cost': 30, 'amount': 100, 'shippingAmount': 10},
                ],
            },
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_order_reports_derived_totals(self) -> None:
        order = self.create_order()

        self.assertEqual(order['calculatedSubTotal'], 110.0)
        self.assertEqual(order['calculatedSalesTax'], 7.0)
        self.assertEqual(order['totalAmount'], 117.0)
        self.assertEqual(order['balance'], 117.0)

    def test_duplicate_creates_a_new_pending_order(self) -> None:
        source = self.create_order()
        self.client.patch(f"/orders/{source['id']}/status", json={'status': 'Shipping'})

        response = self.client.post(f"/orders/{source['id']}/duplicate")

        self.assertEqual(response.status_code, 201, response.text)
        copy = response.json()
        self.assertNotEqual(copy['id'], source['id'])
        self.assertEqual(copy['orderNumber'], source['orderNumber'] + 1)
        self.assertEqual(copy['status'], 'Pending')
        self.assertEqual([i['description'] for i in copy['items']], ['Cards'])
        self.assertEqual(copy['totalAmount'], source['totalAmount'])

    def test_status_change_is_read_back(self) -> None:
        order = self.create_order()

        self.client.patch(f"/orders/{order['id']}/status", json={'status': 'Shipping'})
        response = self.client.get(f"/orders/{order['id']}")

        self.assertEqual(response.json()['status'], 'Shipping')

    def test_cancelling_an_order_cascades_to_items(self) -> None:
        order = self.create_order()

        response = self.client.patch(f"/orders/{order['id']}/status", json={'status': 'Cancelled'})

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual([i['status'] for i in response.json()['items']], ['Cancelled'])
        self.refresh()
        cascaded = self.db.query(StatusChange).filter(StatusChange.entity_type == 'OrderItem').one()
        self.assertTrue(cascaded.cascaded)

    def test_invalid_order_status_is_rejected(self) -> None:
        order = self.create_order()

        response = self.client.patch(f"/orders/{order['id']}/status", json={'status': 'Lost'})

        self.assertEqual(response.status_code, 422)
        self.refresh()
        self.assertEqual(self.db.get(Order, order['id']).status, 'Pending')


if __name__ == '__main__':
    unittest.main()
