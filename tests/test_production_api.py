from __future__ import annotations

import unittest

from printshop.models import StatusChange
from printshop.models_work import Order, OrderItem

from support import APITestCase


class TypesettingApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        office = self.make_office()
        order = Order(order_number=1000, office_id=office.id, status='Pending', version=1)
        order.items = [OrderItem(description='Letterhead', quantity=500, status='Pending')]
        self.db.add(order)
        self.db.commit()
        self.order_item_id = order.items[0].id

    def create_typesetting(self) -> dict:
        response = self.client.post('/typesetting', json={'orderItemId': self.order_item_id, 'plateRan': 'P-12'})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_typesetting_needs_exactly_one_parent(self) -> None:
        neither = self.client.post('/typesetting', json={})
        both = self.client.post('/typesetting', json={'orderItemId': self.order_item_id, 'workOrderItemId': 1})

        self.assertEqual(neither.status_code, 400)
        self.assertEqual(both.status_code, 400)

    def test_typesetting_starts_in_progress(self) -> None:
        typesetting = self.create_typesetting()

        self.assertEqual(typesetting['status'], 'InProgress')
        self.assertEqual(typesetting['orderItemId'], self.order_item_id)
        self.assertEqual(typesetting['plateRan'], 'P-12')

    def test_typesetting_status_follows_the_table(self) -> None:
        typesetting = self.create_typesetting()
        url = f"/typesetting/{typesetting['id']}/status"

        skipped = self.client.patch(url, json={'status': 'Complete'})
        approved = self.client.patch(url, json={'status': 'Approved'})

        self.assertEqual(skipped.status_code, 409)
        self.assertEqual(approved.json()['status'], 'Approved')
        self.refresh()
        self.assertEqual(self.db.query(StatusChange).filter(StatusChange.entity_type == 'Typesetting').count(), 1)

    def test_options_attach_to_typesetting(self) -> None:
        typesetting = self.create_typesetting()

        response = self.client.post(
            '/typesetting-options', json={'typesettingId': typesetting['id'], 'option': 'Bleed', 'selected': True}
        )

        self.assertEqual(response.status_code, 201, response.text)
        detail = self.client.get(f"/typesetting/{typesetting['id']}").json()
        self.assertEqual([o['option'] for o in detail['options']], ['Bleed'])


class CatalogApiTests(APITestCase):
    def test_blank_dimensions_are_stored_as_zero(self) -> None:
        response = self.client.post('/paper-products', json={'brand': 'Cougar', 'paperType': 'Cover', 'size': '11x17'})

        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertRegex(body['referenceId'], r'^custom-\d{13}$')
        self.assertEqual((body['width'], body['height'], body['mWeight'], body['sheetsPerUnit']), (0, 0, 0, 0))
        self.assertIsNone(body['caliper'])

    def test_product_types_are_listed_by_name(self) -> None:
        for name in ('Postcards', 'Banners', 'Envelopes'):
            self.client.post('/product-types', json={'name': name})

        names = [p['name'] for p in self.client.get('/product-types').json()]

        self.assertEqual(names, ['Banners', 'Envelopes', 'Postcards'])


if __name__ == '__main__':
    unittest.main()
