from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

from printshop.email_service import EmailDeliveryError
from printshop.models import StatusChange
from printshop.models_work import Order
from printshop.statuses import RoleName

from support import APITestCase


class OrderStatusTestCase(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        office = self.make_office()
        response = self.client.post(
            '/orders',
            json={
                'officeId': office.id,
                'contactPersonId': self.user_id,
                'items': [{'description': 'Door hangers', 'quantity': 2500, 'amount': 300}],
            },
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.order = response.json()
        self.url = f"/orders/{self.order['id']}/status"

    def set_status(self, status: str) -> None:
        self.db.get(Order, self.order['id']).status = status
        self.db.commit()


class OrderStatusCorrectionTests(OrderStatusTestCase):
    def test_payment_received_is_corrected_back_to_invoiced(self) -> None:
        self.set_status('PaymentReceived')

        response = self.client.patch(self.url, json={'status': 'Invoiced'})

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()['status'], 'Invoiced')

    def test_admin_override_moves_order_out_of_payment_received(self) -> None:
        self.set_status('PaymentReceived')

        denied = self.client.patch(self.url, json={'status': 'Pending'})
        forced = self.client.patch(self.url, json={'status': 'Pending', 'override': True})

        self.assertEqual(denied.status_code, 409)
        self.assertEqual(forced.status_code, 200, forced.text)
        self.assertEqual(forced.json()['status'], 'Pending')
        self.refresh()
        audit = self.db.query(StatusChange).filter(StatusChange.entity_type == 'Order').one()
        self.assertEqual((audit.from_status, audit.to_status, audit.overridden), ('PaymentReceived', 'Pending', True))

    def test_admin_override_frees_invoiced_item(self) -> None:
        self.set_status('Invoicing')
        self.client.patch(self.url, json={'status': 'Invoiced'})
        item_url = f"/order-items/{self.order['items'][0]['id']}/status"

        denied = self.client.patch(item_url, json={'status': 'Press'})
        forced = self.client.patch(item_url, json={'status': 'Press', 'override': True})

        self.assertEqual(denied.status_code, 409)
        self.assertEqual(forced.json()['status'], 'Press')


class ManagerOverrideTests(OrderStatusTestCase):
    user_roles = (RoleName.MANAGER,)

    def test_override_is_forbidden_without_admin(self) -> None:
        self.set_status('PaymentReceived')

        response = self.client.patch(self.url, json={'status': 'Pending', 'override': True})

        self.assertEqual(response.status_code, 403)
        self.refresh()
        self.assertEqual(self.db.get(Order, self.order['id']).status, 'PaymentReceived')


class OrderStatusEmailTests(OrderStatusTestCase):
    @patch('printshop.domain.orders.service.send_order_status_email', new_callable=AsyncMock)
    def test_status_email_goes_to_contact_person(self, send_mock) -> None:
        response = self.client.patch(self.url, json={'status': 'Shipping', 'sendEmail': True})

        self.assertEqual(response.status_code, 200, response.text)
        kwargs = send_mock.await_args.kwargs
        self.assertEqual(kwargs['to'], 'admin@example.com')
        self.assertEqual(kwargs['order_number'], self.order['orderNumber'])
        self.assertEqual(kwargs['status'], 'Shipping')

    @patch('printshop.domain.orders.service.send_order_status_email', new_callable=AsyncMock)
    def test_email_override_and_shipping_details(self, send_mock) -> None:
        response = self.client.patch(
            self.url,
            json={
                'status': 'Shipping',
                'sendEmail': True,
                'emailOverride': 'receiving@example.com',
                'shippingDetails': {'trackingNumber': ['1Z999'], 'shippingMethod': 'UPS'},
            },
        )

        self.assertEqual(response.status_code, 200, response.text)
        shipping = response.json()['shippingInfo']
        self.assertEqual((shipping['trackingNumber'], shipping['shippingMethod']), (['1Z999'], 'UPS'))
        kwargs = send_mock.await_args.kwargs
        self.assertEqual(kwargs['to'], 'receiving@example.com')
        self.assertEqual((kwargs['tracking_numbers'], kwargs['shipping_method']), (['1Z999'], 'UPS'))

    @patch('printshop.domain.orders.service.send_order_status_email', new_callable=AsyncMock)
    def test_no_email_unless_requested(self, send_mock) -> None:
        self.client.patch(self.url, json={'status': 'Shipping'})

        send_mock.assert_not_awaited()

    @patch('printshop.domain.orders.service.send_order_status_email', new_callable=AsyncMock)
    def test_email_failure_keeps_the_status_write(self, send_mock) -> None:
        send_mock.side_effect = EmailDeliveryError('Email service not configured')

        response = self.client.patch(self.url, json={'status': 'Shipping', 'sendEmail': True})

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()['status'], 'Shipping')
        self.refresh()
        self.assertEqual(self.db.get(Order, self.order['id']).status, 'Shipping')

    @patch('printshop.domain.orders.service.send_job_status_email', new_callable=AsyncMock)
    def test_item_status_email_describes_the_job(self, send_mock) -> None:
        item_id = self.order['items'][0]['id']

        response = self.client.patch(
            f'/order-items/{item_id}/status', json={'status': 'Press', 'sendEmail': True}
        )

        self.assertEqual(response.status_code, 200, response.text)
        kwargs = send_mock.await_args.kwargs
        self.assertEqual((kwargs['to'], kwargs['description'], kwargs['status']), ('admin@example.com', 'Door hangers', 'Press'))


if __name__ == '__main__':
    unittest.main()
