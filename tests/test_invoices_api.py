from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

from printshop.email_service import EmailDeliveryError
from printshop.models_invoice import Invoice
from printshop.models_work import Order

from support import APITestCase


class InvoiceApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        office = self.make_office()
        response = self.client.post(
            '/orders',
            json={
                'officeId': office.id,
                'items': [
                    {'description': 'Flyers', 'quantity': 100, 'amount': 100, 'shippingAmount': 10},
                    {'description': 'Posters', 'quantity': 10, 'amount': 50},
                ],
            },
        )
        self.order = response.json()

    def create_invoice(self, total: float = 170.5) -> dict:
        response = self.client.post(
            '/invoices',
            json={
                'orderId': self.order['id'],
                'dateIssued': '2024-05-01T00:00:00',
                'dateDue': '2024-05-31T00:00:00',
                'subtotal': 160,
                'taxRate': 0.07,
                'taxAmount': 10.5,
                'total': total,
            },
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_invoice_moves_order_to_invoicing(self) -> None:
        invoice = self.create_invoice()

        self.assertRegex(invoice['invoiceNumber'], r'^INV-2\d{3}-00001$')
        self.assertEqual(invoice['status'], 'Draft')
        self.assertEqual(len(invoice['items']), 2)
        self.assertEqual(invoice['items'][0]['unitPrice'], 1.0)
        self.refresh()
        self.assertEqual(self.db.get(Order, self.order['id']).status, 'Invoicing')

    def test_invoice_for_unknown_order_is_not_found(self) -> None:
        response = self.client.post(
            '/invoices',
            json={'orderId': 999, 'dateIssued': '2024-05-01T00:00:00', 'dateDue': '2024-05-31T00:00:00',
                  'subtotal': 0, 'total': 0},
        )

        self.assertEqual(response.status_code, 404)

    def test_partial_payment_marks_invoice_sent(self) -> None:
        invoice = self.create_invoice()

        response = self.client.post(
            f"/invoices/{invoice['id']}/payments",
            json={'amount': 50, 'paymentDate': '2024-05-10T00:00:00', 'paymentMethod': 'Check'},
        )

        self.assertEqual(response.status_code, 201, response.text)
        self.refresh()
        self.assertEqual(self.db.get(Invoice, invoice['id']).status, 'Sent')

    def test_full_payment_marks_invoice_paid(self) -> None:
        invoice = self.create_invoice()

        for amount in (100, 70.5):
            self.client.post(
                f"/invoices/{invoice['id']}/payments",
                json={'amount': amount, 'paymentDate': '2024-05-10T00:00:00', 'paymentMethod': 'Cash'},
            )

        self.refresh()
        stored = self.db.get(Invoice, invoice['id'])
        self.assertEqual(stored.status, 'Paid')
        self.assertEqual(len(stored.payments), 2)

    def test_payment_must_be_positive(self) -> None:
        invoice = self.create_invoice()

        response = self.client.post(
            f"/invoices/{invoice['id']}/payments",
            json={'amount': 0, 'paymentDate': '2024-05-10T00:00:00', 'paymentMethod': 'Cash'},
        )

        self.assertEqual(response.status_code, 422)

    @patch('printshop.domain.invoices.service.send_invoice_email', new_callable=AsyncMock)
    def test_sending_invoice_attaches_pdf_and_marks_sent(self, send_mock) -> None:
        invoice = self.create_invoice()

        response = self.client.post(f"/invoices/{invoice['id']}/send", json={'recipientEmail': 'ap@example.com'})

        self.assertEqual(response.status_code, 200, response.text)
        kwargs = send_mock.await_args.kwargs
        self.assertEqual(kwargs['to'], 'ap@example.com')
        self.assertEqual(kwargs['invoice_number'], invoice['invoiceNumber'])
        self.assertTrue(kwargs['pdf'].startswith(b'%PDF'))
        self.refresh()
        self.assertEqual(self.db.get(Invoice, invoice['id']).status, 'Sent')

    @patch('printshop.domain.invoices.service.send_invoice_email', new_callable=AsyncMock)
    def test_failed_invoice_email_leaves_status(self, send_mock) -> None:
        send_mock.side_effect = EmailDeliveryError('Email service not configured')
        invoice = self.create_invoice()

        response = self.client.post(f"/invoices/{invoice['id']}/send", json={'recipientEmail': 'ap@example.com'})

        self.assertEqual(response.status_code, 500)
        self.refresh()
        self.assertEqual(self.db.get(Invoice, invoice['id']).status, 'Draft')


if __name__ == '__main__':
    unittest.main()
