from __future__ import annotations

import unittest
from datetime import datetime
from unittest.mock import AsyncMock, patch

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from printshop.domain.integrations.quickbooks.client import QuickBooksAPIError, QuickBooksClient
from printshop.domain.integrations.quickbooks.invoice_service import (
    InvoiceSyncFailed,
    QuickBooksInvoiceService,
    invoice_payload,
)
from printshop.models_invoice import Invoice, InvoiceItem
from printshop.models_quickbooks import InvoiceSync, QuickBooksSyncLog
from printshop.models_work import Order, OrderItem

from support import DatabaseTestCase

REMOTE_INVOICE = {'Invoice': {'Id': '55', 'SyncToken': '0'}}


class InvoiceSyncTests(DatabaseTestCase, unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_user()
        self.user.quickbooks_realm_id = 'realm-1'
        office = self.make_office(quickbooks_customer_id='QB-CUST-9')
        self.order = Order(order_number=1000, office_id=office.id, status='Pending', version=1)
        self.order.items = [
            OrderItem(description='Brochures', quantity=250, amount=500, shipping_amount=20, status='Pending'),
        ]
        self.db.add(self.order)
        self.db.commit()
        self.service = QuickBooksInvoiceService(self.db)

    def remote_created_sync(self) -> InvoiceSync:
        now = datetime(2024, 6, 1)
        invoice = Invoice(
            invoice_number='INV-2024-00001', order_id=self.order.id, date_issued=now, date_due=now,
            subtotal=520, total=555, status='Draft',
        )
        invoice.items = [InvoiceItem(description='Brochures', quantity=250, unit_price=2, total=500)]
        sync = InvoiceSync(
            invoice=invoice, state='remote_created', attempts=1, quickbooks_invoice_id='77', sync_token='3'
        )
        self.db.add(sync)
        self.db.commit()
        return sync

    def failing_first_commit(self):
        real_commit = self.db.commit
        calls = []

        def commit():
            calls.append(1)
            if len(calls) == 1:
                raise SQLAlchemyError('link write failed')
            real_commit()

        return commit

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_invoice_from_order_is_synced(self, post_json_mock) -> None:
        post_json_mock.return_value = REMOTE_INVOICE

        sync = await self.service.create_from_order(self.order.id, self.user)

        self.assertEqual(sync.state, 'synced')
        self.assertEqual(sync.attempts, 1)
        self.assertEqual(sync.invoice.quickbooks_id, '55')
        self.assertEqual(self.order.quickbooks_invoice_id, '55')
        self.assertEqual(self.order.status, 'Invoicing')

        path, payload = post_json_mock.await_args.args
        self.assertEqual(path, 'invoice')
        self.assertEqual(payload['CustomerRef'], {'value': 'QB-CUST-9'})
        self.assertEqual(payload['DocNumber'], sync.invoice.invoice_number)
        self.assertEqual([line['Amount'] for line in payload['Line']], [500])

        log = self.db.query(QuickBooksSyncLog).one()
        self.assertEqual((log.sync_type, log.status, log.quickbooks_id), ('invoice', 'success', '55'))

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_remote_failure_keeps_local_invoice_for_retry(self, post_json_mock) -> None:
        post_json_mock.side_effect = QuickBooksAPIError('QuickBooks API error: 400', 400)

        with self.assertRaises(HTTPException) as ctx:
            await self.service.create_from_order(self.order.id, self.user)

        self.assertEqual(ctx.exception.status_code, 500)
        sync = self.db.query(InvoiceSync).one()
        self.assertEqual(sync.state, 'failed')
        self.assertIn('400', sync.last_error)
        self.assertIsNone(sync.invoice.quickbooks_id)
        self.assertEqual(self.db.query(QuickBooksSyncLog).one().status, 'failed')

        post_json_mock.side_effect = None
        post_json_mock.return_value = REMOTE_INVOICE
        counts = await self.service.reconcile(self.user)

        self.assertEqual(counts, {'retried': 1, 'synced': 1, 'failed': 0})
        self.assertEqual(sync.state, 'synced')
        self.assertEqual(sync.attempts, 2)

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_failed_link_deletes_remote_invoice(self, post_json_mock) -> None:
        sync = self.remote_created_sync()
        post_json_mock.return_value = {}

        with patch.object(self.db, 'commit', side_effect=self.failing_first_commit()):
            with self.assertRaises(InvoiceSyncFailed):
                await self.service.run_saga(sync, self.user)

        post_json_mock.assert_awaited_once_with(
            'invoice', {'Id': '77', 'SyncToken': '3'}, params={'operation': 'delete'}
        )
        self.db.expire_all()
        self.assertEqual(sync.state, 'compensated')
        self.assertIn('link write failed', sync.last_error)
        self.assertIsNone(sync.invoice.quickbooks_id)

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_failed_compensation_stays_remote_created(self, post_json_mock) -> None:
        sync = self.remote_created_sync()
        post_json_mock.side_effect = QuickBooksAPIError('QuickBooks API error: 503', 503)

        with patch.object(self.db, 'commit', side_effect=self.failing_first_commit()):
            with self.assertRaises(InvoiceSyncFailed):
                await self.service.run_saga(sync, self.user)

        self.db.expire_all()
        self.assertEqual(sync.state, 'remote_created')
        self.assertIn('compensation failed', sync.last_error)

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_remote_created_saga_only_repeats_the_link(self, post_json_mock) -> None:
        sync = self.remote_created_sync()

        await self.service.run_saga(sync, self.user)

        post_json_mock.assert_not_awaited()
        self.assertEqual(sync.state, 'synced')
        self.assertEqual(sync.invoice.quickbooks_id, '77')

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    async def test_reconcile_links_remote_created_invoice(self, post_json_mock) -> None:
        sync = self.remote_created_sync()

        counts = await self.service.reconcile(self.user)

        self.assertEqual(counts, {'retried': 1, 'synced': 1, 'failed': 0})
        post_json_mock.assert_not_awaited()
        self.db.expire_all()
        self.assertEqual(sync.state, 'synced')
        self.assertEqual(sync.attempts, 1)
        self.assertEqual(self.order.quickbooks_invoice_id, '77')

    async def test_unlinked_office_is_rejected(self) -> None:
        self.order.office.quickbooks_customer_id = None
        self.db.commit()

        with self.assertRaises(HTTPException) as ctx:
            await self.service.create_from_order(self.order.id, self.user)

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.db.query(Invoice).count(), 0)


class InvoicePayloadTests(unittest.TestCase):
    def test_payload_dates_and_lines(self) -> None:
        invoice = Invoice(
            invoice_number='INV-2024-00003',
            date_issued=datetime(2024, 6, 1),
            date_due=datetime(2024, 7, 1),
        )
        invoice.items = [InvoiceItem(description='Cards', quantity=100, unit_price=0.5, total=50)]
        invoice.order = Order(order_number=1)

        payload = invoice_payload(invoice)

        self.assertEqual(payload['TxnDate'], '2024-06-01')
        self.assertEqual(payload['DueDate'], '2024-07-01')
        self.assertEqual(payload['CustomerRef'], {'value': None})
        self.assertEqual(
            payload['Line'][0]['SalesItemLineDetail'], {'Qty': 100, 'UnitPrice': 0.5}
        )


if __name__ == '__main__':
    unittest.main()
