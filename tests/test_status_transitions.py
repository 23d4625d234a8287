from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from fastapi import HTTPException

# Every mapper has to be registered before a model can be instantiated
from printshop import models_invoice, models_quickbooks, models_work  # noqa: F401
from printshop.services.status_transitions import apply_status_change, check_transition
from printshop.statuses import InvoiceStatus, OrderStatus, WorkOrderStatus


class CheckTransitionTests(unittest.TestCase):
    def test_work_order_pending_to_approved_is_allowed(self) -> None:
        result = check_transition('WorkOrder', WorkOrderStatus.PENDING, WorkOrderStatus.APPROVED)

        self.assertTrue(result.allowed)

    def test_work_order_draft_cannot_skip_to_approved(self) -> None:
        result = check_transition('WorkOrder', 'Draft', 'Approved')

        self.assertFalse(result.allowed)
        self.assertIn('Draft', result.reason)

    def test_payment_received_can_only_be_corrected_to_invoiced(self) -> None:
        self.assertTrue(check_transition('Order', OrderStatus.PAYMENT_RECEIVED, 'Invoiced').allowed)
        for target in ('Pending', 'Completed', 'Cancelled'):
            with self.subTest(target=target):
                self.assertFalse(check_transition('Order', OrderStatus.PAYMENT_RECEIVED, target).allowed)

    def test_invoiced_order_item_can_only_be_corrected_to_completed(self) -> None:
        self.assertTrue(check_transition('OrderItem', 'Invoiced', 'Completed').allowed)
        self.assertFalse(check_transition('OrderItem', 'Invoiced', 'Pending').allowed)

    def test_same_status_is_allowed(self) -> None:
        self.assertTrue(check_transition('Order', 'PaymentReceived', 'PaymentReceived').allowed)

    def test_unknown_target_is_denied(self) -> None:
        result = check_transition('Invoice', InvoiceStatus.DRAFT, 'Archived')

        self.assertFalse(result.allowed)
        self.assertIn('not a valid', result.reason)

    def test_unknown_current_status_may_move_anywhere(self) -> None:
        self.assertTrue(check_transition('Order', 'Legacy', 'Pending').allowed)

    def test_paid_invoice_can_only_return_to_sent(self) -> None:
        self.assertTrue(check_transition('Invoice', 'Paid', 'Sent').allowed)
        self.assertFalse(check_transition('Invoice', 'Paid', 'Draft').allowed)


class ApplyStatusChangeTests(unittest.TestCase):
    def test_allowed_change_sets_status_and_stages_audit_row(self) -> None:
        db = MagicMock()
        entity = SimpleNamespace(id=7, status='Pending')

        changed = apply_status_change(db, entity, 'Order', OrderStatus.SHIPPING, SimpleNamespace(id=3))

        self.assertTrue(changed)
        self.assertEqual(entity.status, 'Shipping')
        audit = db.add.call_args.args[0]
        self.assertEqual((audit.from_status, audit.to_status, audit.changed_by_id), ('Pending', 'Shipping', 3))
        db.commit.assert_not_called()

    def test_denied_change_raises_conflict_and_writes_nothing(self) -> None:
        db = MagicMock()
        entity = SimpleNamespace(id=7, status='PaymentReceived')

        with self.assertRaises(HTTPException) as ctx:
            apply_status_change(db, entity, 'Order', 'Pending')

        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(entity.status, 'PaymentReceived')
        db.add.assert_not_called()

    def test_same_status_is_a_no_op(self) -> None:
        db = MagicMock()
        entity = SimpleNamespace(id=1, status='Draft')

        self.assertFalse(apply_status_change(db, entity, 'WorkOrder', 'Draft'))
        db.add.assert_not_called()

    def test_cascaded_change_skips_the_table(self) -> None:
        db = MagicMock()
        item = SimpleNamespace(id=2, status='Invoiced')

        apply_status_change(db, item, 'OrderItem', 'Cancelled', enforce=False, cascaded=True)

        self.assertEqual(item.status, 'Cancelled')
        self.assertTrue(db.add.call_args.args[0].cascaded)

    def test_alternate_field(self) -> None:
        db = MagicMock()
        stock = SimpleNamespace(id=4, stock_status='OnHand')

        apply_status_change(db, stock, 'Stock', 'Ordered', field='stock_status')

        self.assertEqual(stock.stock_status, 'Ordered')

    def test_admin_override_writes_denied_move_and_flags_audit(self) -> None:
        db = MagicMock()
        order = SimpleNamespace(id=7, status='PaymentReceived')
        admin = SimpleNamespace(id=1, role_names=['Admin'])

        changed = apply_status_change(db, order, 'Order', 'Pending', admin, override=True)

        self.assertTrue(changed)
        self.assertEqual(order.status, 'Pending')
        audit = db.add.call_args.args[0]
        self.assertTrue(audit.overridden)
        self.assertEqual((audit.from_status, audit.changed_by_id), ('PaymentReceived', 1))

    def test_override_requires_admin(self) -> None:
        db = MagicMock()
        order = SimpleNamespace(id=7, status='PaymentReceived')
        clerk = SimpleNamespace(id=2, role_names=['Sales'])

        with self.assertRaises(HTTPException) as ctx:
            apply_status_change(db, order, 'Order', 'Pending', clerk, override=True)

        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(order.status, 'PaymentReceived')
        db.add.assert_not_called()

    def test_legal_move_with_override_is_not_flagged(self) -> None:
        db = MagicMock()
        order = SimpleNamespace(id=7, status='Pending')
        admin = SimpleNamespace(id=1, role_names=['Admin'])

        apply_status_change(db, order, 'Order', 'Shipping', admin, override=True)

        self.assertFalse(db.add.call_args.args[0].overridden)


if __name__ == '__main__':
    unittest.main()
