from __future__ import annotations

import base64
import unittest
from unittest.mock import patch

from printshop.email_service import EmailDeliveryError, pdf_attachment, send_invoice_email


class EmailServiceTests(unittest.IsolatedAsyncioTestCase):
    def test_pdf_attachment_encodes_bytes_once(self) -> None:
        encoded = pdf_attachment('a.pdf', b'%PDF-1.4')['content']

        self.assertEqual(base64.b64decode(encoded), b'%PDF-1.4')
        self.assertEqual(pdf_attachment('a.pdf', encoded)['content'], encoded)

    @patch('printshop.email_service.RESEND_API_KEY', 're_test')
    @patch('printshop.email_service.resend.Emails.send')
    async def test_invoice_email_carries_pdf(self, send_mock) -> None:
        send_mock.return_value = {'id': 'email-1'}

        result = await send_invoice_email(
            to='ap@example.com',
            invoice_number='INV-2024-00001',
            company_name='Acme Printing',
            total=117.0,
            balance_due=17.0,
            due_date='05/31/2024',
            pdf=b'%PDF-1.4',
        )

        self.assertEqual(result, {'id': 'email-1'})
        payload = send_mock.call_args.args[0]
        self.assertEqual(payload['to'], ['ap@example.com'])
        self.assertEqual(payload['subject'], 'Invoice INV-2024-00001 from Acme Printing')
        self.assertIn('INV-2024-00001', payload['html'])
        self.assertEqual(payload['attachments'][0]['filename'], 'INV-2024-00001.pdf')

    @patch('printshop.email_service.RESEND_API_KEY', None)
    @patch('printshop.email_service.resend.Emails.send')
    async def test_unconfigured_provider_raises(self, send_mock) -> None:
        with self.assertRaises(EmailDeliveryError):
            await send_invoice_email('ap@example.com', 'INV-2024-00001', 'Acme', 1.0, 1.0, '', b'%PDF')

        send_mock.assert_not_called()


if __name__ == '__main__':
    unittest.main()
