from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from printshop.models_work import WorkOrder, WorkOrderItem, WorkOrderItemArtwork
from printshop.routes.upload import is_allowed

from support import APITestCase


class AllowListTests(unittest.TestCase):
    def test_declared_type_or_extension_admits_a_file(self) -> None:
        self.assertTrue(is_allowed('application/pdf', 'proof'))
        self.assertTrue(is_allowed('application/octet-stream', 'cover.PSD'))
        self.assertFalse(is_allowed('text/plain', 'notes.txt'))
        self.assertFalse(is_allowed(None, None))


class UploadApiTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.tmp = tempfile.TemporaryDirectory()
        patcher = patch('printshop.routes.upload.UPLOAD_DIR', self.tmp.name)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.tmp.cleanup)

    def test_upload_stores_file_and_attaches_artwork(self) -> None:
        office = self.make_office()
        work_order = WorkOrder(work_order_number=1000, office_id=office.id, status='Draft', version=1)
        work_order.items = [WorkOrderItem(description='Logo', status='Draft')]
        self.db.add(work_order)
        self.db.commit()
        item_id = work_order.items[0].id

        response = self.client.post(
            '/upload',
            files={'file': ('logo.png', b'\x89PNG data', 'image/png')},
            data={'workOrderItemId': str(item_id)},
        )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertTrue(body['fileUrl'].endswith('.png'))
        stored = list(Path(self.tmp.name).iterdir())
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0].read_bytes(), b'\x89PNG data')

        self.refresh()
        artwork = self.db.query(WorkOrderItemArtwork).one()
        self.assertEqual((artwork.work_order_item_id, artwork.file_url), (item_id, body['fileUrl']))

    def test_missing_file_is_rejected(self) -> None:
        response = self.client.post('/upload', data={'workOrderItemId': '1'})

        self.assertEqual(response.status_code, 400)

    def test_disallowed_type_is_rejected(self) -> None:
        response = self.client.post('/upload', files={'file': ('run.sh', b'echo', 'text/x-shellscript')})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])

    def test_unknown_work_order_item_is_not_found(self) -> None:
        response = self.client.post(
            '/upload',
            files={'file': ('proof.pdf', b'%PDF', 'application/pdf')},
            data={'workOrderItemId': '404'},
        )

        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
