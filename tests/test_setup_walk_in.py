from __future__ import annotations

import unittest

from printshop.models import Company, Office
from printshop.scripts.setup_walk_in import (
    WALK_IN_OFFICE_NAME,
    WalkInSetupError,
    setup_walk_in_office,
)
from printshop.statuses import RoleName

from support import DatabaseTestCase


class SetupWalkInTests(DatabaseTestCase):
    def test_requires_an_admin(self) -> None:
        self.make_user('clerk@example.com', roles=(RoleName.SALES,))

        with self.assertRaises(WalkInSetupError):
            setup_walk_in_office(self.db)

    def test_creates_walk_in_office_once(self) -> None:
        admin = self.make_user()

        first = setup_walk_in_office(self.db)
        second = setup_walk_in_office(self.db)

        self.assertEqual(first.id, second.id)
        self.assertEqual(first.name, WALK_IN_OFFICE_NAME)
        self.assertTrue(first.is_walk_in_office)
        self.assertEqual(first.created_by_id, admin.id)
        self.assertEqual(self.db.query(Office).count(), 1)
        self.assertEqual(self.db.query(Company).count(), 1)


if __name__ == '__main__':
    unittest.main()
