from __future__ import annotations

import unittest

from printshop.models import Company
from printshop.statuses import RoleName

from support import APITestCase


class CompanyApiTests(APITestCase):
    def test_create_company_returns_camel_case(self) -> None:
        response = self.client.post('/companies', json={'name': 'Acme Printing', 'quickbooksId': 'QB-1'})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['name'], 'Acme Printing')
        self.assertEqual(body['quickbooksId'], 'QB-1')
        self.assertTrue(body['isActive'])

    def test_duplicate_quickbooks_id_conflicts(self) -> None:
        self.client.post('/companies', json={'name': 'Acme Printing', 'quickbooksId': 'QB-1'})

        response = self.client.post('/companies', json={'name': 'Other', 'quickbooksId': 'QB-1'})

        self.assertEqual(response.status_code, 409)
        self.refresh()
        self.assertEqual(self.db.query(Company).filter(Company.quickbooks_id == 'QB-1').count(), 1)

    def test_blank_name_is_rejected(self) -> None:
        response = self.client.post('/companies', json={'name': '   '})

        self.assertEqual(response.status_code, 422)

    def test_search_needs_three_characters(self) -> None:
        self.client.post('/companies', json={'name': 'Acme Printing'})
        self.client.post('/companies', json={'name': 'Blue Ridge Press'})

        short = self.client.get('/companies/search', params={'searchTerm': 'ac'})
        found = self.client.get('/companies/search', params={'searchTerm': 'acm'})

        self.assertEqual(short.json(), [])
        self.assertEqual([c['name'] for c in found.json()], ['Acme Printing'])


class OfficePermissionTests(APITestCase):
    user_roles = (RoleName.BINDERY,)

    def test_listing_offices_requires_office_read(self) -> None:
        response = self.client.get('/offices')

        self.assertEqual(response.status_code, 403)


class CustomerOfficeTests(APITestCase):
    user_roles = (RoleName.CUSTOMER,)

    def test_customer_can_list_offices(self) -> None:
        self.make_office()

        response = self.client.get('/offices')

        self.assertEqual(response.status_code, 200)
        self.assertEqual([o['name'] for o in response.json()], ['Main Office'])


if __name__ == '__main__':
    unittest.main()
