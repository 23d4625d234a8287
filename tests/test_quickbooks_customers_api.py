from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

import httpx

from printshop.domain.integrations.quickbooks.client import QuickBooksAPIError, QuickBooksClient
from printshop.models import Address, Company, Office, User
from printshop.models_quickbooks import QuickBooksSyncLog

from support import APITestCase

BILL_ADDR = {
    'line1': '12 Mill St',
    'city': 'Lowell',
    'country': 'USA',
    'countrySubDivisionCode': 'MA',
    'postalCode': '01852',
}

HARBOR = {
    'Id': '101',
    'SyncToken': '2',
    'DisplayName': 'Harbor Dental',
    'CompanyName': 'Harbor Dental Group',
    'GivenName': 'Ana',
    'FamilyName': 'Ruiz',
    'PrimaryEmailAddr': {'Address': 'ana@harbordental.com'},
    'PrimaryPhone': {'FreeFormNumber': '555-0100'},
    'BillAddr': {'Line1': '1 Pier Rd', 'City': 'Salem', 'CountrySubDivisionCode': 'MA', 'PostalCode': '01970'},
}
ELM = {'Id': '102', 'DisplayName': 'Elm Street Books'}
QUARRY = {'Id': '103', 'DisplayName': 'Quarry Gym', 'PrimaryEmailAddr': {'Address': 'ops@quarrygym.com'}}

COUNT_XML = (
    b'<IntuitResponse xmlns="http://schema.intuit.com/finance/v3">'
    b'<QueryResponse totalCount="3"/></IntuitResponse>'
)


def quickbooks_pages(method, path, params=None, json=None, accept='application/json'):
    """Answer the COUNT query in XML and page customers two at a time"""
    statement = params['query']
    if accept == 'application/xml':
        return httpx.Response(200, content=COUNT_XML)
    customers = [HARBOR, ELM] if 'STARTPOSITION 1 ' in statement else [QUARRY]
    return httpx.Response(200, json={'QueryResponse': {'Customer': customers}})


class CustomerPushTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user.quickbooks_realm_id = 'realm-1'
        self.db.commit()

    def linked_company(self) -> Company:
        company = Company(name='Acme Printing', quickbooks_id='42', sync_token='5')
        company.offices = [Office(name='Annex', deleted=True), Office(name='Main')]
        self.db.add(company)
        self.db.commit()
        return company

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_create_customer_links_company_and_office(self, post_json_mock) -> None:
        post_json_mock.return_value = {
            'Customer': {
                'Id': '42',
                'SyncToken': '0',
                'CompanyName': 'Blue Heron Cafe',
                'BillAddr': {'Line1': '12 Mill St', 'City': 'Lowell', 'CountrySubDivisionCode': 'MA',
                             'PostalCode': '01852', 'Country': 'USA'},
            }
        }

        response = self.client.post(
            '/quickbooks/customers',
            json={'companyName': 'Blue Heron Cafe', 'officeName': 'Downtown', 'billAddr': BILL_ADDR,
                  'email': 'owner@blueheron.com'},
        )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body['company']['quickbooksId'], '42')
        self.assertEqual(body['office']['quickbooksCustomerId'], '42')
        self.assertEqual([a['line1'] for a in body['office']['addresses']], ['12 Mill St'])
        path, payload = post_json_mock.await_args.args
        self.assertEqual(path, 'customer')
        self.assertEqual(payload['PrimaryEmailAddr'], {'Address': 'owner@blueheron.com'})
        self.assertEqual(payload['BillAddr']['CountrySubDivisionCode'], 'MA')
        self.refresh()
        self.assertEqual(self.db.query(QuickBooksSyncLog).one().status, 'success')

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_failed_create_is_logged_and_saves_nothing(self, post_json_mock) -> None:
        post_json_mock.side_effect = QuickBooksAPIError('Duplicate Name Exists Error', 400)

        response = self.client.post(
            '/quickbooks/customers',
            json={'companyName': 'Blue Heron Cafe', 'officeName': 'Downtown', 'billAddr': BILL_ADDR},
        )

        self.assertEqual(response.status_code, 500)
        self.refresh()
        self.assertEqual(self.db.query(Company).count(), 0)
        self.assertEqual(self.db.query(QuickBooksSyncLog).one().status, 'failed')

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_update_sends_sparse_payload_and_skips_deleted_office(self, post_json_mock) -> None:
        company = self.linked_company()
        post_json_mock.return_value = {'Customer': {'Id': '42', 'SyncToken': '6', 'CompanyName': 'Acme Printing'}}

        response = self.client.put(
            f'/quickbooks/customers/{company.id}',
            json={'displayName': 'Acme', 'billAddr': BILL_ADDR, 'officeName': 'Main Street'},
        )

        self.assertEqual(response.status_code, 200, response.text)
        payload = post_json_mock.await_args.args[1]
        self.assertEqual((payload['Id'], payload['SyncToken'], payload['sparse']), ('42', '5', True))
        self.assertEqual(response.json()['office']['name'], 'Main Street')
        self.refresh()
        self.assertEqual(self.db.query(Office).filter(Office.deleted.is_(True)).one().name, 'Annex')
        self.assertEqual(self.db.get(Company, company.id).sync_token, '6')

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_update_requires_linked_company(self, post_json_mock) -> None:
        office = self.make_office()

        response = self.client.put(
            f'/quickbooks/customers/{office.company_id}', json={'displayName': 'Acme', 'billAddr': BILL_ADDR}
        )

        self.assertEqual(response.status_code, 400)
        post_json_mock.assert_not_awaited()

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_sync_company_creates_customer_for_unlinked_company(self, post_json_mock) -> None:
        office = self.make_office()
        self.db.add(Address(office_id=office.id, line1='9 Canal St', city='Lowell', state='MA',
                            zipcode='01852', address_type='Billing'))
        self.db.commit()
        post_json_mock.return_value = {'Customer': {'Id': '77', 'SyncToken': '0'}}

        response = self.client.post(f'/quickbooks/customers/{office.company_id}/sync')

        self.assertEqual(response.status_code, 200, response.text)
        payload = post_json_mock.await_args.args[1]
        self.assertNotIn('Id', payload)
        self.assertEqual(payload['BillAddr']['Line1'], '9 Canal St')
        self.assertEqual(response.json()['company']['quickbooksId'], '77')
        self.refresh()
        self.assertEqual(self.db.get(Office, office.id).quickbooks_customer_id, '77')

    @patch.object(QuickBooksClient, 'post_json', new_callable=AsyncMock)
    def test_sync_company_updates_linked_customer(self, post_json_mock) -> None:
        company = self.linked_company()
        post_json_mock.return_value = {'Customer': {'Id': '42', 'SyncToken': '6'}}

        self.client.post(f'/quickbooks/customers/{company.id}/sync')

        payload = post_json_mock.await_args.args[1]
        self.assertEqual((payload['Id'], payload['SyncToken'], payload['sparse']), ('42', '5', True))


class CustomerImportTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user.quickbooks_realm_id = 'realm-1'
        self.db.add(Company(name='Old Harbor', quickbooks_id='101'))
        self.db.commit()

    def import_customers(self) -> dict:
        response = self.client.post('/quickbooks/customers/import', json={'pageSize': 2})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    @patch.object(QuickBooksClient, 'request', new_callable=AsyncMock)
    def test_import_pages_through_counted_customers(self, request_mock) -> None:
        request_mock.side_effect = quickbooks_pages

        body = self.import_customers()

        self.assertEqual(body['totalCustomers'], 3)
        statements = [c.kwargs['params']['query'] for c in request_mock.await_args_list]
        self.assertIn('COUNT(*)', statements[0])
        self.assertTrue(statements[1].endswith('STARTPOSITION 1 MAXRESULTS 2'))
        self.assertTrue(statements[2].endswith('STARTPOSITION 3 MAXRESULTS 2'))
        self.assertEqual(len(statements), 3)

    @patch.object(QuickBooksClient, 'request', new_callable=AsyncMock)
    def test_import_upserts_company_office_contact_and_address(self, request_mock) -> None:
        request_mock.side_effect = quickbooks_pages

        self.import_customers()

        self.refresh()
        self.assertEqual(self.db.query(Company).count(), 3)
        harbor = self.db.query(Company).filter(Company.quickbooks_id == '101').one()
        self.assertEqual((harbor.name, harbor.sync_token), ('Harbor Dental Group', '2'))
        office = self.db.query(Office).filter(Office.quickbooks_customer_id == '101').one()
        self.assertEqual(office.name, 'QuickBooks Office - Harbor Dental')
        contact = self.db.query(User).filter(User.email == 'ana@harbordental.com').one()
        self.assertEqual(contact.name, 'Ana Ruiz')
        self.assertEqual(contact.role_names, ['Customer'])
        self.assertIn(office, contact.offices)
        address = self.db.query(Address).filter(Address.office_id == office.id).one()
        self.assertEqual((address.line1, address.telephone_number), ('1 Pier Rd', '555-0100'))

    @patch.object(QuickBooksClient, 'request', new_callable=AsyncMock)
    def test_repeated_import_does_not_duplicate(self, request_mock) -> None:
        request_mock.side_effect = quickbooks_pages

        self.import_customers()
        self.import_customers()

        self.refresh()
        self.assertEqual(self.db.query(Office).count(), 3)
        self.assertEqual(self.db.query(Address).count(), 1)
        self.assertEqual(self.db.query(User).filter(User.email == 'ops@quarrygym.com').count(), 1)

    @patch.object(QuickBooksClient, 'request', new_callable=AsyncMock)
    def test_failed_count_imports_nothing(self, request_mock) -> None:
        request_mock.side_effect = QuickBooksAPIError('Unauthorized', 401)

        response = self.client.post('/quickbooks/customers/import', json={})

        self.assertEqual(response.status_code, 500)
        self.refresh()
        self.assertEqual(self.db.query(Office).count(), 0)


if __name__ == '__main__':
    unittest.main()
