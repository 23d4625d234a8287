from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

from printshop.models import User
from printshop.services.quickbooks_tokens import QuickBooksTokenError, decrypt_token

from support import APITestCase

TOKEN_RESPONSE = {'access_token': 'access-1', 'refresh_token': 'refresh-1', 'expires_in': 3600}


class OAuthRedirectTests(APITestCase):
    def test_intuit_redirect_is_forwarded_to_frontend(self) -> None:
        response = self.client.get(
            '/quickbooks/callback',
            params={'code': 'abc', 'realmId': '123', 'state': 'xyz'},
            follow_redirects=False,
        )

        self.assertEqual(response.status_code, 307)
        location = urlparse(response.headers['location'])
        self.assertEqual(location.path, '/quickbooks/callback')
        self.assertEqual(parse_qs(location.query), {'code': ['abc'], 'realmId': ['123'], 'state': ['xyz']})

    def test_missing_parameters_are_reported(self) -> None:
        response = self.client.get('/quickbooks/callback', params={'code': 'abc'}, follow_redirects=False)

        self.assertIn('error=missing_parameters', response.headers['location'])


class OAuthCallbackTests(APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user.quickbooks_oauth_state = 'expected-state'
        self.db.commit()

    def complete(self, state: str):
        return self.client.post(
            '/quickbooks/auth/callback', json={'code': 'auth-code', 'realmId': 'realm-9', 'state': state}
        )

    @patch('printshop.domain.integrations.quickbooks.auth_service.post_token_request', new_callable=AsyncMock)
    def test_state_mismatch_is_rejected(self, token_mock) -> None:
        response = self.complete('forged-state')

        self.assertEqual(response.status_code, 400)
        token_mock.assert_not_called()

    @patch('printshop.domain.integrations.quickbooks.auth_service.post_token_request', new_callable=AsyncMock)
    def test_code_exchange_stores_encrypted_credentials(self, token_mock) -> None:
        token_mock.return_value = TOKEN_RESPONSE

        response = self.complete('expected-state')

        self.assertEqual(response.json(), {'success': True, 'realmId': 'realm-9'})
        self.assertEqual(token_mock.await_args.args[0]['grant_type'], 'authorization_code')
        self.refresh()
        user = self.db.get(User, self.user_id)
        self.assertEqual(user.quickbooks_realm_id, 'realm-9')
        self.assertNotEqual(user.quickbooks_access_token, 'access-1')
        self.assertEqual(decrypt_token(user.quickbooks_access_token), 'access-1')
        self.assertIsNone(user.quickbooks_oauth_state)

        status = self.client.get('/quickbooks/auth/status')
        self.assertEqual(status.json(), {'isAuthenticated': True})

    @patch('printshop.domain.integrations.quickbooks.auth_service.post_token_request', new_callable=AsyncMock)
    def test_failed_exchange_keeps_user_disconnected(self, token_mock) -> None:
        token_mock.side_effect = QuickBooksTokenError('invalid_client')

        response = self.complete('expected-state')

        self.assertEqual(response.status_code, 500)
        self.refresh()
        self.assertIsNone(self.db.get(User, self.user_id).quickbooks_access_token)
        self.assertEqual(self.client.get('/quickbooks/auth/status').json(), {'isAuthenticated': False})


if __name__ == '__main__':
    unittest.main()
