from __future__ import annotations

import asyncio
import unittest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from printshop import main  # noqa: F401
from printshop.database import Base
from printshop.models import User
from printshop.services.quickbooks_tokens import (
    REFRESH_WINDOW,
    QuickBooksAuthExpired,
    QuickBooksTokenManager,
    decrypt_token,
    encrypt_token,
    needs_refresh,
)


TOKEN_RESPONSE = {'access_token': 'new-access', 'refresh_token': 'new-refresh', 'expires_in': 3600}


class NeedsRefreshTests(unittest.TestCase):
    def test_window_boundary_is_inclusive(self) -> None:
        now = datetime(2024, 1, 1, 12, 0)

        self.assertTrue(needs_refresh(now + REFRESH_WINDOW, now))
        self.assertFalse(needs_refresh(now + REFRESH_WINDOW + timedelta(seconds=1), now))
        self.assertTrue(needs_refresh(now - timedelta(minutes=1), now))


class TokenManagerTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
        self.addCleanup(self.engine.dispose)
        Base.metadata.create_all(bind=self.engine)
        self.db = sessionmaker(bind=self.engine)()
        self.addCleanup(self.db.close)
        self.user = User(
            email='finance@example.com',
            quickbooks_access_token=encrypt_token('old-access'),
            quickbooks_refresh_token=encrypt_token('old-refresh'),
            quickbooks_realm_id='realm-1',
        )
        self.db.add(self.user)
        self.db.commit()
        self.manager = QuickBooksTokenManager()

    def expire_in(self, delta: timedelta) -> None:
        self.user.quickbooks_token_expiry = datetime.utcnow() + delta
        self.db.commit()

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_fresh_token_is_used_as_is(self, refresh_mock) -> None:
        self.expire_in(REFRESH_WINDOW + timedelta(hours=1))

        token = await self.manager.get_valid_access_token(self.db, self.user)

        self.assertEqual(token, 'old-access')
        refresh_mock.assert_not_called()

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_token_inside_window_is_refreshed_and_stored(self, refresh_mock) -> None:
        refresh_mock.return_value = TOKEN_RESPONSE
        self.expire_in(timedelta(minutes=2))

        token = await self.manager.get_valid_access_token(self.db, self.user)

        self.assertEqual(token, 'new-access')
        refresh_mock.assert_awaited_once_with('old-refresh')
        self.db.expire_all()
        self.assertEqual(decrypt_token(self.user.quickbooks_refresh_token), 'new-refresh')
        self.assertGreater(self.user.quickbooks_token_expiry, datetime.utcnow() + timedelta(minutes=50))

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_concurrent_callers_share_one_refresh(self, refresh_mock) -> None:
        async def slow_refresh(_refresh_token):
            await asyncio.sleep(0.01)
            return TOKEN_RESPONSE

        refresh_mock.side_effect = slow_refresh
        self.expire_in(timedelta(seconds=-10))

        tokens = await asyncio.gather(
            *(self.manager.get_valid_access_token(self.db, self.user) for _ in range(5))
        )

        self.assertEqual(tokens, ['new-access'] * 5)
        self.assertEqual(refresh_mock.await_count, 1)
        self.assertFalse(self.manager.is_refreshing(self.user.id))

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_stale_session_reuses_token_refreshed_elsewhere(self, refresh_mock) -> None:
        refresh_mock.return_value = TOKEN_RESPONSE
        self.expire_in(timedelta(minutes=5))
        other_db = sessionmaker(bind=self.engine)()
        self.addCleanup(other_db.close)
        stale_user = other_db.get(User, self.user.id)
        self.assertEqual(decrypt_token(stale_user.quickbooks_refresh_token), 'old-refresh')

        first = await self.manager.get_valid_access_token(self.db, self.user)
        second = await self.manager.get_valid_access_token(other_db, stale_user)

        self.assertEqual((first, second), ('new-access', 'new-access'))
        refresh_mock.assert_awaited_once_with('old-refresh')
        self.assertEqual(decrypt_token(stale_user.quickbooks_refresh_token), 'new-refresh')

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_cancelled_caller_does_not_cancel_shared_refresh(self, refresh_mock) -> None:
        release = asyncio.Event()

        async def slow_refresh(_refresh_token):
            await release.wait()
            return TOKEN_RESPONSE

        refresh_mock.side_effect = slow_refresh
        self.expire_in(timedelta(seconds=-10))

        first = asyncio.create_task(self.manager.get_valid_access_token(self.db, self.user))
        second = asyncio.create_task(self.manager.get_valid_access_token(self.db, self.user))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        first.cancel()
        release.set()

        self.assertEqual(await second, 'new-access')
        with self.assertRaises(asyncio.CancelledError):
            await first
        self.assertEqual(refresh_mock.await_count, 1)

    @patch('printshop.services.quickbooks_tokens.request_token_refresh', new_callable=AsyncMock)
    async def test_rejected_refresh_token_clears_credentials(self, refresh_mock) -> None:
        refresh_mock.side_effect = QuickBooksAuthExpired('invalid_grant')
        self.expire_in(timedelta(minutes=1))

        with self.assertRaises(HTTPException) as ctx:
            await self.manager.get_valid_access_token(self.db, self.user)

        self.assertEqual(ctx.exception.status_code, 401)
        self.db.expire_all()
        self.assertIsNone(self.user.quickbooks_refresh_token)
        self.assertIsNone(self.user.quickbooks_realm_id)

    async def test_missing_credentials_are_unauthorized(self) -> None:
        self.user.quickbooks_refresh_token = None
        self.db.commit()

        with self.assertRaises(HTTPException) as ctx:
            await self.manager.get_valid_access_token(self.db, self.user)

        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == '__main__':
    unittest.main()
