"""
QuickBooks OAuth token lifecycle
Encrypted storage of the per-user credential and a single-flight refresh
coordinator so concurrent requests never race on the same refresh token
"""

import asyncio
import base64
import hashlib
import logging
from datetime import datetime, timedelta
from typing import Optional

import httpx
from cryptography.fernet import Fernet, InvalidToken
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..config import (
    QUICKBOOKS_CLIENT_ID,
    QUICKBOOKS_CLIENT_SECRET,
    QUICKBOOKS_TOKEN_REFRESH_WINDOW_MINUTES,
    SECRET_KEY,
)
from ..models import User

logger = logging.getLogger(__name__)

QUICKBOOKS_TOKEN_URL = "https://oauth.platform.intuit.com/oauth2/v1/tokens/bearer"
REFRESH_WINDOW = timedelta(minutes=QUICKBOOKS_TOKEN_REFRESH_WINDOW_MINUTES)

# Encryption for tokens
cipher_suite = Fernet(base64.urlsafe_b64encode(hashlib.sha256(SECRET_KEY.encode()).digest()))


class QuickBooksAuthExpired(Exception):
    """The refresh token was rejected; the user has to reconnect"""


class QuickBooksTokenError(Exception):
    """The token endpoint failed for any other reason"""


def encrypt_token(token: str) -> str:
    """Encrypt a token for storage"""
    return cipher_suite.encrypt(token.encode()).decode()


def decrypt_token(encrypted_token: str) -> str:
    """Decrypt a stored token"""
    try:
        return cipher_suite.decrypt(encrypted_token.encode()).decode()
    except InvalidToken as e:
        raise QuickBooksTokenError("Stored QuickBooks token could not be decrypted") from e


def get_basic_auth_header() -> str:
    """Generate Basic Auth header for QuickBooks"""
    credentials = f"{QUICKBOOKS_CLIENT_ID}:{QUICKBOOKS_CLIENT_SECRET}"
    return base64.b64encode(credentials.encode()).decode()


async def post_token_request(data: dict) -> dict:
    """POST to the Intuit token endpoint and return the parsed token payload"""
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(
            QUICKBOOKS_TOKEN_URL,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/x-www-form-urlencoded",
                "Authorization": f"Basic {get_basic_auth_header()}",
            },
            data=data,
        )

    if response.status_code != 200:
        body = response.text
        logger.error(f"❌ QuickBooks token request failed: HTTP {response.status_code} {body}")
        if "invalid_grant" in body or "expired" in body.lower():
            raise QuickBooksAuthExpired(body)
        raise QuickBooksTokenError(body)

    token_data = response.json()
    if not token_data.get("access_token") or not token_data.get("refresh_token"):
        raise QuickBooksTokenError("Invalid token response from QuickBooks")
    return token_data


async def request_token_refresh(refresh_token: str) -> dict:
    """Exchange a refresh token for a new access/refresh pair"""
    return await post_token_request({"grant_type": "refresh_token", "refresh_token": refresh_token})


def needs_refresh(expiry: datetime, now: Optional[datetime] = None) -> bool:
    """True when `expiry` falls within the refresh window (inclusive) or has passed"""
    now = now or datetime.utcnow()
    return expiry <= now + REFRESH_WINDOW


def store_credentials(user: User, token_data: dict, realm_id: Optional[str] = None) -> str:
    """Write a token payload onto the user (no commit); returns the plain access token"""
    access_token = token_data["access_token"]
    user.quickbooks_access_token = encrypt_token(access_token)
    user.quickbooks_refresh_token = encrypt_token(token_data["refresh_token"])
    user.quickbooks_token_expiry = datetime.utcnow() + timedelta(
        seconds=int(token_data.get("expires_in", 3600))
    )
    if realm_id:
        user.quickbooks_realm_id = realm_id
    return access_token


def clear_credentials(user: User) -> None:
    user.quickbooks_access_token = None
    user.quickbooks_refresh_token = None
    user.quickbooks_token_expiry = None
    user.quickbooks_realm_id = None


class QuickBooksTokenManager:
    """
    Owns the refresh-in-flight state per user id.

    The first caller that finds a token inside the refresh window starts the
    refresh; every concurrent caller for the same user awaits that same task,
    so exactly one request reaches the token endpoint per expiry window.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._in_flight: dict[int, asyncio.Task] = {}

    async def get_valid_access_token(self, db: Session, user: User) -> str:
        if not user.quickbooks_refresh_token or not user.quickbooks_token_expiry:
            raise HTTPException(status_code=401, detail="User not authenticated with QuickBooks")

        if not needs_refresh(user.quickbooks_token_expiry):
            return decrypt_token(user.quickbooks_access_token)

        logger.info(f"🔄 QuickBooks token for user {user.id} expires soon, refreshing")
        return await self._refresh_once(db, user)

    async def force_refresh(self, db: Session, user: User) -> str:
        if not user.quickbooks_refresh_token:
            raise HTTPException(status_code=401, detail="User not authenticated with QuickBooks")
        return await self._refresh_once(db, user, force=True)

    def is_refreshing(self, user_id: int) -> bool:
        return user_id in self._in_flight

    async def _refresh_once(self, db: Session, user: User, force: bool = False) -> str:
        async with self._lock:
            task = self._in_flight.get(user.id)
            if task is None:
                # Another session may have rotated the pair since this user was loaded
                db.refresh(user)
                if not user.quickbooks_refresh_token:
                    raise HTTPException(status_code=401, detail="User not authenticated with QuickBooks")
                expiry = user.quickbooks_token_expiry
                if not force and expiry and not needs_refresh(expiry):
                    logger.info(f"QuickBooks token for user {user.id} was already refreshed")
                    return decrypt_token(user.quickbooks_access_token)
                task = asyncio.create_task(self._refresh(db, user))
                self._in_flight[user.id] = task
                task.add_done_callback(lambda _t, user_id=user.id: self._in_flight.pop(user_id, None))
        # A cancelled waiter must not cancel the refresh the others are awaiting
        return await asyncio.shield(task)

    async def _refresh(self, db: Session, user: User) -> str:
        try:
            token_data = await request_token_refresh(decrypt_token(user.quickbooks_refresh_token))
        except QuickBooksAuthExpired as e:
            logger.warning(f"⚠️ QuickBooks authorization expired for user {user.id}: {e}")
            clear_credentials(user)
            db.commit()
            raise HTTPException(
                status_code=401,
                detail="QuickBooks authorization has expired. Please reconnect your account.",
            ) from e
        except (QuickBooksTokenError, httpx.HTTPError) as e:
            logger.error(f"❌ QuickBooks token refresh failed for user {user.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to refresh QuickBooks token") from e

        access_token = store_credentials(user, token_data)
        db.commit()
        logger.info(f"✅ QuickBooks token refreshed for user {user.id}")
        return access_token


token_manager = QuickBooksTokenManager()


def get_token_manager() -> QuickBooksTokenManager:
    """Dependency hook for the process-wide token coordinator"""
    return token_manager
