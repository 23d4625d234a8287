"""QuickBooks connection service - OAuth handshake, status and revocation"""

import logging
import secrets
from datetime import datetime
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ....config import QUICKBOOKS_CLIENT_ID, QUICKBOOKS_CLIENT_SECRET, QUICKBOOKS_REDIRECT_URI
from ....models import User
from ....services.quickbooks_tokens import (
    QuickBooksAuthExpired,
    QuickBooksTokenError,
    QuickBooksTokenManager,
    clear_credentials,
    decrypt_token,
    get_basic_auth_header,
    post_token_request,
    store_credentials,
    token_manager,
)
from .client import QuickBooksAPIError, QuickBooksClient

logger = logging.getLogger(__name__)

QUICKBOOKS_AUTH_URL = "https://appcenter.intuit.com/connect/oauth2"
QUICKBOOKS_REVOKE_URL = "https://developer.api.intuit.com/v2/oauth2/tokens/revoke"
QUICKBOOKS_SCOPES = "com.intuit.quickbooks.accounting openid"


class QuickBooksAuthService:
    """Service layer for the per-user QuickBooks connection"""

    def __init__(self, db: Session, tokens: QuickBooksTokenManager = token_manager):
        self.db = db
        self.tokens = tokens

    def initialize_auth(self, user: User) -> dict:
        """Build the Intuit authorize URL and remember its state for the callback"""
        if not QUICKBOOKS_CLIENT_ID or not QUICKBOOKS_CLIENT_SECRET:
            raise HTTPException(status_code=500, detail="QuickBooks not configured")

        state = secrets.token_urlsafe(32)
        user.quickbooks_oauth_state = state
        self.db.commit()

        query = urlencode(
            {
                "client_id": QUICKBOOKS_CLIENT_ID,
                "response_type": "code",
                "scope": QUICKBOOKS_SCOPES,
                "redirect_uri": QUICKBOOKS_REDIRECT_URI,
                "state": state,
            }
        )
        logger.info(f"🔄 QuickBooks OAuth initiated for user: {user.email}")
        return {"authUri": f"{QUICKBOOKS_AUTH_URL}?{query}", "state": state}

    async def handle_callback(self, user: User, code: str, realm_id: str, state: str) -> dict:
        expected = user.quickbooks_oauth_state
        if not expected or not secrets.compare_digest(expected, state):
            logger.warning(f"⚠️ QuickBooks OAuth state mismatch for user {user.id}")
            raise HTTPException(status_code=400, detail="Invalid OAuth state")

        try:
            token_data = await post_token_request(
                {
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": QUICKBOOKS_REDIRECT_URI,
                }
            )
        except (QuickBooksAuthExpired, QuickBooksTokenError, httpx.HTTPError) as e:
            logger.error(f"❌ QuickBooks code exchange failed for user {user.id}: {e}")
            raise HTTPException(
                status_code=500, detail="Failed to authenticate with QuickBooks"
            ) from e

        store_credentials(user, token_data, realm_id)
        user.quickbooks_oauth_state = None
        self.db.commit()

        logger.info(f"✅ QuickBooks connected for user: {user.email} (realm {realm_id})")
        return {"success": True, "realmId": realm_id}

    async def refresh_token(self, user: User) -> dict:
        await self.tokens.force_refresh(self.db, user)
        return {"success": True, "message": "Token refreshed successfully"}

    @staticmethod
    def auth_status(user: User) -> dict:
        expiry = user.quickbooks_token_expiry
        return {
            "isAuthenticated": bool(user.quickbooks_access_token)
            and expiry is not None
            and datetime.utcnow() < expiry
        }

    async def revoke_token(self, user: User) -> dict:
        if not user.quickbooks_refresh_token:
            raise HTTPException(status_code=401, detail="User not authenticated with QuickBooks")

        token = decrypt_token(user.quickbooks_refresh_token)
        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.post(
                    QUICKBOOKS_REVOKE_URL,
                    headers={
                        "Accept": "application/json",
                        "Content-Type": "application/json",
                        "Authorization": f"Basic {get_basic_auth_header()}",
                    },
                    json={"token": token},
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ QuickBooks revoke failed for user {user.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to revoke QuickBooks token") from e

        # Intuit answers 400 for tokens it already considers revoked
        if response.status_code != 200:
            logger.warning(
                f"⚠️ QuickBooks revoke answered HTTP {response.status_code}: {response.text}"
            )

        clear_credentials(user)
        self.db.commit()
        logger.info(f"🗑️ QuickBooks disconnected for user: {user.email}")
        return {"success": True}

    async def get_company_info(self, user: User) -> dict:
        client = QuickBooksClient(self.db, user, self.tokens)
        realm_id = client.realm_id
        try:
            data = await client.get_json(f"companyinfo/{realm_id}")
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            logger.error(f"❌ QuickBooks company info failed for realm {realm_id}: {e}")
            raise HTTPException(
                status_code=500, detail="Failed to get company info from QuickBooks"
            ) from e
        return {"companyInfo": data.get("CompanyInfo"), "time": data.get("time")}
