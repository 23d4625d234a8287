"""
QuickBooks Online API client
Thin httpx wrapper that injects a valid access token and the user's realm
"""

import logging
from typing import Optional
from xml.etree import ElementTree

import httpx
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ....config import QUICKBOOKS_ENVIRONMENT
from ....models import User
from ....models_quickbooks import QuickBooksSyncLog
from ....services.quickbooks_tokens import QuickBooksTokenManager, token_manager

logger = logging.getLogger(__name__)

if QUICKBOOKS_ENVIRONMENT == "production":
    QUICKBOOKS_API_BASE_URL = "https://quickbooks.api.intuit.com"
else:
    QUICKBOOKS_API_BASE_URL = "https://sandbox-quickbooks.api.intuit.com"


class QuickBooksAPIError(Exception):
    """A QuickBooks API call answered with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def log_sync(
    db: Session,
    user: Optional[User],
    sync_type: str,
    entity_type: str,
    entity_id: Optional[int],
    status: str,
    quickbooks_id: Optional[str] = None,
    error_message: Optional[str] = None,
    sync_data: Optional[dict] = None,
) -> QuickBooksSyncLog:
    """Stage a sync log row; the caller's commit persists it"""
    entry = QuickBooksSyncLog(
        user_id=user.id if user else None,
        sync_type=sync_type,
        entity_type=entity_type,
        entity_id=entity_id,
        quickbooks_id=quickbooks_id,
        status=status,
        error_message=error_message,
        sync_data=sync_data,
    )
    db.add(entry)
    return entry


class QuickBooksClient:
    """Calls the v3 company API on behalf of one connected user"""

    def __init__(self, db: Session, user: User, tokens: QuickBooksTokenManager = token_manager):
        self.db = db
        self.user = user
        self.tokens = tokens

    @property
    def realm_id(self) -> str:
        if not self.user.quickbooks_realm_id:
            raise HTTPException(status_code=401, detail="Not authenticated with QuickBooks")
        return self.user.quickbooks_realm_id

    def url(self, path: str) -> str:
        return f"{QUICKBOOKS_API_BASE_URL}/v3/company/{self.realm_id}/{path}"

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        accept: str = "application/json",
    ) -> httpx.Response:
        url = self.url(path)
        access_token = await self.tokens.get_valid_access_token(self.db, self.user)
        headers = {"Accept": accept, "Authorization": f"Bearer {access_token}"}
        if json is not None:
            headers["Content-Type"] = "application/json"

        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.request(method, url, headers=headers, params=params, json=json)

        if response.status_code not in (200, 201):
            logger.error(
                f"❌ QuickBooks {method} {path} failed: HTTP {response.status_code} {response.text}"
            )
            raise QuickBooksAPIError(response.text, response.status_code)
        return response

    async def get_json(self, path: str, params: Optional[dict] = None) -> dict:
        response = await self.request("GET", path, params=params)
        return response.json()

    async def post_json(self, path: str, payload: dict, params: Optional[dict] = None) -> dict:
        response = await self.request("POST", path, params=params, json=payload)
        return response.json()

    async def query(self, statement: str) -> dict:
        """Run a query statement and return its QueryResponse"""
        data = await self.get_json("query", params={"query": statement})
        return data.get("QueryResponse", {})

    async def count(self, statement: str) -> int:
        """Run a COUNT(*) statement; the XML answer carries totalCount on QueryResponse"""
        response = await self.request(
            "GET", "query", params={"query": statement}, accept="application/xml"
        )
        try:
            root = ElementTree.fromstring(response.content)
        except ElementTree.ParseError as e:
            raise QuickBooksAPIError(f"Unreadable count response: {e}") from e

        query_response = root.find("{*}QueryResponse")
        if query_response is None:
            raise QuickBooksAPIError("Count response has no QueryResponse element")
        return int(query_response.get("totalCount", 0))
