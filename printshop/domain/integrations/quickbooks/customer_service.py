"""
QuickBooks customer sync
Pushes companies to QuickBooks as customers and imports customers back as
companies, offices, contacts and billing addresses
"""

import logging
from datetime import datetime
from typing import Optional

import httpx
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ....models import Address, Company, Office, User
from ....services.quickbooks_tokens import QuickBooksTokenManager, token_manager
from ....statuses import AddressType, RoleName
from ...companies.repository import CompanyRepository
from ...contacts.repository import ContactRepository
from ...offices.repository import OfficeRepository
from ...users.repository import UserRepository
from .client import QuickBooksAPIError, QuickBooksClient, log_sync
from .schemas import CustomerCreate, CustomerImportRequest, CustomerUpdate, QuickBooksAddress

logger = logging.getLogger(__name__)

CUSTOMER_FILTER = "WHERE Active IN (true, false)"


def qb_address(address: QuickBooksAddress) -> dict:
    payload = {
        "Line1": address.line1,
        "City": address.city,
        "Country": address.country,
        "CountrySubDivisionCode": address.countrySubDivisionCode,
        "PostalCode": address.postalCode,
    }
    if address.line2:
        payload["Line2"] = address.line2
    return payload


def qb_address_from_local(address: Address) -> dict:
    return {
        "Line1": address.line1,
        "Line2": address.line2,
        "City": address.city,
        "Country": address.country,
        "CountrySubDivisionCode": address.state,
        "PostalCode": address.zipcode,
    }


def address_values(bill_addr: dict, phone: Optional[dict]) -> dict:
    """Map a QuickBooks BillAddr onto Address columns"""
    return {
        "line1": bill_addr.get("Line1") or "",
        "line2": bill_addr.get("Line2"),
        "city": bill_addr.get("City") or "",
        "state": bill_addr.get("CountrySubDivisionCode") or "",
        "zipcode": str(bill_addr.get("PostalCode") or ""),
        "country": bill_addr.get("Country") or "",
        "telephone_number": (phone or {}).get("FreeFormNumber") or "",
    }


def contact_fields(payload: dict, phone: Optional[str], email: Optional[str], notes: Optional[str]) -> dict:
    if notes:
        payload["Notes"] = notes
    if phone:
        payload["PrimaryPhone"] = {"FreeFormNumber": phone}
    if email:
        payload["PrimaryEmailAddr"] = {"Address": email}
    return payload


def customer_query(last_sync_time: Optional[datetime], select: str = "*") -> str:
    statement = f"SELECT {select} FROM Customer {CUSTOMER_FILTER}"
    if last_sync_time:
        statement += f" AND Metadata.LastUpdatedTime > '{last_sync_time.isoformat()}'"
    return statement


class QuickBooksCustomerService:
    """Service layer for QuickBooks customer sync"""

    def __init__(self, db: Session, tokens: QuickBooksTokenManager = token_manager):
        self.db = db
        self.tokens = tokens
        self.companies = CompanyRepository()
        self.offices = OfficeRepository()

    def _client(self, user: User) -> QuickBooksClient:
        return QuickBooksClient(self.db, user, self.tokens)

    async def _save_customer(
        self, client: QuickBooksClient, payload: dict, user: User, company_id: Optional[int] = None
    ) -> dict:
        """POST the customer; failures are logged and surface as 500"""
        try:
            data = await client.post_json("customer", payload)
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            log_sync(
                self.db, user, "customer", "Company", company_id, "failed",
                error_message=str(e), sync_data={"customer_data": payload},
            )
            self.db.commit()
            raise HTTPException(status_code=500, detail="Failed to save QuickBooks customer") from e

        customer = data.get("Customer", {})
        log_sync(
            self.db, user, "customer", "Company", company_id, "success",
            quickbooks_id=customer.get("Id"), sync_data={"customer_data": payload},
        )
        return customer

    def _billing_address(self, office: Office) -> Optional[Address]:
        return next(
            (a for a in office.addresses if a.address_type == AddressType.BILLING.value), None
        )

    def _upsert_billing_address(self, office: Office, bill_addr: dict, phone: Optional[dict]) -> Address:
        """Update an identical billing address in place, otherwise add a new one"""
        values = address_values(bill_addr, phone)
        existing = (
            self.db.query(Address)
            .filter(
                Address.office_id == office.id,
                Address.address_type == AddressType.BILLING.value,
                Address.deleted.is_(False),
                Address.line1 == values["line1"],
                Address.city == values["city"],
                Address.state == values["state"],
                Address.zipcode == values["zipcode"],
            )
            .first()
        )
        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
            return existing

        address = Address(office=office, address_type=AddressType.BILLING.value, **values)
        self.db.add(address)
        return address

    # ============================================
    # Push
    # ============================================

    async def create_customer(self, data: CustomerCreate, user: User) -> dict:
        client = self._client(user)
        payload = contact_fields(
            {
                "DisplayName": data.companyName,
                "CompanyName": data.companyName,
                "BillAddr": qb_address(data.billAddr),
            },
            data.phone,
            data.email,
            data.notes,
        )
        logger.info(f"🔄 Creating QuickBooks customer: {data.companyName}")
        customer = await self._save_customer(client, payload, user)
        quickbooks_id = str(customer["Id"])

        company = self.companies.get_company_by_quickbooks_id(self.db, quickbooks_id)
        if company is None:
            company = Company(quickbooks_id=quickbooks_id)
            self.db.add(company)
        company.name = customer.get("CompanyName") or customer.get("DisplayName") or data.companyName
        company.sync_token = customer.get("SyncToken")

        office = Office(
            company=company,
            name=data.officeName,
            quickbooks_customer_id=quickbooks_id,
            created_by_id=user.id,
        )
        self.db.add(office)
        self.db.flush()
        self._upsert_billing_address(
            office, customer.get("BillAddr") or payload["BillAddr"], customer.get("PrimaryPhone")
        )
        self.db.commit()

        logger.info(f"✅ QuickBooks customer {quickbooks_id} linked to company {company.id}")
        return {"company": company, "office": self.offices.get_office_by_id(self.db, office.id)}

    async def update_customer(self, company_id: int, data: CustomerUpdate, user: User) -> dict:
        company = self.companies.get_company_by_id(self.db, company_id)
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")
        if not company.quickbooks_id:
            raise HTTPException(status_code=400, detail="Company is not linked to QuickBooks")

        client = self._client(user)
        payload = {
            "Id": company.quickbooks_id,
            "SyncToken": company.sync_token or "0",
            "sparse": True,
            "DisplayName": data.displayName,
            "CompanyName": company.name,
            "BillAddr": qb_address(data.billAddr),
        }
        if data.shipAddr:
            payload["ShipAddr"] = qb_address(data.shipAddr)
        contact_fields(payload, data.phone, data.email, data.notes)

        customer = await self._save_customer(client, payload, user, company.id)
        company.name = customer.get("CompanyName") or company.name
        company.sync_token = customer.get("SyncToken") or company.sync_token

        office = next((o for o in company.offices if not o.deleted), None)
        if office is not None:
            if data.officeName:
                office.name = data.officeName
            self._upsert_billing_address(
                office, customer.get("BillAddr") or payload["BillAddr"], customer.get("PrimaryPhone")
            )
        self.db.commit()

        logger.info(f"✅ QuickBooks customer {company.quickbooks_id} updated")
        return {
            "company": company,
            "office": self.offices.get_office_by_id(self.db, office.id) if office else None,
        }

    async def sync_company(self, company_id: int, user: User) -> dict:
        """Create the customer when the company is unlinked, otherwise send a sparse update"""
        company = self.companies.get_company_by_id(self.db, company_id)
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")

        office = next((o for o in company.offices if not o.deleted), None)
        billing = self._billing_address(office) if office else None

        payload = {"DisplayName": company.name, "CompanyName": company.name}
        if billing is not None:
            payload["BillAddr"] = qb_address_from_local(billing)
        if company.quickbooks_id:
            payload.update(
                {"Id": company.quickbooks_id, "SyncToken": company.sync_token or "0", "sparse": True}
            )

        customer = await self._save_customer(self._client(user), payload, user, company.id)
        company.quickbooks_id = str(customer["Id"])
        company.sync_token = customer.get("SyncToken")
        if office is not None and not office.quickbooks_customer_id:
            office.quickbooks_customer_id = company.quickbooks_id
        self.db.commit()

        logger.info(f"✅ Company {company.id} synced as QuickBooks customer {company.quickbooks_id}")
        return {"company": company, "office": office}

    # ============================================
    # Import
    # ============================================

    async def import_customers(self, data: CustomerImportRequest, user: User) -> dict:
        client = self._client(user)
        try:
            total = await client.count(customer_query(data.lastSyncTime, select="COUNT(*)"))
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            raise HTTPException(
                status_code=500, detail="Failed to fetch customer count from QuickBooks"
            ) from e

        logger.info(f"📥 Importing {total} QuickBooks customers (page size {data.pageSize})")
        imported = 0
        start_position = 1
        while start_position <= total:
            statement = (
                f"{customer_query(data.lastSyncTime)} "
                f"STARTPOSITION {start_position} MAXRESULTS {data.pageSize}"
            )
            try:
                page = await client.query(statement)
            except (QuickBooksAPIError, httpx.HTTPError) as e:
                log_sync(
                    self.db, user, "customer_import", "Company", None, "failed",
                    error_message=str(e), sync_data={"start_position": start_position},
                )
                self.db.commit()
                raise HTTPException(
                    status_code=500, detail="Failed to fetch customers from QuickBooks"
                ) from e

            customers = page.get("Customer", [])
            if isinstance(customers, dict):
                customers = [customers]
            for customer in customers:
                self.import_customer(customer, user)
            imported += len(customers)
            self.db.commit()
            start_position += data.pageSize

        log_sync(
            self.db, user, "customer_import", "Company", None, "success",
            sync_data={"total": total, "imported": imported},
        )
        self.db.commit()
        logger.info(f"✅ QuickBooks customer import complete: {imported} customers")
        return {
            "totalCustomers": imported,
            "message": f"Successfully synced {imported} customers from QuickBooks.",
        }

    def import_customer(self, customer: dict, user: User) -> Office:
        """Upsert one QuickBooks customer as company, office, contact and billing address"""
        quickbooks_id = str(customer["Id"])
        display_name = customer.get("DisplayName") or ""
        company_name = customer.get("CompanyName") or display_name

        company = self.companies.get_company_by_quickbooks_id(self.db, quickbooks_id)
        if company is None:
            company = Company(quickbooks_id=quickbooks_id)
            self.db.add(company)
        company.name = company_name
        if customer.get("SyncToken") is not None:
            company.sync_token = str(customer["SyncToken"])

        office = self.offices.get_office_by_quickbooks_customer_id(self.db, quickbooks_id)
        if office is None:
            office = Office(company=company, quickbooks_customer_id=quickbooks_id, created_by_id=user.id)
            self.db.add(office)
        office.name = f"QuickBooks Office - {display_name}"
        self.db.flush()

        email = (customer.get("PrimaryEmailAddr") or {}).get("Address")
        if email:
            self._import_contact(customer, email, office)

        if customer.get("BillAddr"):
            self._upsert_billing_address(office, customer["BillAddr"], customer.get("PrimaryPhone"))
        return office

    def _import_contact(self, customer: dict, email: str, office: Office) -> User:
        given = customer.get("GivenName") or ""
        family = customer.get("FamilyName") or ""
        name = f"{given} {family}".strip() or customer.get("DisplayName")

        contact = ContactRepository.get_user_by_email(self.db, email)
        if contact is None:
            contact = User(email=email, name=name)
            contact.roles = UserRepository.get_roles_by_name(self.db, [RoleName.CUSTOMER.value])
            self.db.add(contact)
        else:
            contact.name = name
        if office not in contact.offices:
            contact.offices.append(office)
        return contact
