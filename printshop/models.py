from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True
    ),
)

# Contacts (users) attached to offices
office_contacts = Table(
    "office_contacts",
    Base.metadata,
    Column("office_id", Integer, ForeignKey("offices.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=True)  # null for contacts
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # QuickBooks OAuth credentials (tokens encrypted)
    quickbooks_access_token = Column(Text, nullable=True)
    quickbooks_refresh_token = Column(Text, nullable=True)
    quickbooks_token_expiry = Column(DateTime, nullable=True)  # UTC
    quickbooks_realm_id = Column(String(255), nullable=True)
    quickbooks_oauth_state = Column(String(255), nullable=True)  # pending authorize request
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    roles = relationship("Role", secondary=user_roles, back_populates="users")
    offices = relationship("Office", secondary=office_contacts, back_populates="contacts")

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    @property
    def permission_names(self) -> list[str]:
        return sorted({p.name for role in self.roles for p in role.permissions})


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)  # Admin, Finance, Customer, ...
    description = Column(String(255), nullable=True)

    users = relationship("User", secondary=user_roles, back_populates="roles")
    permissions = relationship("Permission", secondary=role_permissions, back_populates="roles")


class Permission(Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)  # e.g. office_read
    description = Column(String(255), nullable=True)

    roles = relationship("Role", secondary=role_permissions, back_populates="permissions")


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    quickbooks_id = Column(String(255), unique=True, nullable=True)  # QuickBooks Customer Id
    sync_token = Column(String(50), default="0", nullable=True)  # QuickBooks SyncToken
    is_active = Column(Boolean, default=True, nullable=False)
    deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    offices = relationship("Office", back_populates="company", order_by="Office.name")


class Office(Base):
    __tablename__ = "offices"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_walk_in_office = Column(Boolean, default=False, nullable=False)
    quickbooks_customer_id = Column(String(255), nullable=True, index=True)
    deleted = Column(Boolean, default=False, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="offices")
    addresses = relationship(
        "Address",
        primaryjoin="and_(Address.office_id == Office.id, Address.deleted == False)",  # noqa: E712
        viewonly=True,
    )
    contacts = relationship("User", secondary=office_contacts, back_populates="offices")
    created_by = relationship("User", foreign_keys=[created_by_id])
    work_orders = relationship("WorkOrder", back_populates="office")
    orders = relationship("Order", back_populates="office")


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    office_id = Column(Integer, ForeignKey("offices.id", ondelete="CASCADE"), nullable=True)
    name = Column(String(255), nullable=True)
    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255), nullable=True)
    line3 = Column(String(255), nullable=True)
    line4 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zipcode = Column(String(20), nullable=False)
    country = Column(String(100), default="USA")
    telephone_number = Column(String(50), nullable=True)
    address_type = Column(String(20), default="Billing")  # Billing, Shipping, Mailing, Other
    deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    office = relationship("Office")


class WalkInCustomer(Base):
    __tablename__ = "walk_in_customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    orders = relationship("Order", back_populates="walk_in_customer")


class StatusChange(Base):
    """Audit trail of status transitions across orders, work orders, items and invoices"""

    __tablename__ = "status_changes"

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String(50), nullable=False, index=True)  # Order, WorkOrder, OrderItem, ...
    entity_id = Column(Integer, nullable=False, index=True)
    from_status = Column(String(50), nullable=True)
    to_status = Column(String(50), nullable=False)
    changed_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    cascaded = Column(Boolean, default=False, nullable=False)  # written by a parent status change
    overridden = Column(Boolean, default=False, nullable=False)  # Admin bypassed the transition table
    created_at = Column(DateTime, server_default=func.now())

    changed_by = relationship("User")
