"""Static roles and permissions, seeded on start-up"""

import logging

from sqlalchemy.orm import Session

from .models import Permission, Role
from .statuses import RoleName

logger = logging.getLogger(__name__)

_RESOURCES = [
    "address",
    "company",
    "invoice",
    "office",
    "order",
    "order_item",
    "order_payment",
    "order_shipping_info",
    "role",
    "typesetting",
    "typesetting_option",
    "typesetting_proof",
    "user",
    "work_order",
    "work_order_item",
]

PERMISSIONS = [f"{resource}_{action}" for resource in _RESOURCES for action in ("create", "read", "update", "delete")]
PERMISSIONS += [
    "office_change_status",
    "order_change_status",
    "order_payment_change_status",
    "work_order_change_status",
]

_READ_FLOOR = ["order_read", "order_item_read", "order_shipping_info_read", "work_order_read", "work_order_item_read"]

# Admin is granted everything implicitly by require_permission
ROLE_PERMISSIONS = {
    RoleName.ADMIN: PERMISSIONS,
    RoleName.BINDERY: _READ_FLOOR + ["order_change_status"],
    RoleName.PREPRESS: _READ_FLOOR + ["address_read", "order_change_status"],
    RoleName.PRODUCTION: _READ_FLOOR + ["address_read", "order_change_status"],
    RoleName.CUSTOMER: _READ_FLOOR
    + [
        "address_read",
        "company_read",
        "office_read",
        "order_payment_create",
        "order_payment_read",
        "typesetting_read",
        "typesetting_option_read",
        "typesetting_proof_read",
    ],
    RoleName.FINANCE: [
        "address_read",
        "company_read",
        "invoice_create",
        "invoice_delete",
        "invoice_read",
        "invoice_update",
        "office_read",
        "order_read",
        "order_update",
        "order_change_status",
        "order_payment_create",
        "order_payment_read",
        "order_payment_update",
        "order_payment_delete",
        "order_payment_change_status",
        "work_order_read",
        "work_order_change_status",
    ],
    RoleName.MANAGER: _READ_FLOOR
    + [
        "address_create",
        "address_delete",
        "address_read",
        "address_update",
        "company_read",
        "company_update",
        "invoice_create",
        "invoice_delete",
        "invoice_read",
        "invoice_update",
        "office_change_status",
        "office_create",
        "office_delete",
        "office_read",
        "office_update",
        "order_change_status",
        "order_item_update",
        "order_payment_read",
        "order_payment_update",
        "order_shipping_info_update",
        "order_update",
        "role_read",
        "user_read",
        "work_order_change_status",
        "work_order_item_update",
        "work_order_update",
    ],
    RoleName.SALES: _READ_FLOOR
    + [
        "address_create",
        "address_delete",
        "address_read",
        "address_update",
        "company_create",
        "company_read",
        "company_update",
        "office_create",
        "office_read",
        "office_update",
        "order_create",
        "order_update",
        "work_order_create",
        "work_order_update",
        "work_order_change_status",
    ],
}


def seed_roles_and_permissions(db: Session) -> None:
    """Create any missing permissions and roles; existing rows are left alone"""
    permissions = {p.name: p for p in db.query(Permission).all()}
    for name in PERMISSIONS:
        if name not in permissions:
            permission = Permission(name=name, description=name.replace("_", " ").capitalize())
            db.add(permission)
            permissions[name] = permission

    existing_roles = {r.name for r in db.query(Role).all()}
    created = 0
    for role_name, granted in ROLE_PERMISSIONS.items():
        if role_name.value in existing_roles:
            continue
        db.add(Role(name=role_name.value, permissions=[permissions[name] for name in granted]))
        created += 1

    db.commit()
    if created:
        logger.info(f"✅ Seeded {created} roles and {len(PERMISSIONS)} permissions")
