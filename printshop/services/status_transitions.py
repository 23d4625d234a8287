"""
Status transition rules
Legal-transition tables for every status-bearing entity, plus the single
write path that checks a transition, applies it and records the audit row
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..models import StatusChange, User
from ..statuses import (
    InvoiceStatus,
    OrderItemStatus,
    OrderStatus,
    RoleName,
    StockStatus,
    TypesettingStatus,
    WorkOrderItemStatus,
    WorkOrderStatus,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    allowed: bool
    reason: str = ""


_PRODUCTION_STAGES = ["Pending", "Prepress", "Press", "Bindery", "Shipping"]

ORDER_TRANSITIONS = {
    "Pending": ["Shipping", "Completed", "Invoicing", "Cancelled"],
    "Shipping": ["Pending", "Completed", "Invoicing", "Cancelled"],
    "Completed": ["Shipping", "Invoicing", "Invoiced"],
    "Invoicing": ["Completed", "Invoiced", "Cancelled"],
    "Invoiced": ["PaymentReceived", "Invoicing"],
    "PaymentReceived": ["Invoiced"],  # Correction only
    "Cancelled": ["Pending"],
}

ORDER_ITEM_TRANSITIONS = {
    **{
        stage: [s for s in _PRODUCTION_STAGES if s != stage]
        + ["Completed", "Hold", "Outsourced", "Cancelled"]
        for stage in _PRODUCTION_STAGES
    },
    "Hold": _PRODUCTION_STAGES + ["Outsourced", "Completed", "Cancelled"],
    "Outsourced": _PRODUCTION_STAGES + ["Hold", "Completed", "Cancelled"],
    "Completed": ["Shipping", "Invoiced"],
    "Invoiced": ["Completed"],  # Correction only
    "Cancelled": ["Pending"],
}

WORK_ORDER_TRANSITIONS = {
    "Draft": ["Pending", "Cancelled"],
    "Pending": ["Draft", "Approved", "Cancelled"],
    "Approved": ["Pending", "Cancelled"],
    "Cancelled": ["Draft", "Pending"],
}

STOCK_TRANSITIONS = {
    "OnHand": ["Ordered", "CS"],
    "CS": ["OnHand", "Received"],
    "Ordered": ["Received", "OnHand"],
    "Received": ["OnHand"],
}

TYPESETTING_TRANSITIONS = {
    "InProgress": ["WaitingApproval", "Approved"],
    "WaitingApproval": ["InProgress", "Approved"],
    "Approved": ["InProgress", "Complete"],
    "Complete": ["InProgress"],
}

INVOICE_TRANSITIONS = {
    "Draft": ["Sent", "Cancelled"],
    "Sent": ["Paid", "Overdue", "Cancelled", "Draft"],
    "Overdue": ["Paid", "Sent", "Cancelled"],
    "Paid": ["Sent"],
    "Cancelled": ["Draft"],
}

# machine name -> (enum of legal values, transition table)
MACHINES: dict[str, tuple[type[Enum], dict[str, list[str]]]] = {
    "Order": (OrderStatus, ORDER_TRANSITIONS),
    "OrderItem": (OrderItemStatus, ORDER_ITEM_TRANSITIONS),
    "WorkOrder": (WorkOrderStatus, WORK_ORDER_TRANSITIONS),
    "WorkOrderItem": (WorkOrderItemStatus, WORK_ORDER_TRANSITIONS),
    "Stock": (StockStatus, STOCK_TRANSITIONS),
    "Typesetting": (TypesettingStatus, TYPESETTING_TRANSITIONS),
    "Invoice": (InvoiceStatus, INVOICE_TRANSITIONS),
}


def _value(status: Union[str, Enum, None]) -> Optional[str]:
    return status.value if isinstance(status, Enum) else status


def _legal_values(machine: str) -> set[str]:
    return {member.value for member in MACHINES[machine][0]}


def check_transition(
    machine: str, current: Union[str, Enum, None], target: Union[str, Enum]
) -> TransitionResult:
    """
    Decide whether `current -> target` is legal for `machine`.

    Re-writing the current status is always allowed. A current value the
    table does not know (legacy rows) may move anywhere so it can be repaired.
    """
    table = MACHINES[machine][1]
    current_value, target_value = _value(current), _value(target)

    if target_value not in _legal_values(machine):
        return TransitionResult(False, f"'{target_value}' is not a valid {machine} status")
    if current_value == target_value:
        return TransitionResult(True, "no change")
    if current_value not in table:
        return TransitionResult(True, f"unknown current status '{current_value}'")
    if target_value in table[current_value]:
        return TransitionResult(True)
    return TransitionResult(
        False, f"{machine} cannot move from {current_value} to {target_value}"
    )


def apply_status_change(
    db: Session,
    entity,
    machine: str,
    target: Union[str, Enum],
    user: Optional[User] = None,
    enforce: bool = True,
    cascaded: bool = False,
    field: str = "status",
    override: bool = False,
) -> bool:
    """
    Move `entity.<field>` to `target` and stage an audit row (no commit).

    Raises 409 when the transition table denies the move and `enforce` is set.
    `override` lets an Admin write a denied move; the audit row is flagged.
    Returns False when the status was already `target` and nothing was written.
    """
    target_value = _value(target)
    current_value = getattr(entity, field)
    overridden = False

    if override and (user is None or RoleName.ADMIN.value not in user.role_names):
        raise HTTPException(status_code=403, detail="Only an Admin can override a status transition")

    if enforce:
        result = check_transition(machine, current_value, target_value)
        if not result.allowed and override and target_value in _legal_values(machine):
            overridden = True
            logger.warning(f"⚠️ Admin {user.id} overrode {machine} {entity.id}: {result.reason}")
        elif not result.allowed:
            logger.warning(f"⚠️ Denied {machine} {entity.id} transition: {result.reason}")
            raise HTTPException(status_code=409, detail=result.reason)

    if current_value == target_value:
        return False

    setattr(entity, field, target_value)
    db.add(
        StatusChange(
            entity_type=machine,
            entity_id=entity.id,
            from_status=current_value,
            to_status=target_value,
            changed_by_id=user.id if user else None,
            cascaded=cascaded,
            overridden=overridden,
        )
    )
    logger.info(f"🔄 {machine} {entity.id}: {current_value} -> {target_value}")
    return True
