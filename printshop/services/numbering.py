"""Document number allocation for work orders, orders and invoices"""

import re
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models_invoice import Invoice

INVOICE_SEQUENCE_WIDTH = 5


def next_sequence_number(db: Session, column, start: int) -> int:
    """Next value after the highest number in `column`, never below `start`"""
    current = db.query(func.max(column)).scalar()
    if current is None or current < start:
        return start
    return current + 1


def generate_invoice_number(db: Session, now: Optional[datetime] = None) -> str:
    """INV-{year}-{NNNNN}, restarting at 00001 each year"""
    year = (now or datetime.utcnow()).year
    prefix = f"INV-{year}-"
    numbers = (
        db.query(Invoice.invoice_number).filter(Invoice.invoice_number.like(f"{prefix}%")).all()
    )

    highest = 0
    for (number,) in numbers:
        match = re.fullmatch(rf"{re.escape(prefix)}(\d+)", number or "")
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}{highest + 1:0{INVOICE_SEQUENCE_WIDTH}d}"
