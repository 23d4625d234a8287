"""Status and choice enumerations shared by models, schemas and services"""

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"
    SHIPPING = "Shipping"
    COMPLETED = "Completed"
    INVOICING = "Invoicing"
    INVOICED = "Invoiced"
    PAYMENT_RECEIVED = "PaymentReceived"
    CANCELLED = "Cancelled"


class OrderItemStatus(str, Enum):
    PENDING = "Pending"
    PREPRESS = "Prepress"
    PRESS = "Press"
    BINDERY = "Bindery"
    SHIPPING = "Shipping"
    COMPLETED = "Completed"
    HOLD = "Hold"
    OUTSOURCED = "Outsourced"
    INVOICED = "Invoiced"
    CANCELLED = "Cancelled"


class WorkOrderStatus(str, Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    APPROVED = "Approved"
    CANCELLED = "Cancelled"


class WorkOrderItemStatus(str, Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    APPROVED = "Approved"
    CANCELLED = "Cancelled"


class StockStatus(str, Enum):
    ON_HAND = "OnHand"
    CS = "CS"  # customer supplied
    ORDERED = "Ordered"
    RECEIVED = "Received"


class TypesettingStatus(str, Enum):
    IN_PROGRESS = "InProgress"
    WAITING_APPROVAL = "WaitingApproval"
    APPROVED = "Approved"
    COMPLETE = "Complete"


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class InvoiceSyncState(str, Enum):
    PENDING = "pending"
    LOCAL_COMMITTED = "local_committed"
    REMOTE_CREATED = "remote_created"
    SYNCED = "synced"
    FAILED = "failed"
    COMPENSATED = "compensated"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CHECK = "Check"
    CREDIT_CARD = "CreditCard"
    ACH = "ACH"
    WIRE = "Wire"
    OTHER = "Other"


class ShippingMethod(str, Enum):
    COURIER = "Courier"
    DELIVER = "Deliver"
    DHL = "DHL"
    FEDEX = "FedEx"
    OTHER = "Other"
    PICKUP = "Pickup"
    UPS = "UPS"
    USPS = "USPS"


class AddressType(str, Enum):
    BILLING = "Billing"
    SHIPPING = "Shipping"
    MAILING = "Mailing"
    OTHER = "Other"


class ProofMethod(str, Enum):
    DIGITAL = "Digital"
    HARD_COPY = "HardCopy"
    PDF = "PDF"
    OTHER = "Other"


class PaperBrand(str, Enum):
    BLAZER_DIGITAL = "BlazerDigital"
    COUGAR = "Cougar"
    ENDURANCE = "Endurance"
    OMNILUX_OPAQUE = "OmniluxOpaque"
    OTHER = "Other"


class PaperType(str, Enum):
    BOOK = "Book"
    COVER = "Cover"
    ENVELOPE = "Envelope"
    GLOSS_COATED = "GlossCoated"
    MATTE_COATED = "MatteCoated"
    PLAIN_UNCOATED = "PlainUncoated"
    OTHER = "Other"


class PaperFinish(str, Enum):
    GLOSS = "Gloss"
    SATIN = "Satin"
    OPAQUE = "Opaque"
    OTHER = "Other"


class RoleName(str, Enum):
    ADMIN = "Admin"
    BINDERY = "Bindery"
    CUSTOMER = "Customer"
    FINANCE = "Finance"
    MANAGER = "Manager"
    PREPRESS = "Prepress"
    PRODUCTION = "Production"
    SALES = "Sales"
