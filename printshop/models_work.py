"""
Production Models
Work orders, orders, their line items and everything attached to them:
artwork, stock, processing options, typesetting and shipping
"""
from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class ShippingInfo(Base):
    __tablename__ = "shipping_info"

    id = Column(Integer, primary_key=True, index=True)
    instructions = Column(Text, nullable=True)
    shipping_other = Column(String(255), nullable=True)
    shipping_date = Column(DateTime, nullable=True)
    shipping_method = Column(String(20), default="Other")  # Courier, Deliver, DHL, FedEx, Pickup, UPS, USPS, Other
    shipping_cost = Column(Float, nullable=True)
    ship_to_same_as_bill_to = Column(Boolean, default=False)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=True)
    office_id = Column(Integer, ForeignKey("offices.id"), nullable=True)
    tracking_number = Column(JSON, default=list)  # list of tracking numbers
    shipping_notes = Column(Text, nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    address = relationship("Address")
    pickup = relationship(
        "ShippingPickup", back_populates="shipping_info", uselist=False, cascade="all, delete-orphan"
    )


class ShippingPickup(Base):
    __tablename__ = "shipping_pickups"

    id = Column(Integer, primary_key=True, index=True)
    shipping_info_id = Column(
        Integer, ForeignKey("shipping_info.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    contact_name = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    pickup_date = Column(DateTime, nullable=True)
    pickup_time = Column(String(20), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    shipping_info = relationship("ShippingInfo", back_populates="pickup")


class WorkOrder(Base):
    __tablename__ = "work_orders"

    id = Column(Integer, primary_key=True, index=True)
    work_order_number = Column(Integer, unique=True, nullable=False, index=True)
    office_id = Column(Integer, ForeignKey("offices.id"), nullable=False, index=True)
    contact_person_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(String(20), default="Draft", nullable=False)  # Draft, Pending, Approved, Cancelled
    purchase_order_number = Column(String(100), nullable=True)
    deposit = Column(Float, default=0)
    description = Column(Text, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    special_instructions = Column(Text, nullable=True)
    total_cost = Column(Float, nullable=True)
    version = Column(Integer, default=1, nullable=False)
    shipping_info_id = Column(Integer, ForeignKey("shipping_info.id"), nullable=True)
    order_id = Column(Integer, ForeignKey("orders.id", use_alter=True), nullable=True)  # set on conversion
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    office = relationship("Office", back_populates="work_orders")
    contact_person = relationship("User", foreign_keys=[contact_person_id])
    created_by = relationship("User", foreign_keys=[created_by_id])
    shipping_info = relationship("ShippingInfo")
    order = relationship("Order", foreign_keys=[order_id], post_update=True)
    items = relationship(
        "WorkOrderItem",
        back_populates="work_order",
        order_by="WorkOrderItem.id",
        cascade="all, delete-orphan",
    )
    notes = relationship(
        "WorkOrderNote",
        back_populates="work_order",
        order_by="WorkOrderNote.id",
        cascade="all, delete-orphan",
    )


class WorkOrderItem(Base):
    __tablename__ = "work_order_items"

    id = Column(Integer, primary_key=True, index=True)
    work_order_id = Column(Integer, ForeignKey("work_orders.id", ondelete="CASCADE"), nullable=False)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=True)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, default=0)
    cost = Column(Float, default=0)
    amount = Column(Float, default=0)
    shipping_amount = Column(Float, default=0)
    ink = Column(String(100), nullable=True)
    size = Column(String(100), nullable=True)
    other = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    status = Column(String(20), default="Draft", nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    work_order = relationship("WorkOrder", back_populates="items")
    product_type = relationship("ProductType")
    artwork = relationship(
        "WorkOrderItemArtwork", back_populates="work_order_item", cascade="all, delete-orphan"
    )
    stocks = relationship(
        "WorkOrderItemStock", back_populates="work_order_item", cascade="all, delete-orphan"
    )
    processing_options = relationship(
        "ProcessingOptions", back_populates="work_order_item", cascade="all, delete-orphan"
    )
    typesettings = relationship("Typesetting", back_populates="work_order_item")


class WorkOrderItemArtwork(Base):
    __tablename__ = "work_order_item_artwork"

    id = Column(Integer, primary_key=True, index=True)
    work_order_item_id = Column(
        Integer, ForeignKey("work_order_items.id", ondelete="CASCADE"), nullable=False
    )
    file_url = Column(String(500), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    work_order_item = relationship("WorkOrderItem", back_populates="artwork")


class WorkOrderNote(Base):
    __tablename__ = "work_order_notes"

    id = Column(Integer, primary_key=True, index=True)
    work_order_id = Column(Integer, ForeignKey("work_orders.id", ondelete="CASCADE"), nullable=False)
    note = Column(Text, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    work_order = relationship("WorkOrder", back_populates="notes")
    created_by = relationship("User")


class StockColumns:
    """Paper stock allocation columns shared by order and work order item stock"""

    stock_qty = Column(Integer, default=0)
    stock_status = Column(String(20), default="OnHand")  # OnHand, CS, Ordered, Received
    cost_per_m = Column(Float, nullable=True)  # cost per thousand sheets
    total_cost = Column(Float, nullable=True)
    supplier = Column(String(255), nullable=True)
    supplied_from = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    ordered_date = Column(DateTime, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    received = Column(Boolean, default=False)
    received_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class WorkOrderItemStock(StockColumns, Base):
    __tablename__ = "work_order_item_stocks"

    id = Column(Integer, primary_key=True, index=True)
    work_order_item_id = Column(
        Integer, ForeignKey("work_order_items.id", ondelete="CASCADE"), nullable=False
    )
    paper_product_id = Column(Integer, ForeignKey("paper_products.id"), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    work_order_item = relationship("WorkOrderItem", back_populates="stocks")
    paper_product = relationship("PaperProduct")


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(Integer, unique=True, nullable=False, index=True)
    office_id = Column(Integer, ForeignKey("offices.id"), nullable=False, index=True)
    contact_person_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    walk_in_customer_id = Column(Integer, ForeignKey("walk_in_customers.id"), nullable=True)
    work_order_id = Column(Integer, ForeignKey("work_orders.id"), nullable=True)  # origin
    status = Column(String(20), default="Pending", nullable=False)
    purchase_order_number = Column(String(100), nullable=True)
    deposit = Column(Float, default=0)
    description = Column(Text, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    special_instructions = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    total_cost = Column(Float, nullable=True)
    version = Column(Integer, default=1, nullable=False)
    shipping_info_id = Column(Integer, ForeignKey("shipping_info.id"), nullable=True)
    quickbooks_invoice_id = Column(String(255), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    office = relationship("Office", back_populates="orders")
    contact_person = relationship("User", foreign_keys=[contact_person_id])
    created_by = relationship("User", foreign_keys=[created_by_id])
    walk_in_customer = relationship("WalkInCustomer", back_populates="orders")
    work_order = relationship("WorkOrder", foreign_keys=[work_order_id])
    shipping_info = relationship("ShippingInfo")
    items = relationship(
        "OrderItem", back_populates="order", order_by="OrderItem.id", cascade="all, delete-orphan"
    )
    order_notes = relationship(
        "OrderNote", back_populates="order", order_by="OrderNote.id", cascade="all, delete-orphan"
    )
    payments = relationship(
        "OrderPayment",
        back_populates="order",
        order_by="OrderPayment.id",
        cascade="all, delete-orphan",
    )
    invoices = relationship("Invoice", back_populates="order")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=True)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, default=0)
    cost = Column(Float, default=0)
    amount = Column(Float, default=0)
    shipping_amount = Column(Float, default=0)
    ink = Column(String(100), nullable=True)
    size = Column(String(100), nullable=True)
    other = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    status = Column(String(20), default="Pending", nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    order = relationship("Order", back_populates="items")
    product_type = relationship("ProductType")
    artwork = relationship("OrderItemArtwork", back_populates="order_item", cascade="all, delete-orphan")
    stocks = relationship("OrderItemStock", back_populates="order_item", cascade="all, delete-orphan")
    processing_options = relationship(
        "ProcessingOptions", back_populates="order_item", cascade="all, delete-orphan"
    )
    typesettings = relationship("Typesetting", back_populates="order_item")


class OrderItemArtwork(Base):
    __tablename__ = "order_item_artwork"

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False)
    file_url = Column(String(500), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    order_item = relationship("OrderItem", back_populates="artwork")


class OrderItemStock(StockColumns, Base):
    __tablename__ = "order_item_stocks"

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False)
    paper_product_id = Column(Integer, ForeignKey("paper_products.id"), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    order_item = relationship("OrderItem", back_populates="stocks")
    paper_product = relationship("PaperProduct")


class OrderNote(Base):
    __tablename__ = "order_notes"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    note = Column(Text, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    order = relationship("Order", back_populates="order_notes")
    created_by = relationship("User")


class OrderPayment(Base):
    __tablename__ = "order_payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Float, nullable=False)
    payment_date = Column(DateTime, nullable=False)
    payment_method = Column(String(20), nullable=False)  # Cash, Check, CreditCard, ACH, Wire, Other
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    order = relationship("Order", back_populates="payments")


class Typesetting(Base):
    """Pre-press work attached to exactly one order item or work order item"""

    __tablename__ = "typesetting"

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id"), nullable=True, index=True)
    work_order_item_id = Column(Integer, ForeignKey("work_order_items.id"), nullable=True, index=True)
    approved = Column(Boolean, default=False)
    cost = Column(Float, nullable=True)
    date_in = Column(DateTime, nullable=True)
    time_in = Column(String(20), nullable=True)
    plate_ran = Column(String(100), nullable=True)
    prep_time = Column(Integer, nullable=True)  # minutes
    status = Column(String(20), default="InProgress", nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    order_item = relationship("OrderItem", back_populates="typesettings")
    work_order_item = relationship("WorkOrderItem", back_populates="typesettings")
    options = relationship(
        "TypesettingOption", back_populates="typesetting", cascade="all, delete-orphan"
    )
    proofs = relationship(
        "TypesettingProof",
        back_populates="typesetting",
        order_by="TypesettingProof.proof_number",
        cascade="all, delete-orphan",
    )


class TypesettingOption(Base):
    __tablename__ = "typesetting_options"

    id = Column(Integer, primary_key=True, index=True)
    typesetting_id = Column(Integer, ForeignKey("typesetting.id", ondelete="CASCADE"), nullable=False)
    option = Column(String(255), nullable=False)
    selected = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())

    typesetting = relationship("Typesetting", back_populates="options")


class TypesettingProof(Base):
    __tablename__ = "typesetting_proofs"

    id = Column(Integer, primary_key=True, index=True)
    typesetting_id = Column(Integer, ForeignKey("typesetting.id", ondelete="CASCADE"), nullable=False)
    proof_number = Column(Integer, nullable=False)
    date_submitted = Column(DateTime, nullable=True)
    approved = Column(Boolean, default=False)
    notes = Column(Text, nullable=True)
    proof_method = Column(String(20), default="Digital")  # Digital, HardCopy, PDF, Other
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    typesetting = relationship("Typesetting", back_populates="proofs")
    artwork = relationship(
        "TypesettingProofArtwork", back_populates="typesetting_proof", cascade="all, delete-orphan"
    )


class TypesettingProofArtwork(Base):
    __tablename__ = "typesetting_proof_artwork"

    id = Column(Integer, primary_key=True, index=True)
    typesetting_proof_id = Column(
        Integer, ForeignKey("typesetting_proofs.id", ondelete="CASCADE"), nullable=False
    )
    file_url = Column(String(500), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    typesetting_proof = relationship("TypesettingProof", back_populates="artwork")


class ProcessingOptions(Base):
    """Bindery and finishing instructions for a line item"""

    __tablename__ = "processing_options"

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=True)
    work_order_item_id = Column(
        Integer, ForeignKey("work_order_items.id", ondelete="CASCADE"), nullable=True
    )
    binding_type = Column(String(100), nullable=True)
    cutting = Column(String(255), nullable=True)
    drilling = Column(String(255), nullable=True)
    folding = Column(String(255), nullable=True)
    padding = Column(String(255), nullable=True)
    stitching = Column(String(255), nullable=True)
    numbering_color = Column(String(50), nullable=True)
    numbering_start = Column(Integer, nullable=True)
    numbering_end = Column(Integer, nullable=True)
    other = Column(Text, nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    order_item = relationship("OrderItem", back_populates="processing_options")
    work_order_item = relationship("WorkOrderItem", back_populates="processing_options")


class PaperProduct(Base):
    __tablename__ = "paper_products"

    id = Column(Integer, primary_key=True, index=True)
    reference_id = Column(String(100), unique=True, nullable=False)
    brand = Column(String(50), default="Other")
    paper_type = Column(String(50), default="Other")
    finish = Column(String(50), default="Other")
    custom_description = Column(String(255), nullable=True)
    size = Column(String(50), nullable=True)
    weight_lb = Column(Float, nullable=True)
    caliper = Column(Float, nullable=True)
    width = Column(Float, default=0)
    height = Column(Float, default=0)
    m_weight = Column(Float, default=0)  # weight per thousand sheets
    sheets_per_unit = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ProductType(Base):
    __tablename__ = "product_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(255), nullable=True)
