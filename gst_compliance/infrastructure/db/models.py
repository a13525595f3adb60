import uuid
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from gst_compliance.infrastructure.db.base import Base


class Business(Base):
    __tablename__ = "businesses"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    gstin = Column(String(15), nullable=False, index=True)
    pan = Column(String(10))
    business_type = Column(String(30), nullable=False)   # proprietor, partnership, llp, pvt_ltd
    gst_scheme = Column(String(20), nullable=False, default="regular")  # regular, composition
    address = Column(Text, nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    state_code = Column(String(2), nullable=False)
    pincode = Column(String(6), nullable=False)
    email = Column(String(255))
    phone = Column(String(15))
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class Customer(Base):
    __tablename__ = "customers"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    gstin = Column(String(15))
    pan = Column(String(10))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    state_code = Column(String(2))
    pincode = Column(String(6))
    email = Column(String(255))
    phone = Column(String(15))
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class Vendor(Base):
    __tablename__ = "vendors"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    gstin = Column(String(15))
    pan = Column(String(10))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    state_code = Column(String(2))
    pincode = Column(String(6))
    email = Column(String(255))
    phone = Column(String(15))
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class Invoice(Base):
    """Outward supply document. ``items`` holds the versioned line-items blob."""
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("business_id", "invoice_number", name="uq_invoice_business_number"),
    )
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Uuid, ForeignKey("customers.id"), nullable=False)
    invoice_number = Column(String(50), nullable=False)
    invoice_type = Column(String(30), nullable=False, default="tax_invoice")
    export_type = Column(String(30))
    invoice_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date)
    place_of_supply = Column(String(100))
    place_of_supply_code = Column(String(2))
    tax_treatment = Column(String(20), nullable=False, default="intra_state")
    is_inter_state = Column(Boolean, default=False)
    is_reverse_charge = Column(Boolean, default=False)
    items = Column(JSON, nullable=False)
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    total_discount = Column(Numeric(15, 2), default=0)
    total_cgst = Column(Numeric(15, 2), default=0)
    total_sgst = Column(Numeric(15, 2), default=0)
    total_igst = Column(Numeric(15, 2), default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    amount_in_words = Column(Text)
    notes = Column(Text)
    terms_and_conditions = Column(Text)
    status = Column(String(20), default="draft")  # draft, sent, paid, cancelled
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class Purchase(Base):
    """Inward supply document; its tax is the business's input tax credit."""
    __tablename__ = "purchases"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id = Column(Uuid, ForeignKey("vendors.id"), nullable=False)
    invoice_number = Column(String(50), nullable=False)
    invoice_date = Column(Date, nullable=False, index=True)
    category = Column(String(30), default="goods")  # goods, services, capital_goods
    place_of_supply_code = Column(String(2))
    tax_treatment = Column(String(20), nullable=False, default="intra_state")
    is_inter_state = Column(Boolean, default=False)
    is_reverse_charge = Column(Boolean, default=False)
    items = Column(JSON, nullable=False)
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    total_discount = Column(Numeric(15, 2), default=0)
    total_cgst = Column(Numeric(15, 2), default=0)
    total_sgst = Column(Numeric(15, 2), default=0)
    total_igst = Column(Numeric(15, 2), default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    itc_eligibility = Column(String(10), default="full")  # full, partial, none
    itc_eligible = Column(Numeric(15, 2), default=0)
    itc_blocked = Column(Numeric(15, 2), default=0)
    gstr2b_status = Column(String(20), default="pending")  # pending, matched, not_found
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class FilingReturn(Base):
    __tablename__ = "filing_returns"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    return_type = Column(String(10), nullable=False)  # GSTR-1, GSTR-3B, GSTR-4, GSTR-9, CMP-08
    period = Column(String(6), nullable=False, index=True)  # MMYYYY
    due_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, filed
    filed_date = Column(Date)
    arn_number = Column(String(50))
    tax_liability = Column(Numeric(15, 2))
    itc_claimed = Column(Numeric(15, 2))
    tax_paid = Column(Numeric(15, 2))
    late_fee = Column(Numeric(15, 2))
    json_data = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class Payment(Base):
    """GST challan (PMT-06)."""
    __tablename__ = "payments"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    filing_return_id = Column(Uuid, ForeignKey("filing_returns.id", ondelete="SET NULL"))
    challan_number = Column(String(50))
    challan_date = Column(Date)
    cgst = Column(Numeric(15, 2), default=0)
    sgst = Column(Numeric(15, 2), default=0)
    igst = Column(Numeric(15, 2), default=0)
    cess = Column(Numeric(15, 2), default=0)
    interest = Column(Numeric(15, 2), default=0)
    late_fee = Column(Numeric(15, 2), default=0)
    cash_cgst_used = Column(Numeric(15, 2), default=0)
    cash_sgst_used = Column(Numeric(15, 2), default=0)
    cash_igst_used = Column(Numeric(15, 2), default=0)
    itc_cgst_used = Column(Numeric(15, 2), default=0)
    itc_sgst_used = Column(Numeric(15, 2), default=0)
    itc_igst_used = Column(Numeric(15, 2), default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    payment_mode = Column(String(30))
    status = Column(String(20), default="pending")  # pending, paid
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
