"""initial: businesses, customers, vendors, invoices, purchases, filing_returns, payments

Revision ID: 3f1a2b4c5d6e
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1a2b4c5d6e"
down_revision = None
branch_labels = None
depends_on = None


def _money(name: str, nullable: bool = True, default: bool = True) -> sa.Column:
    return sa.Column(
        name,
        sa.Numeric(15, 2),
        nullable=nullable,
        server_default="0" if default else None,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def _business_fk() -> sa.Column:
    return sa.Column(
        "business_id",
        sa.Uuid(),
        sa.ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _party_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        _business_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("gstin", sa.String(15), nullable=True),
        sa.Column("pan", sa.String(10), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("state_code", sa.String(2), nullable=True),
        sa.Column("pincode", sa.String(6), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(15), nullable=True),
        _created_at(),
    ]


def upgrade() -> None:
    # ── 1. businesses ─────────────────────────────────────────────────
    op.create_table(
        "businesses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("gstin", sa.String(15), nullable=False, index=True),
        sa.Column("pan", sa.String(10), nullable=True),
        sa.Column("business_type", sa.String(30), nullable=False),
        sa.Column("gst_scheme", sa.String(20), nullable=False, server_default="regular"),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(100), nullable=False),
        sa.Column("state_code", sa.String(2), nullable=False),
        sa.Column("pincode", sa.String(6), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(15), nullable=True),
        _created_at(),
    )

    # ── 2. customers / vendors ────────────────────────────────────────
    op.create_table("customers", *_party_columns())
    op.create_table("vendors", *_party_columns())

    # ── 3. invoices (outward supplies) ────────────────────────────────
    op.create_table(
        "invoices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _business_fk(),
        sa.Column("customer_id", sa.Uuid(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("invoice_number", sa.String(50), nullable=False),
        sa.Column("invoice_type", sa.String(30), nullable=False, server_default="tax_invoice"),
        sa.Column("export_type", sa.String(30), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=False, index=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("place_of_supply", sa.String(100), nullable=True),
        sa.Column("place_of_supply_code", sa.String(2), nullable=True),
        sa.Column("tax_treatment", sa.String(20), nullable=False, server_default="intra_state"),
        sa.Column("is_inter_state", sa.Boolean(), server_default=sa.false()),
        sa.Column("is_reverse_charge", sa.Boolean(), server_default=sa.false()),
        sa.Column("items", sa.JSON(), nullable=False),
        _money("subtotal", nullable=False),
        _money("total_discount"),
        _money("total_cgst"),
        _money("total_sgst"),
        _money("total_igst"),
        _money("total_amount", nullable=False),
        sa.Column("amount_in_words", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("terms_and_conditions", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), server_default="draft"),
        _created_at(),
        sa.UniqueConstraint("business_id", "invoice_number", name="uq_invoice_business_number"),
    )

    # ── 4. purchases (inward supplies / ITC) ──────────────────────────
    op.create_table(
        "purchases",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _business_fk(),
        sa.Column("vendor_id", sa.Uuid(), sa.ForeignKey("vendors.id"), nullable=False),
        sa.Column("invoice_number", sa.String(50), nullable=False),
        sa.Column("invoice_date", sa.Date(), nullable=False, index=True),
        sa.Column("category", sa.String(30), server_default="goods"),
        sa.Column("place_of_supply_code", sa.String(2), nullable=True),
        sa.Column("tax_treatment", sa.String(20), nullable=False, server_default="intra_state"),
        sa.Column("is_inter_state", sa.Boolean(), server_default=sa.false()),
        sa.Column("is_reverse_charge", sa.Boolean(), server_default=sa.false()),
        sa.Column("items", sa.JSON(), nullable=False),
        _money("subtotal", nullable=False),
        _money("total_discount"),
        _money("total_cgst"),
        _money("total_sgst"),
        _money("total_igst"),
        _money("total_amount", nullable=False),
        sa.Column("itc_eligibility", sa.String(10), server_default="full"),
        _money("itc_eligible"),
        _money("itc_blocked"),
        sa.Column("gstr2b_status", sa.String(20), server_default="pending"),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
    )

    # ── 5. filing_returns ─────────────────────────────────────────────
    op.create_table(
        "filing_returns",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _business_fk(),
        sa.Column("return_type", sa.String(10), nullable=False),
        sa.Column("period", sa.String(6), nullable=False, index=True),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("filed_date", sa.Date(), nullable=True),
        sa.Column("arn_number", sa.String(50), nullable=True),
        _money("tax_liability", default=False),
        _money("itc_claimed", default=False),
        _money("tax_paid", default=False),
        _money("late_fee", default=False),
        sa.Column("json_data", sa.JSON(), nullable=True),
        _created_at(),
    )

    # ── 6. payments (challans) ────────────────────────────────────────
    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _business_fk(),
        sa.Column(
            "filing_return_id",
            sa.Uuid(),
            sa.ForeignKey("filing_returns.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("challan_number", sa.String(50), nullable=True),
        sa.Column("challan_date", sa.Date(), nullable=True),
        _money("cgst"),
        _money("sgst"),
        _money("igst"),
        _money("cess"),
        _money("interest"),
        _money("late_fee"),
        _money("cash_cgst_used"),
        _money("cash_sgst_used"),
        _money("cash_igst_used"),
        _money("itc_cgst_used"),
        _money("itc_sgst_used"),
        _money("itc_igst_used"),
        _money("total_amount", nullable=False),
        sa.Column("payment_mode", sa.String(30), nullable=True),
        sa.Column("status", sa.String(20), server_default="pending"),
        _created_at(),
    )


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("filing_returns")
    op.drop_table("purchases")
    op.drop_table("invoices")
    op.drop_table("vendors")
    op.drop_table("customers")
    op.drop_table("businesses")
