"""create ledger tables

Revision ID: c1a2b3d4e5f6
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c1a2b3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("document", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "consultants",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("commission_percentage", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "commission_percentage >= 0 AND commission_percentage <= 100",
            name="ck_consultants_commission_percentage",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "services",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("consultant_id", sa.String(length=36), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_services_consultant_id"), "services", ["consultant_id"])
    op.create_table(
        "payment_methods",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("allows_installments", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("consultant_id", sa.String(length=36), nullable=False),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("payment_method_id", sa.String(length=36), nullable=False),
        sa.Column("transaction_type", sa.String(length=10), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("installment_count", sa.Integer(), nullable=False),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("total_amount > 0", name="ck_payments_total_amount_positive"),
        sa.CheckConstraint("installment_count >= 1", name="ck_payments_installment_count"),
        sa.CheckConstraint(
            "transaction_type IN ('credit', 'debit')", name="ck_payments_transaction_type"
        ),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["payment_method_id"], ["payment_methods.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_payments_client_id"), "payments", ["client_id"])
    op.create_index(op.f("ix_payments_consultant_id"), "payments", ["consultant_id"])
    op.create_index(op.f("ix_payments_service_id"), "payments", ["service_id"])
    op.create_index(op.f("ix_payments_transaction_date"), "payments", ["transaction_date"])
    op.create_table(
        "installments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("payment_id", sa.String(length=36), nullable=False),
        sa.Column("sequence_number", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("paid_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("sequence_number >= 1", name="ck_installments_sequence_number"),
        sa.CheckConstraint("amount > 0", name="ck_installments_amount_positive"),
        sa.CheckConstraint("status IN ('pending', 'paid')", name="ck_installments_status"),
        sa.CheckConstraint(
            "status = 'pending' OR paid_date IS NOT NULL", name="ck_installments_paid_date"
        ),
        sa.ForeignKeyConstraint(["payment_id"], ["payments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "payment_id", "sequence_number", name="uq_installments_payment_sequence"
        ),
    )
    op.create_index(op.f("ix_installments_payment_id"), "installments", ["payment_id"])
    op.create_index(op.f("ix_installments_due_date"), "installments", ["due_date"])
    op.create_table(
        "commissions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("payment_id", sa.String(length=36), nullable=True),
        sa.Column("consultant_id", sa.String(length=36), nullable=False),
        sa.Column("transaction_type", sa.String(length=10), nullable=False),
        sa.Column("base_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("percentage", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("operation_date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.CheckConstraint("amount >= 0", name="ck_commissions_amount"),
        sa.CheckConstraint(
            "transaction_type IN ('credit', 'debit')", name="ck_commissions_transaction_type"
        ),
        sa.ForeignKeyConstraint(["payment_id"], ["payments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_commissions_payment_id"), "commissions", ["payment_id"], unique=True
    )
    op.create_index(op.f("ix_commissions_consultant_id"), "commissions", ["consultant_id"])
    op.create_index(op.f("ix_commissions_operation_date"), "commissions", ["operation_date"])


def downgrade() -> None:
    op.drop_index(op.f("ix_commissions_operation_date"), table_name="commissions")
    op.drop_index(op.f("ix_commissions_consultant_id"), table_name="commissions")
    op.drop_index(op.f("ix_commissions_payment_id"), table_name="commissions")
    op.drop_table("commissions")
    op.drop_index(op.f("ix_installments_due_date"), table_name="installments")
    op.drop_index(op.f("ix_installments_payment_id"), table_name="installments")
    op.drop_table("installments")
    op.drop_index(op.f("ix_payments_transaction_date"), table_name="payments")
    op.drop_index(op.f("ix_payments_service_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_consultant_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_client_id"), table_name="payments")
    op.drop_table("payments")
    op.drop_table("payment_methods")
    op.drop_index(op.f("ix_services_consultant_id"), table_name="services")
    op.drop_table("services")
    op.drop_table("consultants")
    op.drop_table("clients")
