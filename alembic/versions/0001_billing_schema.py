"""tenants, utility rates, rent and utility bills

Revision ID: 0001_billing_schema
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_billing_schema"
down_revision = None
branch_labels = None
depends_on = None

PAYMENT_STATUS = postgresql.ENUM("pending", "submitted", "paid", name="payment_status", create_type=False)
UTILITY_TYPE = postgresql.ENUM("electricity", "water", "generator", name="utility_type", create_type=False)


def _audit_columns():
    return [
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _cycle_columns():
    return [
        sa.Column("subject_id", sa.UUID(), nullable=False),
        sa.Column("bill_date", sa.DateTime(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("original_due_date", sa.DateTime(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("penalty", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("payment_term", sa.Integer(), nullable=False),
        sa.Column("payment_proof_url", sa.String(1024), nullable=True),
        sa.Column("payment_status", PAYMENT_STATUS, nullable=False, server_default="pending"),
    ]


def _bill_indexes(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)
    op.create_index(op.f(f"ix_{table}_subject_id"), table, ["subject_id"], unique=False)
    op.create_index(op.f(f"ix_{table}_due_date"), table, ["due_date"], unique=False)
    op.create_index(op.f(f"ix_{table}_payment_status"), table, ["payment_status"], unique=False)


def upgrade() -> None:
    op.execute("CREATE TYPE payment_status AS ENUM ('pending', 'submitted', 'paid')")
    op.execute("CREATE TYPE utility_type AS ENUM ('electricity', 'water', 'generator')")

    op.create_table(
        "tenants",
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("building_id", sa.UUID(), nullable=True),
        sa.Column("payment_term", sa.Integer(), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("pays_electricity", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pays_water", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pays_generator", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("initial_electricity_reading", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("initial_water_reading", sa.Numeric(12, 2), nullable=False, server_default="0"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tenants_id"), "tenants", ["id"], unique=False)
    op.create_index(op.f("ix_tenants_email"), "tenants", ["email"], unique=False)
    op.create_index(op.f("ix_tenants_building_id"), "tenants", ["building_id"], unique=False)

    op.create_table(
        "utility_rates",
        sa.Column("building_id", sa.UUID(), nullable=False),
        sa.Column("electricity_rate", sa.Numeric(12, 4), nullable=False),
        sa.Column("water_rate", sa.Numeric(12, 4), nullable=False),
        sa.Column("generator_rate", sa.Numeric(12, 4), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_utility_rates_id"), "utility_rates", ["id"], unique=False)
    op.create_index(op.f("ix_utility_rates_building_id"), "utility_rates", ["building_id"], unique=False)

    op.create_table(
        "rent_bills",
        *_cycle_columns(),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["subject_id"], ["tenants.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _bill_indexes("rent_bills")

    op.create_table(
        "utility_bills",
        sa.Column("utility_type", UTILITY_TYPE, nullable=False),
        sa.Column("previous_reading", sa.Numeric(12, 2), nullable=False),
        sa.Column("current_reading", sa.Numeric(12, 2), nullable=False),
        sa.Column("rate", sa.Numeric(12, 4), nullable=False),
        *_cycle_columns(),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["subject_id"], ["tenants.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _bill_indexes("utility_bills")
    op.create_index(op.f("ix_utility_bills_utility_type"), "utility_bills", ["utility_type"], unique=False)


def downgrade() -> None:
    op.drop_table("utility_bills")
    op.drop_table("rent_bills")
    op.drop_table("utility_rates")
    op.drop_table("tenants")
    op.execute("DROP TYPE utility_type")
    op.execute("DROP TYPE payment_status")
