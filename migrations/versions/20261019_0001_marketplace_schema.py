"""marketplace schema: users, vehicles, contracts, queries, visuals, analytics

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum("BUYER", "SELLER", "ADMIN", name="userrole"), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("interests", sa.Text(), nullable=True),
        sa.Column("dealership_name", sa.String(length=255), nullable=True),
        sa.Column("emp_id", sa.String(length=64), nullable=True),
        sa.Column("designation", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"], unique=False)

    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("seller_id", sa.String(length=64), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("trim", sa.String(length=255), nullable=False),
        sa.Column("drive", sa.String(length=8), nullable=False),
        sa.Column("seats", sa.Integer(), nullable=False),
        sa.Column("price_low", sa.Integer(), nullable=False),
        sa.Column("price_high", sa.Integer(), nullable=False),
        sa.Column("use_cases", sa.JSON(), nullable=False),
        sa.Column("f_and_i", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("visual_desc", sa.Text(), nullable=True),
        sa.Column("contract_template", sa.Text(), nullable=True),
        sa.Column("insurance_options", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_vehicles_seller", "vehicles", ["seller_id"], unique=False)
    op.create_index("idx_vehicles_drive", "vehicles", ["drive"], unique=False)

    op.create_table(
        "contracts",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("buyer_id", sa.String(length=64), nullable=False),
        sa.Column("seller_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_name", sa.String(length=255), nullable=False),
        sa.Column("contract_html", sa.Text(), nullable=False),
        sa.Column("contract_summary", sa.Text(), nullable=False),
        sa.Column("highlighted_clauses", sa.JSON(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "REVIEWED", "ACCEPTED", "REJECTED", "NEEDS_CHANGES", name="contractstatus"),
            nullable=False,
        ),
        sa.Column("change_request_message", sa.Text(), nullable=False),
        sa.Column("seller_note", sa.Text(), nullable=False),
        sa.Column("signature_receipt", sa.JSON(), nullable=True),
        sa.Column("revision", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_contracts_buyer_status", "contracts", ["buyer_id", "status"], unique=False)
    op.create_index("idx_contracts_seller_status", "contracts", ["seller_id", "status"], unique=False)

    op.create_table(
        "queries",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("buyer_id", sa.String(length=64), nullable=False),
        sa.Column("buyer_name", sa.String(length=255), nullable=False),
        sa.Column("seller_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_name", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.Enum("OPEN", "CLOSED", name="querystatus"), nullable=False),
        sa.Column("reply", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_queries_buyer", "queries", ["buyer_id"], unique=False)
    op.create_index("idx_queries_seller_status", "queries", ["seller_id", "status"], unique=False)

    op.create_table(
        "saved_visuals",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("buyer_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_name", sa.String(length=255), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_saved_visuals_buyer", "saved_visuals", ["buyer_id"], unique=False)

    op.create_table(
        "usage_analytics",
        sa.Column("key", sa.String(length=32), nullable=False),
        sa.Column("family_count", sa.Integer(), nullable=False),
        sa.Column("commute_count", sa.Integer(), nullable=False),
        sa.Column("trekking_count", sa.Integer(), nullable=False),
        sa.Column("luxury_count", sa.Integer(), nullable=False),
        sa.Column("budget_count", sa.Integer(), nullable=False),
        sa.Column("safety_count", sa.Integer(), nullable=False),
        sa.Column("total_visits", sa.Integer(), nullable=False),
        sa.Column("total_revenue", sa.Integer(), nullable=False),
        sa.Column("conversion_rate", sa.Float(), nullable=False),
        sa.Column("pending_deals", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    op.drop_table("usage_analytics")
    op.drop_index("idx_saved_visuals_buyer", table_name="saved_visuals")
    op.drop_table("saved_visuals")
    op.drop_index("idx_queries_seller_status", table_name="queries")
    op.drop_index("idx_queries_buyer", table_name="queries")
    op.drop_table("queries")
    op.drop_index("idx_contracts_seller_status", table_name="contracts")
    op.drop_index("idx_contracts_buyer_status", table_name="contracts")
    op.drop_table("contracts")
    op.drop_index("idx_vehicles_drive", table_name="vehicles")
    op.drop_index("idx_vehicles_seller", table_name="vehicles")
    op.drop_table("vehicles")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
