"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "admin",
        sa.Column("admin_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("admin_name", sa.String(length=32), nullable=False),
    )

    op.create_table(
        "orders",
        sa.Column("orders_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("customers_id", sa.Integer(), nullable=True),
        sa.Column("customers_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("customers_email_address", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("orders_status", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("date_purchased", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_orders_customers_id", "orders", ["customers_id"])
    op.create_index("ix_orders_orders_status", "orders", ["orders_status"])

    op.create_table(
        "orders_status",
        sa.Column("orders_status_id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("language_id", sa.Integer(), primary_key=True, autoincrement=False, server_default="1"),
        sa.Column("orders_status_name", sa.String(length=64), nullable=False),
    )

    op.create_table(
        "orders_status_history",
        sa.Column("orders_status_history_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("orders_id", sa.Integer(), nullable=False),
        sa.Column("orders_status_id", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.String(length=255), nullable=True),
        sa.Column("date_added", sa.DateTime(timezone=True), nullable=False),
        sa.Column("customer_notified", sa.Integer(), nullable=False, server_default="-1"),
        sa.Column("comments", sa.Text(), nullable=True),
    )
    op.create_index("ix_orders_status_history_orders_id", "orders_status_history", ["orders_id"])
    op.create_index(
        "idx_orders_status_history_lookup",
        "orders_status_history",
        ["orders_id", "orders_status_id", "date_added"],
    )

def downgrade():
    op.drop_index("idx_orders_status_history_lookup", table_name="orders_status_history")
    op.drop_index("ix_orders_status_history_orders_id", table_name="orders_status_history")
    op.drop_table("orders_status_history")
    op.drop_table("orders_status")
    op.drop_index("ix_orders_orders_status", table_name="orders")
    op.drop_index("ix_orders_customers_id", table_name="orders")
    op.drop_table("orders")
    op.drop_table("admin")
