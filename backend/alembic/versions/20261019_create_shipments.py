"""Create shipments table

Revision ID: 20261019_create_shipments
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261019_create_shipments"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "shipments",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("direction", sa.String(32), nullable=False, server_default="incoming"),
        sa.Column("carrier", sa.String(32), nullable=False),
        sa.Column("tracking_code", sa.String(), nullable=False),
        sa.Column("last_update", sa.String(), nullable=False),
        sa.Column("pickup_location", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=True),
        sa.Column("receipt_image", sa.Text(), nullable=True),
        sa.Column("packaging_photo", sa.Text(), nullable=True),
        sa.Column("packing_note", sa.Text(), nullable=True),
        sa.Column("shipping_deadline", sa.Date(), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_shipments_user_id", "shipments", ["user_id"])
    op.create_index("ix_shipments_user_tracking_code", "shipments", ["user_id", "tracking_code"])


def downgrade():
    op.drop_index("ix_shipments_user_tracking_code", table_name="shipments")
    op.drop_index("ix_shipments_user_id", table_name="shipments")
    op.drop_table("shipments")
