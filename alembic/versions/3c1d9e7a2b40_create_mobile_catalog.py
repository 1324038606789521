"""Create mobile catalog tables

Revision ID: 3c1d9e7a2b40
Revises:
Create Date: 2025-06-02 10:12:31.402113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1d9e7a2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "mobile_brands",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "mobiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "brand_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("mobile_brands.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("display_size", sa.String(length=30), nullable=True),
        sa.Column("ram", sa.String(length=30), nullable=True),
        sa.Column("storage", sa.String(length=30), nullable=True),
        sa.Column("camera", sa.String(length=100), nullable=True),
        sa.Column("battery", sa.String(length=30), nullable=True),
        sa.Column("processor", sa.String(length=100), nullable=True),
        sa.Column("operating_system", sa.String(length=50), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_mobiles_brand_id", "mobiles", ["brand_id"])
    op.create_table(
        "mobile_prices",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "mobile_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("mobiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("retailer", sa.String(length=100), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_mobile_prices_price_non_negative"),
    )
    op.create_index("ix_mobile_prices_created_at", "mobile_prices", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_mobile_prices_created_at", table_name="mobile_prices")
    op.drop_table("mobile_prices")
    op.drop_index("ix_mobiles_brand_id", table_name="mobiles")
    op.drop_table("mobiles")
    op.drop_table("mobile_brands")
