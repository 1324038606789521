from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from mobile_pk.infra.db.models.base import Base


class MobileRow(Base):
    __tablename__ = "mobiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    brand_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("mobile_brands.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    model: Mapped[str] = mapped_column(String(100), nullable=False)

    display_size: Mapped[str | None] = mapped_column(String(30), nullable=True)
    ram: Mapped[str | None] = mapped_column(String(30), nullable=True)
    storage: Mapped[str | None] = mapped_column(String(30), nullable=True)
    camera: Mapped[str | None] = mapped_column(String(100), nullable=True)
    battery: Mapped[str | None] = mapped_column(String(30), nullable=True)
    processor: Mapped[str | None] = mapped_column(String(100), nullable=True)
    operating_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
