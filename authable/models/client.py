from __future__ import annotations

import uuid
from datetime import datetime

from authable.models.base import Base, JSONType, utcnow
from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    secret: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    redirect_url: Mapped[str] = mapped_column(String(2000), nullable=False)

    settings: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    priv_settings: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    inserted_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user = relationship("User", back_populates="clients")
    apps = relationship("App", back_populates="client", cascade="all, delete-orphan")
