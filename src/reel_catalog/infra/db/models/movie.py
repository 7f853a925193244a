from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, Text, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from reel_catalog.infra.db.models.base import Base


class MovieRow(Base):
    __tablename__ = "movies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # minutes
    genres: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Space-delimited lowercase words of title + genres, padded with a space on
    # both ends so whole-word matches are a plain LIKE '% word %'
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default=" ")
