"""
Data models — Template (enregistrement persisté)
SQLAlchemy (SQLite) + Pydantic v2
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from pydantic import BaseModel
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class TemplateDB(Base):
    __tablename__ = "templates"
    id:         Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id:    Mapped[str]           = mapped_column(sa.String, nullable=False, index=True)
    name:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    content:    Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)  # JSON Block[] ou HTML brut
    created_at: Mapped[datetime]      = mapped_column(sa.DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime]      = mapped_column(sa.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


# ── PYDANTIC ───────────────────────────────────────────────────────────

class Template(BaseModel):
    """Enregistrement tel qu'échangé avec les collaborateurs load/save."""
    id:         str
    user_id:    str
    name:       str
    content:    Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_db(cls, row: TemplateDB) -> "Template":
        return cls(
            id=row.id,
            user_id=row.user_id,
            name=row.name,
            content=row.content,
            created_at=row.created_at.isoformat() if row.created_at else "",
            updated_at=row.updated_at.isoformat() if row.updated_at else "",
        )
