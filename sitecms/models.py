"""
Data models — ContactInquiry, AdminSession + schémas de requête
SQLAlchemy (SQLite) + Pydantic v2
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ── ENUMS ──────────────────────────────────────────────────────────────

class PageKind(str, Enum):
    PRODUCT  = "product"
    SOLUTION = "solution"
    BLANK    = "blank"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class ContactInquiryDB(Base):
    __tablename__ = "contact_inquiries"
    id:               Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:             Mapped[str]           = mapped_column(sa.String, nullable=False)
    email:            Mapped[str]           = mapped_column(sa.String, nullable=False)
    company:          Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    phone:            Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    product_interest: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    message:          Mapped[str]           = mapped_column(sa.Text, default="")
    language:         Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    source_page:      Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    forwarded:        Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    created_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)


class AdminSessionDB(Base):
    __tablename__ = "admin_sessions"
    token:      Mapped[str]      = mapped_column(sa.String, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    expires_at: Mapped[datetime] = mapped_column(sa.DateTime, nullable=False)


# ── PYDANTIC (API) ─────────────────────────────────────────────────────

class ContentWrite(BaseModel):
    file: str = ""
    content: Any = None
    confirm: bool = False


class LanguageRequest(BaseModel):
    code: str = ""


class ImageUpload(BaseModel):
    filename: str = ""
    content: str = ""


class PageCreate(BaseModel):
    lang: str
    kind: PageKind = PageKind.BLANK
    name: str
    folder: Optional[str] = None


class EditorChange(BaseModel):
    """Une opération d'édition appliquée au document de travail."""
    op: str
    path: List[Any] = Field(default_factory=list)
    value: Any = None
    index: Optional[int] = Field(None, ge=0)
    direction: int = 0
    block_type: Optional[str] = None


class EditorChangeRequest(BaseModel):
    document: Any
    change: EditorChange


class RawUpdate(BaseModel):
    text: str
    last_good: Any = None


class PreviewRequest(BaseModel):
    blocks: List[Any] = Field(default_factory=list)


class ContactRequest(BaseModel):
    name: str
    email: str
    company: str = ""
    phone: str = ""
    productInterest: str = ""
    message: str = ""
    language: str = ""
    sourcePage: str = ""


class EditorDocument(BaseModel):
    document: Any = None
