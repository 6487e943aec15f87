"""SQLite — init + session + CRUD helpers"""
import os
import secrets
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, ContactInquiryDB, AdminSessionDB

DATA_DIR = Path(os.getenv("SITECMS_STATE_DIR", str(Path.cwd() / "data")))

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "sitecms.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Contact ──
def db_create_inquiry(db: Session, obj: ContactInquiryDB) -> ContactInquiryDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_list_inquiries(db: Session, limit: int = 100) -> List[ContactInquiryDB]:
    return (db.query(ContactInquiryDB)
              .order_by(ContactInquiryDB.created_at.desc())
              .limit(limit).all())

def db_mark_forwarded(db: Session, inquiry: ContactInquiryDB):
    inquiry.forwarded = True
    db.commit()


# ── Admin sessions ──
def db_create_session(db: Session, hours: int = 168) -> AdminSessionDB:
    now = datetime.utcnow()
    s = AdminSessionDB(token=secrets.token_urlsafe(32), created_at=now,
                       expires_at=now + timedelta(hours=hours))
    db.add(s); db.commit(); db.refresh(s); return s

def db_get_session(db: Session, token: str) -> Optional[AdminSessionDB]:
    """Session valide (non expirée) ou None. Les sessions expirées sont purgées."""
    if not token:
        return None
    s = db.get(AdminSessionDB, token)
    if s is None:
        return None
    if s.expires_at <= datetime.utcnow():
        db.delete(s); db.commit()
        return None
    return s

def db_delete_session(db: Session, token: str):
    s = db.get(AdminSessionDB, token)
    if s:
        db.delete(s); db.commit()
