"""
Contrôle d'accès admin.

Accepté :
  - cookie `admin_session` → session serveur valide (AdminSessionDB)
  - en-tête X-Admin-Token == ADMIN_TOKEN (scripts / CI)
"""
import os

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..database import get_db, db_get_session

SESSION_COOKIE = "admin_session"


def _admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "changeme")


def require_admin(request: Request, db: Session = Depends(get_db)):
    header = request.headers.get("X-Admin-Token")
    if header and header == _admin_token():
        return
    if db_get_session(db, request.cookies.get(SESSION_COOKIE, "")):
        return
    raise HTTPException(403, "Accès refusé")
