"""
Formulaire de contact public + transfert EmailJS.
POST /api/contact            {name, email, company, phone, productInterest, message, language, sourcePage}
GET  /api/admin/inquiries    → dernières demandes (admin)

La demande est toujours enregistrée en base ; le transfert EmailJS n'a lieu
que si EMAILJS_SERVICE_ID / EMAILJS_TEMPLATE_ID / EMAILJS_PUBLIC_KEY sont définis.
"""
import logging
import os

import requests as http
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db, db_create_inquiry, db_list_inquiries, db_mark_forwarded
from ...models import ContactInquiryDB, ContactRequest
from ..auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])

EMAILJS_URL = "https://api.emailjs.com/api/v1.0/email/send"


def _emailjs_config() -> dict:
    return {
        "service_id": os.getenv("EMAILJS_SERVICE_ID", ""),
        "template_id": os.getenv("EMAILJS_TEMPLATE_ID", ""),
        "user_id": os.getenv("EMAILJS_PUBLIC_KEY", ""),
        "accessToken": os.getenv("EMAILJS_PRIVATE_KEY", ""),
    }


def send_emailjs(params: dict) -> None:
    """Envoie les paramètres du template via l'API REST EmailJS. Lève HTTPException 503/502."""
    cfg = _emailjs_config()
    if not (cfg["service_id"] and cfg["template_id"] and cfg["user_id"]):
        raise HTTPException(503, "EmailJS non configuré")
    payload = {k: v for k, v in cfg.items() if v}
    payload["template_params"] = params
    try:
        resp = http.post(EMAILJS_URL, json=payload, timeout=10)
    except http.RequestException as e:
        log.error("EmailJS injoignable : %s", e)
        raise HTTPException(502, "EmailJS injoignable")
    if resp.status_code != 200:
        log.error("EmailJS error %s: %s", resp.status_code, resp.text)
        raise HTTPException(502, f"EmailJS API error {resp.status_code}")


@router.post("/api/contact")
def submit_contact(req: ContactRequest, db: Session = Depends(get_db)):
    if not req.name.strip() or "@" not in req.email:
        raise HTTPException(400, "Nom et email valides requis")

    inquiry = db_create_inquiry(db, ContactInquiryDB(
        name=req.name.strip(),
        email=req.email.strip(),
        company=req.company or None,
        phone=req.phone or None,
        product_interest=req.productInterest or None,
        message=req.message,
        language=req.language or None,
        source_page=req.sourcePage or None,
    ))
    log.info("Demande de contact %s (%s)", inquiry.id, inquiry.email)

    send_emailjs({
        "name": req.name, "email": req.email, "company": req.company,
        "phone": req.phone, "productInterest": req.productInterest,
        "message": req.message, "language": req.language, "sourcePage": req.sourcePage,
    })
    db_mark_forwarded(db, inquiry)
    return {"success": True, "id": inquiry.id}


@router.get("/api/admin/inquiries", dependencies=[Depends(require_admin)])
def list_inquiries(limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    return [
        {
            "id": i.id, "name": i.name, "email": i.email, "company": i.company,
            "phone": i.phone, "productInterest": i.product_interest, "message": i.message,
            "language": i.language, "sourcePage": i.source_page,
            "forwarded": i.forwarded, "created_at": i.created_at.isoformat(),
        }
        for i in db_list_inquiries(db, limit)
    ]
