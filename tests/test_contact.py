"""Tests formulaire de contact — stockage en base + transfert EmailJS (mocké)."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from sitecms.database import SessionLocal
from sitecms.models import ContactInquiryDB

FORM = {
    "name": "Li Wei", "email": "li@example.com", "company": "ACME",
    "productInterest": "Smart Lock", "message": "Prix ?", "language": "zh", "sourcePage": "/zh/contact",
}


@pytest.fixture
def emailjs(monkeypatch):
    monkeypatch.setenv("EMAILJS_SERVICE_ID", "svc")
    monkeypatch.setenv("EMAILJS_TEMPLATE_ID", "tpl")
    monkeypatch.setenv("EMAILJS_PUBLIC_KEY", "pub")
    monkeypatch.delenv("EMAILJS_PRIVATE_KEY", raising=False)


def _inquiry(inquiry_id):
    db = SessionLocal()
    try:
        return db.get(ContactInquiryDB, inquiry_id)
    finally:
        db.close()


def test_forwarded_to_emailjs(anon, emailjs):
    ok = MagicMock(status_code=200, text="OK")
    with patch("sitecms.api.routes.contact.http.post", return_value=ok) as post:
        r = anon.post("/api/contact", json=FORM)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True

    payload = post.call_args.kwargs["json"]
    assert payload["service_id"] == "svc"
    assert payload["user_id"] == "pub"
    assert "accessToken" not in payload
    assert payload["template_params"]["productInterest"] == "Smart Lock"
    assert post.call_args.kwargs["timeout"] == 10

    inquiry = _inquiry(body["id"])
    assert inquiry.forwarded is True
    assert inquiry.product_interest == "Smart Lock"


def test_not_configured(anon, monkeypatch):
    for var in ("EMAILJS_SERVICE_ID", "EMAILJS_TEMPLATE_ID", "EMAILJS_PUBLIC_KEY"):
        monkeypatch.delenv(var, raising=False)
    with patch("sitecms.api.routes.contact.http.post") as post:
        r = anon.post("/api/contact", json=FORM)
    assert r.status_code == 503
    post.assert_not_called()


def test_emailjs_unreachable(anon, emailjs):
    with patch("sitecms.api.routes.contact.http.post", side_effect=requests.ConnectionError("down")):
        r = anon.post("/api/contact", json=FORM)
    assert r.status_code == 502


def test_emailjs_error_status(anon, emailjs):
    bad = MagicMock(status_code=400, text="The template ID is invalid")
    with patch("sitecms.api.routes.contact.http.post", return_value=bad):
        r = anon.post("/api/contact", json=FORM)
    assert r.status_code == 502
    assert "400" in r.json()["detail"]


@pytest.mark.parametrize("override", [{"name": "  "}, {"email": "no-at-sign"}])
def test_invalid_form(anon, override):
    assert anon.post("/api/contact", json={**FORM, **override}).status_code == 400


def test_inquiries_listed_for_admin(client, emailjs):
    with patch("sitecms.api.routes.contact.http.post", return_value=MagicMock(status_code=200)):
        inquiry_id = client.post("/api/contact", json=FORM).json()["id"]
    listed = client.get("/api/admin/inquiries").json()
    row = next(i for i in listed if i["id"] == inquiry_id)
    assert row["forwarded"] is True
    assert row["sourcePage"] == "/zh/contact"


def test_inquiries_require_admin(anon):
    assert anon.get("/api/admin/inquiries").status_code == 403
