"""
Admin login / logout — mot de passe + session serveur.

GET  /admin/login  → page formulaire
POST /admin/login  → valide ADMIN_PASSWORD, crée une AdminSessionDB, pose le cookie admin_session
GET  /admin/logout → supprime la session + le cookie, redirige vers /admin/login
"""
import hmac
import logging
import os

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from ...database import get_db, db_create_session, db_delete_session
from ..auth import SESSION_COOKIE

log = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "changeme")


def _session_hours() -> int:
    return int(os.getenv("ADMIN_SESSION_HOURS", "168"))


_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Segoe UI',sans-serif;background:#0f0f1a;color:#e8e8f0;
  display:flex;align-items:center;justify-content:center;min-height:100vh}
.card{background:#1a1a2e;border:1px solid #2a2a4e;border-radius:12px;
  padding:48px 40px;width:100%;max-width:380px;text-align:center}
.logo{font-size:1.4rem;font-weight:bold;color:#fff;margin-bottom:4px}
.logo span{color:#e94560}
.sub{color:#555;font-size:13px;margin-bottom:36px}
label{display:block;text-align:left;color:#9ca3af;font-size:12px;margin-bottom:6px}
input[type=password]{width:100%;background:#0f0f1a;border:1px solid #2a2a4e;
  color:#e8e8f0;border-radius:6px;padding:12px 14px;font-size:15px;
  font-family:inherit;outline:none}
input[type=password]:focus{border-color:#e94560}
.btn{display:block;width:100%;margin-top:20px;background:#e94560;color:#fff;
  border:none;padding:14px;border-radius:8px;font-size:15px;font-weight:700;
  cursor:pointer;transition:opacity .2s}
.btn:hover{opacity:.88}
.err{color:#e94560;font-size:13px;margin-top:14px}
"""


@router.get("/admin/login", response_class=HTMLResponse)
def login_page(error: str = ""):
    err_html = '<p class="err">Mot de passe incorrect.</p>' if error else ""
    return HTMLResponse(f"""<!DOCTYPE html><html lang="fr"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Connexion — SiteCMS</title>
<style>{_CSS}</style>
</head><body>
<div class="card">
  <div class="logo">Site<span>CMS</span></div>
  <p class="sub">Espace administration des contenus</p>
  <form method="POST" action="/admin/login">
    <label>Mot de passe</label>
    <input type="password" name="password" autofocus placeholder="••••••••">
    <button class="btn" type="submit">Connexion →</button>
  </form>
  {err_html}
</div>
</body></html>""")


@router.post("/admin/login")
async def login_submit(request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    password = str(form.get("password", ""))

    if not hmac.compare_digest(password.encode(), _admin_password().encode()):
        log.warning("Échec de connexion admin")
        return RedirectResponse("/admin/login?error=1", status_code=303)

    session = db_create_session(db, hours=_session_hours())
    resp = RedirectResponse("/admin", status_code=303)
    resp.set_cookie(
        key=SESSION_COOKIE,
        value=session.token,
        httponly=True,
        samesite="lax",
        max_age=_session_hours() * 3600,
        secure=False,                 # True en prod HTTPS (nginx s'en charge)
    )
    return resp


@router.get("/admin/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        db_delete_session(db, token)
    resp = RedirectResponse("/admin/login", status_code=303)
    resp.delete_cookie(SESSION_COOKIE)
    return resp
