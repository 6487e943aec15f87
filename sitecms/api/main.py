"""
SiteCMS — FastAPI app
Démarrer : uvicorn sitecms.api.main:app --reload --port 8001
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="SiteCMS — contenus multi-langue", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def redirect_403_to_login(request: Request, call_next):
    """Redirige les 403 sur /admin/* vers /admin/login pour les navigateurs."""
    response = await call_next(request)
    path = request.url.path
    accept = request.headers.get("accept", "")
    is_browser = "text/html" in accept
    if (response.status_code == 403
            and path.startswith("/admin")
            and not path.startswith("/api/admin")
            and is_browser):
        return RedirectResponse("/admin/login", status_code=303)
    return response


@app.on_event("startup")
def startup():
    from ..database import init_db
    from .. import store
    init_db()
    log.info("DB initialisée (SQLite)")

    images = store.images_dir()
    try:
        images.mkdir(parents=True, exist_ok=True)
        app.mount("/images", StaticFiles(directory=str(images)), name="images")
        log.info("Images servies depuis %s", images)
    except OSError as e:
        log.warning("Montage /images impossible : %s", e)
    log.info("Contenus : %s (langue maître %s)", store.data_dir(), store.master_lang())


# ── Routers ──────────────────────────────────────────────────────────────────
from .routes.login import router as login_router
from .routes.content import router as content_router
from .routes.images import router as images_router
from .routes.languages import router as languages_router
from .routes.editor import router as editor_router
from .routes.admin import router as admin_router
from .routes.contact import router as contact_router

app.include_router(login_router)
app.include_router(content_router)
app.include_router(images_router)
app.include_router(languages_router)
app.include_router(editor_router)
app.include_router(admin_router)
app.include_router(contact_router)


@app.get("/health")
def health():
    return {"status": "ok", "service": "sitecms"}
