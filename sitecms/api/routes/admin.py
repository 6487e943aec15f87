"""
Pages admin (HTML).
GET /admin                   → liste des fichiers + création de page
GET /admin/editor?file=...   → éditeur visuel / JSON / aperçu
GET /admin/languages         → gestion des langues
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from ... import store
from ...editor.form import build_editor
from ...renderer.admin import render_editor_page, render_files_page, render_languages_page
from ..auth import require_admin
from .editor import load_document

router = APIRouter(tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/admin", response_class=HTMLResponse)
def admin_home():
    return HTMLResponse(render_files_page(store.list_files(), store.list_languages()))


@router.get("/admin/editor", response_class=HTMLResponse)
def admin_editor(file: str = Query(...)):
    if not file.endswith(".json"):
        raise HTTPException(400, "Seuls les fichiers .json sont éditables ici")
    document, missing = load_document(file)
    return HTMLResponse(render_editor_page(file, document, build_editor(document), missing))


@router.get("/admin/languages", response_class=HTMLResponse)
def admin_languages():
    return HTMLResponse(render_languages_page(store.list_languages()))
