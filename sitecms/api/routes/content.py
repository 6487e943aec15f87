"""
Contenus — API fichiers du store.
GET    /api/admin/files?lang=en         → {files}
DELETE /api/admin/files?file=en/x.json
GET    /api/admin/content?file=...      → texte brut du fichier
POST   /api/admin/content {file, content, confirm}
GET    /api/admin/master-content?file=  → équivalent dans la langue maître
POST   /api/admin/pages {lang, kind, name}
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ... import store
from ...editor.validation import validate_save
from ...models import ContentWrite, PageCreate
from ..auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Content"], dependencies=[Depends(require_admin)])


def _media_type(rel: str) -> str:
    return "application/json" if rel.endswith(".json") else "text/markdown; charset=utf-8"


def _require_file(file: Optional[str]) -> str:
    if not file:
        raise HTTPException(400, "Paramètre file requis")
    return file


def _read_or_raise(rel: str) -> str:
    try:
        return store.read_text(rel)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except FileNotFoundError:
        raise HTTPException(404, f"Fichier {rel} introuvable")


def _parsed(content: Any) -> Any:
    if not isinstance(content, str):
        return content
    try:
        return store.loads(content)
    except ValueError:
        return None


# ── Fichiers ─────────────────────────────────────────────────────────────────

@router.get("/api/admin/files")
def list_files(lang: Optional[str] = Query(None)):
    try:
        return {"files": store.list_files(lang)}
    except PermissionError:
        raise HTTPException(403, "Accès refusé")


@router.delete("/api/admin/files")
def delete_file(file: Optional[str] = Query(None)):
    rel = _require_file(file)
    try:
        store.delete(rel)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except FileNotFoundError:
        raise HTTPException(404, f"Fichier {rel} introuvable")
    return {"success": True}


# ── Contenu ──────────────────────────────────────────────────────────────────

@router.get("/api/admin/content")
def get_content(file: Optional[str] = Query(None)):
    rel = _require_file(file)
    return Response(_read_or_raise(rel), media_type=_media_type(rel))


@router.post("/api/admin/content")
def save_content(req: ContentWrite):
    if not req.file or req.content is None:
        raise HTTPException(400, "file et content requis")

    warning = None
    if req.file.endswith(".json"):
        try:
            current = store.loads(req.content) if isinstance(req.content, str) else req.content
        except ValueError as e:
            raise HTTPException(400, f"JSON invalide : {e}")
        try:
            original = _parsed(store.read_text(req.file))
        except FileNotFoundError:
            original = None
        except PermissionError:
            raise HTTPException(403, "Accès refusé")
        warning = validate_save(original, current)
        if warning and not req.confirm:
            raise HTTPException(409, warning)

    try:
        store.write(req.file, req.content)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except OSError as e:
        log.error("Écriture %s : %s", req.file, e)
        raise HTTPException(500, f"Écriture impossible : {e}")
    except ValueError as e:
        raise HTTPException(400, f"JSON invalide : {e}")
    if warning:
        log.warning("Sauvegarde confirmée malgré l'avertissement (%s) : %s", req.file, warning)
    return {"success": True, "warnings": [warning] if warning else []}


@router.get("/api/admin/master-content")
def get_master_content(file: Optional[str] = Query(None)):
    rel = _require_file(file)
    try:
        master_rel = store.master_path(rel)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return Response(_read_or_raise(master_rel), media_type=_media_type(master_rel))


# ── Création de page ─────────────────────────────────────────────────────────

@router.post("/api/admin/pages")
def create_page(req: PageCreate):
    try:
        rel = store.create_page(req.lang, req.kind.value, req.name, req.folder)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except FileExistsError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"success": True, "path": rel}
