"""
Éditeur visuel — API de l'éditeur + outils déclenchables depuis l'admin.
GET  /api/admin/editor?file=            → {document, view, missing}
POST /api/admin/editor/change           {document, change} → {document}
POST /api/admin/editor/form             {document} → {html}
POST /api/admin/editor/raw              {text, last_good} → {text, value, valid, error}
POST /api/admin/editor/preview          {blocks} → HTML
GET  /api/admin/blocks                  → catalogue du registre
POST /api/admin/sync?file=en/x.json     → complète le fichier depuis la langue maître
POST /api/admin/rebuild-index?lang=en&type=products|solutions|all
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from ... import store
from ...blocks import list_specs
from ...editor.form import build_editor
from ...editor.ops import apply_change
from ...editor.raw import RawBuffer
from ...editor.validation import missing_paths
from ...index import CollectionType, rebuild_collection
from ...models import EditorChangeRequest, EditorDocument, PreviewRequest, RawUpdate
from ...renderer.admin import render_form
from ...renderer.blocks import render_preview_page
from ...sync import sync_file
from ..auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Editor"], dependencies=[Depends(require_admin)])


def load_document(rel: str):
    """(document, missing) — lève HTTPException 403/404/400."""
    try:
        document = store.read_json(rel)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except FileNotFoundError:
        raise HTTPException(404, f"Fichier {rel} introuvable")
    except ValueError as e:
        raise HTTPException(400, f"JSON invalide : {e}")

    missing = []
    try:
        master_rel = store.master_path(rel)
        if master_rel != rel and store.exists(master_rel):
            missing = missing_paths(store.read_json(master_rel), document)
    except ValueError as e:
        # maître illisible : pas de comparaison, l'édition reste possible
        log.warning("Comparaison maître impossible pour %s : %s", rel, e)
    return document, missing


@router.get("/api/admin/editor")
def get_editor(file: Optional[str] = Query(None)):
    if not file or not file.endswith(".json"):
        raise HTTPException(400, "Fichier .json requis")
    document, missing = load_document(file)
    return {
        "file": file,
        "document": document,
        "view": build_editor(document).model_dump(mode="json"),
        "missing": missing,
    }


@router.post("/api/admin/editor/change")
def editor_change(req: EditorChangeRequest):
    try:
        document = apply_change(req.document, req.change)
    except ValueError as e:
        raise HTTPException(422, str(e))
    return {"document": document}


@router.post("/api/admin/editor/form")
def editor_form(req: EditorDocument):
    return {"html": render_form(build_editor(req.document))}


@router.post("/api/admin/editor/raw")
def editor_raw(req: RawUpdate):
    try:
        buf = RawBuffer(req.last_good)
    except ValueError as e:
        raise HTTPException(400, f"JSON invalide : {e}")
    buf.update(req.text)
    return buf.state()


@router.post("/api/admin/editor/preview", response_class=HTMLResponse)
def editor_preview(req: PreviewRequest):
    return HTMLResponse(render_preview_page(req.blocks))


@router.get("/api/admin/blocks")
def block_catalogue():
    return [s.model_dump(mode="json") for s in list_specs()]


# ── Outils ───────────────────────────────────────────────────────────────────

@router.post("/api/admin/sync")
def sync_now(file: Optional[str] = Query(None)):
    if not file or not file.endswith(".json"):
        raise HTTPException(400, "Fichier .json requis")
    try:
        master_rel = store.master_path(file)
        master, target = store.resolve(master_rel), store.resolve(file)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    if master == target:
        raise HTTPException(400, "Le fichier appartient à la langue maître")
    if not master.is_file():
        raise HTTPException(404, f"Fichier maître {master_rel} introuvable")
    try:
        changes = sync_file(master, target)
    except ValueError as e:
        raise HTTPException(400, f"JSON maître invalide : {e}")
    log.info("Sync %s ← %s : %d changement(s)", file, master_rel, changes)
    return {"success": True, "changes": changes}


@router.post("/api/admin/rebuild-index")
def rebuild_index(lang: str = Query(...), type: str = Query("all")):
    try:
        kinds = list(CollectionType) if type == "all" else [CollectionType(type)]
    except ValueError:
        raise HTTPException(400, f"Type invalide : {type}")
    try:
        lang_dir = store.resolve(lang)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    if not lang_dir.is_dir():
        raise HTTPException(404, f"Langue {lang} introuvable")

    results = {}
    for kind in kinds:
        results[kind.value] = rebuild_collection(lang_dir, kind)
    if all(v is None for v in results.values()):
        raise HTTPException(404, "Aucun index reconstruit (fichier index ou fiches introuvables)")
    return {"success": True, "items": results}
