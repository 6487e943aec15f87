"""
Langues.
GET    /api/admin/languages         → {languages: [{code, isMaster}]}
POST   /api/admin/languages {code}  → clone la langue maître
DELETE /api/admin/languages {code}  → supprime l'arborescence (maître protégée)
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ... import store
from ...models import LanguageRequest
from ..auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Languages"], dependencies=[Depends(require_admin)])


@router.get("/api/admin/languages")
def list_languages():
    return {"languages": store.list_languages()}


@router.post("/api/admin/languages")
def create_language(req: LanguageRequest):
    if not req.code:
        raise HTTPException(400, "Code langue requis")
    try:
        store.create_language(req.code)
    except FileExistsError as e:
        raise HTTPException(409, str(e))
    except FileNotFoundError as e:
        raise HTTPException(404, str(e))
    except (ValueError, PermissionError) as e:
        raise HTTPException(400, str(e))
    return {"success": True, "code": req.code}


@router.delete("/api/admin/languages")
def delete_language(req: LanguageRequest):
    if not req.code:
        raise HTTPException(400, "Code langue requis")
    try:
        store.delete_language(req.code)
    except PermissionError as e:
        raise HTTPException(403, str(e))
    except FileNotFoundError as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"success": True}
