"""
Images publiques.
GET  /api/admin/images?q=logo          → {images: ["/images/..."]}
POST /api/admin/upload-image {filename, content(base64)} → {success, path}
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ... import store
from ...models import ImageUpload
from ..auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Images"], dependencies=[Depends(require_admin)])


@router.get("/api/admin/images")
def list_images(q: Optional[str] = Query(None)):
    return {"images": store.list_images(q)}


@router.post("/api/admin/upload-image")
def upload_image(req: ImageUpload):
    if not req.filename or not req.content:
        raise HTTPException(400, "filename et content requis")
    try:
        path = store.save_image(req.filename, req.content)
    except PermissionError:
        raise HTTPException(403, "Accès refusé")
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"success": True, "path": path}
