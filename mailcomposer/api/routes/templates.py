"""
Templates — CRUD + rendu HTML.
GET    /api/templates?user_id=…      → liste (plus récents d'abord)
POST   /api/templates                → création (HTML brut en content)
GET    /api/templates/{id}           → enregistrement + blocs normalisés + html
PUT    /api/templates/{id}           → enregistrement des blocs
DELETE /api/templates/{id}
GET    /api/templates/{id}/preview   → page HTML
POST   /api/render                   → {"html": …}
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ...blocks import dump_blocks, serialize_blocks
from ...core.schemas import Document, OperationResult
from ...normalizer import normalize_blocks, parse_content
from ...renderer import render_document_page, render_html
from ...store import NAME_REQUIRED, NOT_FOUND, SqlTemplateStore, TemplateStore

log = logging.getLogger(__name__)
router = APIRouter(tags=["Templates"])


def get_store() -> TemplateStore:
    return SqlTemplateStore()


# ── Modèles requête ────────────────────────────────────────────────────────────

class TemplateCreateRequest(BaseModel):
    user_id: str
    name: str
    content: str = ""


class TemplateUpdateRequest(BaseModel):
    name: str
    blocks: Any = None  # brut, normalisé avant stockage


class RenderRequest(BaseModel):
    blocks: Any = None


# ── Helpers ────────────────────────────────────────────────────────────────────

def _raise_for(result: OperationResult):
    """Traduit l'erreur du collaborateur en HTTPException, message inchangé."""
    if result.ok:
        return
    if result.error == NOT_FOUND:
        raise HTTPException(404, result.error)
    if result.error == NAME_REQUIRED:
        raise HTTPException(422, result.error)
    raise HTTPException(500, result.error or "Erreur de persistance")


def _with_blocks(result: OperationResult) -> Dict[str, Any]:
    tpl = result.template
    blocks = parse_content(tpl.content)
    return {**tpl.model_dump(), "blocks": dump_blocks(blocks), "html": render_html(blocks)}


# ── Routes ─────────────────────────────────────────────────────────────────────

@router.get("/api/templates")
def list_templates(user_id: Optional[str] = None, store: TemplateStore = Depends(get_store)) -> List[Dict[str, Any]]:
    result = store.list(user_id)
    _raise_for(result)
    return [t.model_dump() for t in result.templates]


@router.post("/api/templates", status_code=201)
def create_template(req: TemplateCreateRequest, store: TemplateStore = Depends(get_store)):
    result = store.create(req.user_id, req.name, req.content)
    _raise_for(result)
    return result.template.model_dump()


@router.get("/api/templates/{template_id}")
def get_template(template_id: str, store: TemplateStore = Depends(get_store)):
    result = store.get(template_id)
    _raise_for(result)
    return _with_blocks(result)


@router.put("/api/templates/{template_id}")
def update_template(template_id: str, req: TemplateUpdateRequest, store: TemplateStore = Depends(get_store)):
    if not req.name.strip():
        raise HTTPException(422, NAME_REQUIRED)
    content = serialize_blocks(normalize_blocks(req.blocks))
    result = store.update(template_id, req.name, content)
    _raise_for(result)
    return _with_blocks(result)


@router.delete("/api/templates/{template_id}", status_code=204)
def delete_template(template_id: str, store: TemplateStore = Depends(get_store)):
    _raise_for(store.delete(template_id))
    return Response(status_code=204)


@router.get("/api/templates/{template_id}/preview", response_class=HTMLResponse)
def preview_template(template_id: str, store: TemplateStore = Depends(get_store)):
    result = store.get(template_id)
    _raise_for(result)
    tpl = result.template
    return HTMLResponse(render_document_page(Document(name=tpl.name, blocks=parse_content(tpl.content))))


@router.post("/api/render")
def render(req: RenderRequest):
    return {"html": render_html(normalize_blocks(req.blocks))}
