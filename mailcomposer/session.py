"""
Session d'édition — état courant du canvas + état UI (non persisté).

Seule couche autorisée à appeler le moteur de mutations et le collaborateur
de persistance. Chaque intention UI (clic, glisser-déposer, frappe) est
traitée de façon synchrone et atomique ; le HTML est recalculé à chaque
changement du modèle.
"""
import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from .blocks import BLOCK_TYPES, Block, ColumnsBlock, ImageBlock, TextBlock, default_block, serialize_blocks
from .core.schemas import Document, OperationResult
from .mutations import (
    BlockLocator, ContainerPath, ResizeHandle, RESIZE_HANDLES,
    container_blocks, delete_at, get_block, insert, insert_into_container, insert_preset,
    move_block, patch_block_at, resize_image, update_block_at,
)
from .normalizer import parse_content
from .presets import get_preset
from .renderer import HtmlRenderer, Renderer
from .store import NAME_REQUIRED, TemplateStore

log = logging.getLogger(__name__)

ViewMode = Literal["preview", "code"]
Device   = Literal["desktop", "tablet", "mobile"]

CANVAS_WIDTHS: Dict[str, int] = {"desktop": 640, "tablet": 480, "mobile": 360}

# Base de redimensionnement quand l'image n'a pas de dimension explicite
FALLBACK_IMAGE_WIDTH  = 300
FALLBACK_IMAGE_HEIGHT = 150


class DragState(BaseModel):
    """Glisser en cours : source (None = palette) + drop-zone survolée."""
    source: Optional[BlockLocator] = None
    zone: Optional[int] = None
    container: Optional[ContainerPath] = None


class ResizeSession(BaseModel):
    """Redimensionnement : base figée au pointer-down, jamais recalculée."""
    locator: BlockLocator
    handle: ResizeHandle
    start_x: float
    start_y: float
    start_width: int
    start_height: int


def _shift_after_delete(selected: Optional[BlockLocator], deleted: BlockLocator) -> Optional[BlockLocator]:
    """Sélection après suppression : décalée, conservée, ou effacée."""
    if selected is None:
        return None
    if deleted.container is None:
        if selected.container is None:
            if selected.index == deleted.index:
                return None
            if selected.index > deleted.index:
                return selected.model_copy(update={"index": selected.index - 1})
            return selected
        parent = selected.container.parent
        if parent == deleted.index:
            return None
        if parent > deleted.index:
            container = selected.container.model_copy(update={"parent": parent - 1})
            return selected.model_copy(update={"container": container})
        return selected
    if selected.container == deleted.container:
        if selected.index == deleted.index:
            return None
        if selected.index > deleted.index:
            return selected.model_copy(update={"index": selected.index - 1})
    return selected


def _shift_after_insert(selected: Optional[BlockLocator], path: Optional[ContainerPath],
                        index: int) -> Optional[BlockLocator]:
    """Sélection après insertion en `index` dans la liste `path`."""
    if selected is None:
        return None
    if path is None:
        if selected.container is None:
            if selected.index >= index:
                return selected.model_copy(update={"index": selected.index + 1})
            return selected
        if selected.container.parent >= index:
            container = selected.container.model_copy(update={"parent": selected.container.parent + 1})
            return selected.model_copy(update={"container": container})
        return selected
    if selected.container == path and selected.index >= index:
        return selected.model_copy(update={"index": selected.index + 1})
    return selected


def _shift_after_move(selected: Optional[BlockLocator], source: BlockLocator,
                      target: Optional[ContainerPath], zone: int) -> Optional[BlockLocator]:
    """Sélection (autre que le bloc déplacé) après `move_block` : retrait puis insertion."""
    if source.container == target:
        index = zone - 1 if source.index < zone else zone
    else:
        index = zone
        if source.container is None and target is not None and target.parent > source.index:
            target = target.model_copy(update={"parent": target.parent - 1})
    return _shift_after_insert(_shift_after_delete(selected, source), target, index)


class EditorSession:
    """
    Session d'édition d'un template.

    Usage:
        >>> session = EditorSession(SqlTemplateStore(), template_id)
        >>> session.load()
        >>> session.add_block("text")
        >>> session.save()
    """

    def __init__(self, store: TemplateStore, template_id: str, renderer: Optional[Renderer] = None):
        self.store       = store
        self.template_id = template_id
        self.renderer    = renderer or HtmlRenderer()
        self.document    = Document()
        self.selected: Optional[BlockLocator] = None
        self.drag: Optional[DragState] = None
        self.resize: Optional[ResizeSession] = None
        self.view: ViewMode = "preview"
        self.device: Device = "desktop"
        self.error: Optional[str] = None
        self.loading = False
        self.saving  = False
        self.html    = self.renderer.render_document(self.document.blocks)

    # ── État ────────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> List[Block]:
        return self.document.blocks

    @property
    def canvas_width(self) -> int:
        return CANVAS_WIDTHS[self.device]

    @property
    def selected_block(self) -> Optional[Block]:
        if self.selected is None:
            return None
        return get_block(self.blocks, self.selected)

    def _commit(self, blocks: List[Block]) -> bool:
        """Remplace la liste de blocs ; False si l'opération était un no-op."""
        if blocks is self.document.blocks:
            return False
        self.document = self.document.model_copy(update={"blocks": blocks})
        self.html = self.renderer.render_document(blocks)
        return True

    def _revalidate_selection(self):
        if self.selected is not None and get_block(self.blocks, self.selected) is None:
            self.selected = None

    def set_name(self, name: str):
        self.document = self.document.model_copy(update={"name": name})

    def set_view(self, view: ViewMode):
        if view in ("preview", "code"):
            self.view = view

    def set_device(self, device: Device):
        if device in CANVAS_WIDTHS:
            self.device = device

    # ── Persistance ─────────────────────────────────────────────────────────

    def load(self) -> OperationResult:
        """Charge le template ; en cas d'échec le document courant est conservé."""
        self.error = None
        self.loading = True
        try:
            result = self.store.get(self.template_id)
        finally:
            self.loading = False
        if not result.ok or result.template is None:
            self.error = result.error
            log.warning("Chargement %s impossible : %s", self.template_id, result.error)
            return result
        template = result.template
        self.document = Document(name=template.name, blocks=parse_content(template.content))
        self.selected = None
        self.drag = None
        self.resize = None
        self.html = self.renderer.render_document(self.document.blocks)
        log.info("Template %s chargé (%d blocs)", self.template_id, len(self.document.blocks))
        return result

    def save(self) -> OperationResult:
        """Valide le nom localement puis délègue ; le document n'est jamais modifié."""
        self.error = None
        name = self.document.name.strip()
        if not name:
            self.error = NAME_REQUIRED
            return OperationResult.failure(NAME_REQUIRED)
        self.saving = True
        try:
            result = self.store.update(self.template_id, name, serialize_blocks(self.document.blocks))
        finally:
            self.saving = False
        if not result.ok:
            self.error = result.error
            log.warning("Enregistrement %s impossible : %s", self.template_id, result.error)
        return result

    # ── Palette ─────────────────────────────────────────────────────────────

    def add_block(self, block_type: str) -> bool:
        """Clic sur la palette : ajout en fin de canvas."""
        if block_type not in BLOCK_TYPES:
            return False
        return self._commit(insert(self.blocks, len(self.blocks), default_block(block_type)))

    def add_preset(self, key: str) -> bool:
        preset = get_preset(key)
        if preset is None:
            return False
        return self._commit(insert_preset(self.blocks, len(self.blocks), preset))

    def _drop_zone(self, zone: Optional[int], container: Optional[ContainerPath]) -> Optional[int]:
        if zone is not None:
            return zone
        if self.drag is not None and self.drag.zone is not None and self.drag.container == container:
            return self.drag.zone
        return None

    def drop_palette(self, block_type: str, zone: Optional[int] = None,
                     container: Optional[ContainerPath] = None) -> bool:
        """Dépôt d'un type de la palette sur une drop-zone (canvas ou conteneur)."""
        zone = self._drop_zone(zone, container)
        self.drag = None
        if block_type not in BLOCK_TYPES:
            return False
        block = default_block(block_type)
        if container is None:
            index = len(self.blocks) if zone is None else zone
            changed = self._commit(insert(self.blocks, index, block))
            if changed and isinstance(block, ColumnsBlock):
                self.selected = BlockLocator(index=index)
            return changed
        if zone is None:
            return False
        return self._commit(insert_into_container(self.blocks, container, zone, block))

    def drop_preset(self, key: str, zone: Optional[int] = None) -> bool:
        zone = self._drop_zone(zone, None)
        self.drag = None
        preset = get_preset(key)
        if preset is None:
            return False
        index = len(self.blocks) if zone is None else zone
        return self._commit(insert_preset(self.blocks, index, preset))

    # ── Glisser-déposer ─────────────────────────────────────────────────────

    def start_drag(self, source: BlockLocator):
        if get_block(self.blocks, source) is not None:
            self.drag = DragState(source=source)

    def drag_over(self, zone: int, container: Optional[ContainerPath] = None):
        source = self.drag.source if self.drag is not None else None
        self.drag = DragState(source=source, zone=zone, container=container)

    def end_drag(self):
        self.drag = None

    def drop(self, zone: Optional[int] = None, container: Optional[ContainerPath] = None) -> bool:
        """Dépôt d'un bloc existant : réordonnancement ou déplacement entre conteneurs."""
        zone = self._drop_zone(zone, container)
        drag, self.drag = self.drag, None
        if drag is None or drag.source is None or zone is None:
            return False
        source = drag.source
        was_selected = self.selected == source
        moved = get_block(self.blocks, source)
        if not self._commit(move_block(self.blocks, source, container, zone)):
            return False
        if was_selected:
            self.selected = self._locate(moved, container)
        else:
            self.selected = _shift_after_move(self.selected, source, container, zone)
        self._revalidate_selection()
        return True

    def _locate(self, block: Optional[Block], container: Optional[ContainerPath]) -> Optional[BlockLocator]:
        """Retrouve un bloc déplacé (par identité) dans sa liste cible."""
        if block is None:
            return None
        paths = [container]
        if container is not None:
            # Le parent cible a pu glisser d'un cran vers le haut
            paths.append(container.model_copy(update={"parent": container.parent - 1}))
        for path in paths:
            for i, b in enumerate(container_blocks(self.blocks, path) or []):
                if b is block:
                    return BlockLocator(index=i, container=path)
        return None

    # ── Sélection / propriétés ──────────────────────────────────────────────

    def select(self, locator: Optional[BlockLocator]):
        if locator is None or get_block(self.blocks, locator) is not None:
            self.selected = locator

    def clear_selection(self):
        self.selected = None

    def delete(self, locator: BlockLocator) -> bool:
        if not self._commit(delete_at(self.blocks, locator)):
            return False
        self.selected = _shift_after_delete(self.selected, locator)
        return True

    def delete_selected(self) -> bool:
        if self.selected is None:
            return False
        return self.delete(self.selected)

    def patch(self, locator: BlockLocator, patch: Dict[str, Any]) -> bool:
        return self._commit(patch_block_at(self.blocks, locator, patch))

    def patch_selected(self, patch: Dict[str, Any]) -> bool:
        """Panneau de propriétés : fusion superficielle sur le bloc sélectionné."""
        if self.selected is None:
            return False
        return self.patch(self.selected, patch)

    def update_text(self, locator: BlockLocator, text: str) -> bool:
        """Édition en place (double-clic) d'un bloc texte."""
        if not isinstance(get_block(self.blocks, locator), TextBlock):
            return False
        return self.patch(locator, {"text": text})

    # ── Redimensionnement image ─────────────────────────────────────────────

    def start_resize(self, locator: BlockLocator, handle: ResizeHandle, x: float, y: float,
                     width: Optional[int] = None, height: Optional[int] = None) -> bool:
        """
        Pointer-down sur une poignée. `width`/`height` = dimensions affichées,
        utilisées comme base quand l'image n'en a pas d'explicites.
        """
        block = get_block(self.blocks, locator)
        if not isinstance(block, ImageBlock) or handle not in RESIZE_HANDLES:
            return False
        self.resize = ResizeSession(
            locator=locator,
            handle=handle,
            start_x=x,
            start_y=y,
            start_width=block.props.width or width or FALLBACK_IMAGE_WIDTH,
            start_height=block.props.height or height or FALLBACK_IMAGE_HEIGHT,
        )
        return True

    def resize_to(self, x: float, y: float) -> bool:
        """Pointer-move : déplacement cumulé depuis la base figée."""
        r = self.resize
        if r is None:
            return False
        return self._commit(update_block_at(
            self.blocks, r.locator,
            lambda b: resize_image(
                b, r.handle, x - r.start_x, y - r.start_y,
                start_width=r.start_width,
                start_height=r.start_height,
                canvas_width=self.canvas_width,
            ),
        ))

    def end_resize(self):
        self.resize = None
