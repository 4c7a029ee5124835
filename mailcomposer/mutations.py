"""
Moteur de mutations — opérations structurelles sur une liste de blocs.

Copie-sur-écriture : chaque opération renvoie une nouvelle liste (ou un
nouveau bloc) sans toucher à l'entrée. Index ou chemin hors bornes → no-op
(l'entrée est renvoyée telle quelle), jamais d'exception : le canvas doit
rester rendable en permanence.

Adressage des conteneurs :
  - None                                   → liste de premier niveau
  - ContainerPath(parent=i, column=j)      → colonne j du bloc `columns` i
  - ContainerPath(parent=i)                → enfants du bloc `box` i
L'imbrication plus profonde s'obtient en réappliquant ces fonctions sur la
liste enfant.
"""
import logging
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .blocks import Block, BoxBlock, ColumnsBlock, ColumnsProps, ImageBlock

log = logging.getLogger(__name__)

ResizeHandle = Literal["n", "s", "e", "w", "ne", "nw", "se", "sw"]
RESIZE_HANDLES = ("n", "s", "e", "w", "ne", "nw", "se", "sw")

MIN_IMAGE_WIDTH  = 60
MIN_IMAGE_HEIGHT = 40
CANVAS_GUTTER    = 16
DEFAULT_CANVAS_WIDTH = 640


class ContainerPath(BaseModel):
    """Chemin d'un conteneur depuis la liste de premier niveau."""
    model_config = ConfigDict(frozen=True)
    parent: int
    column: Optional[int] = None


class BlockLocator(BaseModel):
    """Position d'un bloc : index dans une liste (premier niveau ou conteneur)."""
    model_config = ConfigDict(frozen=True)
    index: int
    container: Optional[ContainerPath] = None


# ── Helpers bornes ──────────────────────────────────────────────────────────

def _is_index(seq: List[Any], index: Any) -> bool:
    """Position d'un élément existant."""
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(seq)


def _is_zone(seq: List[Any], zone: Any) -> bool:
    """Drop-zone : 0 = avant le premier, len(seq) = après le dernier."""
    return isinstance(zone, int) and not isinstance(zone, bool) and 0 <= zone <= len(seq)


# ── Opérations sur une liste ────────────────────────────────────────────────

def insert(blocks: List[Block], index: int, block: Block) -> List[Block]:
    """Insère `block` avant la position `index` (index == len → ajout en fin)."""
    if not _is_zone(blocks, index):
        log.debug("insert: zone %r hors bornes (len=%d)", index, len(blocks))
        return blocks
    return [*blocks[:index], block, *blocks[index:]]


def insert_preset(blocks: List[Block], index: int, preset: List[Block]) -> List[Block]:
    """Insère d'un coup toute une sous-séquence (layout prêt à l'emploi)."""
    if not _is_zone(blocks, index):
        log.debug("insert_preset: zone %r hors bornes (len=%d)", index, len(blocks))
        return blocks
    return [*blocks[:index], *preset, *blocks[index:]]


def reorder(blocks: List[Block], from_index: int, to_zone: int) -> List[Block]:
    """
    Déplace l'élément `from_index` vers la drop-zone `to_zone`.

    La zone i est l'interstice entre les éléments i-1 et i. Si from < to, le
    retrait décale la suite d'un cran : l'insertion effective se fait en to-1.
    """
    if not _is_index(blocks, from_index) or not _is_zone(blocks, to_zone):
        log.debug("reorder: %r → %r hors bornes (len=%d)", from_index, to_zone, len(blocks))
        return blocks
    if from_index == to_zone:
        return blocks
    items = list(blocks)
    item = items.pop(from_index)
    insert_at = to_zone - 1 if from_index < to_zone else to_zone
    items.insert(insert_at, item)
    return items


def delete(blocks: List[Block], index: int) -> List[Block]:
    if not _is_index(blocks, index):
        log.debug("delete: index %r hors bornes (len=%d)", index, len(blocks))
        return blocks
    return [*blocks[:index], *blocks[index + 1:]]


# ── Props ───────────────────────────────────────────────────────────────────

def patch_props(block: Block, patch: Dict[str, Any]) -> Block:
    """
    Fusion superficielle de `patch` dans les props du bloc.
    Clés acceptées : camelCase (JSON) ou snake_case ; clés inconnues ignorées.
    Un résultat invalide laisse le bloc inchangé.
    """
    props = block.props
    props_cls = type(props)
    names = {}
    for name, field in props_cls.model_fields.items():
        names[name] = name
        names[field.alias or to_camel(name)] = name

    updates = {names[k]: v for k, v in (patch or {}).items() if k in names}
    if not updates:
        return block
    try:
        new_props = props_cls.model_validate({**dict(props), **updates})
    except ValidationError as e:
        log.debug("patch_props: patch refusé sur %s (%s)", block.type, e.error_count())
        return block
    if isinstance(new_props, ColumnsProps):
        # Passage 2 → 3 colonnes : on complète, les colonnes en trop restent
        new_props = new_props.padded()
    return block.model_copy(update={"props": new_props})


# ── Conteneurs ──────────────────────────────────────────────────────────────

def container_blocks(blocks: List[Block], path: Optional[ContainerPath]) -> Optional[List[Block]]:
    """Liste enfant adressée par `path` (None si le chemin ne résout pas)."""
    if path is None:
        return blocks
    if not _is_index(blocks, path.parent):
        return None
    parent = blocks[path.parent]
    if isinstance(parent, ColumnsBlock):
        visible = parent.props.visible_columns()
        if path.column is None or not _is_index(visible, path.column):
            return None
        return visible[path.column].blocks
    if isinstance(parent, BoxBlock) and path.column is None:
        return parent.props.blocks
    return None


def replace_container_blocks(
    blocks: List[Block], path: Optional[ContainerPath], children: List[Block]
) -> List[Block]:
    """Nouvelle liste de premier niveau où la liste enfant `path` vaut `children`."""
    if path is None:
        return list(children)
    if container_blocks(blocks, path) is None:
        return blocks
    parent = blocks[path.parent]
    if isinstance(parent, ColumnsBlock):
        columns = list(parent.props.columns)
        columns[path.column] = columns[path.column].model_copy(update={"blocks": list(children)})
        new_props = parent.props.model_copy(update={"columns": columns})
    else:
        new_props = parent.props.model_copy(update={"blocks": list(children)})
    out = list(blocks)
    out[path.parent] = parent.model_copy(update={"props": new_props})
    return out


def _apply(
    blocks: List[Block],
    path: Optional[ContainerPath],
    fn: Callable[[List[Block]], List[Block]],
) -> List[Block]:
    children = container_blocks(blocks, path)
    if children is None:
        log.debug("chemin %r introuvable", path)
        return blocks
    new_children = fn(children)
    if new_children is children:
        return blocks
    return replace_container_blocks(blocks, path, new_children)


def get_block(blocks: List[Block], locator: BlockLocator) -> Optional[Block]:
    children = container_blocks(blocks, locator.container)
    if children is None or not _is_index(children, locator.index):
        return None
    return children[locator.index]


def update_block_at(
    blocks: List[Block], locator: BlockLocator, fn: Callable[[Block], Block]
) -> List[Block]:
    """Remplace le bloc adressé par fn(bloc)."""
    def _replace(children: List[Block]) -> List[Block]:
        if not _is_index(children, locator.index):
            return children
        current = children[locator.index]
        updated = fn(current)
        if updated is current:
            return children
        out = list(children)
        out[locator.index] = updated
        return out
    return _apply(blocks, locator.container, _replace)


def patch_block_at(blocks: List[Block], locator: BlockLocator, patch: Dict[str, Any]) -> List[Block]:
    return update_block_at(blocks, locator, lambda b: patch_props(b, patch))


def insert_into_container(
    blocks: List[Block], path: Optional[ContainerPath], index: int, block: Block
) -> List[Block]:
    return _apply(blocks, path, lambda children: insert(children, index, block))


def delete_at(blocks: List[Block], locator: BlockLocator) -> List[Block]:
    return _apply(blocks, locator.container, lambda children: delete(children, locator.index))


def move_block(
    blocks: List[Block],
    source: BlockLocator,
    target_path: Optional[ContainerPath],
    target_zone: int,
) -> List[Block]:
    """
    Déplace un bloc d'une liste (premier niveau ou conteneur) vers la drop-zone
    `target_zone` d'une autre. Même liste → règle de `reorder`. Listes
    distinctes → retrait puis insertion, sans correction de décalage sur la zone.
    """
    if source.container == target_path:
        return _apply(blocks, target_path, lambda children: reorder(children, source.index, target_zone))

    source_children = container_blocks(blocks, source.container)
    target_children = container_blocks(blocks, target_path)
    if source_children is None or target_children is None:
        log.debug("move_block: chemin introuvable %r → %r", source, target_path)
        return blocks
    if not _is_index(source_children, source.index) or not _is_zone(target_children, target_zone):
        log.debug("move_block: index hors bornes %r → %r@%r", source, target_path, target_zone)
        return blocks

    if source.container is None and target_path is not None:
        # Un conteneur ne peut pas être déplacé dans lui-même
        if target_path.parent == source.index:
            return blocks
        # Le retrait au premier niveau décale le parent cible
        if target_path.parent > source.index:
            target_path = target_path.model_copy(update={"parent": target_path.parent - 1})

    item = source_children[source.index]
    remaining = _apply(blocks, source.container, lambda children: delete(children, source.index))
    return _apply(remaining, target_path, lambda children: insert(children, target_zone, item))


# ── Redimensionnement image ─────────────────────────────────────────────────

def resize_image(
    block: Block,
    handle: str,
    dx: float,
    dy: float,
    *,
    start_width: int,
    start_height: int,
    canvas_width: int = DEFAULT_CANVAS_WIDTH,
) -> Block:
    """
    Dimensions d'une image à partir d'une base FIXE (capturée au début du
    glisser) et du déplacement cumulé du pointeur depuis ce début.
    Largeur bornée à [60, canvas_width - 16], hauteur ≥ 40. Une poignée
    mono-axe ne touche pas l'autre dimension.
    """
    if not isinstance(block, ImageBlock) or handle not in RESIZE_HANDLES:
        return block

    updates: Dict[str, int] = {}
    if "e" in handle or "w" in handle:
        delta = dx if "e" in handle else -dx
        width = max(MIN_IMAGE_WIDTH, round(start_width + delta))
        updates["width"] = max(0, min(canvas_width - CANVAS_GUTTER, width))
    if "n" in handle or "s" in handle:
        delta = dy if "s" in handle else -dy
        updates["height"] = max(MIN_IMAGE_HEIGHT, round(start_height + delta))

    return block.model_copy(update={"props": block.props.model_copy(update=updates)})
