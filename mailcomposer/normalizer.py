"""
Normalizer — données persistées/non fiables → Block (total, ne lève jamais).

Repli champ par champ : chaque prop est validée seule contre son type déclaré ;
une valeur absente, nulle ou invalide prend la valeur par défaut du champ.
Type inconnu → bloc texte vide. Au-delà de MAX_DEPTH niveaux de conteneurs,
le sous-arbre devient un bloc texte portant sa forme JSON brute : tout arbre
renvoyé reste rendable et sérialisable.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from .blocks import (
    Block, BlockProps,
    TextBlock, TextProps,
    ImageBlock, ImageProps,
    ButtonBlock, ButtonProps,
    DividerBlock, DividerProps,
    SpacerBlock, SpacerProps,
    Column, ColumnsBlock, ColumnsProps,
    BoxBlock, BoxProps,
    serialize_blocks,
)

log = logging.getLogger(__name__)

# Profondeur maximale de conteneurs (columns/box) imbriqués
MAX_DEPTH = 50

# ── Registry des blocs feuilles ─────────────────────────────────────────────
_LEAF_REGISTRY: dict = {
    "text":    (TextBlock,    TextProps),
    "image":   (ImageBlock,   ImageProps),
    "button":  (ButtonBlock,  ButtonProps),
    "divider": (DividerBlock, DividerProps),
    "spacer":  (SpacerBlock,  SpacerProps),
}


def _raw_props(raw: Dict[str, Any]) -> Dict[str, Any]:
    props = raw.get("props")
    return props if isinstance(props, dict) else {}


def _coerce_fields(props_cls: Type[BlockProps], raw: Dict[str, Any], skip=()) -> Dict[str, Any]:
    """Valide chaque champ isolément ; ne garde que les valeurs acceptées."""
    kept: Dict[str, Any] = {}
    for name, field in props_cls.model_fields.items():
        if name in skip:
            continue
        key = field.alias or name
        value = raw.get(key, raw.get(name))
        if value is None:
            continue
        try:
            validated = props_cls.model_validate({name: value})
        except ValidationError:
            log.debug("normalize: %s.%s invalide (%r) → défaut", props_cls.__name__, key, value)
            continue
        kept[name] = getattr(validated, name)
    return kept


def _normalize_leaf(block_type: str, raw: Dict[str, Any]) -> Block:
    block_cls, props_cls = _LEAF_REGISTRY[block_type]
    return block_cls(props=props_cls(**_coerce_fields(props_cls, _raw_props(raw))))


def _normalize_column(raw: Any, depth: int) -> Column:
    if not isinstance(raw, dict):
        return Column()
    col_id = raw.get("id")
    blocks = raw.get("blocks")
    kwargs: Dict[str, Any] = {
        "blocks": [normalize_block(b, depth) for b in blocks] if isinstance(blocks, list) else [],
    }
    if isinstance(col_id, str) and col_id.strip():
        kwargs["id"] = col_id
    return Column(**kwargs)


def _normalize_columns(raw: Dict[str, Any], depth: int) -> ColumnsBlock:
    props = _raw_props(raw)
    count = 3 if props.get("columnCount", props.get("column_count")) == 3 else 2
    fields = _coerce_fields(ColumnsProps, props, skip=("column_count", "columns"))
    raw_cols = props.get("columns")
    columns = [_normalize_column(c, depth) for c in raw_cols] if isinstance(raw_cols, list) else []
    return ColumnsBlock(props=ColumnsProps(column_count=count, columns=columns, **fields).padded())


def _normalize_box(raw: Dict[str, Any], depth: int) -> BoxBlock:
    props = _raw_props(raw)
    fields = _coerce_fields(BoxProps, props, skip=("blocks",))
    children = props.get("blocks")
    blocks = [normalize_block(b, depth) for b in children] if isinstance(children, list) else []
    return BoxBlock(props=BoxProps(blocks=blocks, **fields))


def normalize_block(raw: Any, depth: int = 0) -> Block:
    """
    Convertit n'importe quelle valeur en Block valide (récursif pour les conteneurs).
    `depth` = nombre de conteneurs englobants ; au-delà de MAX_DEPTH le
    conteneur est remplacé par un bloc texte.
    """
    block_type = raw.get("type") if isinstance(raw, dict) else None
    if not isinstance(block_type, str):
        block_type = None
    if block_type in _LEAF_REGISTRY:
        return _normalize_leaf(block_type, raw)
    if block_type in ("columns", "box") and depth >= MAX_DEPTH:
        log.warning("normalize: imbrication > %d conteneurs → bloc texte", MAX_DEPTH)
        return _raw_text(_dump_raw(raw))[0]
    if block_type == "columns":
        return _normalize_columns(raw, depth + 1)
    if block_type == "box":
        return _normalize_box(raw, depth + 1)
    log.debug("normalize: type inconnu %r → texte vide", block_type)
    return TextBlock()


def _dump_raw(value: Any) -> str:
    """Forme JSON brute d'une valeur ("" si elle n'est pas sérialisable)."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return ""


def _raw_text(value: Any) -> List[Block]:
    if not isinstance(value, str):
        try:
            value = str(value)
        except RecursionError:
            value = ""
    return [TextBlock(props=TextProps(text=value))]


def normalize_blocks(raw: Any) -> List[Block]:
    """
    Document de premier niveau. Formes acceptées :
      - tableau de blocs bruts
      - objet {"blocks": [...]}
    None → [] ; toute autre valeur → un bloc texte portant sa forme chaîne.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [normalize_block(b) for b in raw]
    if isinstance(raw, dict) and isinstance(raw.get("blocks"), list):
        return [normalize_block(b) for b in raw["blocks"]]
    return _raw_text(raw)


def parse_content(content: Optional[str]) -> List[Block]:
    """Template.content (texte JSON, HTML brut, vide…) → liste de blocs."""
    if content is None:
        return []
    if not isinstance(content, str):
        return normalize_blocks(content)
    if not content.strip():
        return []
    try:
        data = json.loads(content)
    except (ValueError, RecursionError):
        log.debug("parse_content: contenu non JSON (%d car.) → bloc texte", len(content))
        return _raw_text(content)
    if data is None or isinstance(data, list) or (isinstance(data, dict) and isinstance(data.get("blocks"), list)):
        return normalize_blocks(data)
    return _raw_text(content)


def normalize(raw: Any) -> List[Block]:
    """Point d'entrée : texte persisté ou données déjà décodées."""
    if isinstance(raw, str) or raw is None:
        return parse_content(raw)
    return normalize_blocks(raw)


__all__ = [
    "normalize",
    "normalize_block",
    "normalize_blocks",
    "parse_content",
    "serialize_blocks",
]
