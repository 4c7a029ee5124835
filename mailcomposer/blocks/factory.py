"""
Fabrique de blocs — valeurs par défaut de la palette du canvas.
"""
import json
from typing import Any, Dict, List

from .button import ButtonBlock, ButtonProps
from .containers import Block, BoxBlock, ColumnsBlock
from .divider import DividerBlock
from .image import ImageBlock, ImageProps
from .spacer import SpacerBlock
from .text import TextBlock, TextProps

BLOCK_TYPES = ("text", "image", "button", "divider", "columns", "box", "spacer")

# (type, libellé) — ordre d'affichage dans la palette
PALETTE = [
    ("text",    "Texte"),
    ("image",   "Image"),
    ("button",  "Bouton"),
    ("divider", "Séparateur"),
    ("columns", "Colonnes"),
    ("box",     "Boîte"),
    ("spacer",  "Espacement"),
]


def default_block(block_type: str) -> Block:
    """Bloc neuf tel que déposé depuis la palette."""
    if block_type == "text":
        return TextBlock(props=TextProps(text="Paragraphe d'exemple."))
    if block_type == "image":
        return ImageBlock(props=ImageProps(src="https://placehold.co/600x200", alt="Image", width=600))
    if block_type == "button":
        return ButtonBlock(props=ButtonProps(label="Appel à l'action"))
    if block_type == "divider":
        return DividerBlock()
    if block_type == "columns":
        # 2 colonnes égales, ids frais
        return ColumnsBlock()
    if block_type == "box":
        return BoxBlock()
    if block_type == "spacer":
        return SpacerBlock()
    raise ValueError(f"Type de bloc inconnu : {block_type!r}. Types : {list(BLOCK_TYPES)}")


def to_json(block: Block) -> Dict[str, Any]:
    """Forme persistée d'un bloc : {"type": ..., "props": {...camelCase}}."""
    return block.model_dump(by_alias=True, exclude_none=True)


def dump_blocks(blocks: List[Block]) -> List[Dict[str, Any]]:
    return [to_json(b) for b in blocks]


def serialize_blocks(blocks: List[Block]) -> str:
    """Tableau JSON stocké tel quel dans Template.content (pas d'objet englobant)."""
    return json.dumps(dump_blocks(blocks), ensure_ascii=False)
