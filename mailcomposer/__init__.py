"""
mailcomposer — Composition de templates email par blocs.

Usage:
    >>> from mailcomposer import parse_content, render_html, serialize_blocks
    >>> blocks = parse_content(template.content)
    >>> html = render_html(blocks)

Usage (mutations):
    >>> from mailcomposer import default_block, insert, reorder
    >>> blocks = insert(blocks, 0, default_block("text"))
    >>> blocks = reorder(blocks, 0, len(blocks))
"""

# ── Blocs ────────────────────────────────────────────────────────────────────
from .blocks import (
    Block, BaseBlock, BlockProps,
    TextBlock, TextProps,
    ImageBlock, ImageProps,
    ButtonBlock, ButtonProps,
    DividerBlock, DividerProps,
    SpacerBlock, SpacerProps,
    Column, ColumnsBlock, ColumnsProps,
    BoxBlock, BoxProps,
    BLOCK_TYPES, PALETTE, default_block, new_column_id,
    to_json, dump_blocks, serialize_blocks,
)
from .core.schemas import Document, OperationResult

# ── Normalisation ────────────────────────────────────────────────────────────
from .normalizer import normalize, normalize_block, normalize_blocks, parse_content

# ── Rendu ────────────────────────────────────────────────────────────────────
from .renderer import Renderer, HtmlRenderer, render_html, render_block, column_widths, escape_html, escape_attr

# ── Mutations ────────────────────────────────────────────────────────────────
from .mutations import (
    BlockLocator, ContainerPath,
    insert, insert_preset, reorder, delete, patch_props,
    container_blocks, replace_container_blocks, get_block,
    insert_into_container, delete_at, patch_block_at, update_block_at,
    move_block, resize_image,
)
from .presets import PRESETS, get_preset

# ── Session ──────────────────────────────────────────────────────────────────
from .session import EditorSession

__version__ = "0.1.0"

__all__ = [
    # Blocs
    "Block", "BaseBlock", "BlockProps",
    "TextBlock", "TextProps", "ImageBlock", "ImageProps",
    "ButtonBlock", "ButtonProps", "DividerBlock", "DividerProps",
    "SpacerBlock", "SpacerProps",
    "Column", "ColumnsBlock", "ColumnsProps", "BoxBlock", "BoxProps",
    "BLOCK_TYPES", "PALETTE", "default_block", "new_column_id",
    "to_json", "dump_blocks", "serialize_blocks",
    "Document", "OperationResult",
    # Normalisation
    "normalize", "normalize_block", "normalize_blocks", "parse_content",
    # Rendu
    "Renderer", "HtmlRenderer", "render_html", "render_block", "column_widths",
    "escape_html", "escape_attr",
    # Mutations
    "BlockLocator", "ContainerPath",
    "insert", "insert_preset", "reorder", "delete", "patch_props",
    "container_blocks", "replace_container_blocks", "get_block",
    "insert_into_container", "delete_at", "patch_block_at", "update_block_at",
    "move_block", "resize_image",
    "PRESETS", "get_preset",
    # Session
    "EditorSession",
]
