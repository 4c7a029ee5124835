"""
Blocs — exports publics + union discriminée `Block`.
"""
from .base import BaseBlock, BlockProps, Pixels, Align, new_column_id
from .text import TextBlock, TextProps
from .image import ImageBlock, ImageProps
from .button import ButtonBlock, ButtonProps
from .divider import DividerBlock, DividerProps
from .spacer import SpacerBlock, SpacerProps
from .containers import (
    Block,
    Column, ColumnLayout, ColumnsBlock, ColumnsProps,
    BoxBlock, BoxProps,
)
from .factory import BLOCK_TYPES, PALETTE, default_block, to_json, dump_blocks, serialize_blocks

__all__ = [
    # Base
    "BaseBlock", "BlockProps", "Pixels", "Align", "new_column_id",
    # Feuilles
    "TextBlock", "TextProps",
    "ImageBlock", "ImageProps",
    "ButtonBlock", "ButtonProps",
    "DividerBlock", "DividerProps",
    "SpacerBlock", "SpacerProps",
    # Conteneurs
    "Column", "ColumnLayout", "ColumnsBlock", "ColumnsProps",
    "BoxBlock", "BoxProps",
    # Union
    "Block",
    # Fabrique
    "BLOCK_TYPES", "PALETTE", "default_block", "to_json", "dump_blocks", "serialize_blocks",
]
