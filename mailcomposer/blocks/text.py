"""Bloc Texte — paragraphe simple, taille/couleur/alignement optionnels."""
from typing import Literal, Optional

from pydantic import Field

from .base import Align, BaseBlock, BlockProps, Pixels


class TextProps(BlockProps):
    text: str = ""
    font_size: Optional[Pixels] = 14
    color: Optional[str] = "#0F172A"
    align: Optional[Align] = "left"


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    props: TextProps = Field(default_factory=TextProps)
