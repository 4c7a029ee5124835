"""Bloc Bouton — lien stylé en bouton."""
from typing import Literal, Optional

from pydantic import Field

from .base import Align, BaseBlock, BlockProps


class ButtonProps(BlockProps):
    label: str = "CTA"
    href: str = "#"
    bg: Optional[str] = "#2563EB"
    color: Optional[str] = "#FFFFFF"
    align: Optional[Align] = "left"


class ButtonBlock(BaseBlock):
    type: Literal["button"] = "button"
    props: ButtonProps = Field(default_factory=ButtonProps)
