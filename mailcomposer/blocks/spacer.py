"""Bloc Espacement — cellule vide de hauteur fixe."""
from typing import Literal

from pydantic import Field

from .base import BaseBlock, BlockProps, Pixels


class SpacerProps(BlockProps):
    height: Pixels = 32


class SpacerBlock(BaseBlock):
    type: Literal["spacer"] = "spacer"
    props: SpacerProps = Field(default_factory=SpacerProps)
