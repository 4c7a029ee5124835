"""Bloc Image — largeur/hauteur absentes = auto au rendu."""
from typing import Literal, Optional

from pydantic import Field

from .base import BaseBlock, BlockProps, Pixels


class ImageProps(BlockProps):
    src: str = ""
    alt: str = ""
    width: Optional[Pixels] = None
    height: Optional[Pixels] = None


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    props: ImageProps = Field(default_factory=ImageProps)
