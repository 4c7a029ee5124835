"""Bloc Séparateur — filet horizontal."""
from typing import Literal, Optional

from pydantic import Field

from .base import BaseBlock, BlockProps


class DividerProps(BlockProps):
    color: Optional[str] = "#E2E8F0"


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"
    props: DividerProps = Field(default_factory=DividerProps)
