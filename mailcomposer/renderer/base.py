"""
Protocol Renderer — interface pluggable pour les renderers (HTML email, texte…).
"""
from typing import List, Protocol, runtime_checkable

from ..blocks import Block


@runtime_checkable
class Renderer(Protocol):
    def render_document(self, blocks: List[Block]) -> str: ...
    def render_block(self, block: Block) -> str: ...
