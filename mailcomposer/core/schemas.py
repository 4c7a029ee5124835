"""
Schémas Pydantic transverses — Document + résultat d'opération.
Structure récursive : Document → Block → (Column →) Block …
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from ..blocks import Block
from ..models import Template


class Document(BaseModel):
    """Document complet : nom + séquence ordonnée de blocs de premier niveau."""
    name: str = ""
    blocks: List[Block] = Field(default_factory=list)


class OperationResult(BaseModel):
    """Issue d'un appel au collaborateur de persistance (jamais d'exception)."""
    ok: bool
    error: Optional[str] = None
    template: Optional[Template] = None
    templates: List[Template] = Field(default_factory=list)

    @classmethod
    def success(cls, template: Optional[Template] = None) -> "OperationResult":
        return cls(ok=True, template=template)

    @classmethod
    def failure(cls, error: str) -> "OperationResult":
        return cls(ok=False, error=error)
