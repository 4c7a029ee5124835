"""Core module pour mailcomposer."""
from .schemas import Document, OperationResult

__all__ = [
    "Document",
    "OperationResult",
]
