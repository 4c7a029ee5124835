"""Renderers — HTML email en tables."""
from .base import Renderer
from .html import (
    HtmlRenderer,
    render_html,
    render_block,
    render_document_page,
    column_widths,
    escape_html,
    escape_attr,
)

__all__ = [
    "Renderer",
    "HtmlRenderer",
    "render_html",
    "render_block",
    "render_document_page",
    "column_widths",
    "escape_html",
    "escape_attr",
]
