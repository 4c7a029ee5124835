"""
Renderer HTML email — génère le balisage en tables d'un document.
Pur et déterministe : même arbre → même chaîne, octet pour octet.
Les clients mail sont sensibles aux espaces/attributs : ne pas reformater.
"""
from typing import List

from ..blocks import (
    Block,
    TextBlock, ImageBlock, ButtonBlock, DividerBlock,
    ColumnsBlock, BoxBlock, SpacerBlock,
)
from ..core.schemas import Document

_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)

_INNER_TABLE = '<table role="presentation" width="100%" cellspacing="0" cellpadding="0">'

_SCAFFOLD_OPEN = (
    '<table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="font-family: Inter, Arial, sans-serif;">'
    '<tr><td align="center" style="padding:16px;">'
    '<table role="presentation" width="600" cellspacing="0" cellpadding="0" style="width:600px; max-width:100%;">'
)
_SCAFFOLD_CLOSE = "</table></td></tr></table>"

# Largeurs (%) par nombre de colonnes / layout
_WIDTHS_2COL = {"equal": [50, 50], "70-30": [70, 30], "30-70": [30, 70]}
_WIDTHS_3COL = [33, 34, 33]


# ── Échappement ─────────────────────────────────────────────────────────────

def escape_html(s: str) -> str:
    """Texte HTML : & < > " uniquement."""
    return (s or "").translate(_ESCAPE_TABLE)


def escape_attr(s: str) -> str:
    """Valeur d'attribut : échappement HTML puis sauts de ligne → espace."""
    return escape_html(s).replace("\n", " ")


def column_widths(column_count: int, layout: str = "equal") -> List[int]:
    if column_count == 2:
        return _WIDTHS_2COL.get(layout, _WIDTHS_2COL["equal"])
    return _WIDTHS_3COL


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_html(blocks: List[Block]) -> str:
    """Génère le HTML email complet (table centrée 600px) d'une liste de blocs."""
    return f"{_SCAFFOLD_OPEN}{render_blocks(blocks)}{_SCAFFOLD_CLOSE}"


def render_document_page(document: Document) -> str:
    """Page HTML autonome (aperçu navigateur) autour du balisage email."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{escape_html(document.name)}</title>
</head>
<body>
{render_html(document.blocks)}
</body>
</html>"""


def render_blocks(blocks: List[Block]) -> str:
    return "".join(render_block(b) for b in blocks)


# ── Dispatch bloc ───────────────────────────────────────────────────────────

def render_block(block: Block) -> str:
    """Une ligne de table (<tr>…</tr>) par bloc."""
    if isinstance(block, TextBlock):    return render_text_block(block)
    if isinstance(block, ImageBlock):   return render_image_block(block)
    if isinstance(block, ButtonBlock):  return render_button_block(block)
    if isinstance(block, DividerBlock): return render_divider_block(block)
    if isinstance(block, ColumnsBlock): return render_columns_block(block)
    if isinstance(block, BoxBlock):     return render_box_block(block)
    if isinstance(block, SpacerBlock):  return render_spacer_block(block)

    return f"<!-- Bloc non implémenté : {escape_html(str(getattr(block, 'type', '?')))} -->"


# ── Renderers par variante ──────────────────────────────────────────────────

def render_text_block(b: TextBlock) -> str:
    p = b.props
    # Seuls les champs renseignés entrent dans le style
    styles = ["padding:12px 0", "line-height:1.6"]
    if p.color:
        styles.append(f"color:{escape_attr(p.color)}")
    if p.font_size:
        styles.append(f"font-size:{p.font_size}px")
    if p.align:
        styles.append(f"text-align:{p.align}")
    return f'<tr><td style="{"; ".join(styles)}">{escape_html(p.text)}</td></tr>'


def render_image_block(b: ImageBlock) -> str:
    p = b.props
    w = f"width:{p.width}px;" if p.width else "width:100%;"
    h = f"height:{p.height}px;" if p.height else "height:auto;"
    return (
        f'<tr><td style="padding:12px 0;">'
        f'<img src="{escape_attr(p.src)}" alt="{escape_attr(p.alt)}" style="display:block; {w} {h} border:0;"/>'
        f'</td></tr>'
    )


def render_button_block(b: ButtonBlock) -> str:
    p = b.props
    bg    = escape_attr(p.bg or "#2563EB")
    color = escape_attr(p.color or "#FFFFFF")
    align = p.align or "left"
    return (
        f'<tr><td style="padding:16px 0; text-align:{align};">'
        f'<a href="{escape_attr(p.href)}" style="background:{bg}; color:{color}; text-decoration:none; '
        f'font-weight:600; padding:10px 16px; border-radius:6px; display:inline-block;">{escape_html(p.label)}</a>'
        f'</td></tr>'
    )


def render_divider_block(b: DividerBlock) -> str:
    c = escape_attr(b.props.color or "#E2E8F0")
    return f'<tr><td style="padding:8px 0;"><hr style="border:none; border-top:1px solid {c}; margin:0;"/></td></tr>'


def render_columns_block(b: ColumnsBlock) -> str:
    p = b.props
    widths = column_widths(p.column_count, p.layout)
    # Colonnes au-delà de column_count ignorées au rendu
    cells = "".join(
        f'<td width="{w}%" style="vertical-align:top; width:{w}%;">'
        f'{_INNER_TABLE}{render_blocks(col.blocks)}</table>'
        f'</td>'
        for col, w in zip(p.visible_columns(), widths)
    )
    return (
        f'<tr><td style="padding:12px 0;">{_INNER_TABLE}<tr>'
        f'{cells}'
        f'</tr></table></td></tr>'
    )


def render_box_block(b: BoxBlock) -> str:
    p = b.props
    bg     = escape_attr(p.background_color or "transparent")
    border = escape_attr(p.border or "none")
    # margin → padding vertical de la ligne englobante
    return (
        f'<tr><td style="padding:{p.margin}px 0;">'
        f'<table role="presentation" width="100%" cellspacing="0" cellpadding="0" '
        f'style="background:{bg}; border:{border}; border-radius:{p.border_radius}px;">'
        f'<tr><td style="padding:{p.padding}px;">'
        f'{_INNER_TABLE}{render_blocks(p.blocks)}</table>'
        f'</td></tr></table></td></tr>'
    )


def render_spacer_block(b: SpacerBlock) -> str:
    h = b.props.height
    return f'<tr><td style="height:{h}px; line-height:{h}px; font-size:1px;">&nbsp;</td></tr>'


# ── Implémentation du protocole Renderer ────────────────────────────────────

class HtmlRenderer:
    """Renderer email (tables) — implémente `renderer.base.Renderer`."""

    def render_document(self, blocks: List[Block]) -> str:
        return render_html(blocks)

    def render_block(self, block: Block) -> str:
        return render_block(block)
