"""
Layouts prêts à l'emploi — séquences de blocs insérées d'un seul tenant.
Chaque appel construit des blocs neufs (ids de colonnes frais).
"""
from typing import Callable, Dict, List, Optional

from .blocks import (
    Block,
    TextBlock, TextProps,
    ImageBlock, ImageProps,
    ButtonBlock, ButtonProps,
    DividerBlock,
    SpacerBlock, SpacerProps,
    Column, ColumnsBlock, ColumnsProps,
    BoxBlock, BoxProps,
)


def _header() -> List[Block]:
    return [
        TextBlock(props=TextProps(text="Votre newsletter", font_size=24, align="center")),
        DividerBlock(),
    ]


def _hero() -> List[Block]:
    return [
        ImageBlock(props=ImageProps(src="https://placehold.co/600x200", alt="Bannière", width=600)),
        TextBlock(props=TextProps(text="Titre principal", font_size=22, align="center")),
        TextBlock(props=TextProps(text="Une courte introduction à votre message.", align="center")),
        ButtonBlock(props=ButtonProps(label="Découvrir", align="center")),
    ]


def _two_columns() -> List[Block]:
    return [
        ColumnsBlock(props=ColumnsProps(layout="30-70", columns=[
            Column(blocks=[ImageBlock(props=ImageProps(src="https://placehold.co/160x160", alt="Illustration"))]),
            Column(blocks=[
                TextBlock(props=TextProps(text="Présentez ici votre produit ou votre actualité.")),
                ButtonBlock(props=ButtonProps(label="En savoir plus")),
            ]),
        ])),
    ]


def _card() -> List[Block]:
    return [
        BoxBlock(props=BoxProps(background_color="#F8FAFC", blocks=[
            TextBlock(props=TextProps(text="Offre du moment", font_size=18)),
            TextBlock(props=TextProps(text="Détaillez votre offre en quelques lignes.")),
            ButtonBlock(props=ButtonProps(label="J'en profite")),
        ])),
    ]


def _footer() -> List[Block]:
    return [
        SpacerBlock(props=SpacerProps(height=24)),
        DividerBlock(),
        TextBlock(props=TextProps(
            text="Vous recevez cet email car vous êtes inscrit à notre liste.",
            font_size=12, color="#64748B", align="center",
        )),
    ]


PRESETS: Dict[str, Dict] = {
    "header":      {"label": "En-tête",           "build": _header},
    "hero":        {"label": "Bannière",          "build": _hero},
    "two_columns": {"label": "Image + texte",     "build": _two_columns},
    "card":        {"label": "Encadré",           "build": _card},
    "footer":      {"label": "Pied de page",      "build": _footer},
}


def get_preset(key: str) -> Optional[List[Block]]:
    preset = PRESETS.get(key)
    if preset is None:
        return None
    build: Callable[[], List[Block]] = preset["build"]
    return build()
