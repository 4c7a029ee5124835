"""
Blocs conteneurs — Colonnes et Boîte.
Structure récursive : Column/Box → Block → (Column/Box → Block …).
L'union discriminée `Block` est définie ici car les conteneurs la référencent.
"""
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from .base import BaseBlock, BlockProps, Pixels, new_column_id
from .button import ButtonBlock
from .divider import DividerBlock
from .image import ImageBlock
from .spacer import SpacerBlock
from .text import TextBlock

ColumnLayout = Literal["equal", "70-30", "30-70"]


class Column(BaseModel):
    """Colonne d'un bloc `columns` — id stable pour le keying UI."""
    id: str = Field(default_factory=new_column_id)
    blocks: List["Block"] = Field(default_factory=list)


class ColumnsProps(BlockProps):
    column_count: Literal[2, 3] = 2
    layout: ColumnLayout = "equal"  # significatif seulement pour 2 colonnes
    columns: List[Column] = Field(default_factory=list)

    def visible_columns(self) -> List[Column]:
        """Colonnes effectivement rendues/éditables (les surplus sont conservés tels quels)."""
        return self.columns[:self.column_count]

    def padded(self) -> "ColumnsProps":
        """Complète la liste avec des colonnes vides jusqu'à column_count."""
        missing = self.column_count - len(self.columns)
        if missing <= 0:
            return self
        extra = [Column() for _ in range(missing)]
        return self.model_copy(update={"columns": [*self.columns, *extra]})


class ColumnsBlock(BaseBlock):
    type: Literal["columns"] = "columns"
    props: ColumnsProps = Field(default_factory=lambda: ColumnsProps().padded())


class BoxProps(BlockProps):
    background_color: str = "transparent"
    padding: Pixels = 16
    margin: Pixels = 0
    border: str = "1px solid #E2E8F0"
    border_radius: Pixels = 8
    blocks: List["Block"] = Field(default_factory=list)


class BoxBlock(BaseBlock):
    type: Literal["box"] = "box"
    props: BoxProps = Field(default_factory=BoxProps)


# Union discriminée par `type`
Block = Annotated[
    Union[
        TextBlock,
        ImageBlock,
        ButtonBlock,
        DividerBlock,
        ColumnsBlock,
        BoxBlock,
        SpacerBlock,
    ],
    Field(discriminator="type"),
]

Column.model_rebuild()
ColumnsProps.model_rebuild()
BoxProps.model_rebuild()
ColumnsBlock.model_rebuild()
BoxBlock.model_rebuild()
