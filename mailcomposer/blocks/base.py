"""
Blocs de base pour mailcomposer.
Un bloc = {type, props} ; les props sont exposées en camelCase dans le JSON
persisté (fontSize, columnCount…) et en snake_case côté Python.
"""
import math
import random
import string
import time
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

_BASE36 = string.digits + string.ascii_lowercase


def _round_px(value):
    """Les dimensions issues du pointeur arrivent en flottants → pixel entier."""
    if isinstance(value, bool):
        raise ValueError("booléen refusé pour une dimension")
    if isinstance(value, float) and math.isfinite(value):
        return round(value)
    return value


# Dimension en pixels : entier ≥ 0
Pixels = Annotated[int, BeforeValidator(_round_px), Field(ge=0)]

Align = Literal["left", "center", "right"]


def _to_base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
        if n == 0:
            return out


def new_column_id() -> str:
    """Id de colonne : horodatage ms en base 36 + suffixe aléatoire (clé UI uniquement)."""
    suffix = "".join(random.choices(_BASE36, k=4))
    return f"{_to_base36(int(time.time() * 1000))}-{suffix}"


class BlockProps(BaseModel):
    """Props d'un bloc. Clés JSON en camelCase, noms Python en snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de toutes les variantes)."""
    type: str
