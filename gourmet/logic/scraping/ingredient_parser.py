"""Ingredient line tokenizer: "200 g Mehl" -> amount "200", unit "g", name "Mehl"."""
import re
from typing import Optional

from gourmet.domain.Ingredient import Ingredient

# amount, then a unit word glued or spaced, then the name
_AMOUNT_UNIT_NAME = re.compile(r"^(\d+(?:[.,]\d+)?)(?!\d)\s*([^\W\d_]\w*)\s+(.+)$")
_AMOUNT_NAME = re.compile(r"^(\d+(?:[.,]\d+)?)\s+(.+)$")
_WHITESPACE = re.compile(r"\s+")


def parse_ingredient_line(text: str) -> Optional[Ingredient]:
    """Split a free-text ingredient row into amount, unit and name.

    Tried in order: amount + unit + name, amount + name, name only.
    The unit is the first word after the amount, so "2 große Zwiebeln" yields
    unit "große"; blank input returns None.
    """
    line = _WHITESPACE.sub(" ", text or "").strip()
    if not line:
        return None
    m = _AMOUNT_UNIT_NAME.match(line)
    if m:
        return Ingredient(name=m.group(3).strip(), amount=m.group(1), unit=m.group(2))
    m = _AMOUNT_NAME.match(line)
    if m:
        return Ingredient(name=m.group(2).strip(), amount=m.group(1), unit="")
    return Ingredient(name=line, amount="", unit="")


__all__ = ["parse_ingredient_line"]
