"""Ingredient domain entity: one line of a dish's ingredient list (name, amount, unit)."""
import uuid
from typing import Optional


def new_id() -> str:
    return uuid.uuid4().hex


class Ingredient:
    def __init__(self, name: str = "", amount: str = "", unit: str = "", id: Optional[str] = None):
        self.id = id or new_id()
        self.name = name
        # amount/unit are free text ("200", "1 Bund", "") and never None
        self.amount = amount if amount is not None else ""
        self.unit = unit if unit is not None else ""

    def __str__(self) -> str:
        parts = [p for p in (self.amount, self.unit, self.name) if p]
        return " ".join(parts)

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.amount, self.unit) == (other.name, other.amount, other.unit)

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            name=str(d.get("name") or ""),
            amount="" if d.get("amount") is None else str(d.get("amount")),
            unit="" if d.get("unit") is None else str(d.get("unit")),
            id=str(d["id"]) if d.get("id") else None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
        }
