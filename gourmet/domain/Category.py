"""Category domain entity plus the list helpers used when the user edits the category bar.

Categories travel as an ordered list of names; sortOrder is always the list index,
so every helper returns a new list and ``build_categories`` renumbers densely.
"""
from typing import List, Optional

from gourmet.utilities.errors import ValidationError


class Category:
    def __init__(self, name: str, sort_order: int = 0, id: Optional[str] = None):
        # backends that only store names use the name as identity
        self.id = id or name
        self.name = name
        self.sort_order = sort_order

    def __str__(self) -> str:
        return f"{self.sort_order}. {self.name}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {"name": str(data)}
        return Category(name=str(d.get("name") or ""), sort_order=int(d.get("sortOrder") or 0),
                        id=d.get("id"))

    def to_dict(self):
        return {"id": self.id, "name": self.name, "sortOrder": self.sort_order}


def clean_names(names: List[str]) -> List[str]:
    """Trim names and reject blanks or duplicates."""
    cleaned = [(n or "").strip() for n in names]
    if any(not n for n in cleaned):
        raise ValidationError("Category names cannot be empty")
    seen = set()
    for n in cleaned:
        if n in seen:
            raise ValidationError(f"Duplicate category: {n}")
        seen.add(n)
    return cleaned


def build_categories(names: List[str]) -> List[Category]:
    return [Category(name=n, sort_order=i) for i, n in enumerate(clean_names(names))]


def add_category(names: List[str], name: str) -> List[str]:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category names cannot be empty")
    if name in names:
        raise ValidationError(f"Duplicate category: {name}")
    return list(names) + [name]


def delete_category(names: List[str], name: str) -> List[str]:
    '''Removes a category name. Dish tags that reference it are left alone.'''
    return [n for n in names if n != name]


def rename_category(names: List[str], old: str, new: str) -> List[str]:
    new = (new or "").strip()
    if not new:
        raise ValidationError("Category names cannot be empty")
    if new != old and new in names:
        raise ValidationError(f"Duplicate category: {new}")
    return [new if n == old else n for n in names]


def move_category(names: List[str], source: str, target: str) -> List[str]:
    """Moves ``source`` to the position currently held by ``target``.

    Unknown names or source == target leave the order unchanged.
    """
    if source not in names or target not in names or source == target:
        return list(names)
    target_index = names.index(target)
    reordered = [n for n in names if n != source]
    reordered.insert(target_index, source)
    return reordered
