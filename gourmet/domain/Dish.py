"""Dish domain entity: a catalog recipe with rating, ingredients, tags and cooking stats."""
from datetime import datetime, timezone
from typing import List, Optional

from gourmet.domain.Ingredient import Ingredient, new_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        # the browser client stores epoch milliseconds
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    # MySQL DATETIME columns come back without an offset and hold UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _format_ts(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class Dish:
    def __init__(self, name: str = "", id: Optional[str] = None, image: Optional[str] = None,
                 rating: int = 0, recipe_link: Optional[str] = None, notes: Optional[str] = None,
                 ingredients: Optional[List[Ingredient]] = None, last_cooked: Optional[datetime] = None,
                 times_cooked: int = 0, tags: Optional[List[str]] = None,
                 created_at: Optional[datetime] = None):
        self.id = id or new_id()
        self.name = name
        self.image = image or None
        self.rating = rating
        self.recipe_link = recipe_link or None
        self.notes = notes or None
        self.ingredients = ingredients[:] if ingredients else []
        self.last_cooked = last_cooked
        self.times_cooked = max(0, int(times_cooked or 0))
        self.tags = tags[:] if tags else []
        self.created_at = created_at or utc_now()

    def __str__(self) -> str:
        return f"{self.name} - rating {self.rating} - cooked {self.times_cooked}x - Tags: {', '.join(self.tags)}"

    __repr__ = __str__

    def mark_cooked(self, when: datetime):
        self.times_cooked += 1
        self.last_cooked = when

    def unmark_cooked(self):
        '''Reverts one cooking; lastCooked is left as it was.'''
        self.times_cooked = max(0, self.times_cooked - 1)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @staticmethod
    def from_dict(data):
        '''Creates a Dish from its camelCase wire/cache form.'''
        d = dict(data) if isinstance(data, dict) else {}
        try:
            rating = int(d.get("rating") or 0)
        except (TypeError, ValueError):
            rating = 0
        try:
            times = int(d.get("timesCooked") or 0)
        except (TypeError, ValueError):
            times = 0
        return Dish(
            id=str(d["id"]) if d.get("id") else None,
            name=str(d.get("name") or ""),
            image=d.get("image") or None,
            rating=rating,
            recipe_link=d.get("recipeLink") or None,
            notes=d.get("notes") or None,
            ingredients=[Ingredient.from_dict(i) for i in d.get("ingredients") or []],
            last_cooked=_parse_ts(d.get("lastCooked")),
            times_cooked=times,
            tags=[str(t) for t in d.get("tags") or []],
            created_at=_parse_ts(d.get("createdAt")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "rating": self.rating,
            "recipeLink": self.recipe_link,
            "notes": self.notes,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "lastCooked": _format_ts(self.last_cooked),
            "timesCooked": self.times_cooked,
            "tags": self.tags,
            "createdAt": _format_ts(self.created_at),
        }
