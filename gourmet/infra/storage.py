"""Storage strategies shared interface and the mode switch held by the repository."""
from enum import Enum
from typing import List

from gourmet.domain.Dish import Dish
from gourmet.domain.Plan import WeeklyPlan


class StorageMode(Enum):
    BACKEND = "backend"
    LOCAL = "local"


class DishStore:
    """Persistence for dishes, weekly plans and the category order.

    Implementations: HttpBackend (remote API) and LocalCache (JSON files).
    All methods are coroutines.
    """

    async def get_dishes(self) -> List[Dish]:
        raise NotImplementedError

    async def save_dish(self, dish: Dish) -> Dish:
        '''Insert or update by id.'''
        raise NotImplementedError

    async def delete_dish(self, dish_id: str) -> None:
        raise NotImplementedError

    async def get_plans(self) -> List[WeeklyPlan]:
        raise NotImplementedError

    async def add_to_plan(self, year: int, week: int, dish_id: str) -> None:
        '''Idempotent: adding a dish already in the week changes nothing.'''
        raise NotImplementedError

    async def remove_from_plan(self, year: int, week: int, dish_id: str) -> None:
        raise NotImplementedError

    async def get_categories(self) -> List[str]:
        raise NotImplementedError

    async def save_categories(self, names: List[str]) -> None:
        '''Replaces the whole category list; list order is the sort order.'''
        raise NotImplementedError
