"""Local JSON cache: the offline copy of dishes, plans and categories.

Three records (dishes.json, plans.json, categories.json) under one directory.
Each write rewrites the whole file through a temp file + move so a crash
never leaves a half-written record.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from gourmet.domain.Dish import Dish
from gourmet.domain.Plan import WeeklyPlan
from gourmet.infra.paths import CATEGORIES_FILE, DATA_DIR, DISHES_FILE, PLANS_FILE
from gourmet.infra.storage import DishStore
from gourmet.utilities.constants import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


class LocalCache(DishStore):
    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else DATA_DIR

    # --- raw records ---
    def _path(self, name: str) -> Path:
        return self.directory / name

    def _load(self, name: str) -> List[Any]:
        path = self._path(name)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.error("Cache record %s is corrupt, treating it as empty", path)
            return []
        return data if isinstance(data, list) else []

    def _atomic_write(self, name: str, data: List[Any]):
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix="." + name.split(".")[0] + "_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self._path(name))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- mirroring from the backend ---
    def write_dishes(self, dishes: List[Dish]):
        self._atomic_write(DISHES_FILE, [d.to_dict() for d in dishes])

    def write_plans(self, plans: List[WeeklyPlan]):
        self._atomic_write(PLANS_FILE, [p.to_dict() for p in plans if not p.is_empty()])

    def write_categories(self, names: List[str]):
        self._atomic_write(CATEGORIES_FILE, list(names))

    # --- DishStore ---
    async def get_dishes(self) -> List[Dish]:
        return [Dish.from_dict(d) for d in self._load(DISHES_FILE)]

    async def save_dish(self, dish: Dish) -> Dish:
        records = self._load(DISHES_FILE)
        for i, rec in enumerate(records):
            if rec.get("id") == dish.id:
                records[i] = dish.to_dict()
                break
        else:
            # newest first, like the backend listing
            records.insert(0, dish.to_dict())
        self._atomic_write(DISHES_FILE, records)
        return dish

    async def delete_dish(self, dish_id: str) -> None:
        records = [r for r in self._load(DISHES_FILE) if r.get("id") != dish_id]
        self._atomic_write(DISHES_FILE, records)
        plans = await self.get_plans()
        removed = [p.remove(dish_id) for p in plans]
        if any(removed):
            self.write_plans(plans)

    async def get_plans(self) -> List[WeeklyPlan]:
        return [WeeklyPlan.from_dict(p) for p in self._load(PLANS_FILE)]

    async def add_to_plan(self, year: int, week: int, dish_id: str) -> None:
        plans = await self.get_plans()
        plan = next((p for p in plans if p.year == year and p.week == week), None)
        if plan is None:
            plan = WeeklyPlan(year, week)
            plans.append(plan)
        if plan.add(dish_id):
            self.write_plans(plans)

    async def remove_from_plan(self, year: int, week: int, dish_id: str) -> None:
        plans = await self.get_plans()
        plan = next((p for p in plans if p.year == year and p.week == week), None)
        if plan is not None and plan.remove(dish_id):
            # write_plans drops the week once it is empty
            self.write_plans(plans)

    async def get_categories(self) -> List[str]:
        names = [str(n) for n in self._load(CATEGORIES_FILE)]
        return names or list(DEFAULT_CATEGORIES)

    async def save_categories(self, names: List[str]) -> None:
        self.write_categories(names)
