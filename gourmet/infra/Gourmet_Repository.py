"""Repository facade over the backend and the local cache.

Every operation goes to the HTTP backend while the repository is in
StorageMode.BACKEND. The first BackendUnavailable switches the instance to
StorageMode.LOCAL (the operation is retried on the cache and a
storage.degraded event is published). Only check_connection() switches back.

Successful backend operations are mirrored into the cache so the offline
copy stays close to the last known server state.
"""
import logging
from datetime import date, datetime
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from gourmet.domain.Category import (
    Category, add_category, build_categories, delete_category, move_category, rename_category,
)
from gourmet.domain.Dish import Dish, utc_now
from gourmet.domain.Ingredient import Ingredient
from gourmet.domain.Plan import WeeklyPlan
from gourmet.domain.ShoppingList import ShoppingList
from gourmet.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from gourmet.events.event_helpers import publish_storage_degraded, publish_storage_restored
from gourmet.infra.Category_Saver import DebouncedCategorySaver
from gourmet.infra.Local_Cache import LocalCache
from gourmet.infra.storage import DishStore, StorageMode
from gourmet.logic.planning.weeks import get_relevant_weeks, is_week_full
from gourmet.logic.reporting.statistics import CookingStats
from gourmet.logic.shopping.aggregator import aggregate
from gourmet.utilities import config
from gourmet.utilities.constants import MAX_DISHES_PER_WEEK, MAX_RATING
from gourmet.utilities.errors import BackendUnavailable, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def check_week(year: int, week: int):
    """Raises ValidationError unless (year, week) is a real ISO week."""
    try:
        date.fromisocalendar(int(year), int(week), 1)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid calendar week {year}-{week}") from e


def _occurrences(dishes: List[Dish]) -> List[Tuple[Ingredient, str, str]]:
    return [(ing, d.id, d.name) for d in dishes for ing in d.ingredients]


class GourmetRepository:
    def __init__(self, backend: Optional[DishStore], cache: LocalCache,
                 mode: StorageMode = StorageMode.BACKEND,
                 clock: Callable[[], datetime] = utc_now,
                 bus: Optional[EventBus] = None,
                 category_delay: float = config.CATEGORY_SAVE_DELAY_SECONDS):
        self.backend = backend
        self.cache = cache
        self.mode = mode if backend is not None else StorageMode.LOCAL
        self.clock = clock
        self.bus = bus or GLOBAL_EVENT_BUS
        self.last_error: Optional[str] = None
        self._category_saver = DebouncedCategorySaver(self.save_categories, delay=category_delay)

    def __str__(self) -> str:
        return f"GourmetRepository(mode={self.mode.value})"

    __repr__ = __str__

    # --- storage mode ---
    @property
    def is_offline(self) -> bool:
        return self.mode is StorageMode.LOCAL

    def status(self) -> Dict[str, object]:
        return {"mode": self.mode.value, "offline": self.is_offline, "reason": self.last_error}

    def _degrade(self, reason: str):
        if self.mode is StorageMode.LOCAL:
            return
        self.mode = StorageMode.LOCAL
        self.last_error = reason
        logger.warning("Backend unavailable, switching to local cache: %s", reason)
        publish_storage_degraded(reason, bus=self.bus)

    async def _run(self, name: str, op: Callable[[DishStore], Awaitable],
                   mirror: Optional[Callable] = None):
        """Run ``op`` on the active store, falling back to the cache on BackendUnavailable.

        ``mirror(result)`` is called after a successful backend call to update the cache.
        """
        if self.mode is StorageMode.BACKEND:
            try:
                result = await op(self.backend)
            except BackendUnavailable as e:
                self._degrade(f"{name}: {e}")
            else:
                if mirror is not None:
                    await mirror(result)
                return result
        return await op(self.cache)

    async def check_connection(self) -> bool:
        """Probe the backend; the only way back from StorageMode.LOCAL."""
        if self.backend is None:
            return False
        try:
            await self.backend.ping()
        except BackendUnavailable as e:
            self._degrade(f"connection check: {e}")
            return False
        if self.mode is StorageMode.LOCAL:
            self.mode = StorageMode.BACKEND
            self.last_error = None
            logger.info("Backend reachable again, leaving local cache mode")
            publish_storage_restored(bus=self.bus)
        return True

    # --- dishes ---
    async def get_dishes(self) -> List[Dish]:
        async def mirror(dishes):
            self.cache.write_dishes(dishes)
        return await self._run("get_dishes", lambda s: s.get_dishes(), mirror)

    async def get_dish(self, dish_id: str) -> Dish:
        for dish in await self.get_dishes():
            if dish.id == dish_id:
                return dish
        raise NotFoundError(f"Dish {dish_id} not found")

    async def _store_dish(self, dish: Dish) -> Dish:
        async def mirror(_):
            await self.cache.save_dish(dish)
        return await self._run("save_dish", lambda s: s.save_dish(dish), mirror)

    @staticmethod
    def _validate_dish(dish: Dish):
        dish.name = (dish.name or "").strip()
        if not dish.name:
            raise ValidationError("Dish name cannot be empty")
        if not 0 <= int(dish.rating) <= MAX_RATING:
            raise ValidationError(f"Rating must be between 0 and {MAX_RATING}")
        for ing in dish.ingredients:
            if not (ing.name or "").strip():
                raise ValidationError("Ingredient name cannot be empty")

    async def add_dish(self, dish: Dish) -> Dish:
        self._validate_dish(dish)
        saved = await self._store_dish(dish)
        logger.info("Added dish %r (%s)", saved.name, saved.id)
        return saved

    async def update_dish(self, dish: Dish) -> Dish:
        """Saves user edits; cooking stats are kept from the stored dish."""
        self._validate_dish(dish)
        stored = await self.get_dish(dish.id)
        dish.times_cooked = stored.times_cooked
        dish.last_cooked = stored.last_cooked
        dish.created_at = stored.created_at
        return await self._store_dish(dish)

    async def rate_dish(self, dish_id: str, rating: int) -> Dish:
        if not isinstance(rating, int) or not 0 <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between 0 and {MAX_RATING}")
        dish = await self.get_dish(dish_id)
        dish.rating = rating
        return await self._store_dish(dish)

    async def delete_dish(self, dish_id: str) -> None:
        async def mirror(_):
            await self.cache.delete_dish(dish_id)
        await self._run("delete_dish", lambda s: s.delete_dish(dish_id), mirror)
        logger.info("Deleted dish %s", dish_id)

    # --- plans ---
    async def get_plans(self) -> List[WeeklyPlan]:
        async def mirror(plans):
            self.cache.write_plans(plans)
        return await self._run("get_plans", lambda s: s.get_plans(), mirror)

    async def get_plan(self, year: int, week: int) -> WeeklyPlan:
        """The plan for (year, week); an empty plan when nothing is assigned."""
        for plan in await self.get_plans():
            if plan.year == year and plan.week == week:
                return plan
        return WeeklyPlan(year, week)

    async def add_dish_to_plan(self, year: int, week: int, dish_id: str) -> WeeklyPlan:
        """Assigns a dish to a week and counts it as cooked.

        Adding a dish that is already in the week changes nothing. The
        five-dishes-per-week limit is a UI rule and is not checked here.
        """
        check_week(year, week)
        dish = await self.get_dish(dish_id)
        plan = await self.get_plan(year, week)
        if plan.contains(dish_id):
            return plan

        async def mirror(_):
            await self.cache.add_to_plan(year, week, dish_id)
        await self._run("add_to_plan", lambda s: s.add_to_plan(year, week, dish_id), mirror)
        plan.add(dish_id)
        dish.mark_cooked(self.clock())
        await self._store_dish(dish)
        return plan

    async def remove_dish_from_plan(self, year: int, week: int, dish_id: str) -> WeeklyPlan:
        """Removes a dish from a week; timesCooked goes down by one, lastCooked stays."""
        check_week(year, week)
        plan = await self.get_plan(year, week)
        if not plan.contains(dish_id):
            return plan

        async def mirror(_):
            await self.cache.remove_from_plan(year, week, dish_id)
        await self._run("remove_from_plan", lambda s: s.remove_from_plan(year, week, dish_id), mirror)
        plan.remove(dish_id)
        try:
            dish = await self.get_dish(dish_id)
        except NotFoundError:
            logger.warning("Removed unknown dish %s from plan %s", dish_id, plan.id)
            return plan
        dish.unmark_cooked()
        await self._store_dish(dish)
        return plan

    # --- categories ---
    async def _category_names(self) -> List[str]:
        pending = self._category_saver.pending
        if pending is not None:
            return pending

        async def mirror(names):
            if names:
                self.cache.write_categories(names)
        return await self._run("get_categories", lambda s: s.get_categories(), mirror)

    async def get_categories(self) -> List[Category]:
        return [Category(name=n, sort_order=i) for i, n in enumerate(await self._category_names())]

    async def save_categories(self, names: List[str]) -> List[Category]:
        """Writes the list now; a queued reorder is superseded by it."""
        categories = build_categories(names)
        cleaned = [c.name for c in categories]
        self._category_saver.discard()

        async def mirror(_):
            self.cache.write_categories(cleaned)
        await self._run("save_categories", lambda s: s.save_categories(cleaned), mirror)
        return categories

    def queue_category_save(self, names: List[str]) -> List[Category]:
        """Debounced save: only the last list within the quiet period is written."""
        categories = build_categories(names)
        self._category_saver.schedule([c.name for c in categories])
        return categories

    async def add_category(self, name: str) -> List[Category]:
        return await self.save_categories(add_category(await self._category_names(), name))

    async def delete_category(self, name: str) -> List[Category]:
        '''Removes the category; dishes keep the tag.'''
        return await self.save_categories(delete_category(await self._category_names(), name))

    async def rename_category(self, old: str, new: str) -> List[Category]:
        return await self.save_categories(rename_category(await self._category_names(), old, new))

    async def move_category(self, source: str, target: str) -> List[Category]:
        return self.queue_category_save(move_category(await self._category_names(), source, target))

    # --- shopping ---
    async def get_week_dishes(self, year: int, week: int) -> List[Dish]:
        """Dishes planned in the week, in plan order; ids without a dish are skipped."""
        check_week(year, week)
        plan = await self.get_plan(year, week)
        if plan.is_empty():
            return []
        dishes = {d.id: d for d in await self.get_dishes()}
        return [dishes[i] for i in plan.dish_ids if i in dishes]

    async def get_week_ingredients(self, year: int, week: int) -> List[Tuple[Ingredient, str, str]]:
        """(ingredient, dish id, dish name) for every ingredient of every dish planned in the week."""
        return _occurrences(await self.get_week_dishes(year, week))

    async def get_shopping_list(self, year: int, week: int) -> ShoppingList:
        """Consolidated list for the week plus the names of planned dishes without ingredients."""
        dishes = await self.get_week_dishes(year, week)
        shopping = aggregate(_occurrences(dishes))
        shopping.dishes_without_ingredients = [d.name for d in dishes if not d.ingredients]
        return shopping

    # --- overview & reporting ---
    async def get_week_overview(self, today: Optional[date] = None) -> List[dict]:
        plans = {(p.year, p.week): p for p in await self.get_plans()}
        dishes = {d.id: d for d in await self.get_dishes()}
        overview = []
        for cw in get_relevant_weeks(today):
            plan = plans.get((cw.year, cw.week)) or WeeklyPlan(cw.year, cw.week)
            overview.append({
                **cw.to_dict(),
                "dishes": [dishes[i].to_dict() for i in plan.dish_ids if i in dishes],
                "count": len(plan.dish_ids),
                "capacity": MAX_DISHES_PER_WEEK,
                "isFull": is_week_full(plan),
            })
        return overview

    async def get_statistics(self) -> dict:
        stats = CookingStats(await self.get_dishes(), await self.get_plans())
        return stats.summary()

    async def close(self):
        await self._category_saver.close()
        if self.backend is not None and hasattr(self.backend, "aclose"):
            await self.backend.aclose()
