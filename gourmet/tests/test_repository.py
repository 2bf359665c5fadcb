import asyncio
from datetime import datetime, timezone

import pytest

from gourmet.domain.Dish import Dish
from gourmet.domain.Ingredient import Ingredient
from gourmet.events.Event_Bus import STORAGE_DEGRADED, STORAGE_RESTORED
from gourmet.infra.storage import StorageMode
from gourmet.utilities.errors import NotFoundError, ValidationError


def curry():
    return Dish("Linsencurry", tags=["Currys"], ingredients=[
        Ingredient("Rote Linsen", "200", "g"), Ingredient("Zwiebeln", "2"), Ingredient("Wasser", "500", "ml"),
    ])


def pasta():
    return Dish("Pasta", ingredients=[Ingredient("Zwiebel", "1"), Ingredient("Spaghetti", "250", "g")])


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, name, payload):
        self.events.append((name, payload))


@pytest.mark.asyncio
async def test_add_then_remove_restores_count_and_keeps_last_cooked(repo, clock):
    dish = await repo.add_dish(curry())
    await repo.add_dish_to_plan(2024, 10, dish.id)

    cooked = await repo.get_dish(dish.id)
    assert cooked.times_cooked == 1
    assert cooked.last_cooked == clock.now

    await repo.remove_dish_from_plan(2024, 10, dish.id)
    after = await repo.get_dish(dish.id)
    assert after.times_cooked == 0
    assert after.last_cooked == clock.now
    assert (await repo.get_plan(2024, 10)).dish_ids == []


@pytest.mark.asyncio
async def test_adding_twice_to_same_week_counts_once(repo):
    dish = await repo.add_dish(curry())
    await repo.add_dish_to_plan(2024, 10, dish.id)
    await repo.add_dish_to_plan(2024, 10, dish.id)
    assert (await repo.get_dish(dish.id)).times_cooked == 1
    assert (await repo.get_plan(2024, 10)).dish_ids == [dish.id]


@pytest.mark.asyncio
async def test_removing_absent_dish_changes_nothing(repo):
    dish = await repo.add_dish(curry())
    await repo.remove_dish_from_plan(2024, 10, dish.id)
    assert (await repo.get_dish(dish.id)).times_cooked == 0


@pytest.mark.asyncio
async def test_times_cooked_never_negative(repo):
    dish = Dish("Suppe", times_cooked=0)
    await repo.add_dish(dish)
    await repo.add_dish_to_plan(2024, 11, dish.id)
    stored = await repo.get_dish(dish.id)
    stored.times_cooked = 0
    await repo.cache.save_dish(stored)
    await repo.backend.save_dish(stored)
    await repo.remove_dish_from_plan(2024, 11, dish.id)
    assert (await repo.get_dish(dish.id)).times_cooked == 0


@pytest.mark.asyncio
async def test_sixth_dish_is_not_blocked_by_repository(repo):
    ids = []
    for i in range(6):
        dish = await repo.add_dish(Dish(f"Gericht {i}"))
        ids.append(dish.id)
        await repo.add_dish_to_plan(2024, 12, dish.id)
    assert (await repo.get_plan(2024, 12)).dish_ids == ids


@pytest.mark.asyncio
async def test_update_keeps_cooking_stats(repo):
    dish = await repo.add_dish(curry())
    await repo.add_dish_to_plan(2024, 10, dish.id)
    edited = Dish("Linsencurry scharf", id=dish.id, rating=5, times_cooked=99)
    await repo.update_dish(edited)
    stored = await repo.get_dish(dish.id)
    assert (stored.name, stored.rating, stored.times_cooked) == ("Linsencurry scharf", 5, 1)


@pytest.mark.asyncio
async def test_validation_happens_before_any_request(repo, server):
    with pytest.raises(ValidationError):
        await repo.add_dish(Dish("   "))
    with pytest.raises(ValidationError):
        await repo.rate_dish("x", 6)
    with pytest.raises(ValidationError):
        await repo.add_dish_to_plan(2024, 60, "x")
    assert server.requests == []


@pytest.mark.asyncio
async def test_unknown_dish(repo):
    with pytest.raises(NotFoundError):
        await repo.get_dish("missing")
    with pytest.raises(NotFoundError):
        await repo.add_dish_to_plan(2024, 10, "missing")


@pytest.mark.asyncio
async def test_shopping_list_for_week(repo):
    a = await repo.add_dish(curry())
    b = await repo.add_dish(pasta())
    await repo.add_dish_to_plan(2024, 10, a.id)
    await repo.add_dish_to_plan(2024, 10, b.id)

    occurrences = await repo.get_week_ingredients(2024, 10)
    assert len(occurrences) == 5

    shopping = await repo.get_shopping_list(2024, 10)
    assert [e.ingredient.name for e in shopping.shopping_list] == ["Rote Linsen", "Spaghetti"]
    onions = shopping.pantry_list[0]
    assert onions.ingredient.name == "Zwiebeln"
    assert onions.ingredient.amount == "3"
    assert [s["dishName"] for s in onions.sources] == ["Linsencurry", "Pasta"]
    assert shopping.dishes_without_ingredients == []


@pytest.mark.asyncio
async def test_planned_dishes_without_ingredients_are_named(repo):
    a = await repo.add_dish(curry())
    b = await repo.add_dish(Dish("Pizza vom Italiener"))
    await repo.add_dish_to_plan(2024, 10, a.id)
    await repo.add_dish_to_plan(2024, 10, b.id)

    shopping = await repo.get_shopping_list(2024, 10)
    assert shopping.dishes_without_ingredients == ["Pizza vom Italiener"]
    assert [e.ingredient.name for e in shopping.shopping_list] == ["Rote Linsen"]
    assert shopping.to_dict()["dishesWithoutIngredients"] == ["Pizza vom Italiener"]


@pytest.mark.asyncio
async def test_empty_week_has_empty_list(repo):
    assert (await repo.get_shopping_list(2024, 20)).is_empty()


@pytest.mark.asyncio
async def test_backend_failure_degrades_to_cache(repo, server, bus):
    recorder = Recorder()
    bus.subscribe(STORAGE_DEGRADED, recorder)
    dish = await repo.add_dish(curry())
    assert [d.id for d in await repo.get_dishes()] == [dish.id]

    server.available = False
    dishes = await repo.get_dishes()
    assert [d.id for d in dishes] == [dish.id]
    assert repo.mode is StorageMode.LOCAL
    assert recorder.events[0][0] == STORAGE_DEGRADED

    # writes keep working offline
    offline = await repo.add_dish(pasta())
    assert {d.id for d in await repo.get_dishes()} == {dish.id, offline.id}
    assert len(recorder.events) == 1


@pytest.mark.asyncio
async def test_recovered_backend_is_used_only_after_check_connection(repo, server, bus):
    recorder = Recorder()
    bus.subscribe(STORAGE_RESTORED, recorder)
    server.available = False
    await repo.get_categories()
    assert repo.mode is StorageMode.LOCAL

    server.available = True
    server.requests.clear()
    await repo.get_dishes()
    assert server.requests == []
    assert repo.mode is StorageMode.LOCAL

    assert await repo.check_connection() is True
    assert repo.mode is StorageMode.BACKEND
    assert recorder.events == [(STORAGE_RESTORED, {"mode": "backend"})]


@pytest.mark.asyncio
async def test_backend_reads_refresh_the_cache(repo, server, cache):
    server.dishes = [Dish("Vom Server", id="srv-1").to_dict()]
    server.categories = ["Suppen"]
    await repo.get_dishes()
    await repo.get_categories()
    assert [d.id for d in await cache.get_dishes()] == ["srv-1"]
    assert await cache.get_categories() == ["Suppen"]


@pytest.mark.asyncio
async def test_categories_save_and_edit(repo, server):
    cats = await repo.save_categories(["Nudeln", "Suppen"])
    assert [(c.name, c.sort_order) for c in cats] == [("Nudeln", 0), ("Suppen", 1)]
    assert server.categories == ["Nudeln", "Suppen"]

    await repo.add_category("Desserts")
    await repo.delete_category("Nudeln")
    assert server.categories == ["Suppen", "Desserts"]

    with pytest.raises(ValidationError):
        await repo.add_category("Suppen")


@pytest.mark.asyncio
async def test_delete_category_keeps_dish_tags(repo):
    await repo.save_categories(["Currys", "Nudeln"])
    dish = await repo.add_dish(curry())
    await repo.delete_category("Currys")
    assert (await repo.get_dish(dish.id)).tags == ["Currys"]


@pytest.mark.asyncio
async def test_move_category_is_debounced(repo, server):
    await repo.save_categories(["A", "B", "C"])
    await repo.move_category("C", "A")
    await repo.move_category("B", "C")
    # pending order is visible before it is written
    assert [c.name for c in await repo.get_categories()] == ["B", "C", "A"]
    assert server.categories == ["A", "B", "C"]
    await repo.close()
    assert server.categories == ["B", "C", "A"]


@pytest.mark.asyncio
async def test_delete_after_pending_move_is_not_undone(repo, server):
    await repo.save_categories(["A", "B", "C"])
    await repo.move_category("C", "A")
    deleted = await repo.delete_category("B")
    assert [c.name for c in deleted] == ["C", "A"]
    assert [c.name for c in await repo.get_categories()] == ["C", "A"]
    await asyncio.sleep(0.2)
    assert server.categories == ["C", "A"]
    await repo.close()
    assert server.categories == ["C", "A"]


@pytest.mark.asyncio
async def test_week_overview_and_statistics(repo):
    dish = await repo.add_dish(curry())
    await repo.add_dish_to_plan(2024, 10, dish.id)
    overview = await repo.get_week_overview(datetime(2024, 3, 5, tzinfo=timezone.utc).date())
    assert [w["label"] for w in overview] == ["Diese Woche", "Letzte Woche", "KW 8"]
    assert overview[0]["count"] == 1
    assert overview[0]["dishes"][0]["name"] == "Linsencurry"
    assert overview[0]["capacity"] == 5

    stats = await repo.get_statistics()
    assert stats["totalDishes"] == 1
    assert stats["mostCooked"] == [{"name": "Linsencurry", "timesCooked": 1}]
