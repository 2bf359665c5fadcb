import pytest

from gourmet.domain.Dish import Dish
from gourmet.domain.Ingredient import Ingredient
from gourmet.utilities.constants import DEFAULT_CATEGORIES


@pytest.mark.asyncio
async def test_categories_default_when_empty(cache):
    assert await cache.get_categories() == list(DEFAULT_CATEGORIES)
    await cache.save_categories(["Suppen", "Nudeln"])
    assert await cache.get_categories() == ["Suppen", "Nudeln"]


@pytest.mark.asyncio
async def test_save_dish_inserts_newest_first_and_updates(cache):
    first = await cache.save_dish(Dish("Curry", ingredients=[Ingredient("Reis", "200", "g")]))
    second = await cache.save_dish(Dish("Pasta"))
    assert [d.name for d in await cache.get_dishes()] == ["Pasta", "Curry"]

    first.rating = 4
    await cache.save_dish(first)
    dishes = {d.id: d for d in await cache.get_dishes()}
    assert dishes[first.id].rating == 4
    assert dishes[first.id].ingredients[0].amount == "200"
    assert second.id in dishes


@pytest.mark.asyncio
async def test_plan_add_is_idempotent_and_empty_weeks_disappear(cache):
    await cache.add_to_plan(2024, 10, "a")
    await cache.add_to_plan(2024, 10, "a")
    await cache.add_to_plan(2024, 10, "b")
    plans = await cache.get_plans()
    assert [(p.id, p.dish_ids) for p in plans] == [("2024-10", ["a", "b"])]

    await cache.remove_from_plan(2024, 10, "a")
    await cache.remove_from_plan(2024, 10, "b")
    assert await cache.get_plans() == []


@pytest.mark.asyncio
async def test_delete_dish_clears_plan_references(cache):
    dish = await cache.save_dish(Dish("Curry"))
    await cache.add_to_plan(2024, 10, dish.id)
    await cache.add_to_plan(2024, 11, dish.id)
    await cache.delete_dish(dish.id)
    assert await cache.get_dishes() == []
    assert await cache.get_plans() == []


@pytest.mark.asyncio
async def test_writes_leave_no_temp_files(cache):
    await cache.save_dish(Dish("Curry"))
    await cache.save_categories(["A"])
    files = sorted(p.name for p in cache.directory.iterdir())
    assert files == ["categories.json", "dishes.json"]


@pytest.mark.asyncio
async def test_corrupt_record_reads_as_empty(cache):
    cache.directory.mkdir(parents=True)
    (cache.directory / "dishes.json").write_text("{not json", encoding="utf-8")
    assert await cache.get_dishes() == []
