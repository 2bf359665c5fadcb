import asyncio

import pytest

from gourmet.domain.Ingredient import Ingredient
from gourmet.domain.ShoppingList import AggregatedEntry, ShoppingList
from gourmet.logic.shopping.session import ShoppingListSession


class SlowRepository:
    """Answers get_shopping_list only when the test releases that week."""

    def __init__(self):
        self.gates = {}

    async def get_shopping_list(self, year, week):
        gate = self.gates.setdefault((year, week), asyncio.Event())
        await gate.wait()
        return ShoppingList([AggregatedEntry(Ingredient(f"Woche {week}"))])


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    repo = SlowRepository()
    session = ShoppingListSession(repo)
    older = asyncio.create_task(session.open(2024, 10))
    await asyncio.sleep(0)
    newer = asyncio.create_task(session.open(2024, 11))
    await asyncio.sleep(0)

    repo.gates[(2024, 11)].set()
    latest = await newer
    repo.gates[(2024, 10)].set()
    stale = await older

    assert latest.shopping_list[0].ingredient.name == "Woche 11"
    assert stale is None
    assert session.current_week == (2024, 11)


@pytest.mark.asyncio
async def test_single_request_is_delivered():
    repo = SlowRepository()
    session = ShoppingListSession(repo)
    task = asyncio.create_task(session.open(2024, 10))
    await asyncio.sleep(0)
    repo.gates[(2024, 10)].set()
    assert (await task).shopping_list[0].ingredient.name == "Woche 10"
