import httpx
import pytest

from gourmet.domain.Dish import Dish
from gourmet.infra.Http_Backend import HttpBackend
from gourmet.utilities.errors import BackendUnavailable


@pytest.mark.asyncio
async def test_round_trip_through_backend(backend, server):
    dish = Dish("Curry", rating=3, tags=["Currys"])
    await backend.save_dish(dish)
    await backend.add_to_plan(2024, 10, dish.id)
    await backend.save_categories(["Currys", "Nudeln"])

    dishes = await backend.get_dishes()
    assert [(d.id, d.name, d.rating, d.tags) for d in dishes] == [(dish.id, "Curry", 3, ["Currys"])]
    plans = await backend.get_plans()
    assert [(p.year, p.week, p.dish_ids) for p in plans] == [(2024, 10, [dish.id])]
    assert await backend.get_categories() == ["Currys", "Nudeln"]
    assert ("POST", "plans") in server.requests


@pytest.mark.asyncio
async def test_delete_requests_use_query_parameters(backend, server):
    dish = Dish("Curry")
    await backend.save_dish(dish)
    await backend.add_to_plan(2024, 10, dish.id)
    await backend.remove_from_plan(2024, 10, dish.id)
    assert await backend.get_plans() == []
    await backend.delete_dish(dish.id)
    assert await backend.get_dishes() == []


@pytest.mark.asyncio
async def test_server_error_raises_backend_unavailable(backend, server):
    server.fail_status = 500
    with pytest.raises(BackendUnavailable) as info:
        await backend.get_dishes()
    assert "500" in str(info.value)


@pytest.mark.asyncio
async def test_connection_error_raises_backend_unavailable(backend, server):
    server.available = False
    with pytest.raises(BackendUnavailable):
        await backend.ping()


@pytest.mark.asyncio
async def test_invalid_json_raises_backend_unavailable():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>PHP warning</html>"))
    backend = HttpBackend("http://backend.test/api.php", transport=transport)
    with pytest.raises(BackendUnavailable):
        await backend.get_categories()
