"""HTTP client for the persistence backend.

The backend is a single endpoint script selected with ``?endpoint=``:
  dishes      GET (list with ingredients + tags), POST (upsert), DELETE ?id=
  plans       GET (grouped by year-week), POST {year, week, dishId}, DELETE ?year&week&dishId
  categories  GET (ordered names), POST (full replace with a list of names)

Transport errors, non-2xx answers and unreadable bodies all raise
BackendUnavailable; deciding what to do about it is the repository's job.
"""
import logging
from typing import Any, List, Optional

import httpx

from gourmet.domain.Dish import Dish
from gourmet.domain.Plan import WeeklyPlan
from gourmet.infra.storage import DishStore
from gourmet.utilities import config
from gourmet.utilities.errors import BackendUnavailable

logger = logging.getLogger(__name__)


class HttpBackend(DishStore):
    def __init__(self, url: str = config.BACKEND_URL, timeout: float = config.HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def _request(self, method: str, endpoint: str, params: Optional[dict] = None,
                       payload: Any = None) -> Any:
        query = {"endpoint": endpoint}
        query.update(params or {})
        try:
            response = await self._client.request(method, self.url, params=query, json=payload)
        except httpx.HTTPError as e:
            raise BackendUnavailable(f"{method} {endpoint}: {e}") from e
        if response.status_code >= 400:
            try:
                detail = response.json().get("error", "")
            except (ValueError, AttributeError):
                detail = response.text[:200]
            raise BackendUnavailable(f"{method} {endpoint}: HTTP {response.status_code} {detail}")
        try:
            return response.json()
        except ValueError as e:
            raise BackendUnavailable(f"{method} {endpoint}: invalid JSON in response") from e

    async def ping(self) -> bool:
        '''Cheapest request the backend offers; raises BackendUnavailable when it is down.'''
        await self._request("GET", "categories")
        return True

    async def get_dishes(self) -> List[Dish]:
        data = await self._request("GET", "dishes")
        return [Dish.from_dict(d) for d in data or []]

    async def save_dish(self, dish: Dish) -> Dish:
        await self._request("POST", "dishes", payload=dish.to_dict())
        return dish

    async def delete_dish(self, dish_id: str) -> None:
        await self._request("DELETE", "dishes", params={"id": dish_id})

    async def get_plans(self) -> List[WeeklyPlan]:
        data = await self._request("GET", "plans")
        return [WeeklyPlan.from_dict(p) for p in data or []]

    async def add_to_plan(self, year: int, week: int, dish_id: str) -> None:
        await self._request("POST", "plans", payload={"year": year, "week": week, "dishId": dish_id})

    async def remove_from_plan(self, year: int, week: int, dish_id: str) -> None:
        await self._request("DELETE", "plans", params={"year": year, "week": week, "dishId": dish_id})

    async def get_categories(self) -> List[str]:
        data = await self._request("GET", "categories")
        return [str(n) for n in data or []]

    async def save_categories(self, names: List[str]) -> None:
        await self._request("POST", "categories", payload=list(names))

    async def aclose(self):
        await self._client.aclose()
