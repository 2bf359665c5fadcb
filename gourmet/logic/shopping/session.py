"""Request sequencing for shopping list views.

When the user switches weeks quickly, an older, slower request may finish
after a newer one. ShoppingListSession hands out a token per request and only
the most recent one gets its result delivered.

The HTTP API answers each request on its own, so nothing in gourmet.api uses
this class. It is meant for in-process clients that hold a repository and
switch weeks interactively, such as a desktop front end or a script driving
the planner.
"""
import logging
from typing import Optional

from gourmet.domain.ShoppingList import ShoppingList

logger = logging.getLogger(__name__)


class ShoppingListSession:
    def __init__(self, repository):
        self.repository = repository
        self._latest = 0
        self.current_week: Optional[tuple] = None

    async def open(self, year: int, week: int) -> Optional[ShoppingList]:
        """Loads the list for (year, week); returns None when a newer open() started meanwhile."""
        self._latest += 1
        token = self._latest
        self.current_week = (year, week)
        shopping = await self.repository.get_shopping_list(year, week)
        if token != self._latest:
            logger.debug("Discarding stale shopping list for %s-%s", year, week)
            return None
        return shopping
