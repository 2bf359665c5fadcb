"""Batch import of recipe URLs into the catalog.

Every URL is handled on its own: a page that cannot be scraped or saved is
logged and the batch moves on.
"""
import logging
from typing import Iterable, List, Optional

from gourmet.domain.Dish import Dish
from gourmet.events.Event_Bus import EventBus
from gourmet.events.event_helpers import publish_import_failed, publish_recipe_imported
from gourmet.utilities.constants import DEFAULT_DISH_NAME, DEFAULT_TAG
from gourmet.utilities.errors import GourmetError

logger = logging.getLogger(__name__)


class ImportReport:
    def __init__(self):
        self.imported: List[Dish] = []
        self.failed: List[dict] = []
        self.log: List[str] = []

    def __str__(self) -> str:
        return f"Import: {len(self.imported)} imported, {len(self.failed)} failed"

    __repr__ = __str__

    def to_dict(self):
        return {
            "imported": [d.to_dict() for d in self.imported],
            "failed": self.failed,
            "log": self.log,
        }


async def import_recipes(urls: Iterable[str], scraper, repository,
                         bus: Optional[EventBus] = None) -> ImportReport:
    """Scrape each URL and store the result as a new dish.

    Args:
        urls: one URL per entry; blank entries are skipped.
        scraper: object with ``async scrape(url) -> ScrapeResult``.
        repository: the GourmetRepository the dishes are added to.

    Returns:
        ImportReport with the created dishes, the failures and one log line per step.
    """
    report = ImportReport()
    for raw in urls:
        url = (raw or "").strip()
        if not url:
            continue
        report.log.append(f"Importiere: {url}")
        result = await scraper.scrape(url)
        if not result.success:
            _fail(report, url, result.error_kind, result.error, bus)
            continue
        dish = result.candidate.to_dish(DEFAULT_DISH_NAME, DEFAULT_TAG)
        dish.recipe_link = url
        try:
            saved = await repository.add_dish(dish)
        except GourmetError as e:
            _fail(report, url, "save_failed", str(e), bus)
            continue
        report.imported.append(saved)
        report.log.append(f"- Erfolgreich importiert: {saved.name}")
        logger.info("Imported %s as %r", url, saved.name)
        publish_recipe_imported(url, saved.id, saved.name, bus=bus)
    report.log.append("--- Import abgeschlossen ---")
    return report


def _fail(report: ImportReport, url: str, kind: str, error: str, bus: Optional[EventBus]):
    report.failed.append({"url": url, "kind": kind, "error": error})
    report.log.append(f"- Fehler beim Import von {url}: {error}")
    logger.warning("Import of %s failed: %s (%s)", url, error, kind)
    publish_import_failed(url, kind, error, bus=bus)


__all__ = ["import_recipes", "ImportReport"]
