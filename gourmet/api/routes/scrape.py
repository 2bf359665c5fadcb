from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from gourmet.api.dependencies import get_repository, get_scraper
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.logic.scraping.importer import import_recipes
from gourmet.utilities.errors import ExtractionError
from gourmet.utilities.validators import ImportRequest

router = APIRouter(prefix="/api", tags=["scraping"])

_STATUS_BY_KIND = {
    ExtractionError.INVALID_URL: 422,
    ExtractionError.UNPARSEABLE: 422,
    ExtractionError.BLOCKED: 502,
    ExtractionError.FETCH_FAILED: 502,
}


@router.post("/scrape-recipe")
async def scrape_recipe(payload: dict, scraper=Depends(get_scraper)):
    """Extract a recipe from a page to pre-fill the dish form.

    An invalid URL is reported by the scraper in the same response shape as
    any other failure.
    """
    result = await scraper.scrape(str(payload.get("url") or ""))
    if result.success:
        return result.to_response()
    return JSONResponse(status_code=_STATUS_BY_KIND.get(result.error_kind, 502),
                        content=result.to_response())


@router.post("/import")
async def import_batch(data: ImportRequest, repo: GourmetRepository = Depends(get_repository),
                       scraper=Depends(get_scraper)):
    """Import several recipe URLs; failures are reported per URL and do not stop the batch."""
    report = await import_recipes(data.urls, scraper, repo)
    return report.to_dict()
