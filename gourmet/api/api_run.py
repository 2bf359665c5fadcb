from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from gourmet.api.routes import categories, dishes, plans, scrape, shopping
from gourmet.events.web_observers import (
    start as start_event_observers, get_events as get_web_events, get_status as get_banner_status
)
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.infra.Http_Backend import HttpBackend
from gourmet.infra.Local_Cache import LocalCache
from gourmet.infra.storage import StorageMode
from gourmet.logic.scraping.extraction import RecipeScraper
from gourmet.logic.scraping.fetcher import PageFetcher
from gourmet.utilities import config
from gourmet.utilities.errors import NotFoundError, ValidationError

# Logging
logger = logging.getLogger("gourmet_app")

# Initialize FastAPI app
app = FastAPI(title="MyGourmet API")

# Include routers
app.include_router(dishes.router)
app.include_router(plans.router)
app.include_router(categories.router)
app.include_router(shopping.router)
app.include_router(scrape.router)


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in e.get('loc', [])[1:])}: {e.get('msg')}" for e in exc.errors()]
    return JSONResponse(status_code=422, content={"error": "; ".join(messages) or "Invalid request"})


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


def build_repository() -> GourmetRepository:
    cache = LocalCache(config.CACHE_DIR)
    if not config.BACKEND_ENABLED:
        logger.info("Backend disabled, working on the local cache in %s", config.CACHE_DIR)
        return GourmetRepository(None, cache, mode=StorageMode.LOCAL)
    return GourmetRepository(HttpBackend(config.BACKEND_URL), cache)


@app.on_event("startup")
async def _startup():
    """Register event observers and build the repository unless one was provided."""
    start_event_observers()
    logger.info("Web observers for storage and import events started")
    if getattr(app.state, "repository", None) is None:
        app.state.repository = build_repository()
        await app.state.repository.check_connection()
    if getattr(app.state, "scraper", None) is None:
        app.state.scraper = RecipeScraper(PageFetcher())


@app.on_event("shutdown")
async def _shutdown():
    """Flush pending category edits and close HTTP clients."""
    repository = getattr(app.state, "repository", None)
    if repository is not None:
        await repository.close()
    scraper = getattr(app.state, "scraper", None)
    if scraper is not None and hasattr(scraper, "aclose"):
        await scraper.aclose()


# -------------------- STATUS & EVENTS --------------------
@app.get("/api/status")
async def storage_status():
    """Storage mode for the offline banner."""
    status = app.state.repository.status()
    status["banner"] = get_banner_status()
    return status


@app.post("/api/status/reconnect")
async def reconnect():
    ok = await app.state.repository.check_connection()
    return {"connected": ok, **app.state.repository.status()}


@app.get("/api/events")
def events(since: Optional[int] = None):
    """Recent storage/import events; poll with since=<next_cursor>."""
    return get_web_events(since)


@app.get("/api/statistics")
async def statistics():
    return await app.state.repository.get_statistics()
