"""Request-scoped access to the objects built at startup (kept on app.state)."""
from fastapi import Request

from gourmet.infra.Gourmet_Repository import GourmetRepository


def get_repository(request: Request) -> GourmetRepository:
    return request.app.state.repository


def get_scraper(request: Request):
    return request.app.state.scraper
