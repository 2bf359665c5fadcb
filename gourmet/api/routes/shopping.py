from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Response

from gourmet.api.dependencies import get_repository
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.infra.pdf_utils import generate_pdf_for_shopping_list
from gourmet.logic.planning.weeks import iso_week
from gourmet.logic.shopping.share import format_share_text
from gourmet.utilities.constants import LABEL_WEEK_PREFIX

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])


def _resolve_week(year: Optional[int], week: Optional[int]):
    if year is None or week is None:
        return iso_week(date.today())
    return year, week


@router.get("")
async def shopping_list(year: Optional[int] = None, week: Optional[int] = None,
                        repo: GourmetRepository = Depends(get_repository)):
    """Consolidated ingredients for one week, split into to-buy and pantry staples."""
    year, week = _resolve_week(year, week)
    shopping = await repo.get_shopping_list(year, week)
    return {"year": year, "week": week, **shopping.to_dict()}


@router.get("/text")
async def shopping_list_text(year: Optional[int] = None, week: Optional[int] = None,
                             include_pantry: bool = False,
                             repo: GourmetRepository = Depends(get_repository)):
    year, week = _resolve_week(year, week)
    shopping = await repo.get_shopping_list(year, week)
    text = format_share_text(shopping, f"{LABEL_WEEK_PREFIX} {week}", include_pantry=include_pantry)
    return Response(content=text, media_type="text/plain; charset=utf-8")


@router.get("/pdf")
async def shopping_list_pdf(year: Optional[int] = None, week: Optional[int] = None,
                            repo: GourmetRepository = Depends(get_repository)):
    year, week = _resolve_week(year, week)
    shopping = await repo.get_shopping_list(year, week)
    pdf_bytes = generate_pdf_for_shopping_list(shopping, f"{LABEL_WEEK_PREFIX} {week}")
    filename = f"einkaufsliste_{year}_kw{week:02d}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f"attachment; filename={filename}"})
