from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from gourmet.api.dependencies import get_repository, get_scraper
from gourmet.domain.Dish import Dish
from gourmet.domain.Ingredient import Ingredient
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.logic.catalog.browse import SORT_NAME, SORT_OPTIONS, browse
from gourmet.utilities.errors import ExtractionError, ValidationError
from gourmet.utilities.validators import DishInput, RatingInput, ScrapeRequest

router = APIRouter(prefix="/api/dishes", tags=["dishes"])


def _dish_from_input(data: DishInput, dish_id: Optional[str] = None) -> Dish:
    return Dish(
        id=dish_id,
        name=data.name,
        image=data.image,
        rating=data.rating,
        recipe_link=data.recipeLink,
        notes=data.notes,
        ingredients=[Ingredient(name=i.name, amount=i.amount, unit=i.unit, id=i.id) for i in data.ingredients],
        tags=data.tags,
    )


@router.get("")
async def list_dishes(search: str = "", category: List[str] = Query(default=[]),
                      rarely_cooked: bool = Query(default=False, alias="rarelyCooked"),
                      sort: str = SORT_NAME,
                      repo: GourmetRepository = Depends(get_repository)):
    """All dishes matching the filters; every given category must be a tag of the dish."""
    if sort not in SORT_OPTIONS:
        raise ValidationError(f"Unknown sort order {sort!r}, expected one of {', '.join(SORT_OPTIONS)}")
    dishes = browse(await repo.get_dishes(), search, category, rarely_cooked, sort)
    return [d.to_dict() for d in dishes]


@router.post("", status_code=201)
async def create_dish(data: DishInput, repo: GourmetRepository = Depends(get_repository)):
    dish = await repo.add_dish(_dish_from_input(data))
    return dish.to_dict()


@router.get("/{dish_id}")
async def get_dish(dish_id: str, repo: GourmetRepository = Depends(get_repository)):
    return (await repo.get_dish(dish_id)).to_dict()


@router.put("/{dish_id}")
async def update_dish(dish_id: str, data: DishInput, repo: GourmetRepository = Depends(get_repository)):
    dish = await repo.update_dish(_dish_from_input(data, dish_id))
    return dish.to_dict()


@router.put("/{dish_id}/rating")
async def rate_dish(dish_id: str, data: RatingInput, repo: GourmetRepository = Depends(get_repository)):
    return (await repo.rate_dish(dish_id, data.rating)).to_dict()


@router.post("/{dish_id}/prefill")
async def prefill_dish(dish_id: str, data: ScrapeRequest,
                       repo: GourmetRepository = Depends(get_repository),
                       scraper=Depends(get_scraper)):
    """Scrape the URL and fill only the empty fields of the dish (tags are merged)."""
    dish = await repo.get_dish(dish_id)
    result = await scraper.scrape(data.url)
    if not result.success:
        if result.error_kind in (ExtractionError.INVALID_URL, ExtractionError.UNPARSEABLE):
            raise ValidationError(result.error)
        return JSONResponse(status_code=502, content={"error": result.error})
    result.candidate.merge_into(dish)
    return (await repo.update_dish(dish)).to_dict()


@router.delete("/{dish_id}", status_code=204)
async def delete_dish(dish_id: str, repo: GourmetRepository = Depends(get_repository)):
    await repo.get_dish(dish_id)
    await repo.delete_dish(dish_id)
    return Response(status_code=204)
