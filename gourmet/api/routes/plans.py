from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from gourmet.api.dependencies import get_repository
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.logic.planning.weeks import is_week_full, target_week_for_new_assignment
from gourmet.utilities.constants import MAX_DISHES_PER_WEEK
from gourmet.utilities.validators import PlanAssignmentInput

router = APIRouter(prefix="/api", tags=["plans"])


@router.get("/plans")
async def list_plans(repo: GourmetRepository = Depends(get_repository)):
    return [p.to_dict() for p in await repo.get_plans()]


@router.get("/weeks")
async def week_overview(today: Optional[date] = None, repo: GourmetRepository = Depends(get_repository)):
    """The planner weeks (next week from Friday on, this, last, the one before) with their dishes."""
    return await repo.get_week_overview(today)


@router.get("/plans/{year}/{week}")
async def get_plan(year: int, week: int, repo: GourmetRepository = Depends(get_repository)):
    return (await repo.get_plan(year, week)).to_dict()


@router.post("/plans")
async def add_to_plan(data: PlanAssignmentInput, repo: GourmetRepository = Depends(get_repository)):
    """Assign a dish to a week (defaults to the week a quick add targets today).

    A week holds at most five dishes; a sixth is answered with 409.
    """
    if data.year is None or data.week is None:
        year, week = target_week_for_new_assignment()
    else:
        year, week = data.year, data.week
    plan = await repo.get_plan(year, week)
    if not plan.contains(data.dishId) and is_week_full(plan):
        return JSONResponse(status_code=409, content={
            "error": f"Week {week}/{year} already has {MAX_DISHES_PER_WEEK} dishes"})
    plan = await repo.add_dish_to_plan(year, week, data.dishId)
    return plan.to_dict()


@router.delete("/plans/{year}/{week}/{dish_id}")
async def remove_from_plan(year: int, week: int, dish_id: str,
                           repo: GourmetRepository = Depends(get_repository)):
    return (await repo.remove_dish_from_plan(year, week, dish_id)).to_dict()
