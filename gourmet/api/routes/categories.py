from fastapi import APIRouter, Depends

from gourmet.api.dependencies import get_repository
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.utilities.validators import CategoriesInput, CategoryMoveInput, CategoryNameInput

router = APIRouter(prefix="/api/categories", tags=["categories"])


def _dump(categories):
    return [c.to_dict() for c in categories]


@router.get("")
async def list_categories(repo: GourmetRepository = Depends(get_repository)):
    return _dump(await repo.get_categories())


@router.put("")
async def replace_categories(data: CategoriesInput, repo: GourmetRepository = Depends(get_repository)):
    return _dump(await repo.save_categories(data.categories))


@router.post("", status_code=201)
async def add_category(data: CategoryNameInput, repo: GourmetRepository = Depends(get_repository)):
    return _dump(await repo.add_category(data.name))


@router.put("/order")
async def move_category(data: CategoryMoveInput, repo: GourmetRepository = Depends(get_repository)):
    """Reorder by drag and drop; the new order is saved after a short quiet period."""
    return _dump(await repo.move_category(data.source, data.target))


@router.put("/{name}")
async def rename_category(name: str, data: CategoryNameInput, repo: GourmetRepository = Depends(get_repository)):
    return _dump(await repo.rename_category(name, data.name))


@router.delete("/{name}")
async def delete_category(name: str, repo: GourmetRepository = Depends(get_repository)):
    """Dishes keep the tag of a deleted category."""
    return _dump(await repo.delete_category(name))
