from fastapi import APIRouter, HTTPException
from starlette import status

from schemas.catalog_schemas import CategoryRead
from utils.deps import storage_dependency

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"]
)


@router.get("", response_model=list[CategoryRead])
def list_categories(storage: storage_dependency):
    return storage.get_categories()


@router.get("/{slug}", response_model=CategoryRead)
def get_category(slug: str, storage: storage_dependency):
    category = storage.get_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category
