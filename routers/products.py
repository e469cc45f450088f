from fastapi import APIRouter, HTTPException, Query
from starlette import status

from schemas.catalog_schemas import ProductRead
from utils.deps import storage_dependency

router = APIRouter(
    prefix="/api/products",
    tags=["products"]
)


@router.get("", response_model=list[ProductRead])
def list_products(
    storage: storage_dependency,
    featured: bool = False,
    new_arrival: bool = Query(False, alias="new"),
    category: str | None = None,
):
    """
    All products, or one filtered view. Filters are exclusive and checked
    in order: ``featured``, ``new``, ``category`` (by slug; an unknown slug
    yields an empty list).
    """
    if featured:
        return storage.get_featured_products()

    if new_arrival:
        return storage.get_new_arrivals()

    if category:
        category_obj = storage.get_category_by_slug(category)
        if category_obj is None:
            return []
        return storage.get_products_by_category(category_obj.id)

    return storage.get_products()


@router.get("/{slug}", response_model=ProductRead)
def get_product(slug: str, storage: storage_dependency):
    product = storage.get_product_by_slug(slug)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product
