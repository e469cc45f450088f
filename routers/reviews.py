from fastapi import APIRouter
from starlette import status

from schemas.review_schemas import ReviewCreate, ReviewRead
from services.review_service import ReviewService
from utils.deps import storage_dependency

router = APIRouter(
    prefix="/api/reviews",
    tags=["reviews"]
)


@router.get("/product/{product_id}", response_model=list[ReviewRead])
def get_product_reviews(product_id: int, storage: storage_dependency):
    return storage.get_reviews(product_id)


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
def create_review(body: ReviewCreate, storage: storage_dependency):
    return ReviewService.create_review(storage, body)
