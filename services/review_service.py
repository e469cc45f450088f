from fastapi import HTTPException
from starlette import status

from schemas.catalog_schemas import ProductUpdate
from schemas.review_schemas import ReviewCreate, ReviewRead
from storage import Storage
from utils.logger import get_logger

logger = get_logger(__name__)


class ReviewService:

    @staticmethod
    def create_review(storage: Storage, body: ReviewCreate) -> ReviewRead:
        """
        Store a review and refresh the product's rating and review count.

        The rating is the plain mean over every review of the product,
        recomputed from scratch inside the same transaction as the insert.
        """
        with storage.transaction():
            # The product lock serializes reviews of the same product, so each
            # recomputation sees every review committed before it
            if storage.get_product(body.product_id, for_update=True) is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                    detail="Product not found")

            review = storage.create_review(body)

            reviews = storage.get_reviews(body.product_id)
            rating = sum(r.rating for r in reviews) / len(reviews)
            storage.update_product(body.product_id, ProductUpdate(rating=rating, num_reviews=len(reviews)))

        logger.info(
            "Review created",
            extra={"review_id": review.id, "product_id": body.product_id,
                   "rating": rating, "num_reviews": len(reviews)}
        )
        return review
