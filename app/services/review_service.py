# app/services/review_service.py
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.lookup import NotFound
from app.models.review import Review
from app.repositories.product_repo import ProductRepository
from app.repositories.review_repo import ReviewRepository
from app.schemas.review import ReviewCreate
from app.schemas.user import ResolvedIdentity


class ReviewService:
    def __init__(self, repo: ReviewRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    def list_reviews(self, session: Session, product_id: int) -> list[Review]:
        """Newest first. Unknown products simply have no reviews."""
        return self.repo.list_for_product(session, product_id)

    def create_review(
        self,
        session: Session,
        identity: ResolvedIdentity,
        product_id: int,
        payload: ReviewCreate,
    ) -> Review:
        if isinstance(self.product_repo.get_by_id(session, product_id), NotFound):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        review = Review(
            product_id=product_id,
            user_id=identity.user_id,
            rating=payload.rating,
            comment=payload.comment,
            created_at=datetime.now(timezone.utc),
        )
        return self.repo.create(session, review)
