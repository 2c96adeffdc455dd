# app/repositories/review_repo.py
from sqlmodel import Session, col, select

from app.models.review import Review


class ReviewRepository:

    def list_for_product(self, session: Session, product_id: int) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.product_id == product_id)
            .order_by(col(Review.created_at).desc(), col(Review.id).desc())
        )
        return session.exec(stmt).all()

    def create(self, session: Session, review: Review) -> Review:
        session.add(review)
        session.commit()
        session.refresh(review)
        return review
