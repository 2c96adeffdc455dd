# app/repositories/product_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from app.core.lookup import Lookup, lookup_of
from app.models.product import Category, Product


class ProductRepository:
    """
    Data access layer for Product & Category.

    - Pure DB operations (queries only; the catalog is read-only here).
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_by_id(self, session: Session, product_id: int) -> Lookup[Product]:
        return lookup_of(session.get(Product, product_id))

    def list_products(
        self,
        session: Session,
        search: str | None = None,
        category_id: int | None = None,
    ) -> list[Product]:
        """
        Products matching `search` (substring of name or description,
        case-insensitive) and/or `category_id`. Filters combine with AND.
        """
        stmt = select(Product)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.description).ilike(pattern),
                )
            )
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        stmt = stmt.order_by(Product.id)
        return session.exec(stmt).all()

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Product)).one()

    # ----- Categories -----

    def list_categories(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.id)
        return session.exec(stmt).all()

    def count_categories(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Category)).one()
