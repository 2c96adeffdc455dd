# app/services/product_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.lookup import Found
from app.models.product import Category, Product
from app.repositories.product_repo import ProductRepository


class ProductService:
    """
    Business logic for the read-only catalog (products & categories).
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(
        self,
        session: Session,
        search: str | None = None,
        category_id: int | None = None,
    ) -> list[Product]:
        if search is not None:
            search = search.strip() or None
        return self.repo.list_products(session, search=search, category_id=category_id)

    def get_product(self, session: Session, product_id: int) -> Product:
        """
        Raises:
            HTTPException(404): if not found.
        """
        result = self.repo.get_by_id(session, product_id)
        if not isinstance(result, Found):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return result.value

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list_categories(session)
