# app/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_identity
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.review_repo import ReviewRepository
from app.schemas.product import CategoryRead, ProductRead
from app.schemas.review import ReviewCreate, ReviewRead
from app.schemas.user import ResolvedIdentity
from app.services.product_service import ProductService
from app.services.review_service import ReviewService

router = APIRouter(prefix="/products", tags=["Products"])
categories_router = APIRouter(prefix="/categories", tags=["Categories"])

repo = ProductRepository()
service = ProductService(repo)
review_service = ReviewService(ReviewRepository(), repo)


# -------- Catalog --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    search: str | None = None,
    category: int | None = None,
):
    """
    List products.

    - `search` matches name or description (case-insensitive).
    - `category` filters by category id.
    """
    return service.list_products(session, search=search, category_id=category)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    return service.get_product(session, product_id)


@categories_router.get("", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    return service.list_categories(session)


# -------- Reviews --------


@router.get("/{product_id}/reviews", response_model=list[ReviewRead])
def list_reviews(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Reviews for a product, newest first.
    """
    return review_service.list_reviews(session, product_id)


@router.post(
    "/{product_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    product_id: int,
    payload: ReviewCreate,
    session: Session = Depends(get_session),
    identity: ResolvedIdentity = Depends(require_identity),
):
    """
    Review a product.

    Auth:
      - Requires a logged-in user.
    """
    return review_service.create_review(session, identity, product_id, payload)
