# app/routers/cart.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartCreated, CartItemCreate, CartRead
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.post("", response_model=CartCreated, status_code=status.HTTP_201_CREATED)
def create_cart(session: Session = Depends(get_session)):
    """
    Create an empty anonymous cart and return its id.
    """
    return service.create_cart(session)


@router.get("/{cart_id}", response_model=CartRead)
def get_cart(
    cart_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a cart with live product data.

    Unknown carts read as empty.
    """
    return service.get_cart(session, cart_id)


@router.post(
    "/{cart_id}/items",
    response_model=CartRead,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    cart_id: int,
    payload: CartItemCreate,
    session: Session = Depends(get_session),
):
    """
    Add a product to the cart (repeated adds accumulate quantity).

    Returns the updated cart.
    """
    service.add_item(session, cart_id, payload)
    return service.get_cart(session, cart_id)
