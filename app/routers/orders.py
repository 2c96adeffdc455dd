# app/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from app.core.auth import require_identity
from app.database import get_session
from app.schemas.order import OrderCreate, OrderRead
from app.schemas.user import ResolvedIdentity
from app.services.order_service import EmptyCart, OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(request: Request) -> OrderService:
    """The service instance built in create_app (it owns the cart locks)."""
    return request.app.state.order_service


@router.post("", response_model=OrderRead)
def checkout(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    identity: ResolvedIdentity = Depends(require_identity),
    service: OrderService = Depends(get_order_service),
):
    """
    Create an order from a cart and clear the cart.

    Auth:
      - Requires a logged-in user.

    An empty cart is a client error (400); no order is created.
    """
    outcome = service.create_order_from_cart(session, identity, payload.cart_id)
    if isinstance(outcome, EmptyCart):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot create an empty order",
        )
    return outcome.order


@router.get("", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    identity: ResolvedIdentity = Depends(require_identity),
    service: OrderService = Depends(get_order_service),
):
    """
    List the authenticated user's orders (with items), newest first.
    """
    return service.list_user_orders(session, identity)
