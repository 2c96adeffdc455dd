# app/services/cart_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.lookup import Found, NotFound
from app.models.cart import CartItem
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import (
    CartCreated,
    CartItemCreate,
    CartItemRead,
    CartRead,
)
from app.schemas.product import ProductRead


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - create anonymous carts
      - accumulate quantity per (cart, product)
      - render the cart with live product data and totals
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    def create_cart(self, session: Session) -> CartCreated:
        cart = self.cart_repo.create_cart(session)
        return CartCreated(id=cart.id)

    def get_cart(self, session: Session, cart_id: int) -> CartRead:
        """
        Return the cart with live prices:
          - list of CartItemRead (with line_total)
          - total_quantity
          - total_price

        Unknown or empty carts read as an empty item list.
        """
        item_reads: list[CartItemRead] = []
        total_qty = 0
        total_price = 0.0

        for item, product in self.cart_repo.list_lines(session, cart_id):
            line_total = item.quantity * product.price
            total_qty += item.quantity
            total_price += line_total

            item_reads.append(
                CartItemRead(
                    id=item.id,
                    cart_id=item.cart_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    product=ProductRead.model_validate(product, from_attributes=True),
                    line_total=round(line_total, 2),
                )
            )

        return CartRead(
            id=cart_id,
            items=item_reads,
            total_quantity=total_qty,
            total_price=round(total_price, 2),
        )

    def add_item(
        self,
        session: Session,
        cart_id: int,
        payload: CartItemCreate,
    ) -> CartItem:
        """
        Add a product to the cart.

        Rules:
          - cart and product must exist (404 otherwise)
          - existing line => quantity += payload.quantity
          - no line yet => insert one
        """
        if isinstance(self.cart_repo.get_cart(session, cart_id), NotFound):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart not found",
            )
        if isinstance(self.product_repo.get_by_id(session, payload.product_id), NotFound):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        existing = self.cart_repo.get_item(session, cart_id, payload.product_id)

        if isinstance(existing, Found):
            item = existing.value
            item.quantity += payload.quantity
            return self.cart_repo.update_item(session, item)

        item = CartItem(
            cart_id=cart_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
        return self.cart_repo.create_item(session, item)
