# app/services/order_service.py
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from sqlmodel import Session

from app.core.locks import KeyedLocks
from app.models.order import Order, OrderItem
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.order import OrderItemRead, OrderRead
from app.schemas.user import ResolvedIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderPlaced:
    order: OrderRead


@dataclass(frozen=True)
class EmptyCart:
    """Checkout refused: the cart had no lines. Nothing was written."""

    cart_id: int


CheckoutOutcome = Union[OrderPlaced, EmptyCart]


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from cart (single transaction)
      - Freeze each line's unit price at checkout
      - Clear cart after success
      - List a user's orders, newest first
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        cart_locks: KeyedLocks | None = None,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.cart_locks = cart_locks or KeyedLocks()

    # -------- Checkout --------

    def create_order_from_cart(
        self,
        session: Session,
        identity: ResolvedIdentity,
        cart_id: int,
    ) -> CheckoutOutcome:
        """
        Convert a cart into an Order for the resolved user.

        Steps:
          1. Take the per-cart lock and lock the cart row.
          2. Load cart lines with live product prices.
          3. Empty cart => EmptyCart, nothing written.
          4. Create Order row.
          5. Create OrderItem rows with the prices read in step 2.
          6. Delete the cart's lines.
          7. Commit.

        Any failure in 4-6 rolls the whole transaction back and the
        original exception propagates.
        """
        logger.info("Creating order for cart_id=%s user_id=%s", cart_id, identity.user_id)
        with self.cart_locks.hold(cart_id):
            return self._checkout(session, identity.user_id, cart_id)

    def _checkout(
        self,
        session: Session,
        user_id: int,
        cart_id: int,
    ) -> CheckoutOutcome:
        # 1-2) Lock + load; copy quantities and prices out as plain values
        self.cart_repo.lock_cart(session, cart_id)
        snapshot = [
            (item.product_id, item.quantity, product.price)
            for item, product in self.cart_repo.list_lines(session, cart_id)
        ]

        # 3) Guard
        if not snapshot:
            session.rollback()
            logger.info("Cart %s is empty, no order created", cart_id)
            return EmptyCart(cart_id=cart_id)

        try:
            # 4) Order header
            order = self.order_repo.create_order(
                session,
                Order(user_id=user_id, created_at=datetime.now(timezone.utc)),
            )

            # 5) Lines with frozen prices
            items = self.order_repo.create_items(
                session,
                [
                    OrderItem(
                        order_id=order.id,
                        product_id=product_id,
                        quantity=quantity,
                        price=price,
                    )
                    for product_id, quantity, price in snapshot
                ],
            )

            # 6) Clear cart
            self.cart_repo.clear_cart(session, cart_id)

            dto = self._build_order_dto(order, items)

            # 7) Commit
            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Checkout of cart %s failed, rolled back", cart_id)
            raise

        logger.info(
            "Order %s created from cart %s with %d lines", dto.id, cart_id, len(dto.items)
        )
        return OrderPlaced(order=dto)

    # -------- History --------

    def list_user_orders(
        self,
        session: Session,
        identity: ResolvedIdentity,
    ) -> list[OrderRead]:
        """
        All orders of the user, newest first, each with its items.
        """
        orders = self.order_repo.list_for_user(session, identity.user_id)
        result = [
            self._build_order_dto(order, self.order_repo.list_items_for_order(session, order.id))
            for order in orders
        ]
        logger.info("Returning %d orders for user %s", len(result), identity.user_id)
        return result

    # -------- Helper DTO builder --------

    def _build_order_dto(
        self,
        order: Order,
        items: list[OrderItem],
    ) -> OrderRead:
        item_dtos: list[OrderItemRead] = []
        total = 0.0

        for it in items:
            line_total = it.quantity * it.price
            total += line_total
            item_dtos.append(
                OrderItemRead(
                    id=it.id,
                    order_id=it.order_id,
                    product_id=it.product_id,
                    quantity=it.quantity,
                    price=it.price,
                    line_total=round(line_total, 2),
                )
            )

        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            created_at=order.created_at,
            items=item_dtos,
            total=round(total, 2),
        )
