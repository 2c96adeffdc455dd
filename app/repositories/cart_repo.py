# app/repositories/cart_repo.py
from sqlmodel import Session, select

from app.core.lookup import Lookup, lookup_of
from app.models.cart import Cart, CartItem
from app.models.product import Product


class CartRepository:
    """
    Data access layer for carts and cart_items.

    NOTE:
      - `create_cart`, `create_item` and `update_item` commit on their own.
      - `lock_cart` and `clear_cart` run inside the checkout transaction
        and never commit; the order service owns that transaction.
    """

    # ---- Carts ----

    def create_cart(self, session: Session) -> Cart:
        cart = Cart()
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    def get_cart(self, session: Session, cart_id: int) -> Lookup[Cart]:
        return lookup_of(session.get(Cart, cart_id))

    def lock_cart(self, session: Session, cart_id: int) -> Lookup[Cart]:
        """
        SELECT the cart row FOR UPDATE so concurrent checkouts of the same
        cart queue up. SQLite ignores the clause.
        """
        stmt = select(Cart).where(Cart.id == cart_id).with_for_update()
        return lookup_of(session.exec(stmt).first())

    # ---- Lines ----

    def list_lines(
        self, session: Session, cart_id: int
    ) -> list[tuple[CartItem, Product]]:
        """
        Cart lines joined with the live product row, in insertion order.
        """
        stmt = (
            select(CartItem, Product)
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.id)
        )
        return session.exec(stmt).all()

    def list_items(self, session: Session, cart_id: int) -> list[CartItem]:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id)
        return session.exec(stmt).all()

    def get_item(
        self, session: Session, cart_id: int, product_id: int
    ) -> Lookup[CartItem]:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return lookup_of(session.exec(stmt).first())

    def create_item(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def update_item(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def clear_cart(self, session: Session, cart_id: int) -> int:
        """
        Delete every line of the cart (no commit). Returns how many went.
        """
        items = self.list_items(session, cart_id)
        for item in items:
            session.delete(item)
        session.flush()
        return len(items)
