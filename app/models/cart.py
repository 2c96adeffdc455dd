# app/models/cart.py
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Cart(SQLModel, table=True):
    """
    Anonymous shopping cart, addressed by id only.

    No owner until checkout and no expiry; checkout deletes its lines but
    keeps the cart row.
    """

    __tablename__ = "carts"

    id: int | None = Field(default=None, primary_key=True)


class CartItem(SQLModel, table=True):
    """
    One (product, quantity) line in a cart.
    A cart cannot have 2 rows for the same product.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: int | None = Field(default=None, primary_key=True)

    cart_id: int = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        description="Must be >= 1",
    )
