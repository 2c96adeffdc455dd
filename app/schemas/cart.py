# app/schemas/cart.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from app.schemas.product import ProductRead


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.

    A repeated add for the same product increments the existing line.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)


class CartCreated(SQLModel):
    id: int


class CartItemRead(SQLModel):
    """
    Read model for a single cart line joined with live product data.
    """

    id: int
    cart_id: int
    product_id: int
    quantity: int
    product: ProductRead
    line_total: float


class CartRead(SQLModel):
    """
    Full cart response with totals at current catalog prices.
    """

    id: int
    items: list[CartItemRead]
    total_quantity: int
    total_price: float
