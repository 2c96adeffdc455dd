# app/schemas/order.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class OrderCreate(SQLModel):
    """
    Payload for checking out a cart.

    Backend derives:
      - user_id from the session token
      - created_at = now (UTC)
      - items and prices from the cart's current contents
    """

    model_config = ConfigDict(extra="forbid")

    cart_id: int = Field(gt=0)


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    `price` is the unit price frozen at checkout.
    """

    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float
    line_total: float


class OrderRead(SQLModel):
    """
    Full order view including items.
    """

    id: int
    user_id: int
    created_at: datetime
    items: list[OrderItemRead]
    total: float
