# app/schemas/product.py
from sqlmodel import SQLModel


class CategoryRead(SQLModel):
    id: int
    name: str


class ProductRead(SQLModel):
    """
    Product representation for clients (live catalog data).
    """

    id: int
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    category_id: int | None = None
