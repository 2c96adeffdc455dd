# app/models/product.py
from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Product category (e.g. Laptops, Books).
    """

    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        unique=True,
        index=True,
        description="Display name, unique across categories",
    )


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Read-only from the API's perspective: the catalog is seeded, not managed.
    Order lines copy `price` at checkout time, so changing it here never
    rewrites past orders.
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        index=True,
        description="Display name of the product",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        description="Current unit price",
    )

    image_url: str | None = Field(
        default=None,
        description="Main image URL",
    )

    category_id: int | None = Field(
        default=None,
        foreign_key="categories.id",
        index=True,
    )
