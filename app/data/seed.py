# app/data/seed.py
import logging

from sqlmodel import Session

from app.models.product import Category, Product
from app.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = ["Laptops", "Smartphones", "Books", "T-Shirts", "Headphones"]

# (name, description, price, image_url, category name)
SAMPLE_PRODUCTS = [
    ("MacBook Pro", "The latest MacBook Pro with M3 chip.", 2500.00, "https://placeimg.com/640/480/tech", "Laptops"),
    ("Dell XPS 15", "A powerful and stylish Windows laptop.", 2000.00, "https://placeimg.com/640/480/tech?2", "Laptops"),
    ("iPhone 15 Pro", "The latest iPhone with A17 Pro chip.", 1200.00, "https://placeimg.com/640/480/tech?3", "Smartphones"),
    ("Samsung Galaxy S24", "The latest Samsung phone with Galaxy AI.", 1100.00, "https://placeimg.com/640/480/tech?4", "Smartphones"),
    ("The Pragmatic Programmer", "Your journey to mastery, 20th Anniversary Edition.", 50.00, "https://placeimg.com/640/480/arch", "Books"),
    ("Clean Code", "A Handbook of Agile Software Craftsmanship.", 45.00, "https://placeimg.com/640/480/arch?2", "Books"),
    ("Python T-Shirt", "A comfortable and stylish t-shirt for Python developers.", 30.00, "https://placeimg.com/640/480/people", "T-Shirts"),
    ("FastAPI T-Shirt", "Show your love for the FastAPI framework.", 30.00, "https://placeimg.com/640/480/people?2", "T-Shirts"),
    ("Sony WH-1000XM5", "Industry-leading noise canceling headphones.", 400.00, "https://placeimg.com/640/480/tech?5", "Headphones"),
    ("Bose QuietComfort Ultra", "The next generation of noise-cancelling headphones.", 430.00, "https://placeimg.com/640/480/tech?6", "Headphones"),
]


def seed(session: Session, repo: ProductRepository | None = None) -> None:
    """
    Insert the sample catalog. Only seeds empty tables, never overwrites.
    """
    repo = repo or ProductRepository()

    if repo.count_categories(session) == 0:
        session.add_all([Category(name=name) for name in SAMPLE_CATEGORIES])
        session.commit()
        logger.info("Seeded %d categories", len(SAMPLE_CATEGORIES))

    if repo.count(session) == 0:
        category_ids = {c.name: c.id for c in repo.list_categories(session)}
        session.add_all(
            [
                Product(
                    name=name,
                    description=description,
                    price=price,
                    image_url=image_url,
                    category_id=category_ids.get(category),
                )
                for name, description, price, image_url, category in SAMPLE_PRODUCTS
            ]
        )
        session.commit()
        logger.info("Seeded %d products", len(SAMPLE_PRODUCTS))
