# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import Settings, get_settings
from app.core.locks import KeyedLocks
from app.data.seed import seed
from app.database import build_engine, create_db_and_tables
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.services.order_service import OrderService

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import cart as _cart_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401
from app.models import review as _review_models  # noqa: F401

# Routers
from app.routers.users import router as users_router
from app.routers.products import router as products_router
from app.routers.products import categories_router
from app.routers.cart import router as cart_router
from app.routers.orders import router as orders_router

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create tables, then seed the sample catalog if enabled.

    Shutdown:
      - Dispose the engine's connection pool.
    """
    settings: Settings = app.state.settings
    engine: Engine = app.state.engine
    logger.info("Startup: initializing database %s", engine.url.render_as_string())
    try:
        create_db_and_tables(engine)
        if settings.SEED_SAMPLE_DATA:
            with Session(engine) as session:
                seed(session)
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB initialization FAILED: {e}")
        raise
    yield
    engine.dispose()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed ids and bodies are client errors (400), not 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Unrecovered store failures: 500 carrying the underlying cause."""
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    cause = getattr(exc, "orig", None) or exc
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(cause)},
    )


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
) -> FastAPI:
    """
    Build the application around an explicit settings object and engine.

    Both default to the environment-driven configuration.
    """
    settings = settings or get_settings()
    engine = engine or build_engine(settings)

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.order_service = OrderService(
        OrderRepository(),
        CartRepository(),
        KeyedLocks(),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)

    app.include_router(users_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(categories_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront-backend"}

    return app


app = create_app()
