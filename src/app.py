"""CraftMarket FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay (e.g. "production" for PostgreSQL).
from craftmarket.domain import marketplace
from craftmarket.utils.logging import clear_context, get_logger
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

marketplace.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="CraftMarket API",
    description="Local marketplace for handmade food and craft items",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context for each request."""
    clear_context()
    with marketplace.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from craftmarket.catalogue.api import category_router, product_router  # noqa: E402
from craftmarket.identity.api import profile_router, seller_router  # noqa: E402
from craftmarket.ordering.api import cart_router, checkout_router, order_router  # noqa: E402
from craftmarket.reviews.api import review_router  # noqa: E402

app.include_router(profile_router)
app.include_router(seller_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(review_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
