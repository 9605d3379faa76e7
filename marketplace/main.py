import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.config import settings
from marketplace.errors import register_exception_handlers
from marketplace.logging_config import configure_logging
from marketplace.cart import router as cart_router
from marketplace.moderation import router as moderation_router
from marketplace.reports import router as reports_router
from marketplace.reviews import router as reviews_router
from marketplace.search import router as search_router
from marketplace.shops import router as shops_router
from marketplace.users import router as users_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Voucher Marketplace API",
    description="Shops, reviews, search, carts, reporting and moderation for the voucher marketplace",
    version="1.0.0",
    # Hide interactive docs in production
    docs_url=None if settings.is_production else "/docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(users_router.router)
app.include_router(shops_router.router)
app.include_router(reviews_router.router)
app.include_router(reports_router.router)
app.include_router(moderation_router.router)
app.include_router(search_router.router)
app.include_router(cart_router.router)


@app.get("/health")
def health():
    return {"status": "healthy", "service": "marketplace"}


def run() -> None:
    logger.info("Starting marketplace API (%s)", settings.env)
    uvicorn.run("marketplace.main:app", host="0.0.0.0", port=8000, reload=not settings.is_production)


if __name__ == "__main__":
    run()
