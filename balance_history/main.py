"""
Balance History Service: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI

from balance_history.config import get_settings
from balance_history.api.health import router as health_router
from balance_history.api.users import router as users_router
from balance_history.api.credit_cards import router as credit_cards_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Daily credit card balance history with retroactive corrections",
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(credit_cards_router)


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
