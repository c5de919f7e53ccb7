# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, asset_engine
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.request_logging import register_request_logging
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .router import (
    assets_router, batch_tags_router, categories_router, companies_router,
    employees_router, server_accounts_router
)
from .router.overview import dashboard_router
from . import models  # noqa: F401  registers tables on Base

setup_logging()

# Create tables
Base.metadata.create_all(bind=asset_engine)

app = FastAPI(title=f"{settings.PROJECT_NAME} Assets")

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    expose_headers=["Content-Disposition"],
)

register_request_logging(app)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(companies_router.router)
app.include_router(categories_router.router)
app.include_router(employees_router.router)
app.include_router(server_accounts_router.router)
app.include_router(assets_router.router)
app.include_router(batch_tags_router.router)
app.include_router(dashboard_router.router)


@app.get("/api/assets-service/health")
def health():
    return {"status": "healthy"}
