# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import AuthBase, auth_engine
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.request_logging import register_request_logging
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .routers import authrouter, userrouter
from . import models  # noqa: F401  registers tables on AuthBase

setup_logging()

# Create tables
AuthBase.metadata.create_all(bind=auth_engine)

# This MUST exist for uvicorn
app = FastAPI(title=f"{settings.PROJECT_NAME} Auth")

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_request_logging(app)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(authrouter.router)
app.include_router(userrouter.router)


@app.get("/api/auth/health")
def health():
    return {"status": "healthy"}
