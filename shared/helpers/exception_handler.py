import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from shared.core.exceptions import StorageError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _failure(http_status: int, app_status_code: str, message: str, data=None, headers=None):
    wrapped = JsonOutResult(
        data=data,
        status="Failure",
        status_code=str(app_status_code),
        message=message
    ).model_dump()
    return JSONResponse(content=jsonable_encoder(wrapped), status_code=http_status, headers=headers)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # AppError subclasses already carry a wrapped detail
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail.keys()):
            return JSONResponse(
                content=jsonable_encoder(exc.detail),
                status_code=exc.status_code,
                headers=getattr(exc, "headers", None)
            )
        return _failure(
            exc.status_code,
            str(exc.status_code),
            str(exc.detail),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", []) if p not in ("body", "query", "path"))
            errors.setdefault(field or "__root__", []).append(err.get("msg"))

        first_field, first_messages = next(iter(errors.items()), ("", ["Invalid input"]))
        message = f"{first_field}: {first_messages[0]}" if first_field else first_messages[0]
        return _failure(422, AppStatusCode.INVALID_INPUT, message, data={"errors": errors})

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        error = StorageError()
        return JSONResponse(content=error.detail, status_code=error.status_code)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _failure(500, AppStatusCode.OPERATION_FAILED, "Internal server error")
