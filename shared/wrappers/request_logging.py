import logging
import time
import uuid
from typing import Callable
from fastapi import FastAPI, Request, Response

logger = logging.getLogger("asset_tag.requests")


def register_request_logging(app: FastAPI):

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        """Log every request with timing and tag it with a request id."""
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "%s %s - Status: %s - Time: %.4fs - Request: %s",
            request.method, request.url.path, response.status_code, process_time, request_id
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
