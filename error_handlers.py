"""
Error handlers: map the exceptions to JSON error responses
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from exceptions import NLPServerError
from logger import get_logger

logger = get_logger(__name__)


def create_error_response(status_code: int, error: str, detail: str, request_id: str = None) -> JSONResponse:
    """Create standardized error response"""
    content = {"error": error, "detail": detail}
    if request_id:
        content["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        content=content
    )


async def nlp_server_error_handler(request: Request, exc: NLPServerError):
    request_id = getattr(request.state, "request_id", "unknown")
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} in request {request_id}: {exc.message}")
    else:
        logger.warning(f"{exc.kind} in request {request_id}: {exc.message}")

    return create_error_response(exc.status_code, exc.kind, exc.message, request_id)


async def general_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(f"Unhandled exception in request {request_id}: {str(exc)}", exc_info=exc)

    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalError",
        "An unexpected error occurred",
        request_id
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(NLPServerError, nlp_server_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
