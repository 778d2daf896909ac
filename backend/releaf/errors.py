"""Exception handlers giving every error response the same JSON shape."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from releaf.config import settings

logger = logging.getLogger(__name__)

# Driver error codes / messages for the constraint kinds we translate
_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


def error_body(detail) -> dict:
    """`{"success": false, "error": ...}`, or the detail dict merged in."""
    if isinstance(detail, dict):
        return {"success": False, **detail}
    return {"success": False, "error": detail}


def integrity_error_status(exc: IntegrityError) -> tuple[int, dict]:
    """Map a constraint violation to a status code and response detail."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None)
    message = str(orig) if orig is not None else str(exc)

    if code == _PG_UNIQUE_VIOLATION or "UNIQUE constraint failed" in message:
        return status.HTTP_409_CONFLICT, {
            "error": "A unique constraint would be violated.",
            "details": "A record with these details already exists.",
        }
    if code == _PG_FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in message:
        return status.HTTP_400_BAD_REQUEST, {
            "error": "Foreign key constraint failed.",
            "details": "One of the referenced records does not exist.",
        }
    return status.HTTP_400_BAD_REQUEST, {"error": "Constraint violation."}


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = _validation_messages(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body({"error": "Validation failed", "details": messages}),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    status_code, detail = integrity_error_status(exc)
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=status_code, content=error_body(detail))


async def no_result_handler(request: Request, exc: NoResultFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body({"error": "Record not found."}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = {"error": "Internal server error"}
    if settings.DEBUG:
        detail["details"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(NoResultFound, no_result_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
