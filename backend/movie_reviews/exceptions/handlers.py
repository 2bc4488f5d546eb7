import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_reviews.exceptions.base import AppException, ErrorKind

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}

def _message_body(message: str) -> Dict[str, Any]:
    return {"success": False, "message": message}

def _bare_body(message: str) -> Dict[str, Any]:
    return {"message": message}


# kind -> (status, body builder, log level)
_ERROR_RESPONSES = {
    ErrorKind.VALIDATION: (status.HTTP_400_BAD_REQUEST, _error_body, logging.WARNING),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, _error_body, logging.INFO),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, _error_body, logging.INFO),
    ErrorKind.AUTHORIZATION: (status.HTTP_403_FORBIDDEN, _message_body, logging.WARNING),
    ErrorKind.AUTHENTICATION: (status.HTTP_401_UNAUTHORIZED, _bare_body, logging.WARNING),
}


def error_response(request: Request, kind: ErrorKind, message: str, payload: Any = None) -> JSONResponse:
    """Translate a client-facing error kind into its HTTP status and body, logging the outcome.

    ``ErrorKind.UNEXPECTED`` is not handled here, see :func:`unexpected_exception_handler`.
    """
    status_code, build_body, level = _ERROR_RESPONSES[kind]
    summary = f" payload={payload}" if payload is not None else ""
    logger.log(level, f"{kind.value} error on {request.method} {request.url.path}: {message}{summary}")

    headers = {"WWW-Authenticate": "Bearer"} if kind is ErrorKind.AUTHENTICATION else None
    return JSONResponse(status_code=status_code, content=build_body(message), headers=headers)


def _summarize_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # never echo the offending input, it may hold a password
    return [{"loc": list(error["loc"]), "type": error["type"]} for error in errors]


def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    messages = []
    for error in errors:
        if error["type"] == "json_invalid":
            messages.append("Request body is not valid JSON")
            continue

        field = ".".join(str(part) for part in error["loc"][1:]) or "body"
        if error["type"] == "value_error":
            messages.append(str(error.get("ctx", {}).get("error", error["msg"])))
        else:
            messages.append(f"{field}: {error['msg']}")
    return "; ".join(messages)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    if exc.kind is ErrorKind.UNEXPECTED:
        return await unexpected_exception_handler(request, exc)
    return error_response(request, exc.kind, exc.message, exc.payload)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    return error_response(
        request,
        ErrorKind.VALIDATION,
        format_validation_errors(errors),
        _summarize_validation_errors(errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.info(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unexpected error happened on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_message_body(GENERIC_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
