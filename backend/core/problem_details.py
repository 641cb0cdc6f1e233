# core/problem_details.py - RFC 7807 style error bodies and exception handlers
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import get_logger

logger = get_logger(__name__)

PROBLEM_JSON = "application/problem+json"
MODEL_VALIDATION_PROBLEM_TYPE = "https://courselibrary.com/modelvalidationproblem"
UNEXPECTED_FAULT_DETAIL = "An unexpected fault happened. Try again later."

# Problem types per status, as https://tools.ietf.org/html/rfc9110 sections
_STATUS_TYPES = {
    400: "https://tools.ietf.org/html/rfc9110#section-15.5.1",
    404: "https://tools.ietf.org/html/rfc9110#section-15.5.5",
    405: "https://tools.ietf.org/html/rfc9110#section-15.5.6",
    406: "https://tools.ietf.org/html/rfc9110#section-15.5.7",
    415: "https://tools.ietf.org/html/rfc9110#section-15.5.16",
    422: "https://tools.ietf.org/html/rfc4918#section-11.2",
    500: "https://tools.ietf.org/html/rfc9110#section-15.6.1",
}

def _status_title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"

def problem_details(
    request: Request,
    status_code: int,
    detail: Optional[str] = None,
    title: Optional[str] = None,
    problem_type: Optional[str] = None,
    **extensions: Any
) -> Dict[str, Any]:
    body = {
        "type": problem_type or _STATUS_TYPES.get(status_code, "about:blank"),
        "title": title or _status_title(status_code),
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
    }
    body.update(extensions)
    return body

def problem_response(
    request: Request,
    status_code: int,
    detail: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(problem_details(request, status_code, detail, **kwargs)),
        media_type=PROBLEM_JSON,
        headers=headers,
    )

def validation_errors(errors: List[Dict[str, Any]], model_name: str = "request") -> Dict[str, List[str]]:
    """Group pydantic errors by field path, dropping the body/query/path prefix"""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        key = ".".join(loc) or model_name
        grouped.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return grouped

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else None
    if detail == _status_title(exc.status_code):
        detail = None
    return problem_response(request, exc.status_code, detail, headers=getattr(exc, "headers", None))

async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Model binding failed for {request.method} {request.url.path}: {len(exc.errors())} error(s)")
    return problem_response(
        request,
        422,
        "See the errors field for details.",
        title="One or more validation errors occurred.",
        problem_type=MODEL_VALIDATION_PROBLEM_TYPE,
        errors=validation_errors(exc.errors()),
    )

async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return problem_response(request, 500, UNEXPECTED_FAULT_DETAIL)

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
