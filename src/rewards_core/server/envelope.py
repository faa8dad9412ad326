from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

GENERIC_FAILURE_MESSAGE = "Error processing request"


def ok(data: Any = None, meta: dict[str, Any] | None = None) -> JSONResponse:
    content: dict[str, Any] = {"success": True, "data": data}
    if meta is not None:
        content["meta"] = meta
    return JSONResponse(content=content)


def error(message: str, detail: str | None = None, status: int = 500) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if detail is not None:
        content["error"] = detail
    return JSONResponse(status_code=status, content=content)


def failure(exc: Exception) -> JSONResponse:
    """Generic 500 envelope for any error other than not-found."""
    return error(GENERIC_FAILURE_MESSAGE, detail=str(exc), status=500)
