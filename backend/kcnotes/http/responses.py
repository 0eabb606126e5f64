"""Uniform response envelopes.

Every JSON body the service emits has the shape
``{"success": bool, "message": str, "data": object | null}``.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import status
from fastapi.responses import HTMLResponse, JSONResponse


def envelope(success: bool, message: str, data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return {"success": success, "message": message, "data": data}


def send_success(
    data: Optional[dict[str, Any]] = None,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    return JSONResponse(envelope(True, message, data), status_code=status_code)


def send_error(
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    message: str = "Internal server error.",
) -> JSONResponse:
    return JSONResponse(envelope(False, message), status_code=status_code)


def send_html(body: str, status_code: int = status.HTTP_200_OK) -> HTMLResponse:
    return HTMLResponse(body, status_code=status_code)
