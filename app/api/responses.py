"""
Response envelope helpers.

Every successful API response has the shape
`{"ok": true, "message": str, "data": any}`.
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Build a success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"ok": True, "message": message, "data": jsonable_encoder(data)},
    )


def error_response(message: str, error: Any = None, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    """Build a failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "message": message, "error": jsonable_encoder(error)},
    )
