from typing import Any, Mapping, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def json_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Bare JSON body for successful calls. The audit endpoints return the
    record itself rather than wrapping it in an envelope.
    """
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data, exclude_none=True))


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Every failure is reported to the caller as a single `error` string."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)
