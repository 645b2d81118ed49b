from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Envelope for every response: ``{status_code, status, message, data}``.
    ``status`` is "success" below 400 and "error" otherwise.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "status": "success" if status_code < 400 else "error",
            "message": message,
            "data": jsonable_encoder(data) if data is not None else {},
        },
        headers=headers,
    )
