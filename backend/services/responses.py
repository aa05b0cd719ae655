from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def send_response(success: bool, message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    """Render the standard {success, message, data} envelope."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": success, "message": message, "data": data}),
    )


def ok(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return send_response(True, message, data, status_code)


def fail(message: str, status_code: int, data: Any = None) -> JSONResponse:
    return send_response(False, message, data, status_code)
