from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def json_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def bad_request(errors: Any) -> JSONResponse:
    return json_response({"error": "Bad request", "details": errors}, status.HTTP_400_BAD_REQUEST)


def unauthorized() -> JSONResponse:
    # Same body for every cause so callers cannot probe which websites exist.
    return json_response({"error": "Unauthorized"}, status.HTTP_401_UNAUTHORIZED)
