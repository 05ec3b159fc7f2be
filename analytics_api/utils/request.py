from typing import Optional, Tuple, Type

from fastapi import Request
from pydantic import BaseModel, ValidationError

from ..schemas.params import FILTER_KEYS


def format_validation_errors(error: ValidationError) -> list:
    """Error list safe to return to clients: no input echo, no docs URLs"""
    return error.errors(include_url=False, include_context=False, include_input=False)


def check_request(request: Request, schema: Type[BaseModel]) -> Tuple[Optional[BaseModel], Optional[list]]:
    """
    Validate the query string of ``request`` against ``schema``.

    Returns ``(query, None)`` on success and ``(None, errors)`` otherwise.
    Repeated keys keep their last value.
    """
    try:
        query = schema.model_validate(dict(request.query_params))
    except ValidationError as e:
        return None, format_validation_errors(e)
    return query, None


def get_request_filters(query) -> dict:
    """Pick the supplied filter parameters out of a validated query"""
    filters = {}
    for key in FILTER_KEYS:
        value = getattr(query, key, None)
        if value is not None:
            filters[key] = value
    return filters
