"""
Reusable query-string rules.

Each rule is an annotated type or a mixin model so endpoint schemas can be
assembled from the pieces they need, the way they are combined in
``schemas/requests.py``.
"""
from typing import Annotated, Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

COMPARE_ALIASES = {
    "previous-period": "prev",
    "year-over-year": "yoy",
}


def _check_timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError("Invalid timezone")
    return value


def _normalize_compare(value):
    if isinstance(value, str):
        return COMPARE_ALIASES.get(value, value)
    return value


# Epoch milliseconds; numeric strings are coerced, fractions are rejected.
# Bounded to 1970-01-01 .. 3000-01-01 UTC so that snapping, timezone
# conversion and every compare shift stay inside the datetime range.
MIN_TIMESTAMP = 0
MAX_TIMESTAMP = 32503680000000

Timestamp = Annotated[int, Field(ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP)]

Unit = Literal["minute", "hour", "day", "month", "year"]

Timezone = Annotated[str, StringConstraints(min_length=1), AfterValidator(_check_timezone)]

Compare = Annotated[Literal["prev", "yoy", "yesterday"], BeforeValidator(_normalize_compare)]

# Paging values stay strings here; handlers convert them to int. Nine digits
# keep the offset within a 64-bit database integer.
PositiveIntString = Annotated[str, StringConstraints(pattern=r"^[1-9][0-9]*$", max_length=9)]


class QueryParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FilterParams(QueryParams):
    url: Optional[str] = None
    referrer: Optional[str] = None
    title: Optional[str] = None
    query: Optional[str] = None
    host: Optional[str] = None
    os: Optional[str] = None
    browser: Optional[str] = None
    device: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    language: Optional[str] = None
    event: Optional[str] = None


FILTER_KEYS = tuple(FilterParams.model_fields)


class PagingParams(QueryParams):
    page: Optional[PositiveIntString] = None
    page_size: Optional[PositiveIntString] = Field(default=None, alias="pageSize")
    search: Optional[str] = None
