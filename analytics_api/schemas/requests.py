from typing import Optional

from pydantic import Field, model_validator

from .params import Compare, FilterParams, PagingParams, QueryParams, Timestamp, Timezone, Unit


class TimeRangeParams(QueryParams):
    start_at: Timestamp = Field(alias="startAt")
    end_at: Timestamp = Field(alias="endAt")

    @model_validator(mode="after")
    def check_range(self):
        if self.end_at < self.start_at:
            raise ValueError("endAt must not be before startAt")
        return self


class PageviewsQuery(FilterParams, TimeRangeParams):
    unit: Unit
    timezone: Timezone
    compare: Optional[Compare] = None


class ReportsQuery(PagingParams):
    pass


class SessionActivityQuery(TimeRangeParams):
    pass
