from datetime import date, datetime, timezone
from typing import Annotated, Any, List, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictFloat,
    StrictInt,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

MAX_TOTAL_HOURS = 24 * 7


def _check_total_hours(value: Union[int, float]) -> Union[int, float]:
    # Range check before any float() call; also rejects inf, NaN and huge ints.
    if not (0 <= value <= MAX_TOTAL_HOURS):
        raise ValueError(f"must be a finite number between 0 and {MAX_TOTAL_HOURS}")
    return value


TotalHours = Annotated[Union[StrictInt, StrictFloat], AfterValidator(_check_total_hours)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeEntry(CamelModel):
    day: str
    job_name: str
    start_time: str
    end_time: str
    description: Optional[str] = None


class TimecardCreate(CamelModel):
    week_start_date: datetime
    entries: List[TimeEntry] = []
    total_hours: TotalHours

    @field_validator("week_start_date", mode="before")
    @classmethod
    def _parse_week_start(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str) and len(value) == 10:
            return datetime.combine(date.fromisoformat(value), datetime.min.time())
        return value

    @field_validator("week_start_date")
    @classmethod
    def _to_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TimecardUpdate(CamelModel):
    # Defaults are never validated, so an explicit null fails while an absent key does not.
    entries: List[TimeEntry] = None
    total_hours: TotalHours = None
    completed: StrictBool = None


class TimecardResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    week_start_date: datetime
    entries: List[TimeEntry]
    total_hours: float
    completed: bool

    @field_serializer("week_start_date")
    def _serialize_week_start(self, value: datetime) -> str:
        # Stored as naive UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


class TimecardGroupResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    owner_id: str
    name: Optional[str]
    email: Optional[str]
    timecards: List[TimecardResponse]


class CurrentWeekResponse(BaseModel):
    exists: bool


class MessageResponse(BaseModel):
    msg: str
