"""
Aggregation nodes
"""

import re
from datetime import datetime, timedelta, tzinfo
from typing import Any, Iterable, Mapping, get_args

import pydantic

from elastic_schema.errors import ValidationError
from elastic_schema.formatters import Formatter
from elastic_schema.models import RangeSpec, SortDirection
from elastic_schema.nodes.base import AggNode, BucketAggNode

# fixed intervals, e.g. 90m or 1.5h
INTERVAL_PATTERN = re.compile(r"\d+(\.\d+)?[yqMwdhms]")
CALENDAR_INTERVALS = {"year", "quarter", "month", "week", "day", "hour", "minute", "second"}

METRIC_FUNCTIONS = {"avg", "sum", "min", "max", "value_count", "cardinality"}

# year in which time zone offsets are looked up
REFERENCE_YEAR = 2024


def utc_offset_string(tz: tzinfo) -> str:
    """
    Format the standard (non daylight saving) offset of a time zone as +HH:MM.
    The standard offset is the smaller of the offsets in january and july
    """
    offsets = [tz.utcoffset(datetime(REFERENCE_YEAR, month, 1)) for month in (1, 7)]
    offset = min((o for o in offsets if o is not None), default=timedelta(0))
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


class DateHistogram(BucketAggNode):
    agg_type = "date_histogram"

    def __init__(self, field: str | None = None, interval: str | None = None, time_zone: tzinfo | None = None):
        super().__init__(field)
        self.interval = interval
        self.time_zone = time_zone

    @property
    def interval(self) -> str | None:
        return self._interval

    @interval.setter
    def interval(self, value: str | None):
        if value is not None:
            if not isinstance(value, str) or not (value in CALENDAR_INTERVALS or INTERVAL_PATTERN.fullmatch(value)):
                raise ValidationError(f"Invalid date histogram interval: {value!r}")
        self._interval = value

    @property
    def time_zone(self) -> tzinfo | None:
        return self._time_zone

    @time_zone.setter
    def time_zone(self, value: tzinfo | None):
        if value is not None and not isinstance(value, tzinfo):
            raise ValidationError(f"time_zone should be a time zone object (e.g. ZoneInfo), got {value!r}")
        self._time_zone = value

    def agg_params(self) -> dict:
        params = super().agg_params()
        if self._interval is not None:
            params["interval"] = self._interval
        if self._time_zone is not None:
            params["time_zone"] = utc_offset_string(self._time_zone)
        return params


class Histogram(BucketAggNode):
    agg_type = "histogram"

    def __init__(self, field: str | None = None, interval: float | None = None, min_doc_count: int | None = None):
        super().__init__(field)
        self.interval = interval
        self.min_doc_count = min_doc_count

    @property
    def interval(self) -> float | None:
        return self._interval

    @interval.setter
    def interval(self, value: float | None):
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"Histogram interval should be a positive number, got {value!r}")
        self._interval = value

    @property
    def min_doc_count(self) -> int | None:
        return self._min_doc_count

    @min_doc_count.setter
    def min_doc_count(self, value: int | None):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
            raise ValidationError(f"min_doc_count should be a non-negative integer, got {value!r}")
        self._min_doc_count = value

    def agg_params(self) -> dict:
        params = super().agg_params()
        if self._interval is None:
            raise ValidationError("Histogram needs an interval before it can be rendered")
        params["interval"] = self._interval
        if self._min_doc_count is not None:
            params["min_doc_count"] = self._min_doc_count
        return params


class Terms(BucketAggNode):
    agg_type = "terms"

    def __init__(self, field: str | None = None, size: int | None = None, order: Mapping[str, str] | None = None):
        super().__init__(field)
        self.size = size
        self.order = order

    @property
    def size(self) -> int | None:
        return self._size

    @size.setter
    def size(self, value: int | None):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
            raise ValidationError(f"Terms size should be a positive integer, got {value!r}")
        self._size = value

    @property
    def order(self) -> dict[str, str] | None:
        return dict(self._order) if self._order is not None else None

    @order.setter
    def order(self, value: Mapping[str, str] | None):
        if value is not None:
            if not value or any(direction not in get_args(SortDirection) for direction in value.values()):
                raise ValidationError(f"Terms order should map keys to 'asc' or 'desc', got {value!r}")
            value = dict(value)
        self._order = value

    def agg_params(self) -> dict:
        params = super().agg_params()
        if self._size is not None:
            params["size"] = self._size
        if self._order is not None:
            params["order"] = dict(self._order)
        return params


class RangeAgg(BucketAggNode):
    agg_type = "range"

    def __init__(self, field: str | None = None, ranges: Iterable[RangeSpec | dict] = (), keyed: bool = False):
        super().__init__(field)
        self.ranges = ranges
        self.keyed = keyed

    @property
    def ranges(self) -> list[RangeSpec]:
        return list(self._ranges)

    @ranges.setter
    def ranges(self, value: Iterable[RangeSpec | dict]):
        try:
            self._ranges = [r if isinstance(r, RangeSpec) else RangeSpec.model_validate(r) for r in value]
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid range: {e}") from e

    def add_range(self, from_: Any = None, to: Any = None, key: str | None = None) -> "RangeAgg":
        try:
            self._ranges.append(RangeSpec(key=key, from_=from_, to=to))
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid range: {e}") from e
        return self

    def agg_params(self) -> dict:
        params = super().agg_params()
        if not self._ranges:
            raise ValidationError("Range aggregation needs at least one range before it can be rendered")
        params["ranges"] = [r.render() for r in self._ranges]
        if self.keyed:
            params["keyed"] = True
        return params


class Metric(AggNode):
    """Single value metric aggregation, e.g. Metric("avg", "price")"""

    def __init__(self, function: str, field: str | None = None):
        if function not in METRIC_FUNCTIONS:
            raise ValidationError(f"Unknown metric function {function!r}, use one of {sorted(METRIC_FUNCTIONS)}")
        super().__init__(field)
        self.function = function

    def __repr__(self):
        return f"<Metric {self.function}({self.field})>"

    def render(self) -> dict:
        if not self.field:
            raise ValidationError(f"Metric {self.function} needs a field before it can be rendered")
        return {self.function: {"field": self.field}}

    def handle_result(self, raw: Mapping[str, Any], formatter: Formatter) -> Any:
        value = raw.get("value")
        if self.function in {"value_count", "cardinality"}:
            return value
        return formatter.format(self.field, value)
