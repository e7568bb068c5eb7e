from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

ElasticType = Literal[
    "text",
    "annotated_text",
    "binary",
    "match_only_text",
    "date",
    "boolean",
    "keyword",
    "constant_keyword",
    "wildcard",
    "integer",
    "byte",
    "short",
    "long",
    "unsigned_long",
    "float",
    "half_float",
    "double",
    "scaled_float",
    "object",
    "flattened",
    "nested",
    "dense_vector",
    "geo_point",
]


SortDirection = Literal["asc", "desc"]
RangeValue = float | int | str


class RangeSpec(BaseModel):
    """One range of a range aggregation. from_ is inclusive, to is exclusive"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key: str | None = None
    from_: RangeValue | None = Field(default=None, alias="from")
    to: RangeValue | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> Self:
        if self.from_ is None and self.to is None:
            raise ValueError("A range needs at least one of 'from' and 'to'")
        return self

    def render(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RangeBounds(BaseModel):
    """Bounds of a range query"""

    model_config = ConfigDict(frozen=True)

    gt: RangeValue | None = None
    gte: RangeValue | None = None
    lt: RangeValue | None = None
    lte: RangeValue | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> Self:
        if all(v is None for v in (self.gt, self.gte, self.lt, self.lte)):
            raise ValueError("A range query needs at least one bound")
        if self.gt is not None and self.gte is not None:
            raise ValueError("Use either gt or gte, not both")
        if self.lt is not None and self.lte is not None:
            raise ValueError("Use either lt or lte, not both")
        return self

    def render(self) -> dict:
        return self.model_dump(exclude_none=True)
