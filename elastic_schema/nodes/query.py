"""
Query nodes. Query nodes decode the "hits" part of a search response.
"""

from typing import Any, Iterable, Mapping

import pydantic

from elastic_schema.errors import ValidationError
from elastic_schema.formatters import Formatter
from elastic_schema.models import RangeBounds
from elastic_schema.nodes.base import Node
from elastic_schema.results import Hit, HitCollection

BOOLEAN_CLAUSES = ("must", "should", "must_not", "filter")


class QueryNode(Node):
    def handle_result(self, raw: Mapping[str, Any], formatter: Formatter) -> HitCollection:
        total = raw.get("total")
        if isinstance(total, Mapping):
            total = total.get("value")
        hits = [
            Hit(
                id=hit.get("_id"),
                index=hit.get("_index"),
                score=hit.get("_score"),
                source={name: formatter.format(name, value) for name, value in hit.get("_source", {}).items()},
            )
            for hit in raw.get("hits", [])
        ]
        return HitCollection(hits, total=total, max_score=raw.get("max_score"))


class MatchAll(QueryNode):
    def render(self) -> dict:
        return {"match_all": {}}


class Term(QueryNode):
    """Exact value(s) of a field. Renders as a term query for one value, and as a terms query for more values"""

    def __init__(self, field: str, *values: Any):
        if not values:
            raise ValidationError(f"Term query on {field} needs at least one value")
        self.field = field
        self.values = list(values)

    def render(self) -> dict:
        if len(self.values) == 1:
            return {"term": {self.field: self.values[0]}}
        return {"terms": {self.field: list(self.values)}}


class Match(QueryNode):
    def __init__(self, field: str, query: str, operator: str | None = None):
        if operator is not None and operator not in ("and", "or"):
            raise ValidationError(f"Match operator should be 'and' or 'or', got {operator!r}")
        self.field = field
        self.query = query
        self.operator = operator

    def render(self) -> dict:
        options: dict[str, Any] = {"query": self.query}
        if self.operator is not None:
            options["operator"] = self.operator
        return {"match": {self.field: options}}


class Range(QueryNode):
    def __init__(self, field: str, bounds: RangeBounds | None = None, **kwargs: Any):
        self.field = field
        if bounds is None:
            try:
                bounds = RangeBounds(**kwargs)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid range on {field}: {e}") from e
        self.bounds = bounds

    def render(self) -> dict:
        return {"range": {self.field: self.bounds.render()}}


class Boolean(QueryNode):
    def __init__(
        self,
        must: Iterable[QueryNode] = (),
        should: Iterable[QueryNode] = (),
        must_not: Iterable[QueryNode] = (),
        filter: Iterable[QueryNode] = (),
        minimum_should_match: int | str | None = None,
    ):
        self.clauses: dict[str, list[QueryNode]] = {
            "must": list(must),
            "should": list(should),
            "must_not": list(must_not),
            "filter": list(filter),
        }
        self.minimum_should_match = minimum_should_match

    def add(self, clause: str, node: QueryNode) -> "Boolean":
        if clause not in BOOLEAN_CLAUSES:
            raise ValidationError(f"Unknown boolean clause {clause!r}, use one of {BOOLEAN_CLAUSES}")
        self.clauses[clause].append(node)
        return self

    def render(self) -> dict:
        body: dict[str, Any] = {
            clause: [node.render() for node in nodes] for clause, nodes in self.clauses.items() if nodes
        }
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        return {"bool": body}


class Nested(QueryNode):
    """Query on the documents of a nested field"""

    def __init__(self, path: str, query: QueryNode, score_mode: str | None = None):
        if score_mode is not None and score_mode not in ("avg", "max", "min", "none", "sum"):
            raise ValidationError(f"Invalid nested score_mode {score_mode!r}")
        self.path = path
        self.query = query
        self.score_mode = score_mode

    def render(self) -> dict:
        body: dict[str, Any] = {"path": self.path, "query": self.query.render()}
        if self.score_mode is not None:
            body["score_mode"] = self.score_mode
        return {"nested": body}
