from typing import Any, Mapping

from elastic_schema.errors import ValidationError
from elastic_schema.formatters import Formatter
from elastic_schema.nodes.base import Aggregable, Node
from elastic_schema.nodes.query import MatchAll, QueryNode
from elastic_schema.results import SearchResult


class Search(Aggregable, Node):
    """
    The root of a search request: a query, the number of hits to return, and the aggregations.

        search = Search(Term("category", "books"), size=0)
        search.aggregate("per_month", DateHistogram("published", interval="month"))
        result = search.handle_result(es.search(index="articles", **search.render()), formatter)
        result.aggregations["per_month"]  # BucketCollection
    """

    def __init__(self, query: QueryNode | None = None, size: int | None = None, source: list[str] | bool | None = None):
        Aggregable.__init__(self)
        self.query = query if query is not None else MatchAll()
        self.size = size
        self.source = source

    @property
    def size(self) -> int | None:
        return self._size

    @size.setter
    def size(self, value: int | None):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
            raise ValidationError(f"size should be a non-negative integer, got {value!r}")
        self._size = value

    def render(self) -> dict:
        body: dict[str, Any] = {"query": self.query.render()}
        if self._size is not None:
            body["size"] = self._size
        if self.source is not None:
            body["_source"] = self.source
        if self._aggs:
            body["aggs"] = self.render_aggs()
        return body

    def handle_result(self, raw: Mapping[str, Any], formatter: Formatter) -> SearchResult:
        hits = self.query.handle_result(raw.get("hits", {}), formatter)
        aggregations = self.handle_aggs_result(raw.get("aggregations", {}), formatter)
        return SearchResult(hits, aggregations)
