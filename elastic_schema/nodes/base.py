"""
Nodes are the building blocks of a search request.

Each node renders itself to a request fragment (render) and decodes the matching fragment of the
response (handle_result). Nodes that can hold child aggregations render them under "aggs", and decode
the child results of every bucket with the child nodes. Rendering and decoding never change a node.
"""

import abc
import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Self

from elastic_schema.errors import ValidationError
from elastic_schema.formatters import Formatter
from elastic_schema.results import Bucket, BucketCollection


class Node(abc.ABC):
    @abc.abstractmethod
    def render(self) -> dict:
        """Render this node as (part of) a request body"""

    @abc.abstractmethod
    def handle_result(self, raw: Mapping[str, Any], formatter: Formatter) -> Any:
        """Decode the response fragment for this node"""


class AggNode(Node):
    """Any node that can be used as an aggregation"""

    def __init__(self, field: str | None = None):
        self.field = field

    def __repr__(self):
        return f"<{type(self).__name__} field={self.field}>"


def decode_child(node: AggNode, raw: Any, formatter: Formatter) -> Any:
    """Decode the result of a child aggregation. Values that are not a nested result go through the formatter"""
    if isinstance(raw, Mapping):
        return node.handle_result(raw, formatter)
    return formatter.format(node.field, raw)


class Aggregable:
    """Mixin for nodes that hold named child aggregations"""

    def __init__(self):
        self._aggs: dict[str, AggNode] = {}

    def aggregate(self, name: str, node: AggNode) -> Self:
        if name in self._aggs:
            logging.debug(f"Replacing aggregation {name}")
        self._aggs[name] = node
        return self

    @property
    def aggs(self) -> Mapping[str, AggNode]:
        return MappingProxyType(self._aggs)

    def render_aggs(self) -> dict:
        return {name: node.render() for name, node in self._aggs.items()}

    def handle_aggs_result(self, raw: Mapping[str, Any], formatter: Formatter) -> dict[str, Any]:
        return {name: decode_child(node, raw.get(name), formatter) for name, node in self._aggs.items()}


class BucketAggNode(Aggregable, AggNode):
    """
    Base for bucketed aggregations (histograms, terms, ranges).
    Subclasses set agg_type and add their own parameters in agg_params
    """

    agg_type: str

    def __init__(self, field: str | None = None):
        AggNode.__init__(self, field)
        Aggregable.__init__(self)

    def agg_params(self) -> dict:
        if not self.field:
            raise ValidationError(f"{type(self).__name__} needs a field before it can be rendered")
        return {"field": self.field}

    def aggregate(self, name: str, node: AggNode) -> Self:
        if name in Bucket.reserved_names or name.startswith("_"):
            raise ValidationError(f"{name!r} cannot be used as the name of a bucket aggregation")
        return super().aggregate(name, node)

    def render(self) -> dict:
        result: dict[str, Any] = {self.agg_type: self.agg_params()}
        if self._aggs:
            result["aggs"] = self.render_aggs()
        return result

    def handle_result(self, raw: Mapping[str, Any], formatter: Formatter) -> BucketCollection:
        return BucketCollection(self.handle_bucket(bucket, formatter) for bucket in _raw_buckets(raw))

    def handle_bucket(self, raw: Mapping[str, Any], formatter: Formatter) -> Bucket:
        return Bucket(
            key=raw.get("key"),
            aggs=self.handle_aggs_result(raw, formatter),
            doc_count=raw.get("doc_count"),
            key_as_string=raw.get("key_as_string"),
        )


def _raw_buckets(raw: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    buckets = raw.get("buckets", [])
    if isinstance(buckets, Mapping):
        # keyed response: {key: bucket, ...}
        return [dict(bucket, key=key) for key, bucket in buckets.items()]
    return buckets
