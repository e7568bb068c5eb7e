from elastic_schema.nodes.agg import DateHistogram, Histogram, Metric, RangeAgg, Terms
from elastic_schema.nodes.base import AggNode, Aggregable, BucketAggNode, Node
from elastic_schema.nodes.query import Boolean, Match, MatchAll, Nested, QueryNode, Range, Term
from elastic_schema.nodes.search import Search

__all__ = [
    "AggNode",
    "Aggregable",
    "Boolean",
    "BucketAggNode",
    "DateHistogram",
    "Histogram",
    "Match",
    "MatchAll",
    "Metric",
    "Nested",
    "Node",
    "QueryNode",
    "Range",
    "RangeAgg",
    "Search",
    "Term",
]
