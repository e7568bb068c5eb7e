"""
Typed wrappers around decoded engine responses.

Results are created fresh by the nodes for every decoded response and are not changed afterwards.
"""

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Sequence, overload


def _plain(value: Any) -> Any:
    """Convert (nested) results into plain python structures"""
    if isinstance(value, BucketCollection):
        return list(value.as_dicts())
    if isinstance(value, Bucket):
        return value.as_dict()
    return value


class Bucket:
    """
    A single bucket of a bucketed aggregation: the bucket key plus the results of the child aggregations,
    which are available both as attributes (bucket.avg_price) and as items (bucket["avg_price"])
    """

    __slots__ = ("_key", "_doc_count", "_key_as_string", "_aggs")

    #: attribute names that cannot be used for child aggregations
    reserved_names = frozenset({"key", "doc_count", "key_as_string", "aggs", "as_dict"})

    def __init__(
        self,
        key: Any,
        aggs: Mapping[str, Any] | None = None,
        doc_count: int | None = None,
        key_as_string: str | None = None,
    ):
        self._key = key
        self._doc_count = doc_count
        self._key_as_string = key_as_string
        self._aggs = MappingProxyType(dict(aggs or {}))

    def __repr__(self):
        return f"<Bucket key={self._key!r} doc_count={self._doc_count} aggs={list(self._aggs)}>"

    def __getattr__(self, name: str) -> Any:
        # only called for names that are not regular attributes
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._aggs[name]
        except KeyError:
            raise AttributeError(f"Bucket has no aggregation {name!r}") from None

    def __getitem__(self, name: str) -> Any:
        return self._aggs[name]

    def __contains__(self, name: object) -> bool:
        return name in self._aggs

    @property
    def key(self) -> Any:
        return self._key

    @property
    def doc_count(self) -> int | None:
        return self._doc_count

    @property
    def key_as_string(self) -> str | None:
        return self._key_as_string

    @property
    def aggs(self) -> Mapping[str, Any]:
        return self._aggs

    def as_dict(self) -> dict:
        result: dict[str, Any] = {"key": self._key}
        if self._doc_count is not None:
            result["doc_count"] = self._doc_count
        for name, value in self._aggs.items():
            result[name] = _plain(value)
        return result


class BucketCollection(Sequence[Bucket]):
    """The buckets of an aggregation, in the order returned by the engine"""

    def __init__(self, buckets: Iterable[Bucket] = ()):
        self._buckets = tuple(buckets)

    def __repr__(self):
        return f"<BucketCollection n={len(self._buckets)}>"

    @overload
    def __getitem__(self, index: int) -> Bucket: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Bucket]: ...

    def __getitem__(self, index):
        return self._buckets[index]

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self._buckets)

    def keys(self) -> list:
        return [bucket.key for bucket in self._buckets]

    def as_dicts(self) -> Iterable[dict]:
        """Return the buckets as a sequence of {key, doc_count, agg1, ...} dicts"""
        for bucket in self._buckets:
            yield bucket.as_dict()


class Hit:
    def __init__(self, id: str | None, index: str | None = None, score: float | None = None, source: Mapping | None = None):
        self.id = id
        self.index = index
        self.score = score
        self.source = MappingProxyType(dict(source or {}))

    def __repr__(self):
        return f"<Hit id={self.id!r} index={self.index!r}>"

    def __getitem__(self, field: str) -> Any:
        return self.source[field]

    def as_dict(self) -> dict:
        return dict(self.source, _id=self.id)


class HitCollection(Sequence[Hit]):
    def __init__(self, hits: Iterable[Hit] = (), total: int | None = None, max_score: float | None = None):
        self._hits = tuple(hits)
        self.total = total
        self.max_score = max_score

    def __repr__(self):
        return f"<HitCollection n={len(self._hits)} total={self.total}>"

    @overload
    def __getitem__(self, index: int) -> Hit: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Hit]: ...

    def __getitem__(self, index):
        return self._hits[index]

    def __len__(self) -> int:
        return len(self._hits)

    def __iter__(self) -> Iterator[Hit]:
        return iter(self._hits)

    def ids(self) -> list:
        return [hit.id for hit in self._hits]


class SearchResult:
    def __init__(self, hits: HitCollection, aggregations: Mapping[str, Any] | None = None):
        self.hits = hits
        self.aggregations = MappingProxyType(dict(aggregations or {}))

    @property
    def total(self) -> int | None:
        return self.hits.total

    def as_dict(self) -> dict:
        return dict(
            meta={"total_count": self.total},
            results=[hit.as_dict() for hit in self.hits],
            aggregations={name: _plain(value) for name, value in self.aggregations.items()},
        )
