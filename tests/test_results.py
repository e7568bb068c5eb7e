import pytest

from elastic_schema.results import Bucket, BucketCollection, Hit, HitCollection, SearchResult


def test_bucket():
    bucket = Bucket("a", {"avg_i": 1.5, "max_i": 2.0}, doc_count=2)
    assert bucket.key == "a"
    assert bucket.doc_count == 2
    assert bucket.key_as_string is None
    assert bucket.avg_i == 1.5
    assert bucket["max_i"] == 2.0
    assert "avg_i" in bucket
    assert dict(bucket.aggs) == {"avg_i": 1.5, "max_i": 2.0}
    assert bucket.as_dict() == {"key": "a", "doc_count": 2, "avg_i": 1.5, "max_i": 2.0}
    with pytest.raises(AttributeError):
        bucket.min_i
    with pytest.raises(KeyError):
        bucket["min_i"]


def test_bucket_is_immutable():
    aggs = {"avg_i": 1.5}
    bucket = Bucket("a", aggs)
    aggs["avg_i"] = 3
    assert bucket.avg_i == 1.5
    with pytest.raises(TypeError):
        bucket.aggs["avg_i"] = 3
    with pytest.raises(AttributeError):
        bucket.key = "b"
    with pytest.raises(AttributeError):
        bucket.foo = "b"


def test_bucket_collection():
    buckets = BucketCollection([Bucket(2000), Bucket(1000, {"sub": BucketCollection([Bucket("x")])})])
    assert len(buckets) == 2
    assert buckets.keys() == [2000, 1000]
    assert [b.key for b in buckets] == [2000, 1000]
    assert buckets[-1].key == 1000
    assert list(buckets.as_dicts()) == [{"key": 2000}, {"key": 1000, "sub": [{"key": "x"}]}]
    assert len(BucketCollection()) == 0


def test_hits():
    hits = HitCollection([Hit("1", "articles", 1.0, {"title": "a"})], total=3)
    assert len(hits) == 1
    assert hits.ids() == ["1"]
    assert hits[0].as_dict() == {"title": "a", "_id": "1"}
    result = SearchResult(hits, {"n": 3})
    assert result.total == 3
    assert result.aggregations["n"] == 3
