from datetime import date, datetime
from typing import Any, Mapping

import pytest

from elastic_schema.definition import Definition
from elastic_schema.fields import Field
from elastic_schema.indexable import Indexable, Mode
from elastic_schema.nodes.base import AggNode


class Article(Indexable):
    elastic_mode = Mode.index

    id: int
    title: str
    score: float
    published: datetime
    day: date
    tags: list[str]
    summary: str | None
    is_public: bool
    extra: dict[str, Any]
    author: object


class StoredArticle(Indexable):
    elastic_mode = Mode.storage

    id: int


class StaticNode(AggNode):
    """Aggregation node that renders to a fixed value and returns the raw result unchanged"""

    def __init__(self, rendered: Any, field: str | None = None):
        super().__init__(field)
        self.rendered = rendered
        self.received: list[Any] = []

    def render(self) -> Any:
        return self.rendered

    def handle_result(self, raw, formatter):
        self.received.append(raw)
        return raw


class RecordingFormatter:
    """Passes values through, but remembers which (field, value) pairs it was asked to format"""

    def __init__(self):
        self.calls: list[tuple[str | None, Any]] = []

    def format(self, field: str | None, value: Any) -> Any:
        self.calls.append((field, value))
        return value


class MemoryTransport:
    def __init__(self, response: Mapping[str, Any] | None = None):
        self.response = response or {}
        self.indices: dict[str, dict] = {}
        self.searches: list[tuple[str, dict]] = []

    def create_index(self, index, mapping):
        self.indices[index] = dict(mapping)

    def put_mapping(self, index, mapping):
        self.indices.setdefault(index, {"properties": {}})["properties"].update(mapping["properties"])

    def search(self, index, body):
        self.searches.append((index, dict(body)))
        return self.response


@pytest.fixture()
def article():
    return Article


@pytest.fixture()
def stored_article():
    return StoredArticle


@pytest.fixture()
def definition(article):
    return Definition(targets=[article])


@pytest.fixture()
def nested_definition(article, definition):
    """A definition with a nested 'author' field that has its own name and email fields"""
    author = Definition(targets=[article])
    author.register_field(Field("name", {"type": "text"}))
    author.register_field(Field("email", {"type": "keyword"}))
    definition.register_field(Field("title", {"type": "text"}))
    definition.register_field(Field("author", nested=author))
    return definition


@pytest.fixture()
def static_node():
    return StaticNode


@pytest.fixture()
def formatter():
    return RecordingFormatter()


@pytest.fixture()
def memory_transport():
    return MemoryTransport
