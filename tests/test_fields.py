from datetime import UTC, datetime

import pytest

from elastic_schema.definition import Definition
from elastic_schema.errors import FrozenDefinitionError, MappingResolutionError
from elastic_schema.fields import Field


def test_value_field(article):
    field = Field("title", {"type": "text", "analyzer": "english"})
    assert field.name == "title"
    assert field.is_nested is False
    assert field.mapping_options() == {"type": "text", "analyzer": "english"}
    assert field.mapping_options(article) == {"type": "text", "analyzer": "english"}
    assert list(field.expanded_names()) == ["title"]
    assert field.get_field("foo") is None


def test_mapping_inference_default():
    # by default, fields may infer their type (see Settings.mapping_inference)
    assert Field("foo").mapping_inference_enabled is True
    assert Field("foo", mapping_inference=False).mapping_inference_enabled is False


def test_inferred_options(article):
    assert Field("published").mapping_options(article) == {"type": "date", "format": "strict_date_optional_time"}
    assert Field("tags").mapping_options(article) == {"type": "keyword"}
    with pytest.raises(MappingResolutionError):
        Field("title", mapping_inference=False).mapping_options(article)
    with pytest.raises(MappingResolutionError):
        Field("title").mapping_options()


def test_mapping_options_returns_copy():
    field = Field("title", {"type": "text"})
    field.mapping_options()["type"] = "keyword"
    assert field.mapping_options() == {"type": "text"}


def test_nested_field(article):
    nested = Definition(targets=[article])
    nested.register_field(Field("name", {"type": "keyword"}))
    field = Field("author", {"type": "object"}, nested=nested)
    assert field.is_nested
    assert field.mapping_options() == {"type": "object", "properties": {"name": {"type": "keyword"}}}
    assert list(field.expanded_names()) == ["author", "author.name"]
    assert field.get_field("name") is nested.get_field("name")
    assert field.get_field("other") is None


def test_freeze():
    nested = Definition()
    field = Field("author", nested=nested)
    field.freeze()
    field.freeze()
    assert field.frozen
    assert nested.frozen
    with pytest.raises(FrozenDefinitionError):
        field.options["type"] = "object"
    with pytest.raises(FrozenDefinitionError):
        field.mapping_inference_enabled = False


def test_prepare_value_for_result():
    date = Field("date", {"type": "date"})
    assert date.prepare_value_for_result("2018-01-01T12:00:00") == datetime(2018, 1, 1, 12)
    assert date.prepare_value_for_result(1514764800000) == datetime(2018, 1, 1, tzinfo=UTC)
    assert date.prepare_value_for_result(None) is None
    assert Field("n", {"type": "integer"}).prepare_value_for_result("3") == 3
    assert Field("x", {"type": "double"}).prepare_value_for_result(2) == 2.0
    assert Field("b", {"type": "boolean"}).prepare_value_for_result("true") is True
    assert Field("t", {"type": "long"}).prepare_value_for_result(["1", "2"]) == [1, 2]
    assert Field("k", {"type": "keyword"}).prepare_value_for_result(12) == 12
    assert Field("untyped").prepare_value_for_result("x") == "x"
