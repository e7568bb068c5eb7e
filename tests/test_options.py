import pytest

from elastic_schema.errors import FrozenDefinitionError
from elastic_schema.indexable import Mode
from elastic_schema.options import OptionsMap, canonical_key


def test_canonical_key():
    assert canonical_key("foo") == "foo"
    assert canonical_key(Mode.storage) == "storage"
    assert canonical_key(1) == "1"


def test_options_map():
    options = OptionsMap({Mode.index: 1}, foo="bar")
    assert options["index"] == 1
    assert options[Mode.index] == 1
    assert options.get("foo") == "bar"
    assert list(options) == ["index", "foo"]
    assert len(options) == 2
    del options[Mode.index]
    assert "index" not in options
    assert options.to_dict() == {"foo": "bar"}


def test_frozen_options_map():
    options = OptionsMap(foo="bar")
    options.freeze()
    options.freeze()
    assert options.frozen
    with pytest.raises(FrozenDefinitionError):
        options["foo"] = "baz"
    with pytest.raises(FrozenDefinitionError):
        options.update(qux=1)
    with pytest.raises(FrozenDefinitionError):
        options.pop("foo")
    assert options == {"foo": "bar"}
