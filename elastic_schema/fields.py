"""
A Field describes how one attribute of the targets is mapped onto the engine.

Fields come in two kinds:
- Value fields carry their own mapping options, e.g. {"type": "keyword"}. If no type is given, the type
  can be inferred from the target class (see indexable.infer_field_options)
- Compound fields own a nested Definition. They render as "nested" (or whatever type is declared, e.g.
  "object") with the properties of the nested definition
"""

import datetime
import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from elastic_schema.config import get_settings
from elastic_schema.errors import FrozenDefinitionError, MappingResolutionError
from elastic_schema.indexable import Indexable, infer_field_options
from elastic_schema.options import OptionsMap

if TYPE_CHECKING:
    from elastic_schema.definition import Definition

INTEGER_TYPES = {"integer", "long", "short", "byte", "unsigned_long"}
FLOAT_TYPES = {"float", "double", "half_float", "scaled_float"}


def _parse_date(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # dates in aggregation results are epoch milliseconds
        return datetime.datetime.fromtimestamp(value / 1000.0, tz=datetime.UTC)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    return value


def _parse_integer(value: Any) -> Any:
    if isinstance(value, float) and not value.is_integer():
        # e.g. the average of an integer field
        return value
    return int(value)


class Field:
    def __init__(
        self,
        name: str,
        options: Mapping[str, Any] | None = None,
        mapping_inference: bool | None = None,
        nested: "Definition | None" = None,
    ):
        self._name = name
        self._options = OptionsMap(options or {})
        self._mapping_inference = get_settings().mapping_inference if mapping_inference is None else mapping_inference
        self._nested = nested
        self._frozen = False

    def __repr__(self):
        return f"<Field name={self._name} options={self._options.to_dict()} nested={self.is_nested}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> OptionsMap:
        return self._options

    @property
    def mapping_inference_enabled(self) -> bool:
        return self._mapping_inference

    @mapping_inference_enabled.setter
    def mapping_inference_enabled(self, value: bool):
        if self._frozen:
            raise FrozenDefinitionError(f"Cannot change field {self._name!r} after it has been frozen")
        self._mapping_inference = value

    @property
    def nested(self) -> "Definition | None":
        return self._nested

    @property
    def is_nested(self) -> bool:
        return self._nested is not None

    def mapping_options(self, target: type[Indexable] | None = None) -> dict:
        """
        Get the mapping fragment for this field.
        target is the class used to infer the type if the options do not declare one.
        Raises MappingResolutionError if there is no type and it cannot be inferred
        """
        options = self._options.to_dict()
        if self._nested is not None:
            options.setdefault("type", "nested")
            options["properties"] = self._nested.as_es_mapping()["properties"]
            return options
        if "type" in options:
            return options
        if not self._mapping_inference:
            raise MappingResolutionError(
                f"Cannot determine mapping for field {self._name!r} without explicit type and without inference"
            )
        if target is None:
            raise MappingResolutionError(f"Cannot infer mapping for field {self._name!r}: no target to infer from")
        return options | infer_field_options(target, self._name)

    def expanded_names(self) -> Iterator[str]:
        yield self._name
        if self._nested is not None:
            for name in self._nested.expanded_field_names():
                yield f"{self._name}.{name}"

    def get_field(self, path: str) -> "Field | None":
        if self._nested is None:
            return None
        return self._nested.get_field(path)

    def prepare_value_for_result(self, value: Any) -> Any:
        """Convert a raw value from the engine to the python value for this field's declared type"""
        if value is None:
            return None
        if isinstance(value, list):
            return [self.prepare_value_for_result(v) for v in value]
        es_type = self._options.get("type")
        if es_type == "date":
            return _parse_date(value)
        if es_type in INTEGER_TYPES:
            return _parse_integer(value)
        if es_type in FLOAT_TYPES:
            return float(value)
        if es_type == "boolean" and isinstance(value, str):
            return value.lower() == "true"
        return value

    def freeze(self) -> None:
        if self._frozen:
            return
        if self._nested is not None:
            self._nested.freeze()
        self._options.freeze()
        self._frozen = True
        logging.debug(f"Field {self._name} frozen")

    @property
    def frozen(self) -> bool:
        return self._frozen
