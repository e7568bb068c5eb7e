"""
The capability a class needs to back a Definition.

A target is a class deriving from Indexable. It declares an elastic_mode, and can
tell which mapping options to use for one of its attributes. The default
implementation looks at the type hints of the class:

    class Article(Indexable):
        elastic_mode = Mode.index
        title: str
        published: datetime | None
        tags: list[str]

    Article.elastic_field_options_for("published")  # {"type": "date", "format": ...}
"""

import logging
import types
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from class_doc import extract_docs_from_cls_obj

from elastic_schema.config import get_settings
from elastic_schema.errors import MappingResolutionError
from elastic_schema.models import ElasticType


class Mode(Enum):
    #: documents are indexed for searching
    index = "index"

    #: the engine is the primary storage of the documents
    storage = "storage"


for field, doc in extract_docs_from_cls_obj(Mode).items():
    Mode[field].__doc__ = "\n".join(doc)


# python types that map onto a single elastic type. str is handled separately, see Settings.string_type
TYPEMAP_PY_TO_ES: dict[type, ElasticType] = {
    bool: "boolean",
    int: "long",
    float: "double",
    datetime: "date",
    date: "date",
    dict: "object",
}

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


def _unwrap_hint(hint: Any) -> Any:
    """Strip Optional and container types, e.g. list[str] | None -> str"""
    origin = get_origin(hint)
    if origin is ClassVar:
        return None
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(hint) if a is not type(None)]
        return _unwrap_hint(args[0]) if len(args) == 1 else None
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(hint)
        return _unwrap_hint(args[0]) if args else None
    if origin is dict:
        return dict
    return hint


def elastic_options_for_type(hint: Any) -> dict | None:
    """Get the mapping options for a python type hint, or None if it has no obvious elastic counterpart"""
    python_type = _unwrap_hint(hint)
    if python_type is str:
        return {"type": get_settings().string_type.value}
    es_type = TYPEMAP_PY_TO_ES.get(python_type)
    if es_type is None:
        return None
    if es_type == "date":
        return {"type": es_type, "format": get_settings().date_format}
    return {"type": es_type}


class Indexable:
    elastic_mode: ClassVar[Mode] = Mode.index

    @classmethod
    def elastic_field_options_for(cls, field_name: str) -> dict | None:
        hints = get_type_hints(cls)
        if field_name not in hints:
            return None
        return elastic_options_for_type(hints[field_name])


def is_indexable(target: Any) -> bool:
    return isinstance(target, type) and issubclass(target, Indexable)


def infer_field_options(target: type[Indexable], field_name: str) -> dict:
    """
    Ask the target which mapping options to use for field_name.
    Any failure is reported as a MappingResolutionError
    """
    logging.debug(f"Inferring mapping options for {target.__name__}.{field_name}")
    try:
        options = target.elastic_field_options_for(field_name)
    except MappingResolutionError:
        raise
    except Exception as e:
        raise MappingResolutionError(f"Cannot infer mapping for field {field_name!r} of {target.__name__}: {e}") from e
    if not options:
        raise MappingResolutionError(f"Cannot infer mapping for field {field_name!r} of {target.__name__}")
    return dict(options)
