from elastic_schema.definition import Definition
from elastic_schema.errors import (
    ConfigurationError,
    FrozenDefinitionError,
    MappingResolutionError,
    ValidationError,
)
from elastic_schema.fields import Field
from elastic_schema.formatters import DefinitionFormatter, Formatter, PassthroughFormatter
from elastic_schema.indexable import Indexable, Mode, infer_field_options
from elastic_schema.results import Bucket, BucketCollection, Hit, HitCollection, SearchResult

__all__ = [
    "Bucket",
    "BucketCollection",
    "ConfigurationError",
    "Definition",
    "DefinitionFormatter",
    "Field",
    "Formatter",
    "FrozenDefinitionError",
    "Hit",
    "HitCollection",
    "Indexable",
    "MappingResolutionError",
    "Mode",
    "PassthroughFormatter",
    "SearchResult",
    "ValidationError",
    "infer_field_options",
]
