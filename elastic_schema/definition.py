"""
A Definition describes how a family of target classes is mapped onto engine fields.

A definition is built in two phases: first targets and fields are registered, then freeze() is called.
After freezing, the definition (including its custom options, fields and nested definitions) cannot be
changed anymore, and it can be shared freely. Any attempt to change it raises FrozenDefinitionError.

    definition = Definition(targets=[Article])
    definition.register_field(Field("title", {"type": "text"}))
    definition.register_field(Field("published"))  # type is inferred from Article
    definition.freeze()
    definition.as_es_mapping()  # {"properties": {"title": {...}, "published": {...}}}
"""

import logging
from typing import Iterable, Iterator

from elastic_schema.errors import ConfigurationError, FrozenDefinitionError
from elastic_schema.fields import Field
from elastic_schema.indexable import Indexable, Mode, is_indexable
from elastic_schema.options import OptionsMap


class Definition:
    def __init__(self, targets: Iterable[type[Indexable]] | None = None):
        self._targets: list[type[Indexable]] | None = None
        self._fields: dict[str, Field] = {}
        self._custom_options = OptionsMap()
        self._frozen = False
        if targets is not None:
            self.targets = targets

    def __repr__(self):
        targets = ", ".join(t.__name__ for t in self._targets or [])
        return f"<Definition targets=[{targets}] fields={list(self._fields)} frozen={self._frozen}>"

    def _check_mutable(self):
        if self._frozen:
            raise FrozenDefinitionError("Cannot change a definition after it has been frozen")

    @property
    def targets(self) -> list[type[Indexable]]:
        return list(self._targets or [])

    @targets.setter
    def targets(self, targets: Iterable[type[Indexable]]):
        """Set the target classes. All targets need to be Indexable and use the same elastic_mode"""
        self._check_mutable()
        targets = list(targets)
        if not targets:
            raise ConfigurationError("A definition needs at least one target")
        for target in targets:
            if not is_indexable(target):
                raise ConfigurationError(f"Target {target!r} is not indexable")
            if not isinstance(target.elastic_mode, Mode):
                raise ConfigurationError(f"Target {target.__name__} has invalid elastic_mode {target.elastic_mode!r}")
        modes = {target.elastic_mode for target in targets}
        if len(modes) > 1:
            raise ConfigurationError(
                f"All targets should use the same elastic_mode, got {sorted(m.value for m in modes)}"
            )
        self._targets = targets

    @property
    def main_target(self) -> type[Indexable]:
        if not self._targets:
            raise ConfigurationError("Targets have not been set for this definition")
        return self._targets[0]

    @property
    def mode(self) -> Mode:
        return self.main_target.elastic_mode

    @property
    def custom_options(self) -> OptionsMap:
        return self._custom_options

    def register_field(self, field: Field) -> Field:
        """
        Add a field to this definition. If a field with the same name exists, it is replaced,
        but keeps its original position
        """
        self._check_mutable()
        if field.name in self._fields:
            logging.warning(f"Field {field.name} was already registered, replacing it")
        else:
            logging.debug(f"Registering field {field.name}")
        self._fields[field.name] = field
        return field

    def has_field(self, name: str) -> bool:
        return self.get_field(name) is not None

    def get_field(self, path: str) -> Field | None:
        """
        Get a field by name, or by dotted path for fields in nested definitions (e.g. "author.name").
        Returns None if the field (or an intermediate field) does not exist or is not nested
        """
        head, _, rest = path.partition(".")
        field = self._fields.get(head)
        if field is None or not rest:
            return field
        return field.get_field(rest)

    def fields(self) -> Iterator[Field]:
        yield from self._fields.values()

    def expanded_field_names(self) -> list[str]:
        return [name for field in self.fields() for name in field.expanded_names()]

    def as_es_mapping(self) -> dict:
        """
        Render the mapping document for this definition.
        Raises MappingResolutionError if the mapping for any field cannot be determined
        """
        target = self._targets[0] if self._targets else None
        properties = {field.name: field.mapping_options(target) for field in self.fields()}
        return {"properties": properties}

    def freeze(self) -> None:
        if self._frozen:
            return
        self._custom_options.freeze()
        for field in self._fields.values():
            field.freeze()
        self._frozen = True
        logging.debug(f"Definition frozen with fields {list(self._fields)}")

    @property
    def frozen(self) -> bool:
        return self._frozen
