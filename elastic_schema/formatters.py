"""
Formatters shape the terminal values of a response (metric values, document fields) into python values.
Nodes call formatter.format(field, value), where field is the (possibly dotted) field name the value
belongs to, or None if the node is not bound to a field.
"""

from typing import Any, Protocol

from elastic_schema.definition import Definition


class Formatter(Protocol):
    def format(self, field: str | None, value: Any) -> Any: ...


class PassthroughFormatter:
    """Leaves all values as returned by the engine"""

    def format(self, field: str | None, value: Any) -> Any:
        return value


class DefinitionFormatter:
    """Converts values according to the type declared for the field in a definition"""

    def __init__(self, definition: Definition):
        self.definition = definition

    def format(self, field: str | None, value: Any) -> Any:
        if field is None:
            return value
        definition_field = self.definition.get_field(field)
        if definition_field is None:
            return value
        return definition_field.prepare_value_for_result(value)
