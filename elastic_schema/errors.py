"""
Error kinds raised by definitions and nodes.

All errors are raised at the offending call, except MappingResolutionError,
which is only raised when a mapping is actually rendered.
"""


class ConfigurationError(ValueError):
    """Invalid definition setup, e.g. empty or mixed-mode targets"""


class FrozenDefinitionError(ConfigurationError):
    """Attempt to change a definition (or its fields/options) after freeze()"""


class ValidationError(ValueError):
    """Invalid value assigned to a node parameter"""


class MappingResolutionError(Exception):
    """A field has no explicit type, and its type could not be inferred"""
