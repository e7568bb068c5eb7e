from enum import Enum
from typing import Any, Iterator, MutableMapping

from elastic_schema.errors import FrozenDefinitionError


def canonical_key(key: Any) -> str:
    """Normalize an option key, so Mode.index, "index" and the like all address the same entry"""
    if isinstance(key, Enum):
        key = key.value
    return str(key)


class OptionsMap(MutableMapping[str, Any]):
    """
    A string-keyed mapping that normalizes every key through canonical_key.
    After freeze() all mutations raise FrozenDefinitionError
    """

    def __init__(self, items: Any = None, **kwargs):
        self._data: dict[str, Any] = {}
        self._frozen = False
        self.update(items or {}, **kwargs)

    def __getitem__(self, key: Any) -> Any:
        return self._data[canonical_key(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._check_mutable()
        self._data[canonical_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        self._check_mutable()
        del self._data[canonical_key(key)]

    def __contains__(self, key: object) -> bool:
        return canonical_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self):
        return f"OptionsMap({self._data!r})"

    def _check_mutable(self):
        if self._frozen:
            raise FrozenDefinitionError("Cannot change options after they have been frozen")

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)
