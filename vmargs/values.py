"""
vmargs value store: the resolved name → value mapping handed to the caller.

Rules
- flag-only arguments that were supplied are stored as "" (empty-string sentinel).
- absent optional arguments are simply not present.
- absent required arguments are filled from their default after scanning.
- the verbatim trailing segment travels alongside as `trailing`.

Lifecycle
- created empty by the validator, populated during the single validation pass,
  then sealed; a sealed store rejects further writes.
"""
from collections.abc import Mapping
from types import MappingProxyType

FLAG_SENTINEL = ""


class ValueStore(Mapping):
    """
    Read-only mapping from argument name to resolved string value.
    """

    def __init__(self, values=(), /, trailing=()):
        self._values = {}
        self._trailing = tuple(trailing)
        self._sealed = False
        for name, value in dict(values).items():
            self.store(name, value)

    @property
    def trailing(self):
        return self._trailing

    @property
    def sealed(self):
        return self._sealed

    def store(self, name, value, /):
        if self._sealed:
            raise TypeError("value-store is sealed and cannot be modified")
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("value-store entries must map strings to strings")
        self._values[name] = value

    def seal(self):
        self._sealed = True
        return self

    def __getitem__(self, name, /):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"value-store({dict(self._values)!r}, trailing={self._trailing!r})"

    def __rich_repr__(self):
        yield MappingProxyType(self._values)
        yield "trailing", self._trailing


__all__ = (
    "FLAG_SENTINEL",
    "ValueStore",
)
