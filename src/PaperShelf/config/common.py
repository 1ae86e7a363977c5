"""Typed access to one section of the PaperShelf configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

_MISSING = object()


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """One top-level mapping of the config file.

    Accessors report problems with the dotted key (``search.exact``) so a bad
    YAML value can be located from the error message alone.
    """

    name: str
    values: Mapping[str, Any]

    @classmethod
    def of(cls, raw: Mapping[str, Any], name: str) -> ConfigSection:
        """Return section ``name`` of the root mapping.

        Raises:
            ValueError: If the section is missing.
            TypeError: If the section is not a mapping.
        """
        values = raw.get(name)
        if values is None:
            raise ValueError(f"Missing required config: {name}")
        if not isinstance(values, Mapping):
            raise TypeError(f"{name} must be an object")
        return cls(name, values)

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def get(self, field: str, default: Any = _MISSING) -> Any:
        """Return the raw value of ``field``; required unless ``default`` is given."""
        if field in self.values:
            return self.values[field]
        if default is _MISSING:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return default

    def text(self, field: str, default: Any = _MISSING) -> str:
        value = self.get(field, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(field)} must be a string")
        return value

    def flag(self, field: str) -> bool:
        value = self.get(field)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(field)} must be a boolean")
        return value

    def integer(self, field: str) -> int:
        # bool is an int subclass; YAML `true` must not pass as 1.
        value = self.get(field)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(field)} must be an integer")
        return value


def check_non_empty(value: str, config_key: str) -> None:
    """Raise ValueError if a string setting is blank."""
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")
