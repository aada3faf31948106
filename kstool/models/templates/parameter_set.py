"""Parameter sets extracted from job templates."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from pydantic import BaseModel, Field

from kstool.models.templates.errors import UnknownParameterError


class ParameterSet:
    """Ordered ``name -> value`` mapping bound to a template's parameters.

    The set of names is fixed when the set is created from a template's
    defaults; edits may change values but never introduce new names.
    """

    __slots__ = ("_values",)

    def __init__(self, defaults: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = {
            str(name): str(value) for name, value in (defaults or {}).items()
        }

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ParameterSet({self._values!r})"

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name, default)

    def names(self) -> list[str]:
        return list(self._values)

    def items(self) -> list[tuple[str, str]]:
        return list(self._values.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def copy(self) -> ParameterSet:
        return ParameterSet(self._values)

    def set(self, name: str, value: str) -> None:
        """Set one known parameter."""
        if name not in self._values:
            raise UnknownParameterError([name])
        self._values[name] = str(value)

    def merged(self, updates: Mapping[str, str]) -> ParameterSet:
        """Return a copy with *updates* applied.

        All names are checked before anything is applied, so a rejected
        update leaves no partial changes behind.
        """
        unknown = [name for name in updates if name not in self._values]
        if unknown:
            raise UnknownParameterError(unknown)
        result = self.copy()
        for name, value in updates.items():
            result._values[name] = str(value)
        return result


class NamedConfiguration(BaseModel):
    """A parameter set persisted under a user-chosen name."""

    name: str
    parameters: dict[str, str] = Field(default_factory=dict)
