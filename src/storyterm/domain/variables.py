"""Named integer counters available to story scripting."""
from __future__ import annotations

from typing import Dict, Iterator

from storyterm.core.types import wrap_int64
from storyterm.domain.defs import ActionDef


class VariableSlot:
    """Write-through handle to a single variable."""

    __slots__ = ("_store", "name")

    def __init__(self, store: Dict[str, int], name: str) -> None:
        self._store = store
        self.name = name

    @property
    def value(self) -> int:
        return self._store[self.name]

    @value.setter
    def value(self, new_value: int) -> None:
        self._store[self.name] = wrap_int64(new_value)

    def __repr__(self) -> str:
        return f"VariableSlot({self.name!r}, {self.value})"


class Variables:
    """Mapping from variable name to a signed 64-bit counter.

    Unset names read as 0 and entries are never removed.
    """

    def __init__(self, initial: Dict[str, int] | None = None) -> None:
        self._values: Dict[str, int] = {}
        for name, value in (initial or {}).items():
            self.set(name, value)

    def get(self, name: str) -> int:
        """Return the current value of ``name`` or 0 when it was never written."""
        return self._values.get(name, 0)

    def get_mut(self, name: str) -> VariableSlot:
        """Return a handle to ``name``, inserting it with 0 if it does not exist yet."""
        self._values.setdefault(name, 0)
        return VariableSlot(self._values, name)

    def set(self, name: str, value: int) -> None:
        self._values[name] = wrap_int64(value)

    def apply(self, action: ActionDef) -> int:
        """Apply a scripted action and return the variable's new value."""
        slot = self.get_mut(action.name)
        slot.value = action.op.execute(slot.value, action.value)
        return slot.value

    def as_dict(self) -> Dict[str, int]:
        """Return a snapshot copy of all written variables."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Variables({self._values!r})"
