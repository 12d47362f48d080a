"""Partial edits to event records.

A patch names the entity type it applies to and carries only the fields being
changed. A field absent from the patch is left alone; a field present with
``None`` is cleared. ``UNSET`` lets callers build a patch from optional inputs
without conflating the two.
"""

from dataclasses import dataclass, field, fields, is_dataclass, replace
from types import MappingProxyType
from typing import Any, Mapping


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class PatchError(ValueError):
    """Raised when a patch does not fit the entity it is applied to."""


@dataclass(frozen=True)
class FieldPatch:
    target: type
    changes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not is_dataclass(self.target):
            raise PatchError(f"{self.target!r} is not an event type")
        known = {f.name for f in fields(self.target)}
        unknown = sorted(set(self.changes) - known)
        if unknown:
            raise PatchError(f"{self.target.__name__} has no field(s): {', '.join(unknown)}")
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @classmethod
    def for_(cls, target: type, **values: Any) -> "FieldPatch":
        """Build a patch for ``target``, dropping any value passed as ``UNSET``."""
        return cls(target, {k: v for k, v in values.items() if v is not UNSET})

    @property
    def is_empty(self) -> bool:
        return not self.changes


def apply_patch(entity: Any, patch: FieldPatch) -> Any:
    """Return a copy of ``entity`` with the patch's fields overwritten."""
    if type(entity) is not patch.target:
        raise PatchError(
            f"Patch for {patch.target.__name__} cannot be applied to {type(entity).__name__}"
        )
    if patch.is_empty:
        return entity
    return replace(entity, **patch.changes)
