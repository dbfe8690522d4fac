"""Snapshot store — the private cache behind one computed property.

Holds the last computed value and, for every watched dependency path, a deep
clone of the value seen there when the property was last recomputed. One
store belongs to exactly one installed property on one object.
"""

from __future__ import annotations

from typing import Any, Callable

from computed_property.paths import get_path

_UNSET = object()


class Snapshot:
    """Cached value plus per-path baselines for change detection."""

    __slots__ = ("value", "dependencies", "baselines", "equals", "clone")

    def __init__(
        self,
        obj: object,
        dependencies: tuple[str, ...],
        equals: Callable[[Any, Any], bool],
        clone: Callable[[Any], Any],
    ) -> None:
        self.value = _UNSET
        self.dependencies = dependencies
        self.equals = equals
        self.clone = clone
        self.baselines: dict[str, Any] = {
            path: clone(get_path(obj, path)) for path in dependencies
        }

    @property
    def watching(self) -> bool:
        return bool(self.dependencies)

    @property
    def cached(self) -> bool:
        return self.value is not _UNSET

    def invalidate(self) -> None:
        self.value = _UNSET

    def refresh(self, obj: object) -> bool:
        """Compare every path against its baseline; re-baseline the ones that moved.

        All differing paths are refreshed, not just the first one found.
        """
        changed = False
        for path in self.dependencies:
            current = get_path(obj, path)
            if not self.equals(self.baselines[path], current):
                changed = True
                self.baselines[path] = self.clone(current)
        return changed
