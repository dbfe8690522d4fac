"""Record — attribute bag with dotted-path access.

A Record is a convenient target for computed properties: fields are plain
attributes, nested data is reachable with get()/set() paths, and iteration
lists computed properties alongside ordinary fields.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from computed_property.computed import ComputedProperty, computed_properties
from computed_property.paths import MISSING, get_path, set_path


class Record:
    """Attribute container whose computed properties enumerate with its fields."""

    def __init__(self, values: Mapping | None = None, /, **fields: object) -> None:
        for key, value in {**(values or {}), **fields}.items():
            setattr(self, key, value)

    def get(self, path: str, default: object = None) -> object:
        value = get_path(self, path)
        return default if value is MISSING else value

    def set(self, path: str, value: object) -> None:
        set_path(self, path, value)

    def update(self, values: Mapping) -> None:
        for path, value in values.items():
            self.set(path, value)

    def __iter__(self) -> Iterator[str]:
        """Public field names, then computed property names."""
        fields = [key for key in vars(self) if not key.startswith("_")]
        return iter(fields + [name for name in computed_properties(self) if name not in fields])

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if name in computed_properties(self):
            return True
        return not name.startswith("_") and name in vars(self)

    def to_dict(self) -> dict[str, object]:
        """Plain dict of every field, with computed properties evaluated.

        Getter-less computed properties are left out.
        """
        result = {}
        for key in self:
            prop = type(self).__dict__.get(key)
            if isinstance(prop, ComputedProperty) and not prop.readable:
                continue
            result[key] = getattr(self, key)
        return result

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"Record({fields})"
