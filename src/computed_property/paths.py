"""Dotted path access into nested objects.

A path like ``"data.title"`` walks mappings by key, sequences by index and
everything else by attribute. Missing steps never raise; they read as MISSING.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence


class _Missing:
    """Marker for a path that does not resolve to a value."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def _is_index(key: str) -> bool:
    return key.isdigit() or (key[:1] == "-" and key[1:].isdigit())


def _step(current, key: str):
    if isinstance(current, Mapping):
        return current.get(key, MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if _is_index(key):
            try:
                return current[int(key)]
            except IndexError:
                return MISSING
        return MISSING
    return getattr(current, key, MISSING)


def get_path(obj, path: str, default=MISSING):
    """Read the value at a dotted path, or default if any step is missing.

    A mapping that holds the whole dotted path as a literal key wins over
    walking the segments.
    """
    if isinstance(obj, Mapping) and path in obj:
        return obj[path]
    current = obj
    for key in path.split("."):
        current = _step(current, key)
        if current is MISSING:
            return default
    return current


def set_path(obj, path: str, value) -> None:
    """Write value at a dotted path, creating intermediate dicts as needed."""
    *parents, last = path.split(".")
    current = obj
    for key in parents:
        child = _step(current, key)
        if child is MISSING or child is None:
            child = {}
            _assign(current, key, child)
        current = child
    _assign(current, last, value)


def _assign(container, key: str, value) -> None:
    if isinstance(container, MutableMapping):
        container[key] = value
    elif isinstance(container, MutableSequence) and _is_index(key):
        container[int(key)] = value
    else:
        setattr(container, key, value)
