"""Structural copy and comparison of dependency values."""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping


def deep_clone(value):
    return copy.deepcopy(value)


def deep_equal(a, b) -> bool:
    """Compare two values by structure rather than identity.

    Plain objects (classes that keep object's default __eq__) compare by type
    and instance attributes, so a deep clone of such an object still equals
    the original.
    """
    if a is b:
        return True
    if isinstance(a, float) and isinstance(b, float):
        return a == b or (math.isnan(a) and math.isnan(b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if _compares_by_identity(a) and _compares_by_identity(b):
        if type(a) is not type(b):
            return False
        return deep_equal(_state(a), _state(b))
    return a == b


def _compares_by_identity(value) -> bool:
    kind = type(value)
    if kind.__eq__ is not object.__eq__ or kind.__module__ == "builtins":
        return False
    return not callable(value) and (
        hasattr(value, "__dict__") or hasattr(kind, "__slots__")
    )


def _state(value) -> dict:
    state = dict(getattr(value, "__dict__", {}))
    for klass in type(value).__mro__:
        slots = getattr(klass, "__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if hasattr(value, slot):
                state[slot] = getattr(value, slot)
    return state
