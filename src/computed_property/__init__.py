"""computed-property: cached derived attributes invalidated by watched paths."""

from importlib.metadata import version as _version

__version__ = _version("computed-property")

from computed_property.computed import (
    ComputedProperty,
    Descriptor,
    InvalidArgument,
    computed_properties,
    computed_property,
    remove_computed_property,
)
from computed_property.compare import deep_clone, deep_equal
from computed_property.paths import MISSING, get_path, set_path
from computed_property.record import Record

__all__ = [
    "computed_property",
    "computed_properties",
    "remove_computed_property",
    "ComputedProperty",
    "Descriptor",
    "InvalidArgument",
    "Record",
    "get_path",
    "set_path",
    "MISSING",
    "deep_clone",
    "deep_equal",
]
