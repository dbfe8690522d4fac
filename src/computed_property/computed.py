"""Computed properties — derived attributes cached against watched paths.

computed_property() attaches a named accessor to an existing object. Reading
it calls the getter lazily and caches the result. The cache is reused until
the value at one of the declared dependency paths deep-changes; then the next
read recomputes. Without dependencies every read recomputes.

Python only dispatches descriptors found on the class, so each target gets a
private host subclass of its own class the first time a property is
installed. The descriptor (and the snapshot store it owns) lives there.
"""

from __future__ import annotations

import copy
import copyreg
import logging
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from typing import Any, Callable, NamedTuple

from computed_property._snapshot import Snapshot
from computed_property.compare import deep_clone, deep_equal

logger = logging.getLogger("computed_property.computed")

# Marks host classes created here, kept in the class __dict__ so subclasses
# of a host never count as hosts themselves.
_HOST_FLAG = "__computed_host__"


class InvalidArgument(TypeError):
    """Raised when computed_property() is called with unusable arguments."""


class Descriptor(NamedTuple):
    """Getter/setter pair for a computed property. Both are optional."""

    get: Callable[[Any], Any] | None = None
    set: Callable[[Any, Any], None] | None = None


class ComputedProperty:
    """Data descriptor that memoizes its getter against dependency snapshots."""

    __slots__ = ("name", "_fget", "_fset", "_snapshot")

    def __init__(self, name: str, descriptor: Descriptor, snapshot: Snapshot) -> None:
        self.name = name
        self._fget = descriptor.get
        self._fset = descriptor.set
        self._snapshot = snapshot

    @property
    def readable(self) -> bool:
        return self._fget is not None

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._snapshot.dependencies

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        if self._fget is None:
            raise AttributeError(
                f"computed property {self.name!r} of {type(obj).__name__!r} object has no getter"
            )
        snap = self._snapshot
        changed = snap.watching and snap.refresh(obj)
        if changed or not snap.watching or not snap.cached:
            try:
                snap.value = self._fget(obj)
            except Exception:
                snap.invalidate()
                raise
            logger.debug("Recomputed %r", self.name)
        return snap.value

    def __set__(self, obj, value) -> None:
        if self._fset is None:
            raise AttributeError(
                f"computed property {self.name!r} of {type(obj).__name__!r} object has no setter"
            )
        self._fset(obj, value)

    def __delete__(self, obj) -> None:
        raise AttributeError(
            f"computed property {self.name!r} can only be removed with remove_computed_property()"
        )

    def _install_on(self, obj) -> ComputedProperty:
        snap = self._snapshot
        return computed_property(
            obj,
            self.name,
            snap.dependencies,
            Descriptor(self._fget, self._fset),
            equals=snap.equals,
            clone=snap.clone,
        )

    def __repr__(self) -> str:
        snap = self._snapshot
        state = f"cached={snap.value!r}" if snap.cached else "unset"
        return f"ComputedProperty({self.name!r}, {state})"


def _resolve_descriptor(descriptor) -> Descriptor:
    if isinstance(descriptor, Descriptor):
        return descriptor
    if isinstance(descriptor, property):
        return Descriptor(descriptor.fget, descriptor.fset)
    if isinstance(descriptor, Mapping):
        return Descriptor(descriptor.get("get"), descriptor.get("set"))
    raise InvalidArgument(
        f"Expected `descriptor` to be a mapping or property but got {type(descriptor).__name__}"
    )


def _is_descriptor_shape(value) -> bool:
    return isinstance(value, (Descriptor, property, Mapping))


def _flatten(dependencies) -> tuple[str, ...]:
    """Flatten one level so callers can pass lists of dependency lists."""
    if dependencies is None:
        return ()
    if isinstance(dependencies, str):
        return (dependencies,)
    flat: list[str] = []
    for dep in dependencies:
        if isinstance(dep, Iterable) and not isinstance(dep, str):
            flat.extend(dep)
        else:
            flat.append(dep)
    return tuple(flat)


@contextmanager
def _as_base(obj):
    """Temporarily give a host object back its original class."""
    host = type(obj)
    obj.__class__ = host.__bases__[0]
    try:
        yield
    finally:
        obj.__class__ = host


def _reinstall(source, duplicate):
    for prop in type(source).__dict__.values():
        if isinstance(prop, ComputedProperty):
            prop._install_on(duplicate)
    return duplicate


def _host_copy(self):
    with _as_base(self):
        duplicate = copy.copy(self)
    return _reinstall(self, duplicate)


def _host_deepcopy(self, memo):
    with _as_base(self):
        duplicate = copy.deepcopy(self, memo)
    return _reinstall(self, duplicate)


def _new_plain(cls, *args):
    return cls.__new__(cls, *args)


def _new_plain_ex(cls, args, kwargs):
    return cls.__new__(cls, *args, **kwargs)


def _host_reduce_ex(self, protocol):
    # Pickles as the original class; accessors and caches are not persisted.
    # pickle rejects __newobj__ for a class other than the live one, hence
    # the plain constructors.
    with _as_base(self):
        rv = self.__reduce_ex__(protocol)
    if isinstance(rv, tuple) and rv[0] is copyreg.__newobj__:
        return (_new_plain, *rv[1:])
    if isinstance(rv, tuple) and rv[0] is copyreg.__newobj_ex__:
        return (_new_plain_ex, *rv[1:])
    return rv


def _host_class(obj) -> type:
    """Return obj's private host class, creating it on first use.

    Copies of a host object get the same computed properties with fresh
    snapshots; pickling stores the object as its original class.

    Raises InvalidArgument without touching obj if its class cannot be
    swapped (builtins, final types, incompatible layouts).
    """
    cls = type(obj)
    if cls.__dict__.get(_HOST_FLAG, False):
        return cls
    try:
        host = type(cls)(
            cls.__name__,
            (cls,),
            {
                "__slots__": (),
                "__module__": cls.__module__,
                "__qualname__": cls.__qualname__,
                _HOST_FLAG: True,
                "__copy__": _host_copy,
                "__deepcopy__": _host_deepcopy,
                "__reduce_ex__": _host_reduce_ex,
            },
        )
        obj.__class__ = host
    except TypeError as exc:
        raise InvalidArgument(
            f"Cannot attach computed properties to {cls.__name__} objects: {exc}"
        ) from exc
    return host


def computed_property(
    obj,
    name: str,
    dependencies=None,
    descriptor=None,
    *,
    equals: Callable[[Any, Any], bool] = deep_equal,
    clone: Callable[[Any], Any] = deep_clone,
) -> ComputedProperty:
    """Add a computed property to obj, recomputed when a dependency changes.

    Usage:
        page = Record(name="home-page", ext=".hbs", dirname="views",
                      data={"title": "Home"})

        computed_property(
            page,
            "path",
            ["name", "ext", "dirname", "data.title"],
            lambda self: f"{self.dirname}/{self.name}{self.ext}",
        )

        page.path              # "views/home-page.hbs"
        page.dirname = "pages"
        page.path              # "pages/home-page.hbs"

    dependencies may be omitted, in which case the property recomputes on
    every read. A bare callable in either trailing position is shorthand for
    Descriptor(get=callable). descriptor may also be a Descriptor, a builtin
    property, or a mapping with optional "get" and "set" keys.
    """
    if descriptor is None and (callable(dependencies) or _is_descriptor_shape(dependencies)):
        dependencies, descriptor = None, dependencies
    if callable(descriptor):
        descriptor = Descriptor(get=descriptor)
    resolved = _resolve_descriptor(descriptor)

    paths = _flatten(dependencies)
    snapshot = Snapshot(obj, paths, equals, clone)
    host = _host_class(obj)

    prop = ComputedProperty(name, resolved, snapshot)
    getattr(obj, "__dict__", {}).pop(name, None)
    if name in host.__dict__:
        # Redefining: drop the old one so it moves to the end of the order.
        delattr(host, name)
    setattr(host, name, prop)
    logger.debug("Installed computed property %r watching %d path(s)", name, len(paths))
    return prop


def computed_properties(obj) -> tuple[str, ...]:
    """Names of the computed properties installed on obj, in install order."""
    cls = type(obj)
    if not cls.__dict__.get(_HOST_FLAG, False):
        return ()
    return tuple(
        key for key, value in cls.__dict__.items() if isinstance(value, ComputedProperty)
    )


def remove_computed_property(obj, name: str) -> None:
    """Remove a computed property; obj reverts to its own class once none remain."""
    cls = type(obj)
    if name not in computed_properties(obj):
        raise AttributeError(f"{cls.__name__!r} object has no computed property {name!r}")
    delattr(cls, name)
    logger.debug("Removed computed property %r", name)
    if not computed_properties(obj):
        obj.__class__ = cls.__bases__[0]
