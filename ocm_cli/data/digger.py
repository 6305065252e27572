"""
Extract values from arbitrary objects using paths.

A path is a sequence of names separated by dots, for example ``api.url``. Each name is matched
against the accessor methods, properties and public fields of the current object, or against the
keys of a mapping. Matching ignores case, and an underscore in the path matches a transition from
lower case to upper case in the name, so ``external_id`` finds ``external_id()``, ``ExternalId()``
or ``get_external_id()``.

Accessors annotated as returning ``Tuple[T, bool]`` are preferred: the boolean says if the value
is actually present, so a missing value comes back as ``None`` instead of as an empty default.
"""

import inspect
import logging
import threading
import typing
from collections.abc import Mapping
from typing import Any, Dict, Iterator, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

# Values of these types have nothing to dig into:
LEAF_TYPES = (str, bytes, bytearray, int, float, complex)
SEQUENCE_TYPES = (list, tuple, set, frozenset)


class Accessor(NamedTuple):
    """Method or property of a class that can be used to extract the value of a path segment."""

    name: str
    is_property: bool
    returns_pair: bool


def name_matches(name: str, segment: str) -> bool:
    """Check if a Python name (method, property, field or key) matches a path segment."""
    name_len, segment_len = len(name), len(segment)

    # Two characters are compatible if they are equal ignoring case. An underscore in the segment
    # is compatible with a transition from lower case to upper case in the name.
    name_i = segment_i = 0
    while name_i < name_len and segment_i < segment_len:
        if name[name_i].lower() == segment[segment_i].lower():
            name_i += 1
            segment_i += 1
            continue
        if name_i > 0 and segment[segment_i] == "_":
            if name[name_i - 1].islower() and name[name_i].isupper():
                segment_i += 1
                continue
        return False

    return name_i == name_len and segment_i == segment_len


def strip_get_prefix(name: str) -> str:
    """Remove the ``Get`` or ``get_`` prefix of an accessor name, if it is followed by a word."""
    # Checking only that the name starts with `Get` isn't enough, `Getaway` isn't an accessor
    # for `away`.
    if name.startswith("Get") and len(name) > 3 and name[3].isupper():
        return name[3:]
    if name.startswith("get_") and len(name) > 4 and name[4].isalpha():
        return name[4:]
    return name


def method_name_matches(method: str, segment: str) -> bool:
    """Check if the name of a method matches a path segment."""
    return name_matches(strip_get_prefix(method), segment)


def is_leaf(value: Any) -> bool:
    """Check if the value is a scalar or a plain collection, without fields to extract."""
    if isinstance(value, LEAF_TYPES):
        return True
    return isinstance(value, SEQUENCE_TYPES) and not hasattr(value, "_fields")


def returns_pair(func: Any) -> bool:
    """Check if a function is annotated as returning a value and a presence flag."""
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError):
        hints = getattr(func, "__annotations__", {})
    result = hints.get("return")
    if result is None:
        return False
    args = typing.get_args(result)
    return typing.get_origin(result) is tuple and len(args) == 2 and args[1] is bool


def takes_no_arguments(func: Any) -> bool:
    """Check if a function defined in a class takes no arguments other than the instance."""
    try:
        parameters = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False
    if len(parameters) != 1:
        return False
    return parameters[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )


def class_accessors(cls: type) -> Iterator[Accessor]:
    """Generate the public accessors of a class, in alphabetical order."""
    for name in dir(cls):
        if name.startswith("_"):
            continue
        attr = inspect.getattr_static(cls, name, None)
        if isinstance(attr, property):
            if attr.fget is not None:
                yield Accessor(name, True, returns_pair(attr.fget))
        elif inspect.isfunction(attr) and takes_no_arguments(attr):
            yield Accessor(name, False, returns_pair(attr))


def object_fields(obj: Any) -> Iterator[str]:
    """Generate the names of the public fields of an object."""
    seen = set()
    names = list(getattr(obj, "__dict__", {}))
    names.extend(getattr(type(obj), "_fields", ()))
    for name in dir(type(obj)):
        attr = inspect.getattr_static(type(obj), name, None)
        if inspect.ismemberdescriptor(attr) or inspect.isgetsetdescriptor(attr):
            names.append(name)
    for name in names:
        if name.startswith("_") or name in seen:
            continue
        seen.add(name)
        yield name


class Digger:
    """
    Extracts information from objects using paths.

    The accessor found for each combination of class and path segment is cached, so digging the
    same path in many objects of the same class only scans the class once.
    """

    def __init__(self):
        self._method_cache: Dict[Tuple[type, str], Accessor] = {}
        self._method_cache_lock = threading.Lock()
        self._field_cache: Dict[Tuple[type, str], str] = {}
        self._field_cache_lock = threading.Lock()

    def dig(self, obj: Any, path: str) -> Any:
        """Extract from the object the value that corresponds to the dot separated path."""
        path = path.strip()
        if not path:
            return obj
        for segment in path.split("."):
            obj = self._dig_field(obj, segment.strip())
            if obj is None:
                return None
        return obj

    def _dig_field(self, obj: Any, segment: str) -> Any:
        if obj is None or is_leaf(obj):
            return None
        if isinstance(obj, Mapping):
            return self._dig_key(obj, segment)

        accessor = self._lookup_method(type(obj), segment)
        if accessor is not None:
            return self._call_accessor(obj, accessor)

        field = self._lookup_field(obj, segment)
        if field is not None:
            return getattr(obj, field, None)

        return None

    def _dig_key(self, mapping: Mapping, segment: str) -> Any:
        if segment in mapping:
            return mapping[segment]
        for key in mapping:
            if isinstance(key, str) and name_matches(key, segment):
                return mapping[key]
        return None

    def _call_accessor(self, obj: Any, accessor: Accessor) -> Any:
        # Instance attributes with the same name don't hide the accessor:
        attr = inspect.getattr_static(type(obj), accessor.name, None)
        if attr is None:
            return None
        result = attr.__get__(obj, type(obj))
        if not accessor.is_property:
            result = result()
        if accessor.returns_pair:
            value, present = result
            return value if present else None
        return result

    def _lookup_method(self, cls: type, segment: str) -> Optional[Accessor]:
        """
        Find the accessor of the class that matches the path segment. For example, if the segment
        is ``my_field`` it will look for ``get_my_field``, ``GetMyField``, ``my_field`` or
        ``MyField``. Accessors that return a presence flag are tried first.
        """
        key = (cls, segment)
        with self._method_cache_lock:
            accessor = self._method_cache.get(key)
            if accessor is not None:
                return accessor

            accessors = list(class_accessors(cls))
            for candidates in (
                [a for a in accessors if a.returns_pair],
                [a for a in accessors if not a.returns_pair],
            ):
                for candidate in candidates:
                    if method_name_matches(candidate.name, segment):
                        logger.debug(
                            "Segment '%s' of '%s' resolved to accessor '%s'", segment, cls.__name__, candidate.name
                        )
                        self._method_cache[key] = candidate
                        return candidate

        return None

    def _lookup_field(self, obj: Any, segment: str) -> Optional[str]:
        """Find the public field of the object that matches the path segment."""
        key = (type(obj), segment)
        with self._field_cache_lock:
            field = self._field_cache.get(key)
            if field is not None:
                return field

            for candidate in object_fields(obj):
                if name_matches(candidate, segment):
                    logger.debug(
                        "Segment '%s' of '%s' resolved to field '%s'", segment, type(obj).__name__, candidate
                    )
                    self._field_cache[key] = candidate
                    return candidate

        return None
