"""Member introspection used by the printer.

Turns a composite value into an ordered list of :class:`Member` records and
classifies values into the shapes the printer knows how to render:

- ``None`` renders as ``null``
- scalars (numbers, text, bytes, date/time, UUID, enum members, paths, classes)
  render through ``str``
- mappings and other iterables are enumerated
- everything else (dataclasses, Pydantic models, plain objects) is a composite
  whose fields and properties are printed one per line
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import inspect
import numbers
import types
import typing
from collections.abc import Iterable, Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel

from objectprinting.errors import UnsupportedMemberSelection

SCALAR_TYPES = (
    numbers.Number,
    str,
    bytes,
    bytearray,
    date,
    time,
    timedelta,
    UUID,
    enum.Enum,
    PurePath,
    type,
)
NUMERIC_TYPES = (int, float, Decimal)

_UNION_ORIGINS = (typing.Union, types.UnionType)


class MemberSelection(enum.Flag):
    """Which members of a composite are printed."""

    FIELDS = 1
    PROPERTIES = 2
    BOTH = FIELDS | PROPERTIES

    @classmethod
    def parse(cls, value: Union["MemberSelection", str]) -> "MemberSelection":
        """Return a supported selection, accepting member names case-insensitively."""
        if isinstance(value, str):
            try:
                value = cls[value.strip().upper()]
            except KeyError:
                raise UnsupportedMemberSelection(
                    f"Unknown member selection: {value!r}"
                ) from None
        if not isinstance(value, cls) or value not in _SUPPORTED_SELECTIONS:
            raise UnsupportedMemberSelection(
                f"Member selection {value!r} is not supported; "
                "use FIELDS, PROPERTIES or BOTH"
            )
        return value


_SUPPORTED_SELECTIONS = frozenset(
    {MemberSelection.FIELDS, MemberSelection.PROPERTIES, MemberSelection.BOTH}
)


class ValueKind(enum.Enum):
    NULL = "null"
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    COMPOSITE = "composite"


class Member:
    """A named member of a composite value.

    The value is read on first access through :meth:`load`, so a member that
    is skipped never runs its property getter.
    """

    __slots__ = ("name", "kind", "annotation", "_getter", "_value", "_loaded")

    def __init__(
        self,
        name: str,
        getter: Callable[[], Any],
        annotation: Any = None,
        kind: str = "field",  # "field" or "property"
    ):
        self.name = name
        self.kind = kind
        self.annotation = annotation
        self._getter = getter
        self._value: Any = None
        self._loaded = False

    @classmethod
    def of(cls, name: str, value: Any, annotation: Any = None, kind: str = "field") -> "Member":
        """Build a member around an already known value."""
        return cls(name, lambda: value, annotation, kind)

    def load(self) -> Any:
        if not self._loaded:
            self._value = self._getter()
            self._loaded = True
        return self._value

    @property
    def value(self) -> Any:
        return self.load()

    @property
    def declared_type(self) -> Any:
        """The annotated class, or the runtime type when there is no usable annotation."""
        if self.annotation is not None:
            normalized = _normalize_type(self.annotation)
            if isinstance(normalized, type):
                return normalized
        return type(self.load())

    def __repr__(self) -> str:
        return f"Member(name={self.name!r}, kind={self.kind!r})"


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_numeric_type(tp: Any) -> bool:
    """True for the integer and floating-point family (``bool`` excluded)."""
    return (
        isinstance(tp, type)
        and issubclass(tp, NUMERIC_TYPES)
        and not issubclass(tp, bool)
    )


def is_number(value: Any) -> bool:
    return isinstance(value, NUMERIC_TYPES) and not isinstance(value, bool)


def classify(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    if is_scalar(value):
        return ValueKind.SCALAR
    # Pydantic models are iterable, dataclasses may be; both print by member.
    if isinstance(value, BaseModel) or dataclasses.is_dataclass(value):
        return ValueKind.COMPOSITE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Iterable):
        return ValueKind.SEQUENCE
    return ValueKind.COMPOSITE


def _type_hints(target: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError, AttributeError):
        return dict(getattr(target, "__annotations__", None) or {})


def _normalize_type(annotation: Any) -> Any:
    """Unwrap ``Optional[X]`` to ``X`` and parametrised generics to their origin."""
    origin = typing.get_origin(annotation)
    if origin in _UNION_ORIGINS:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _normalize_type(args[0])
        return annotation
    if isinstance(origin, type):
        return origin
    return annotation


def _field_annotations(cls: type) -> Dict[str, Any]:
    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}
    return _type_hints(cls)


def _instance_attribute_names(obj: Any) -> List[str]:
    names: List[str] = []
    for klass in reversed(type(obj).__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in names:
                continue
            if hasattr(obj, slot):
                names.append(slot)
    for name in getattr(obj, "__dict__", {}):
        if name not in names:
            names.append(name)
    return names


def _field_members(obj: Any) -> List[Member]:
    cls = type(obj)
    annotations = _field_annotations(cls)
    if dataclasses.is_dataclass(obj):
        names = [f.name for f in dataclasses.fields(obj)]
    elif isinstance(obj, BaseModel):
        names = list(cls.model_fields)
    else:
        names = _instance_attribute_names(obj)

    members: List[Member] = []
    for name in names:
        if name.startswith("_"):
            continue
        getter = functools.partial(getattr, obj, name)
        members.append(Member(name, getter, annotations.get(name), "field"))
    return members


def _property_descriptors(cls: type) -> Dict[str, property]:
    descriptors: Dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        # Skip the library base classes (BaseModel exposes model_extra etc.).
        if klass.__module__.partition(".")[0] == "pydantic":
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("_"):
                descriptors[name] = attr
    return descriptors


def _property_members(obj: Any) -> List[Member]:
    members: List[Member] = []
    for name, descriptor in _property_descriptors(type(obj)).items():
        hints = _type_hints(descriptor.fget) if descriptor.fget else {}
        getter = functools.partial(getattr, obj, name)
        members.append(Member(name, getter, hints.get("return"), "property"))
    return members


def iter_members(
    obj: Any, selection: Union[MemberSelection, str] = MemberSelection.BOTH
) -> List[Member]:
    """Return the members of ``obj`` in declaration order, fields before properties.

    Raises:
        UnsupportedMemberSelection: if ``selection`` is not FIELDS, PROPERTIES or BOTH.
    """
    selection = MemberSelection.parse(selection)
    members: List[Member] = []
    if selection & MemberSelection.FIELDS:
        members.extend(_field_members(obj))
    if selection & MemberSelection.PROPERTIES:
        seen = {member.name for member in members}
        members.extend(m for m in _property_members(obj) if m.name not in seen)
    return members


def declared_type_of(owner: type, name: str) -> Optional[type]:
    """Return the declared class of member ``name`` on ``owner``, if annotated."""
    annotation = _field_annotations(owner).get(name)
    if annotation is None:
        attr = inspect.getattr_static(owner, name, None)
        if isinstance(attr, property) and attr.fget is not None:
            annotation = _type_hints(attr.fget).get("return")
    if annotation is None:
        return None
    normalized = _normalize_type(annotation)
    return normalized if isinstance(normalized, type) else None


__all__ = [
    "Member",
    "MemberSelection",
    "ValueKind",
    "classify",
    "declared_type_of",
    "is_number",
    "is_numeric_type",
    "is_scalar",
    "iter_members",
]
