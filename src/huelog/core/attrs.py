"""Attribute model: a tagged variant of scalar values and named groups.

Every attribute is `Attr(key, value)` where value is either a `Scalar`
wrapping one primitive, or a `Group` holding an ordered tuple of child
attributes. Arbitrary Python values are classified once, when the attribute
is built, so the renderer only ever walks the variant.

Example:
    >>> attrs = to_attrs({"user": 42, "req": {"method": "GET", "path": "/"}})
    >>> attrs[1].value.attrs[0]
    Attr(key='method', value=Scalar(value='GET'))
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import TypeAlias, Union

ScalarValue: TypeAlias = Union[str, int, float, bool, None, datetime, date, timedelta, Decimal]

_SCALAR_TYPES = (str, int, float, bool, type(None), datetime, date, timedelta, Decimal)


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single primitive value."""
    value: ScalarValue


@dataclass(frozen=True, slots=True)
class Group:
    """Named, ordered sub-sequence of attributes. May be empty."""
    attrs: tuple[Attr, ...] = ()


AttrValue: TypeAlias = Union[Scalar, Group]


@dataclass(frozen=True, slots=True)
class Attr:
    """One key/value pair. Keys need not be unique within a sequence."""
    key: str
    value: AttrValue


def attr(key: str, value: object) -> Attr:
    """Build an attribute from any Python value.

    Mappings become groups (in iteration order), an existing `Attr` is
    re-keyed, and values outside the scalar set are stringified.
    """
    if isinstance(value, (Scalar, Group)):
        return Attr(key, value)
    if isinstance(value, Attr):
        return Attr(key, value.value)
    if isinstance(value, Mapping):
        return Attr(key, Group(to_attrs(value)))
    if isinstance(value, _SCALAR_TYPES):
        return Attr(key, Scalar(value))
    return Attr(key, Scalar(str(value)))


def group(key: str, *attrs: Attr, **kw: object) -> Attr:
    """Build a group attribute from positional attrs followed by keywords."""
    return Attr(key, Group((*attrs, *to_attrs(kw))))


def to_attrs(items: Mapping[str, object] | Iterable[Attr | tuple[str, object]]) -> tuple[Attr, ...]:
    """Normalize a mapping or a sequence of attrs / (key, value) pairs."""
    if isinstance(items, Mapping):
        return tuple(attr(str(k), v) for k, v in items.items())
    out: list[Attr] = []
    for item in items:
        out.append(item if isinstance(item, Attr) else attr(str(item[0]), item[1]))
    return tuple(out)
