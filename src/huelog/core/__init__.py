"""Record and attribute model."""

from .attrs import Attr, AttrValue, Group, Scalar, ScalarValue, attr, group, to_attrs
from .record import Level, Record, Source

__all__ = [
    "Attr", "AttrValue", "Group", "Scalar", "ScalarValue", "attr", "group", "to_attrs",
    "Level", "Record", "Source",
]
