from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scalar:
    text: str


@dataclass(frozen=True)
class Complex:
    """An object value with named sub-fields.

    The sub-fields ``value``, ``type``, ``primary`` and ``formatted`` carry
    special meaning for the encoder.
    """
    fields: Mapping[str, Union[Scalar, "Complex"]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str) -> Scalar | Complex | None:
        return self.fields.get(name)

    def has(self, name: str) -> bool:
        return name in self.fields

    def text(self, name: str) -> str | None:
        """Return the text of a scalar sub-field, or None."""
        sub = self.fields.get(name)
        return sub.text if isinstance(sub, Scalar) else None


@dataclass(frozen=True)
class ScalarList:
    items: tuple[Scalar, ...] = ()


@dataclass(frozen=True)
class ComplexList:
    items: tuple[Complex, ...] = ()


AttributeValue = Union[Scalar, Complex, ScalarList, ComplexList]
ContactRecord = Mapping[str, AttributeValue]

_VALUE_TYPES = (Scalar, Complex, ScalarList, ComplexList)
_FALSY_TEXT = {"", "0", "false"}


def is_truthy(value: AttributeValue | None) -> bool:
    """Scalars are false only for "", "0" and "false" (any case, no trimming)."""
    if value is None:
        return False
    if isinstance(value, Scalar):
        return value.text.lower() not in _FALSY_TEXT
    if isinstance(value, Complex):
        return bool(value.fields)
    return bool(value.items)


# ── Conversion from plain Python data ──────────────────────────────────────────

def _is_object(obj: Any) -> bool:
    if isinstance(obj, (Mapping, Complex)):
        return True
    if isinstance(obj, (Scalar, ScalarList, ComplexList, str, bytes, type)):
        return False
    return hasattr(obj, "__dict__")


def _members(obj: Any) -> Mapping[str, Any]:
    if isinstance(obj, Mapping):
        return obj
    return vars(obj)


def _scalar(obj: Any) -> Scalar:
    if isinstance(obj, Scalar):
        return obj
    if isinstance(obj, bool):
        return Scalar("true" if obj else "false")
    return Scalar(str(obj))


def _complex(obj: Any) -> Complex:
    if isinstance(obj, Complex):
        return obj
    subs: dict[str, Scalar | Complex] = {}
    for name, raw in _members(obj).items():
        if raw is None:
            continue
        sub = to_value(raw)
        if isinstance(sub, (ScalarList, ComplexList)):
            # lists nested inside an object have no vCard rendering
            logger.debug("ignoring list sub-field %r", name)
            continue
        subs[str(name)] = sub
    return Complex(subs)


def to_value(obj: Any) -> AttributeValue | None:
    """Convert JSON-style data (or attribute objects) into an AttributeValue."""
    if obj is None or isinstance(obj, _VALUE_TYPES):
        return obj
    if isinstance(obj, (list, tuple)):
        items = [item for item in obj if item is not None]
        if not any(_is_object(item) for item in items):
            return ScalarList(tuple(_scalar(item) for item in items))
        # mixed lists keep every entry; bare scalars become {"value": ...}
        return ComplexList(tuple(
            _complex(item) if _is_object(item) else Complex({"value": _scalar(item)})
            for item in items
        ))
    if _is_object(obj):
        return _complex(obj)
    return _scalar(obj)


def to_record(obj: Any) -> ContactRecord:
    """Build an ordered ContactRecord from a mapping or attribute object."""
    record: dict[str, AttributeValue] = {}
    for name, raw in _members(obj).items():
        value = to_value(raw)
        if value is not None:
            record[str(name)] = value
    return MappingProxyType(record)
