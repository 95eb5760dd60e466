from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .encoding import EMPTY, UNRECOGNIZED, DropHook, encode_singular, notify_drop
from .fields import descriptor_for
from .model import AttributeValue, Complex, ComplexList, ScalarList, is_truthy

T = TypeVar("T")


def primary_instance(items: Sequence[T]) -> T | None:
    """Return the first item marked primary, falling back to the first item."""
    if not items:
        return None
    for item in items:
        if isinstance(item, Complex) and is_truthy(item.get("primary")):
            return item
    return items[0]


def map_attribute(
    attribute: str,
    value: AttributeValue,
    on_drop: DropHook | None = None,
) -> list[str]:
    """Return the folded content lines for one record attribute.

    Plural handling is decided by attribute name, not by value shape:
    simple plurals become one comma-joined line, organizations collapse to
    their primary instance (plus a TITLE line), and every other plural gets
    one line per instance. Addresses with a ``formatted`` sub-field also get
    a LABEL line.
    """
    descriptor = descriptor_for(attribute)
    if descriptor is None:
        notify_drop(on_drop, attribute, UNRECOGNIZED)
        return []

    lines: list[str] = []

    def emit(name: str, val: AttributeValue) -> None:
        line = encode_singular(name, val, on_drop)
        if line is not None:
            lines.append(line)

    if not isinstance(value, (ScalarList, ComplexList)):
        emit(attribute, value)
        return lines

    if not value.items:
        notify_drop(on_drop, attribute, EMPTY)
    elif descriptor.simple_plural:
        emit(attribute, value)
    elif descriptor.primary_only:
        primary = primary_instance(value.items)
        emit(attribute, primary)
        if isinstance(primary, Complex) and primary.has("title"):
            emit("title", primary.get("title"))
    else:
        for instance in value.items:
            emit(attribute, instance)
            if attribute == "addresses" and isinstance(instance, Complex) and instance.has("formatted"):
                emit("label", instance)
    return lines
