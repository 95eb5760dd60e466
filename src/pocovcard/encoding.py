from __future__ import annotations

import logging
import re
from collections.abc import Callable

from .fields import descriptor_for, vcard_field_name
from .folding import fold_line
from .model import AttributeValue, Complex, ComplexList, ScalarList, is_truthy

logger = logging.getLogger(__name__)

DropHook = Callable[[str, str], None]

# Reasons passed to a drop hook
UNRECOGNIZED = "unrecognized"
UNENCODABLE = "unencodable"
EMPTY = "empty"

_NEWLINE = re.compile(r"\r?\n")


def notify_drop(on_drop: DropHook | None, attribute: str, reason: str) -> None:
    logger.debug("dropping attribute %r (%s)", attribute, reason)
    if on_drop is not None:
        on_drop(attribute, reason)


def escape_value(text: str) -> str:
    """Escape commas, semicolons and newlines as RFC 2426 requires.

    Backslashes are left as they are; values are expected to be escaped
    exactly once.
    """
    text = text.replace(",", "\\,")
    text = text.replace(";", "\\;")
    return _NEWLINE.sub(r"\\n", text)


def type_value(text: str) -> str:
    """Map a Portable Contacts type to its vCard TYPE parameter value."""
    if text == "mobile":
        text = "cell"
    return text.upper()


def _parameters(attribute: str, value: AttributeValue) -> list[str]:
    params: list[str] = []
    if isinstance(value, Complex):
        kind = value.text("type")
        if kind is not None:
            params.append(f"TYPE={type_value(kind)}")
        if is_truthy(value.get("primary")):
            params.append("TYPE=PREF")
    if attribute == "photos":
        params.append("VALUE=URI")
    return params


def _multi_part_body(sub_fields: tuple[str, ...], value: Complex) -> str:
    parts: list[str] = []
    for sub_field in sub_fields:
        text = value.text(sub_field) if sub_field else None
        parts.append(escape_value(text) if text is not None else "")
    return ";".join(parts)


def encode_body(attribute: str, value: AttributeValue) -> str | None:
    """Render the escaped body of a content line, or None if unencodable."""
    if isinstance(value, Complex):
        if value.has("value"):
            text = value.text("value")
        elif attribute == "label":
            text = value.text("formatted")
        else:
            descriptor = descriptor_for(attribute)
            if descriptor is not None and descriptor.multi_part:
                return _multi_part_body(descriptor.sub_fields, value)
            return None
        return escape_value(text) if text is not None else None
    if isinstance(value, ScalarList):
        return ",".join(escape_value(item.text) for item in value.items)
    if isinstance(value, ComplexList):
        texts = [item.text("value") for item in value.items]
        if any(text is None for text in texts):
            return None
        return ",".join(escape_value(text) for text in texts)
    return escape_value(value.text)


def encode_singular(
    attribute: str,
    value: AttributeValue,
    on_drop: DropHook | None = None,
) -> str | None:
    """Encode one attribute value as a folded content line, or None."""
    identifier = vcard_field_name(attribute, value)
    if identifier is None:
        notify_drop(on_drop, attribute, UNRECOGNIZED)
        return None

    body = encode_body(attribute, value)
    if body is None:
        notify_drop(on_drop, attribute, UNENCODABLE)
        return None
    if not body:
        notify_drop(on_drop, attribute, EMPTY)
        return None

    head = ";".join([identifier, *_parameters(attribute, value)])
    return fold_line(f"{head}:{body}")
