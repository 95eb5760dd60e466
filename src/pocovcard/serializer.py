"""vCard 3.0 serialization of Portable Contacts records.

    >>> from pocovcard.serializer import serialize_record
    >>> print(serialize_record({"displayName": "Joseph Smarr", "note": "a, b"}))
    BEGIN:VCARD
    VERSION:3.0
    PRODID:-//pocovcard//EN
    FN:Joseph Smarr
    NOTE:a\\, b
    END:VCARD
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .encoding import DropHook
from .mapper import map_attribute
from .model import ContactRecord, to_record

PRODID = "-//pocovcard//EN"


def serialize_record(
    record: ContactRecord | Any,
    *,
    prodid: str = PRODID,
    on_drop: DropHook | None = None,
) -> str:
    """Serialize one contact into a single vCard, without a trailing newline."""
    lines = ["BEGIN:VCARD", "VERSION:3.0", f"PRODID:{prodid}"]
    for attribute, value in to_record(record).items():
        lines.extend(map_attribute(attribute, value, on_drop))
    lines.append("END:VCARD")
    return "\n".join(lines)


def serialize_records(
    records: Iterable[ContactRecord | Any],
    *,
    prodid: str = PRODID,
    on_drop: DropHook | None = None,
) -> str:
    """Serialize contacts into concatenated vCards joined by single newlines."""
    return "\n".join(
        serialize_record(record, prodid=prodid, on_drop=on_drop) for record in records
    )
