from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .model import ContactRecord, to_record

logger = logging.getLogger(__name__)


class SourceError(ValueError):
    """A contact source could not be read as Portable Contacts data."""


# ── Portable Contacts documents ────────────────────────────────────────────────
#
# Accepted shapes:
#
#   {"displayName": ...}                      a single entry
#   [{"displayName": ...}, ...]               a list of entries
#   {"startIndex": 0, "entry": {...} | [...]} a Portable Contacts response

def load_entries(data: Any) -> list[ContactRecord]:
    """Return the contact records held in a decoded JSON document."""
    if isinstance(data, Mapping) and "entry" in data:
        data = data["entry"]
    if isinstance(data, Mapping):
        return [to_record(data)]
    if isinstance(data, list):
        records = []
        for i, entry in enumerate(data):
            if not isinstance(entry, Mapping):
                raise SourceError(f"entry {i} is not an object")
            records.append(to_record(entry))
        return records
    raise SourceError(f"expected an object or a list of objects, got {type(data).__name__}")


def read_entries_from_files(paths: list[Path]) -> list[tuple[ContactRecord, str]]:
    """Parse JSON files and return (record, source_label) pairs in file order."""
    results: list[tuple[ContactRecord, str]] = []
    for p in paths:
        label = p.stem
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SourceError(f"{p}: invalid JSON ({exc})") from exc
        try:
            records = load_entries(data)
        except SourceError as exc:
            raise SourceError(f"{p}: {exc}") from exc
        logger.debug("%s: %d entr(ies)", label, len(records))
        results.extend((r, label) for r in records)
    return results


def collect_sources(source_dir: Path) -> list[Path]:
    """Return all .json files found directly inside source_dir, sorted by name."""
    if not source_dir.is_dir():
        return []
    return sorted(p for p in source_dir.iterdir() if p.suffix.lower() == ".json")


def write_vcards(text: str, path: Path) -> int:
    """Write serialized vCards to path and return how many cards it holds."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return sum(1 for line in text.split("\n") if line == "BEGIN:VCARD")
