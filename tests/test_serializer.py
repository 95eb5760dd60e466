from __future__ import annotations

import types

import vobject

from pocovcard.cli import SAMPLE_ENTRY
from pocovcard.model import to_record
from pocovcard.report import DropTally
from pocovcard.serializer import PRODID, serialize_record, serialize_records

HEADER = ["BEGIN:VCARD", "VERSION:3.0", f"PRODID:{PRODID}"]

EXPECTED_SAMPLE = (
    "BEGIN:VCARD\n"
    "VERSION:3.0\n"
    f"PRODID:{PRODID}\n"
    "FN:Joseph Smarr\n"
    "N:Smarr;Joseph;;;\n"
    "NOTE:in vCard\\, escape commas\n"
    "EMAIL;TYPE=WORK:joseph@plaxo.com\n"
    "CATEGORIES:math enthusiast,badass mc\n"
    "END:VCARD"
)


def _full_entry() -> dict:
    return {
        "id": "42",
        "displayName": "Joseph Smarr",
        "name": {"givenName": "Joseph", "familyName": "Smarr", "honorificPrefix": "Mr."},
        "nickname": "JS",
        "birthday": "1978-01-01",
        "emails": [{"value": "joseph@plaxo.com", "type": "work", "primary": True}],
        "phoneNumbers": [{"value": "+1 650 555 1212", "type": "mobile"}],
        "addresses": [{"type": "work", "streetAddress": "1 Main St", "locality": "Mountain View",
                       "formatted": "1 Main St, Mountain View"}],
        "organizations": [{"name": "Plaxo", "title": "Chief Platform Architect"}],
        "ims": [{"value": "jsmarr", "type": "aim"}],
        "urls": [{"value": "http://josephsmarr.com", "type": "blog"}],
        "photos": [{"value": "http://example.com/joseph.jpg"}],
        "tags": ["math enthusiast"],
        "note": "x" * 200,
    }


# ── Canonical fixture ──────────────────────────────────────────────────────────

def test_sample_entry_serializes_exactly():
    assert serialize_record(SAMPLE_ENTRY) == EXPECTED_SAMPLE


def test_sample_entry_from_attribute_objects():
    entry = types.SimpleNamespace(
        displayName="Joseph Smarr",
        name=types.SimpleNamespace(givenName="Joseph", familyName="Smarr"),
        note="in vCard, escape commas",
        emails=[types.SimpleNamespace(value="joseph@plaxo.com", type="work")],
        tags=["math enthusiast", "badass mc"],
    )
    assert serialize_record(entry) == EXPECTED_SAMPLE


def test_sample_entry_from_converted_record():
    assert serialize_record(to_record(SAMPLE_ENTRY)) == EXPECTED_SAMPLE


# ── Document structure ─────────────────────────────────────────────────────────

def test_empty_record_is_header_and_footer():
    assert serialize_record({}) == "\n".join(HEADER + ["END:VCARD"])


def test_unrecognized_only_record_is_minimal():
    assert serialize_record({"accounts": [{"domain": "x"}], "connected": True}) == (
        "\n".join(HEADER + ["END:VCARD"])
    )


def test_no_trailing_newline():
    assert not serialize_record(SAMPLE_ENTRY).endswith("\n")


def test_attribute_order_preserved():
    text = serialize_record({"note": "n", "displayName": "d", "birthday": "b"})
    body = text.split("\n")[3:-1]
    assert body == ["NOTE:n", "FN:d", "BDAY:b"]


def test_custom_prodid():
    text = serialize_record({}, prodid="-//Example//EN")
    assert text.split("\n")[2] == "PRODID:-//Example//EN"


def test_input_not_mutated():
    entry = _full_entry()
    snapshot = repr(entry)
    serialize_record(entry)
    assert repr(entry) == snapshot


def test_full_entry_lines():
    lines = serialize_record(_full_entry()).split("\n")
    assert lines[:3] == HEADER
    assert lines[-1] == "END:VCARD"
    assert "UID:42" in lines
    assert "N:Smarr;Joseph;;Mr.;" in lines
    assert "EMAIL;TYPE=WORK;TYPE=PREF:joseph@plaxo.com" in lines
    assert "TEL;TYPE=CELL:+1 650 555 1212" in lines
    assert "ADR;TYPE=WORK:;;1 Main St;Mountain View;;;" in lines
    assert "LABEL;TYPE=WORK:1 Main St\\, Mountain View" in lines
    assert "ORG:Plaxo;" in lines
    assert "TITLE:Chief Platform Architect" in lines
    assert "X-AIM;TYPE=AIM:jsmarr" in lines
    assert "PHOTO;VALUE=URI:http://example.com/joseph.jpg" in lines
    assert "NOTE:" + "x" * 70 in lines
    assert " " + "x" * 75 in lines


# ── Multiple records ───────────────────────────────────────────────────────────

def test_serialize_records_joined_by_single_newline():
    text = serialize_records([{"displayName": "A"}, {"displayName": "B"}])
    assert "END:VCARD\nBEGIN:VCARD" in text
    assert "\n\n" not in text
    assert text == serialize_record({"displayName": "A"}) + "\n" + serialize_record({"displayName": "B"})


def test_serialize_records_empty():
    assert serialize_records([]) == ""


def test_drop_hook_collects_across_records():
    tally = DropTally()
    serialize_records(
        [{"accounts": "x", "note": ""}, {"relationships": ["friend"]}],
        on_drop=tally,
    )
    assert tally.counts[("accounts", "unrecognized")] == 1
    assert tally.counts[("note", "empty")] == 1
    assert tally.counts[("relationships", "unrecognized")] == 1
    assert tally.total == 3


# ── Readable by a real vCard parser ────────────────────────────────────────────

def test_output_parses_with_vobject():
    text = serialize_records([_full_entry(), SAMPLE_ENTRY])
    cards = list(vobject.readComponents(text))
    assert len(cards) == 2
    first = cards[0]
    assert first.fn.value == "Joseph Smarr"
    assert first.note.value == "x" * 200
    assert "escape commas" in cards[1].note.value
