"""Static mapping tables from Portable Contacts attributes to vCard 3.0 fields.

See RFC 2426 and http://portablecontacts.net for both vocabularies.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .model import AttributeValue, Complex

FIELD_NAMES = MappingProxyType({
    "id":            "UID",
    "name":          "N",
    "displayName":   "FN",
    "birthday":      "BDAY",
    "anniversary":   "X-ANNIVERSARY",
    "note":          "NOTE",
    "utcOffset":     "TZ",
    "nickname":      "NICKNAME",
    "updated":       "REV",
    "title":         "TITLE",
    "label":         "LABEL",
    "addresses":     "ADR",
    "emails":        "EMAIL",
    "urls":          "URL",
    "phoneNumbers":  "TEL",
    "photos":        "PHOTO",
    "tags":          "CATEGORIES",
    "organizations": "ORG",
})

# "ims" instances pick their field from their type
IM_FIELD_NAMES = MappingProxyType({
    "aim":   "X-AIM",
    "icq":   "X-ICQ",
    "xmpp":  "X-JABBER",
    "msn":   "X-MSN",
    "yahoo": "X-YAHOO",
    "skype": "X-SKYPE-USERNAME",
})

# Sub-field order of semicolon-delimited values; "" reserves a blank slot.
MULTI_PART_FIELDS = MappingProxyType({
    "name":          ("familyName", "givenName", "middleName", "honorificPrefix", "honorificSuffix"),
    "addresses":     ("", "", "streetAddress", "locality", "region", "postalCode", "country"),
    "organizations": ("name", "department"),
})

SIMPLE_PLURAL_FIELDS = frozenset({"tags", "relationships"})

# plural on input, but vCard only gets the primary instance
PRIMARY_INSTANCE_FIELDS = frozenset({"organizations"})


@dataclass(frozen=True)
class FieldDescriptor:
    identifier: str | None
    sub_fields: tuple[str, ...] = ()
    simple_plural: bool = False
    primary_only: bool = False

    @property
    def multi_part(self) -> bool:
        return bool(self.sub_fields)


def _build_descriptors() -> dict[str, FieldDescriptor]:
    names = [*FIELD_NAMES, *sorted(SIMPLE_PLURAL_FIELDS - FIELD_NAMES.keys()), "ims"]
    return {
        name: FieldDescriptor(
            identifier=FIELD_NAMES.get(name),
            sub_fields=MULTI_PART_FIELDS.get(name, ()),
            simple_plural=name in SIMPLE_PLURAL_FIELDS,
            primary_only=name in PRIMARY_INSTANCE_FIELDS,
        )
        for name in names
    }


# built once at import, never mutated
DESCRIPTORS = MappingProxyType(_build_descriptors())


def descriptor_for(attribute: str) -> FieldDescriptor | None:
    """Return the static descriptor for a known attribute, else None."""
    return DESCRIPTORS.get(attribute)


def vcard_field_name(attribute: str, value: AttributeValue | None) -> str | None:
    """Return the vCard identifier for an attribute/value pair, or None."""
    descriptor = DESCRIPTORS.get(attribute)
    if descriptor is not None and descriptor.identifier is not None:
        return descriptor.identifier
    if attribute == "ims" and isinstance(value, Complex):
        im_type = value.text("type")
        if im_type is not None:
            return IM_FIELD_NAMES.get(im_type)
    return None
