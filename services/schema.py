"""SIP preamble schema: field table, vocabularies and patterns."""

import re

# Declaration order is the canonical header order.
PREAMBLE_SCHEMA = {
    "sip":      {"type": (int, float), "type_name": "number", "required": True},
    "title":    {"type": str, "type_name": "string", "required": True},
    "status":   {"type": str, "type_name": "string", "required": True},
    "category": {"type": None, "type_name": None, "required": True},     # checked by the category rule
    "author":   {"type": str, "type_name": "string", "required": True},
    "created":  {"type": str, "type_name": "string", "required": True},   # ISO: YYYY-MM-DD
    "updated":  {"type": str, "type_name": "string", "required": False},  # ISO: YYYY-MM-DD
}

HEADER_ORDER = tuple(PREAMBLE_SCHEMA)
HEADER_REQUIRED = tuple(h for h, spec in PREAMBLE_SCHEMA.items() if spec["required"])
HEADER_OPTIONAL = tuple(h for h, spec in PREAMBLE_SCHEMA.items() if not spec["required"])
HEADER_ALL = frozenset(PREAMBLE_SCHEMA)
DATE_HEADERS = ("created", "updated")

VALID_STATUSES = frozenset({"Draft", "Review", "Final", "Withdrawn", "Living"})
VALID_CATEGORIES = frozenset({"Core", "Blockchain", "Meta"})

ISO_DATE_RE = re.compile(
    r"^(?P<year>[0-9]{4})-(?P<month>0[1-9]|1[0-2])-(?P<day>0[1-9]|[12][0-9]|3[01])$"
)
HEADER_LINE_RE = re.compile(r"^([a-z]+):.+$", re.MULTILINE)

GITHUB_USERNAME = r"[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}"
EMAIL = r".+@.+"
# Group 1: handle after an email, group 2: handle without an email.
AUTHOR_RE = re.compile(
    rf"^\w[.\w\s]*(?: (?:<{EMAIL}>(?: (\(@{GITHUB_USERNAME}\)))?)|(\(@{GITHUB_USERNAME}\)))?$"
)


def type_name(value) -> str:
    """Name a decoded YAML value's type the way diagnostics spell it."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    return "object"


def has_type(value, header: str) -> bool:
    """True when value matches the declared type of header (bools are never numbers).

    Headers declared without a type accept any value.
    """
    spec = PREAMBLE_SCHEMA[header]
    if spec["type"] is None:
        return True
    if isinstance(value, bool):
        return False
    return isinstance(value, spec["type"])
