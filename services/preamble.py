"""SIP preamble rule: decode the front-matter, then check schema, order and field values.

Every check runs against the same decoded mapping and reports through the
caller's ``report(message, node)`` callback. Only a decode failure stops
validation early; everything else is reported and validation continues.
"""

import logging
import re
from collections.abc import Callable
from datetime import date

import yaml
from yaml.constructor import ConstructorError

from services.reporter import PreambleNode
from services.schema import (
    AUTHOR_RE,
    DATE_HEADERS,
    HEADER_ALL,
    HEADER_LINE_RE,
    HEADER_ORDER,
    HEADER_REQUIRED,
    ISO_DATE_RE,
    PREAMBLE_SCHEMA,
    VALID_CATEGORIES,
    VALID_STATUSES,
    has_type,
    type_name,
)

log = logging.getLogger(__name__)

DECODE_MESSAGE = "The front-matter is not proper YAML"


_BOOL_TAG = "tag:yaml.org,2002:bool"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _PreambleLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 scalars and no duplicate keys.

    Dates stay plain strings so the date rules see the source text (a YAML
    date object would turn ``2024-13-01`` into a constructor error). Only
    true/false are booleans, so ``title: yes`` is a string, and ``1e3`` is a
    number.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                continue
            key = (key_node.tag, key_node.value)
            if key in seen:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key_node.value!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


_PreambleLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (_BOOL_TAG, _FLOAT_TAG, _TIMESTAMP_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_PreambleLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)
# Added after the int resolver, so plain integers still resolve to int.
_PreambleLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+0123456789."),
)


class PreambleError(ValueError):
    """The preamble cannot be turned into a typed mapping."""


class DecodeError(PreambleError):
    """The preamble is not YAML, or not a YAML mapping."""


class TypeMismatchError(PreambleError):
    def __init__(self, header: str, actual: str, expected: str):
        self.header = header
        self.actual = actual
        self.expected = expected
        super().__init__(
            f'Parsed header "{header}" has wrong type. Has "{actual}", should be "{expected}"'
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_preamble(raw: str) -> dict:
    """Decode raw front-matter text and narrow it to a typed preamble mapping.

    Raises DecodeError for invalid YAML or a non-mapping document, and
    TypeMismatchError when a known header carries a value of the wrong type.
    """
    try:
        data = yaml.load(raw, Loader=_PreambleLoader)
    except yaml.YAMLError as e:
        raise DecodeError(f"Preamble is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Preamble is not a YAML object, got {type_name(data)}")

    for header, value in data.items():
        if header in PREAMBLE_SCHEMA and not has_type(value, header):
            raise TypeMismatchError(
                header, type_name(value), PREAMBLE_SCHEMA[header]["type_name"]
            )
    return data


# ---------------------------------------------------------------------------
# Schema checks
# ---------------------------------------------------------------------------


def check_required(preamble: dict) -> list[str]:
    return [
        f'Required header "{header}" is missing from preamble.'
        for header in HEADER_REQUIRED
        if header not in preamble
    ]


def check_unknown(preamble: dict) -> list[str]:
    return [
        f'Preamble has unknown header "{header}".'
        for header in preamble
        if header not in HEADER_ALL
    ]


def extract_header_order(raw: str) -> list[str]:
    """Header names in the order they appear in the raw text."""
    return HEADER_LINE_RE.findall(raw)


def check_order(raw: str) -> list[str]:
    """Report the first header out of canonical order, at most once."""
    found = [h for h in extract_header_order(raw) if h in HEADER_ALL]
    present = set(found)
    expected = [h for h in HEADER_ORDER if h in present]
    for header, wanted in zip(found, expected):
        if header != wanted:
            return [f'Preamble header "{header}" is not in proper order']
    return []


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


def is_valid_date(value: str, today: date) -> bool:
    """YYYY-MM-DD whose year, month and day are each no later than today's.

    The comparison is per component, not calendar order: with today at
    2026-10-17, 2026-01-20 is rejected because 20 > 17.
    """
    match = ISO_DATE_RE.fullmatch(value)
    if match is None:
        return False
    year, month, day = (int(match.group(g)) for g in ("year", "month", "day"))
    return year <= today.year and month <= today.month and day <= today.day


def check_dates(preamble: dict, raw: str, today: date) -> list[str]:
    return [
        f'Preamble header "{header}" is not a valid date in ISO 8601 format'
        for header in DATE_HEADERS
        if header in preamble and not is_valid_date(preamble[header], today)
    ]


def check_status(preamble: dict, raw: str, today: date) -> list[str]:
    status = preamble.get("status")
    if status is not None and status not in VALID_STATUSES:
        return ['Header "status" is not a valid status']
    return []


def check_living_updated(preamble: dict, raw: str, today: date) -> list[str]:
    # Compared against lowercase "living" while the status vocabulary says
    # "Living", so a valid status never trips this. Kept as-is until the
    # intended casing is settled.
    if preamble.get("status") == "living" and "updated" not in preamble:
        return ['SIP has status of "living" but doesn\'t have "updated" header']
    return []


def check_category(preamble: dict, raw: str, today: date) -> list[str]:
    if "category" not in preamble:
        return []
    category = preamble["category"]
    if not isinstance(category, str) or category not in VALID_CATEGORIES:
        return ['Header "category" is not a valid category']
    return []


def parse_author(author: str) -> tuple[bool, str | None]:
    """Match one author entry. Returns (well_formed, handle or None)."""
    match = AUTHOR_RE.match(author.strip())
    if match is None:
        return False, None
    return True, match.group(1) or match.group(2)


def check_author(preamble: dict, raw: str, today: date) -> list[str]:
    if "author" not in preamble:
        return []
    has_handle = False
    for author in preamble["author"].split(","):
        ok, handle = parse_author(author)
        if not ok:
            return ['Preamble header "author" is malformed']
        if handle:
            has_handle = True
    if not has_handle:
        return ['Preamble header "author" doesn\'t have at least one github account']
    return []


FIELD_RULES = (
    check_dates,
    check_status,
    check_living_updated,
    check_category,
    check_author,
)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def validate_preamble(
    node: PreambleNode,
    report: Callable[[str, PreambleNode], None],
    today: date | None = None,
) -> None:
    """Run every preamble check on node, passing each violation to report."""
    if node.type != "yaml":
        raise ValueError(f"Expected a yaml node, got {node.type!r}")
    today = today or date.today()

    try:
        preamble = load_preamble(node.value)
    except PreambleError as e:
        log.debug("Front-matter YAML parse error: %s", e)
        report(DECODE_MESSAGE, node)
        return
    log.debug("Parsed preamble: %r", preamble)

    messages = check_required(preamble) + check_unknown(preamble) + check_order(node.value)
    for rule in FIELD_RULES:
        messages.extend(rule(preamble, node.value, today))

    for message in messages:
        report(message, node)
