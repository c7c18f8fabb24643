"""Locate the front-matter block of a SIP document and validate it."""

from datetime import date

from services.preamble import validate_preamble
from services.reporter import Diagnostic, PreambleNode, Reporter


def find_preamble(content: str, path: str | None = None) -> PreambleNode | None:
    """Return the ``---`` delimited block at the top of content, or None.

    start_line is the opening delimiter's line (1-based), end_line the closing one.
    """
    if not content.startswith("---"):
        return None

    lines = content.split("\n")
    if lines[0].strip() != "---":
        return None

    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return None

    return PreambleNode(
        value="\n".join(lines[1:end_idx]),
        start_line=1,
        end_line=end_idx + 1,
        path=path,
    )


def validate_document(
    content: str, path: str | None = None, today: date | None = None
) -> list[Diagnostic]:
    """Diagnostics for one document. Documents without front-matter have none."""
    node = find_preamble(content, path)
    if node is None:
        return []
    reporter = Reporter()
    validate_preamble(node, reporter.report, today=today)
    return reporter.diagnostics
