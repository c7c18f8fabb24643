"""Diagnostic collection for preamble validation."""

import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreambleNode:
    """The front-matter block of one document, as handed to the validator."""

    value: str
    start_line: int = 1
    end_line: int = 1
    path: str | None = None
    type: str = "yaml"


@dataclass(frozen=True)
class Diagnostic:
    message: str
    node: PreambleNode

    @property
    def line(self) -> int:
        return self.node.start_line

    def to_dict(self) -> dict:
        return {"message": self.message, "line": self.line, "path": self.node.path}

    def __str__(self) -> str:
        return f"{self.node.path or '<preamble>'}:{self.line}: {self.message}"


@dataclass
class Reporter:
    """Accumulates diagnostics in the order they are reported."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, message: str, node: PreambleNode) -> None:
        log.debug("%s:%d: %s", node.path or "<preamble>", node.start_line, message)
        self.diagnostics.append(Diagnostic(message, node))

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]
