"""
Parser-specific data models

Type-safe structures for scanner bookkeeping and parse diagnostics.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List

from .shader import ModuleKind


class DiagnosticKind(Enum):
    """
    Taxonomy of parse diagnostics

    LEXICAL: unrecognized directive keyword
    SYNTACTIC: wrong argument count for a recognized keyword
    COMPOSITION: module/program/type-mapping state errors
    RESOURCE: include search path and file problems
    """
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"
    COMPOSITION = "composition"
    RESOURCE = "resource"


@dataclass(frozen=True)
class Diagnostic:
    """
    One problem found while parsing

    Attributes:
        kind: DiagnosticKind of the problem
        message: Human-readable description (e.g., "main: Program has already been defined.")
        origin: File the directive came from, or "<source>" for in-memory text
        line: 1-based line number of the directive
        statement: The directive line as written, without its marker
    """
    kind: DiagnosticKind
    message: str
    origin: str = "<source>"
    line: int = 0
    statement: str = ""

    @property
    def location(self) -> str:
        return f"{self.origin}:{self.line}"

    def __str__(self) -> str:
        return f"{self.location}: {self.kind.value}: {self.message}"


@dataclass
class ScanFrame:
    """
    Scan state for one source buffer

    One frame exists per file being scanned: the root source and each nested
    include. Only the innermost frame scans; frames below it wait for the
    nested scan to return.

    Attributes:
        source: Full text of the buffer
        origin: Path of the file, or "<source>"
        last_end: Offset where the previous directive boundary ended (the
                  position of its terminating newline); 0 before the first
        position: Offset of the directive currently being processed
    """
    source: str
    origin: str = "<source>"
    last_end: int = 0
    position: int = 0

    def line_at(self, offset: int) -> int:
        """1-based line number of an offset in the buffer"""
        return self.source.count("\n", 0, offset) + 1

    def span_take(self, end: int) -> str:
        """Copy of the text between the previous boundary and `end`"""
        return self.source[self.last_end:end]


@dataclass
class OpenModule:
    """
    The module currently accepting text

    Attributes:
        name: Name from the opening directive
        kind: Kind from the opening directive
        spans: Text spans accumulated so far, in order
    """
    name: str
    kind: ModuleKind
    spans: List[str] = field(default_factory=list)

    def code_join(self) -> str:
        """Concatenate the spans and trim surrounding whitespace"""
        return "".join(self.spans).strip()
