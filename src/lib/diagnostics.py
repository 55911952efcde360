"""
Diagnostic sink

Parsing never stops at the first problem: every error is reported here as a
structured Diagnostic and scanning continues with the next directive.
"""

from typing import Iterator, List, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter

from ..models.parser import Diagnostic, DiagnosticKind, ScanFrame
from .lexer import ShaderweaveLexer
from .log import WARN


class DiagnosticSink:
    """
    Collects diagnostics for one parse

    Example:
        >>> sink = DiagnosticSink()
        >>> sink.report(DiagnosticKind.COMPOSITION, "Extraneous end statement.")
        >>> len(sink)
        1
    """

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        frame: Optional[ScanFrame] = None,
        statement: str = "",
    ) -> Diagnostic:
        """
        Record a diagnostic located at the directive currently being scanned

        Args:
            kind: Diagnostic category
            message: Human-readable message
            frame: Scan frame of the directive; omitted for end-of-parse problems
            statement: The directive line text, for rendering

        Returns:
            The recorded Diagnostic
        """
        if frame is None:
            diagnostic = Diagnostic(kind=kind, message=message, statement=statement)
        else:
            diagnostic = Diagnostic(
                kind=kind,
                message=message,
                origin=frame.origin,
                line=frame.line_at(frame.position),
                statement=statement,
            )
        self.diagnostics.append(diagnostic)
        WARN(str(diagnostic))
        return diagnostic

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)


def diagnostic_render(diagnostic: Diagnostic, color: bool = True) -> str:
    """
    Render a diagnostic for the terminal

    The first line is "origin:line: kind: message"; when the diagnostic
    carries its directive line, that line follows, highlighted with the
    ShaderweaveLexer.

    Args:
        diagnostic: Diagnostic to render
        color: Highlight with ANSI colors (TerminalFormatter), else plain text

    Example:
        shader.glsl:12: composition: Extraneous end statement.
            #end
    """
    header = str(diagnostic)
    if not diagnostic.statement:
        return header

    line = f"#{diagnostic.statement.strip()}\n"
    if color:
        line = highlight(line, ShaderweaveLexer(), TerminalFormatter())
    return f"{header}\n    {line.rstrip()}"
