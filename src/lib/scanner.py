"""
Scanner for directive-annotated shader source

Walks one source buffer looking for two things only: line comments, which
are skipped so a marker inside them is not taken for a directive, and
directive markers, whose line is split, classified and handed to the
interpreter. Everything else is body text; it is never inspected and only
reaches a module in bulk, as the span between two directive boundaries.

Example:
    >>> context = ParseContext(ModuleRegistry(), TypeRegistry(), DiagnosticSink())
    >>> Scanner(context).scan("#module m\\nfloat x;\\n#end\\n")
    >>> context.modules.get("m").code
    'float x;'
"""

import re
from pathlib import Path
from typing import Optional, Pattern

from ..config import appsettings
from ..models.context import ParseContext
from ..models.parser import ScanFrame
from .directives import DirectiveRegistry
from .includes import IncludeResolver
from .interpreter import DirectiveInterpreter
from .log import LOG


class Scanner:
    """
    Character-level driver of one parse

    A single Scanner serves the root buffer and every included buffer: the
    include resolver calls back into scan(), which pushes a new frame on the
    context for the nested file.
    """

    def __init__(self, context: ParseContext, registry: Optional[DirectiveRegistry] = None) -> None:
        """
        Args:
            context: Shared parse state
            registry: Directive registry used for classification
        """
        self.context = context
        self.registry = registry or DirectiveRegistry()
        self.resolver = IncludeResolver(context, self.scan)
        self.interpreter = DirectiveInterpreter(context, self.resolver, self.registry)
        self.pattern = self.pattern_compile()

    def pattern_compile(self) -> Pattern[str]:
        """Regex matching either a comment opener or a directive marker"""
        return re.compile(
            f"(?P<comment>{re.escape(appsettings.comment_marker)})"
            f"|(?P<directive>{re.escape(appsettings.directive_marker)})"
        )

    def scan(self, source: str, origin: str = "<source>", canonical: Optional[Path] = None) -> None:
        """
        Scan one buffer into the shared context

        Args:
            source: Full text of the buffer
            origin: File path for diagnostics, or "<source>"
            canonical: Resolved path of the file, tracked for cycle detection
        """
        frame = ScanFrame(source=source, origin=origin)
        with self.context.frame_enter(frame, canonical):
            LOG(f"Scanning {origin} (depth {self.context.include_depth})", level=2)
            self.frame_scan(frame)
            self.interpreter.frame_finish(frame)

    def frame_scan(self, frame: ScanFrame) -> None:
        source = frame.source
        marker_width = len(appsettings.directive_marker)
        position = 0

        while True:
            match = self.pattern.search(source, position)
            if match is None:
                break

            line_end = source.find("\n", match.start())
            if line_end == -1:
                line_end = len(source)

            if match.lastgroup == "comment":
                position = line_end
                continue

            statement = source[match.start() + marker_width:line_end]
            directive = self.registry.statement_parse(statement)

            frame.position = match.start()
            self.interpreter.directive_process(directive, frame, statement)
            if directive.is_boundary:
                frame.last_end = line_end

            position = line_end + 1
