"""
Include resolution

Finds an #include target along the search paths and scans it with the same
ParseContext. While the included file is scanned, its own directory sits at
the front of the search paths, so relative includes inside it resolve next
to it first.
"""

import os
from pathlib import Path
from typing import Callable, Optional

from ..config import appsettings
from ..models.context import ParseContext
from ..models.parser import DiagnosticKind, ScanFrame
from .log import LOG


# (source text, origin, canonical path) -> None
ScanFunction = Callable[[str, str, Optional[Path]], None]


def source_read(path: Path) -> str:
    """
    Read a shader source file with its line endings untouched

    Newline translation is disabled so "\\r\\n" sources keep their bytes in
    module text.

    Raises:
        OSError, UnicodeDecodeError: If the file cannot be read or decoded
    """
    with open(path, 'r', encoding=appsettings.source_encoding, newline='') as f:
        return f.read()


class IncludeResolver:
    """
    Resolves and recursively scans included files

    Every file currently being scanned has its canonical path on the
    context's include stack; re-entering one of them is reported as a
    cyclic include rather than recursing.
    """

    def __init__(self, context: ParseContext, scan: ScanFunction) -> None:
        """
        Args:
            context: Shared parse state
            scan: Scanner entry point used for the included text
        """
        self.context = context
        self.scan = scan

    def path_resolve(self, requested: str) -> Optional[str]:
        """
        Find the first search directory holding `requested`

        A candidate counts as found only if it can actually be opened for
        reading.

        Args:
            requested: Path as written in the #include directive

        Returns:
            The candidate path, or None if no directory has it

        Example:
            With search_paths ["shaders/lib", "shaders"] and
            "shaders/noise.glsl" present:
            >>> resolver.path_resolve("noise.glsl")
            'shaders/noise.glsl'
        """
        for directory in self.context.search_paths:
            candidate = appsettings.includeCandidate_make(directory, requested)
            try:
                with open(candidate, "rb"):
                    return candidate
            except OSError:
                continue
        return None

    def include_process(self, requested: str, frame: ScanFrame, statement: str) -> None:
        """
        Resolve, read and scan one included file

        Args:
            requested: Path as written in the #include directive
            frame: Frame of the includer, for diagnostics
            statement: The #include line text, for diagnostics
        """
        sink = self.context.sink

        path = self.path_resolve(requested)
        if path is None:
            sink.report(
                DiagnosticKind.RESOURCE,
                f"Couldn't find file {requested}, in the provided paths.",
                frame,
                statement,
            )
            return

        canonical = Path(path).resolve()
        if canonical in self.context.include_stack:
            sink.report(DiagnosticKind.RESOURCE, f"{requested}: Cyclic include.", frame, statement)
            return

        if self.context.include_depth >= appsettings.max_include_depth:
            sink.report(
                DiagnosticKind.RESOURCE,
                f"{requested}: Include depth exceeds {appsettings.max_include_depth}.",
                frame,
                statement,
            )
            return

        try:
            text = source_read(Path(path))
        except (OSError, UnicodeDecodeError) as e:
            sink.report(
                DiagnosticKind.RESOURCE, f"{requested}: Couldn't read file ({e}).", frame, statement
            )
            return

        LOG(f"Including {path} ({len(text)} chars)", level=2)
        with self.context.searchPath_push(os.path.dirname(path)):
            self.scan(text, path, canonical)
