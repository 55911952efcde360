"""
Parse context model

ParseContext is the single state value threaded by reference through the
scanner, the interpreter and every recursive include. Nothing about a parse
lives in module-level state.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, TYPE_CHECKING

from .parser import OpenModule, ScanFrame
from .shader import ShaderModule

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.registry import ModuleRegistry, TypeRegistry
    from ..lib.diagnostics import DiagnosticSink


@dataclass
class ProgramSlot:
    """
    The program set by #program: its name and module references

    Attributes:
        name: Program name
        vertex: The VERTEX module it was built from
        fragment: The FRAGMENT module it was built from
    """
    name: str
    vertex: ShaderModule
    fragment: ShaderModule


@dataclass
class ParseContext:
    """
    Shared interpreter state for one top-level parse.

    Attributes:
        modules: Registry of finalized modules
        ctypes: Registry of GLSL -> host type-name mappings
        sink: Diagnostic sink collecting every reported problem
        search_paths: Ordered include search directories (front is searched first)
        open_module: The module currently accepting text, None when closed
        program: The program, set at most once
        include_stack: Canonical paths of every file currently being scanned
        frames: Scan frames of every buffer currently being scanned, innermost last
    """
    modules: 'ModuleRegistry'
    ctypes: 'TypeRegistry'
    sink: 'DiagnosticSink'
    search_paths: List[str] = field(default_factory=list)
    open_module: Optional[OpenModule] = None
    program: Optional[ProgramSlot] = None
    include_stack: List[Path] = field(default_factory=list)
    frames: List[ScanFrame] = field(default_factory=list)

    @property
    def frame(self) -> Optional[ScanFrame]:
        """Innermost scan frame, the one actively scanning"""
        return self.frames[-1] if self.frames else None

    @property
    def include_depth(self) -> int:
        """Number of nested includes below the root frame"""
        return max(len(self.frames) - 1, 0)

    @contextmanager
    def searchPath_push(self, directory: str) -> Iterator[None]:
        """
        Put `directory` at the front of the search paths for the block.

        Example:
            with context.searchPath_push("shaders/lib"):
                scanner.scan(text, origin)
        """
        self.search_paths.insert(0, directory)
        try:
            yield
        finally:
            self.search_paths.pop(0)

    @contextmanager
    def frame_enter(self, frame: ScanFrame, canonical: Optional[Path] = None) -> Iterator[ScanFrame]:
        """Push a scan frame (and its canonical path, if any) for the block"""
        self.frames.append(frame)
        if canonical is not None:
            self.include_stack.append(canonical)
        try:
            yield frame
        finally:
            if canonical is not None:
                self.include_stack.pop()
            self.frames.pop()
