"""
Directive interpreter

A small state machine over ParseContext. Its composition state is either
closed (no module open) or open on exactly one module, and that state is
shared across nested includes: an #include reached while a module is open
keeps feeding the same module.

Span accumulation: when a boundary directive is reached while a module is
open, the raw text between the previous boundary and this directive is
appended to the module before the directive is acted on. A span of exactly
`gap_skip_width` encoded bytes (the blank line left between two directives)
is dropped. Comments stay inside spans verbatim; pass-through directives
(#define, #version, ...) are not boundaries at all, so their lines also
stay verbatim in module text.
"""

from typing import Callable, Dict, Optional

from ..config import appsettings
from ..models.context import ParseContext, ProgramSlot
from ..models.directives import Directive, DirectiveKind
from ..models.parser import DiagnosticKind, OpenModule, ScanFrame
from ..models.shader import ModuleKind, ShaderModule
from .directives import DirectiveRegistry
from .includes import IncludeResolver
from .log import LOG, verbosity_get


Handler = Callable[[Directive, ScanFrame, str], None]

# Opening directive -> (module kind, label used in diagnostics)
MODULE_OPENERS: Dict[DirectiveKind, tuple] = {
    DirectiveKind.MODULE: (ModuleKind.GENERIC, "module"),
    DirectiveKind.VERT: (ModuleKind.VERTEX, "vertex module"),
    DirectiveKind.FRAG: (ModuleKind.FRAGMENT, "fragment module"),
}


class DirectiveInterpreter:
    """
    Applies classified directives to a ParseContext

    Handlers are looked up by DirectiveKind; every handler has the signature
    (directive, frame, statement) and reports problems to the context's
    sink instead of raising.
    """

    def __init__(
        self,
        context: ParseContext,
        resolver: IncludeResolver,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        """
        Args:
            context: Shared parse state
            resolver: Include resolver feeding files back into the scanner
            registry: Directive registry, used to tell lexical from syntactic errors
        """
        self.context = context
        self.resolver = resolver
        self.registry = registry or DirectiveRegistry()
        self.handlers: Dict[DirectiveKind, Handler] = {
            DirectiveKind.END: self.module_end,
            DirectiveKind.MODULE: self.module_open,
            DirectiveKind.VERT: self.module_open,
            DirectiveKind.FRAG: self.module_open,
            DirectiveKind.PROGRAM: self.program_set,
            DirectiveKind.INCLUDE: self.file_include,
            DirectiveKind.INCLUDE_MODULE: self.module_include,
            DirectiveKind.CTYPEDEF: self.ctype_define,
            DirectiveKind.INVALID: self.directive_reject,
        }

    def directive_process(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        """
        Flush pending module text, then act on one directive

        Args:
            directive: Classified directive
            frame: Scan frame positioned on the directive's marker
            statement: Directive line text, for diagnostics
        """
        if not directive.is_boundary:
            return

        if self.context.open_module is not None:
            self.span_append(frame.span_take(frame.position))

        if verbosity_get() >= 3:
            LOG(f"{frame.origin}:{frame.line_at(frame.position)} #{statement.strip()}", level=3)
        self.handlers[directive.kind](directive, frame, statement)

    def span_append(self, span: str) -> None:
        """Append raw source text to the open module, skipping blank-line gaps

        The gap width is measured in encoded bytes, so a newline followed by
        one multi-byte character is real text and kept.
        """
        if len(span.encode(appsettings.source_encoding)) == appsettings.gap_skip_width:
            return
        self.context.open_module.spans.append(span)

    def frame_finish(self, frame: ScanFrame) -> None:
        """
        Close out a scanned buffer

        Text after the last boundary belongs to the open module, if any. At
        the end of the root buffer a module still open is reported.
        """
        if self.context.open_module is None:
            return

        frame.position = len(frame.source)
        if frame.last_end < frame.position:
            self.span_append(frame.span_take(frame.position))

        if self.context.include_depth == 0:
            self.context.sink.report(
                DiagnosticKind.COMPOSITION,
                f"{self.context.open_module.name}: Module was never ended.",
                frame,
            )
            self.context.open_module = None

    def module_open(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        kind, label = MODULE_OPENERS[directive.kind]
        name = directive.args[0]

        if self.context.open_module is not None:
            self.context.sink.report(
                DiagnosticKind.COMPOSITION,
                f"{name}: New {label} started before ending the last module.",
                frame,
                statement,
            )
            return

        self.context.open_module = OpenModule(name=name, kind=kind)
        LOG(f"Opened {label} '{name}'", level=2)

    def module_end(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        """Finalize the open module and register it"""
        open_module = self.context.open_module
        if open_module is None:
            self.context.sink.report(
                DiagnosticKind.COMPOSITION, "Extraneous end statement.", frame, statement
            )
            return

        module = ShaderModule(
            name=open_module.name,
            kind=open_module.kind,
            code=open_module.code_join(),
            origin=frame.origin,
        )
        if not self.context.modules.insert(module):
            self.context.sink.report(
                DiagnosticKind.COMPOSITION,
                f"{module.name}: Module has already been defined.",
                frame,
                statement,
            )
        else:
            LOG(f"Closed module '{module.name}' ({len(module.code)} chars)", level=2)

        self.context.open_module = None

    def program_set(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        """
        Pair a vertex and a fragment module into the program

        Both module references are checked before giving up, so a single
        directive can report a bad vertex and a bad fragment module at once.
        """
        name, vert_name, frag_name = directive.args
        sink = self.context.sink

        if self.context.program is not None:
            sink.report(
                DiagnosticKind.COMPOSITION,
                f"{name}: Program has already been defined.",
                frame,
                statement,
            )
            return

        vertex = self.context.modules.get_ofKind(vert_name, ModuleKind.VERTEX)
        fragment = self.context.modules.get_ofKind(frag_name, ModuleKind.FRAGMENT)

        if vertex is None:
            sink.report(
                DiagnosticKind.COMPOSITION, f"{vert_name}: Vertex module not found.", frame, statement
            )
        if fragment is None:
            sink.report(
                DiagnosticKind.COMPOSITION, f"{frag_name}: Fragment module not found.", frame, statement
            )
        if vertex is None or fragment is None:
            return

        self.context.program = ProgramSlot(name=name, vertex=vertex, fragment=fragment)
        LOG(f"Program '{name}' = {vert_name} + {frag_name}", level=2)

    def file_include(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        if not self.context.search_paths:
            self.context.sink.report(
                DiagnosticKind.RESOURCE,
                "Cannot include files without providing search paths.",
                frame,
                statement,
            )
            return
        self.resolver.include_process(directive.args[0], frame, statement)

    def module_include(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        """Append a finalized module's code to the open module"""
        name = directive.args[0]
        module = self.context.modules.get(name)

        if module is None:
            self.context.sink.report(
                DiagnosticKind.COMPOSITION, f"{name}: Module couldn't be found.", frame, statement
            )
            return

        if self.context.open_module is None:
            self.context.sink.report(
                DiagnosticKind.COMPOSITION,
                f"{name}: include_module used outside any open module.",
                frame,
                statement,
            )
            return

        self.context.open_module.spans.append(module.code)

    def ctype_define(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        glsl_type, host_type = directive.args
        if not self.context.ctypes.insert(glsl_type, host_type):
            self.context.sink.report(
                DiagnosticKind.COMPOSITION,
                f"{glsl_type}: Type has already been mapped.",
                frame,
                statement,
            )

    def directive_reject(self, directive: Directive, frame: ScanFrame, statement: str) -> None:
        """Report an unrecognized or arity-mismatched directive"""
        if self.registry.spec_get(directive.keyword) is None:
            kind = DiagnosticKind.LEXICAL
        else:
            kind = DiagnosticKind.SYNTACTIC
        self.context.sink.report(kind, directive.error, frame, statement)
