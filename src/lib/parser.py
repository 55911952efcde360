"""
Parser for directive-annotated shader source

Turns a root shader source (plus whatever it #includes) into a ParsedShader:
the single program pairing a vertex and a fragment module, the GLSL -> host
type-name mapping, and every diagnostic reported along the way.

The parse runs in one pass:
1. Scanning: locate comments and directive lines in each buffer
2. Interpreting: open/close modules, build the program, follow includes,
   register type mappings

Key features:
- Named, kind-tagged modules composed from raw text spans
- Module composition with #include_module
- Recursive #include with search paths and cycle detection
- Diagnostics collected, never raised, so one run reports everything

Example:
    >>> parser = ShaderParser("#vert v\\nA\\n#end\\n#frag f\\nB\\n#end\\n#program P v f\\n")
    >>> shader = parser.parse()
    >>> shader.program.vertex_source
    'A'
    >>> shader.clean
    True
"""

from pathlib import Path
from typing import List, Optional, Sequence

from ..models.context import ParseContext
from ..models.shader import ParsedShader, ShaderProgram
from .diagnostics import DiagnosticSink
from .directives import DirectiveRegistry
from .includes import source_read
from .log import LOG
from .registry import ModuleRegistry, TypeRegistry
from .scanner import Scanner


class ShaderParser:
    """
    Driver for one top-level parse

    Owns the registries, the diagnostic sink and the parse context; runs the
    scanner over the root source and extracts the result. Only the program
    and the type mapping leave the parse: every other module and all scan
    state are dropped with the parser.
    """

    def __init__(
        self,
        source: str,
        search_paths: Optional[Sequence[str]] = None,
        origin: str = "<source>",
        canonical: Optional[Path] = None,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        """
        Initialize parser with source text

        Args:
            source: Root shader source text
            search_paths: Ordered directories consulted by #include
            origin: Name of the root source for diagnostics
            canonical: Resolved path of the root file, if it is a file
            registry: Optional DirectiveRegistry for classification

        Attributes:
            source: Root source text
            origin: Root source name
            context: ParseContext shared by every scan frame of this parse
            scanner: Scanner bound to the context
        """
        self.source = source
        self.origin = origin
        self.canonical = canonical
        self.context = ParseContext(
            modules=ModuleRegistry(),
            ctypes=TypeRegistry(),
            sink=DiagnosticSink(),
            search_paths=list(search_paths or []),
        )
        self.scanner = Scanner(self.context, registry)

    @classmethod
    def fromFile(
        cls, path: Path, search_paths: Optional[Sequence[str]] = None, **kwargs
    ) -> "ShaderParser":
        """
        Create a parser for a root shader file

        Args:
            path: Root shader file
            search_paths: Include directories; defaults to the file's directory

        Raises:
            OSError, UnicodeDecodeError: If the root file cannot be read
        """
        path = Path(path)
        source = source_read(path)
        if search_paths is None:
            search_paths = [str(path.parent)]
        return cls(
            source,
            search_paths=search_paths,
            origin=str(path),
            canonical=path.resolve(),
            **kwargs,
        )

    def parse(self) -> ParsedShader:
        """
        Parse the root source

        Returns:
            ParsedShader with the program (None if never validly set), a copy
            of the type mapping, and the diagnostics in report order
        """
        LOG(f"Parsing {self.origin} with search paths {self.context.search_paths}", level=2)
        self.scanner.scan(self.source, self.origin, self.canonical)

        program: Optional[ShaderProgram] = None
        slot = self.context.program
        if slot is not None:
            program = ShaderProgram(
                name=slot.name,
                vertex_source=slot.vertex.code,
                fragment_source=slot.fragment.code,
            )

        diagnostics = list(self.context.sink)
        LOG(
            f"Parsed {len(self.context.modules)} module(s), "
            f"{len(self.context.ctypes)} type mapping(s), {len(diagnostics)} diagnostic(s)",
            level=1,
        )
        return ParsedShader(
            program=program,
            type_mapping=self.context.ctypes.export(),
            diagnostics=diagnostics,
        )


def shader_parse(
    source: str, search_paths: Optional[Sequence[str]] = None, origin: str = "<source>"
) -> ParsedShader:
    """Parse shader source text; see ShaderParser"""
    return ShaderParser(source, search_paths, origin=origin).parse()


def shaderFile_parse(path: Path, search_paths: Optional[List[str]] = None) -> ParsedShader:
    """Parse a root shader file; see ShaderParser.fromFile"""
    return ShaderParser.fromFile(path, search_paths).parse()
