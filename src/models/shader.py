"""
Shader composition models

Modules, the program that pairs them, and the final artifact handed to
downstream code generation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import Diagnostic


class ModuleKind(Enum):
    """Kind of a shader module, fixed by its opening directive"""
    GENERIC = "module"
    VERTEX = "vert"
    FRAGMENT = "frag"


@dataclass(frozen=True)
class ShaderModule:
    """
    A finalized, named block of composed shader source

    Built when the matching #end is reached; its code is the trimmed
    concatenation of every span accumulated while it was open.

    Attributes:
        name: Module name from the opening directive
        kind: GENERIC, VERTEX or FRAGMENT
        code: Composed source text, leading/trailing whitespace trimmed
        origin: File (or "<source>") in which the module was closed
    """
    name: str
    kind: ModuleKind
    code: str
    origin: str = "<source>"


@dataclass(frozen=True)
class ShaderProgram:
    """
    The single program produced by a parse

    Attributes:
        name: Program name from the #program directive
        vertex_source: Code of the vertex module
        fragment_source: Code of the fragment module
    """
    name: str
    vertex_source: str
    fragment_source: str


@dataclass
class ParsedShader:
    """
    Result of parsing one root shader source

    Attributes:
        program: The program, or None when no valid #program was seen
        type_mapping: GLSL type name -> host type name, from #ctypedef
        diagnostics: Every problem reported during the parse, in order

    Example:
        >>> result = shader_parse(source, ["shaders"])
        >>> result.clean
        True
        >>> result.program.name
        'main'
    """
    program: Optional[ShaderProgram] = None
    type_mapping: Dict[str, str] = field(default_factory=dict)
    diagnostics: List['Diagnostic'] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True when the parse reported no diagnostics"""
        return not self.diagnostics

    @property
    def diagnostic_count(self) -> int:
        return len(self.diagnostics)
