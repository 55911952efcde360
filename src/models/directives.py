"""
Directive specification and metadata models

Defines the keyword tables of the shaderweave directive mini-language: the
custom composition directives with their required argument counts, and the
standard GLSL preprocessor keywords that are passed through untouched.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Set, Tuple


class DirectiveCategory(Enum):
    """
    Categories of shaderweave directives

    Used for organization and documentation of the keyword table.
    """
    STRUCTURAL = "structural"    # #module, #vert, #frag, #end
    COMPOSITION = "composition"  # #program, #include_module
    RESOURCE = "resource"        # #include
    TYPEMAP = "typemap"          # #ctypedef
    PASSTHROUGH = "passthrough"  # #define, #version, ... (GLSL's own)


class DirectiveKind(Enum):
    """Kind of a classified directive line"""
    END = "end"
    MODULE = "module"
    VERT = "vert"
    FRAG = "frag"
    PROGRAM = "program"
    INCLUDE = "include"
    INCLUDE_MODULE = "include_module"
    CTYPEDEF = "ctypedef"

    PASSTHROUGH = "passthrough"
    INVALID = "invalid"


@dataclass(frozen=True)
class DirectiveSpec:
    """
    Specification for a custom shaderweave directive

    Attributes:
        keyword: Directive keyword as written after the marker (e.g., "vert")
        kind: DirectiveKind the keyword classifies to
        arity: Exact number of arguments the directive takes
        category: Category for organization
        description: Human-readable description
        arguments: Names of the arguments, in order (documentation only)
    """
    keyword: str
    kind: DirectiveKind
    arity: int
    category: DirectiveCategory
    description: str
    arguments: Tuple[str, ...] = field(default_factory=tuple)

    def usage(self) -> str:
        """Usage string, e.g. '#program <name> <vert> <frag>'"""
        return " ".join([f"#{self.keyword}"] + [f"<{arg}>" for arg in self.arguments])


@dataclass
class Directive:
    """
    One classified directive line

    Produced per directive line by the classifier and consumed immediately by
    the interpreter; never retained.

    Attributes:
        kind: Classified kind
        keyword: First word of the line ("" for an empty directive)
        args: Arguments following the keyword, exactly `arity` of them for
              custom directives; empty for pass-through and invalid lines
        error: Error message for INVALID directives, None otherwise

    Example:
        "#program main v f" classifies to
        Directive(kind=DirectiveKind.PROGRAM, keyword="program", args=("main", "v", "f"))
    """
    kind: DirectiveKind
    keyword: str
    args: Tuple[str, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def is_boundary(self) -> bool:
        """Whether this directive splits module text (everything but pass-through)"""
        return self.kind is not DirectiveKind.PASSTHROUGH


CUSTOM_DIRECTIVES: Tuple[DirectiveSpec, ...] = (
    DirectiveSpec("end", DirectiveKind.END, 0, DirectiveCategory.STRUCTURAL,
                  "Close the currently open module"),
    DirectiveSpec("module", DirectiveKind.MODULE, 1, DirectiveCategory.STRUCTURAL,
                  "Open a generic module", ("name",)),
    DirectiveSpec("vert", DirectiveKind.VERT, 1, DirectiveCategory.STRUCTURAL,
                  "Open a vertex module", ("name",)),
    DirectiveSpec("frag", DirectiveKind.FRAG, 1, DirectiveCategory.STRUCTURAL,
                  "Open a fragment module", ("name",)),
    DirectiveSpec("program", DirectiveKind.PROGRAM, 3, DirectiveCategory.COMPOSITION,
                  "Pair a vertex and a fragment module into the program",
                  ("name", "vert", "frag")),
    DirectiveSpec("include", DirectiveKind.INCLUDE, 1, DirectiveCategory.RESOURCE,
                  "Scan another file through the search paths", ("path",)),
    DirectiveSpec("include_module", DirectiveKind.INCLUDE_MODULE, 1, DirectiveCategory.COMPOSITION,
                  "Append a finished module's code to the open module", ("name",)),
    DirectiveSpec("ctypedef", DirectiveKind.CTYPEDEF, 2, DirectiveCategory.TYPEMAP,
                  "Map a GLSL type name to a host type name", ("glsl_type", "host_type")),
)


# GLSL's own preprocessor keywords; left verbatim in module text
PASSTHROUGH_KEYWORDS: Set[str] = {
    'define',
    'undef',
    'if',
    'ifdef',
    'ifndef',
    'else',
    'elif',
    'endif',
    'error',
    'pragma',
    'extension',
    'version',
    'line',
}


def passthrough_is(keyword: str) -> bool:
    """Check if a keyword belongs to the GLSL preprocessor"""
    return keyword in PASSTHROUGH_KEYWORDS
