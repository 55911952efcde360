"""
shaderweave - Module-composing preprocessor for GLSL

Splits directive-annotated GLSL into named modules and pairs a vertex and a
fragment module into a program.
"""

__version__ = "1.0.0"

from .parser import ShaderParser, shader_parse, shaderFile_parse
from .emitter import ShaderEmitter, EmitError, ShaderweaveError
from .directives import DirectiveRegistry, statement_split
from .diagnostics import DiagnosticSink, diagnostic_render
from .log import LOG, state_connectToLogger

__all__ = [
    "ShaderParser",
    "shader_parse",
    "shaderFile_parse",
    "ShaderEmitter",
    "EmitError",
    "ShaderweaveError",
    "DirectiveRegistry",
    "statement_split",
    "DiagnosticSink",
    "diagnostic_render",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
