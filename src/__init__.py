"""
shaderweave - Module-composing preprocessor for GLSL

Scans GLSL annotated with #module/#vert/#frag/#program directives and
produces one vertex/fragment program plus a GLSL -> host type-name mapping.
"""

__version__ = "1.0.0"

from .lib import ShaderParser, shader_parse, shaderFile_parse, ShaderEmitter, DirectiveRegistry, LOG, state_connectToLogger
from .models import ParsedShader, ShaderProgram, Diagnostic, DiagnosticKind

__all__ = [
    "ShaderParser",
    "shader_parse",
    "shaderFile_parse",
    "ShaderEmitter",
    "DirectiveRegistry",
    "LOG",
    "state_connectToLogger",
    "ParsedShader",
    "ShaderProgram",
    "Diagnostic",
    "DiagnosticKind",
    "__version__",
]
