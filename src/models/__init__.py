"""
Models package for shaderweave

Contains data structures and type definitions for the parse pipeline.
"""

from .state import ProgramState, pipeline
from .directives import (
    DirectiveSpec,
    DirectiveCategory,
    DirectiveKind,
    Directive,
    CUSTOM_DIRECTIVES,
    PASSTHROUGH_KEYWORDS,
)
from .shader import ModuleKind, ShaderModule, ShaderProgram, ParsedShader
from .parser import Diagnostic, DiagnosticKind, ScanFrame, OpenModule
from .context import ParseContext, ProgramSlot

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveSpec",
    "DirectiveCategory",
    "DirectiveKind",
    "Directive",
    "CUSTOM_DIRECTIVES",
    "PASSTHROUGH_KEYWORDS",
    "ModuleKind",
    "ShaderModule",
    "ShaderProgram",
    "ParsedShader",
    "Diagnostic",
    "DiagnosticKind",
    "ScanFrame",
    "OpenModule",
    "ParseContext",
    "ProgramSlot",
]
