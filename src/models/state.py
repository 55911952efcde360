"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .shader import ParsedShader


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the shaderweave CLI pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, includePath, outputSubdir, strict
        - env_check: inputSourceFile, searchPaths, shaderOutputdir, envOK
        - source_parse: parsedShader
        - diagnostics_report: (no additions)
        - shader_emit: emitResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the root shader source
        outputdir: Base output directory for emitted files
        verbosity: Logging verbosity level (1-3)
        inputFile: Root shader filename (relative to inputdir)
        includePath: Extra include directories (relative to inputdir)
        outputSubdir: Subdirectory within outputdir for output
        strict: Fail the run when any diagnostic was reported
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the root shader source
        searchPaths: Initial include search directories
        shaderOutputdir: Final output directory (outputdir + outputSubdir)
        parsedShader: Parse result (program, type mapping, diagnostics)
        emitResult: Emission results (files, program, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    includePath: Optional[List[str]] = field(default=None)
    outputSubdir: str = field(default=".")
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    searchPaths: List[str] = field(default_factory=list)
    shaderOutputdir: Path = field(default=Path("/"))
    parsedShader: Optional[Any] = field(default=None)  # ParsedShader at runtime
    emitResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, includePath, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for emitted output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Options the dataclass does not know about are dropped
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_parse,
            diagnostics_report,
            shader_emit,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
