#!/usr/bin/env python3
"""
shaderweave - Module-composing preprocessor for GLSL

Reads one root shader source annotated with shaderweave directives, follows
its includes, and writes the resulting program's vertex and fragment stages
together with a YAML manifest of GLSL -> host type-name mappings.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Directives:
    #module <name> / #vert <name> / #frag <name>   open a module
    #end                                             close it
    #include_module <name>                           splice a finished module in
    #include <path>                                  scan another file
    #program <name> <vert> <frag>                    pick the program
    #ctypedef <glsl_type> <host_type>                map a type name

Usage:
    shaderweave inputdir/ outputdir/ --inputFile main.glsl

Examples:
    # Basic run
    shaderweave shaders/ build/ --inputFile sprite.glsl

    # Extra include directories, fail on any diagnostic
    shaderweave shaders/ build/ --inputFile sprite.glsl --includePath common --strict

    # Verbose output
    shaderweave shaders/ build/ --inputFile sprite.glsl -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import ShaderParser, ShaderEmitter, EmitError, diagnostic_render, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
      _               _
  ___| |__   __ _  __| | ___ _ ____      _____  __ ___   _____
 / __| '_ \ / _` |/ _` |/ _ \ '__\ \ /\ / / _ \/ _` \ \ / / _ \
 \__ \ | | | (_| | (_| |  __/ |   \ V  V /  __/ (_| |\ V /  __/
 |___/_| |_|\__,_|\__,_|\___|_|    \_/\_/ \___|\__,_| \_/ \___|

  Module-composing preprocessor for GLSL
"""

# Define CLI arguments
parser = ArgumentParser(
    description="shaderweave - compose GLSL modules into a vertex/fragment program",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Root shader source (relative to inputdir)"
)

parser.add_argument(
    "--includePath",
    action="append",
    default=None,
    type=str,
    help="Extra #include search directory, relative to inputdir (repeatable)",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the emitted files",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=False,
    help="Fail when the parse reports any diagnostic",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the root shader
            - searchPaths: Root shader's directory, then each --includePath
            - shaderOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file or an include directory is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    search_paths = [str(input_file.parent)]
    for include_dir in state.includePath or []:
        directory = state.inputdir / include_dir
        if not directory.is_dir():
            print(f"Error: Include directory not found: {directory}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        search_paths.append(str(directory))
    state.searchPaths = search_paths
    LOG(f"Search paths: {search_paths}", level=2)

    state.shaderOutputdir = state.outputdir / state.outputSubdir
    state.shaderOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.shaderOutputdir}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Parse the root shader and everything it includes.

    Args:
        inputstate: Program state with inputSourceFile and searchPaths set

    Returns:
        ProgramState with added field:
            - parsedShader: ParsedShader (program, type mapping, diagnostics)

    Exits:
        1 if the root file cannot be read
    """

    state = inputstate.copy()

    LOG("Parsing shader source...", level=1)
    try:
        shader_parser = ShaderParser.fromFile(state.inputSourceFile, state.searchPaths)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    state.parsedShader = shader_parser.parse()
    return state


def diagnostics_report(inputstate: ProgramState) -> ProgramState:
    """
    Print every parse diagnostic with its highlighted directive line.

    Args:
        inputstate: Program state with parsedShader populated

    Returns:
        ProgramState unchanged

    Exits:
        1 in strict mode (--strict or SHADERWEAVE_STRICT_MODE) when any
        diagnostic was reported
    """
    state = inputstate.copy()
    shader = state.parsedShader

    color = sys.stderr.isatty()
    for diagnostic in shader.diagnostics:
        print(diagnostic_render(diagnostic, color=color), file=sys.stderr)

    if shader.diagnostics:
        LOG(f"{shader.diagnostic_count} diagnostic(s) reported", level=1)
        if state.strict or appsettings.strict_mode:
            print("Error: Diagnostics reported in strict mode", file=sys.stderr)
            sys.exit(1)
    return state


def shader_emit(inputstate: ProgramState) -> ProgramState:
    """
    Write the program stages and the type-mapping manifest.

    Args:
        inputstate: Program state with parsedShader populated

    Returns:
        ProgramState with added field:
            - emitResult: Dict containing:
                - status: bool (emission success)
                - program: str (program name)
                - files: list of written paths

    Exits:
        1 if the parse produced no program or writing fails
    """

    state = inputstate.copy()

    if state.parsedShader is None or state.parsedShader.program is None:
        print("Error: No program defined; expected '#program <name> <vert> <frag>'", file=sys.stderr)
        sys.exit(1)

    LOG("Emitting program...", level=1)
    try:
        emitter = ShaderEmitter(state.parsedShader, str(state.shaderOutputdir))
        state.emitResult = emitter.emit()
    except EmitError as e:
        print(f"Emit error: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display emission results to user.

    Args:
        inputstate: Program state with emitResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if emitResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.emitResult:
        print("Error: Emission failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Program emitted!", level=1)
    LOG(f"  Program: {state.emitResult['program']}", level=1)
    for path in state.emitResult['files']:
        LOG(f"  Wrote:   {path}", level=1)
    LOG(f"  Types:   {len(state.parsedShader.type_mapping)} mapping(s)", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="shaderweave - GLSL module composer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compose a GLSL program from a root shader source.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and build search paths
        2. source_parse: Parse root shader and its includes
        3. diagnostics_report: Print diagnostics (fail in strict mode)
        4. shader_emit: Write stages and manifest
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing shader sources
        outputdir: Directory where emitted files will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, diagnostics_report, shader_emit, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
