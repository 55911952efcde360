"""
End-to-end pipeline tests

Tests the full run: shader sources on disk → parse → diagnostics → emitted
stage files and YAML manifest, plus the pieces the CLI uses along the way
(emitter, diagnostic rendering, lexer, settings).
"""

from pathlib import Path

import pytest
import yaml
from pygments.token import Comment, Keyword, Name

from shaderweave.__main__ import (
    diagnostics_report,
    env_check,
    results_report,
    shader_emit,
    source_parse,
)
from shaderweave.config import AppSettings
from shaderweave.lib.diagnostics import diagnostic_render
from shaderweave.lib.emitter import EmitError, ShaderEmitter
from shaderweave.lib.lexer import ShaderweaveLexer
from shaderweave.lib.parser import shader_parse
from shaderweave.models import ProgramState, pipeline
from shaderweave.models.parser import Diagnostic, DiagnosticKind
from shaderweave.models.shader import ParsedShader


MAIN_SOURCE = """\
#include types.glsl
#include common/lighting.glsl

#vert sprite_vs
#version 450
layout(location = 0) in vec3 a_pos;
void main() { gl_Position = vec4(a_pos, 1.0); }
#end

#frag sprite_fs
#version 450
#include_module lighting
layout(location = 0) out vec4 o_color;
void main() { o_color = vec4(lambert(), 1.0); } // flat
#end

#program sprite sprite_vs sprite_fs
"""

TYPES_SOURCE = "#ctypedef vec3 Vec3\n#ctypedef vec4 Vec4\n"

LIGHTING_SOURCE = "#module lighting\nfloat lambert() { return 1.0; }\n#end\n"


@pytest.fixture
def shader_tree(tmp_path):
    """Input tree with a root shader, a sibling include and a subdirectory include"""
    inputdir = tmp_path / "in"
    (inputdir / "common").mkdir(parents=True)
    (inputdir / "main.glsl").write_text(MAIN_SOURCE)
    (inputdir / "types.glsl").write_text(TYPES_SOURCE)
    (inputdir / "common" / "lighting.glsl").write_text(LIGHTING_SOURCE)
    return inputdir


def state_make(inputdir: Path, outputdir: Path, **kwargs) -> ProgramState:
    return ProgramState(
        inputdir=inputdir,
        outputdir=outputdir,
        verbosity=0,
        inputFile=kwargs.pop("inputFile", "main.glsl"),
        **kwargs,
    )


class TestPipeline:
    """Test the CLI stages end to end"""

    def test_full_run(self, shader_tree, tmp_path):
        """Sources compose into stage files and a manifest"""
        state = pipeline(
            state_make(shader_tree, tmp_path / "out"),
            env_check,
            source_parse,
            diagnostics_report,
            shader_emit,
            results_report,
        )

        assert state.envOK
        assert state.parsedShader.clean
        assert state.emitResult['status'] is True
        assert state.emitResult['program'] == "sprite"

        out = tmp_path / "out"
        vertex = (out / "sprite.vert").read_text()
        fragment = (out / "sprite.frag").read_text()
        assert vertex == (
            "#version 450\n"
            "layout(location = 0) in vec3 a_pos;\n"
            "void main() { gl_Position = vec4(a_pos, 1.0); }\n"
        )
        assert fragment == (
            "#version 450\n"
            "float lambert() { return 1.0; }\n"
            "layout(location = 0) out vec4 o_color;\n"
            "void main() { o_color = vec4(lambert(), 1.0); } // flat\n"
        )

        manifest = yaml.safe_load((out / "ctypes.yaml").read_text())
        assert manifest == {'program': 'sprite', 'ctypes': {'vec3': 'Vec3', 'vec4': 'Vec4'}}

    def test_output_subdir(self, shader_tree, tmp_path):
        """Files land in outputdir/outputSubdir"""
        state = pipeline(
            state_make(shader_tree, tmp_path / "out", outputSubdir="build/shaders"),
            env_check,
            source_parse,
            shader_emit,
        )
        assert (tmp_path / "out" / "build" / "shaders" / "sprite.vert").exists()
        assert len(state.emitResult['files']) == 3

    def test_include_path(self, tmp_path):
        """--includePath directories are searched after the root's directory"""
        inputdir = tmp_path / "in"
        (inputdir / "shared").mkdir(parents=True)
        (inputdir / "main.glsl").write_text("#include extra.glsl\n")
        (inputdir / "shared" / "extra.glsl").write_text("#ctypedef float f32\n")

        state = pipeline(
            state_make(inputdir, tmp_path / "out", includePath=["shared"]),
            env_check,
            source_parse,
        )
        assert state.searchPaths == [str(inputdir), str(inputdir / "shared")]
        assert state.parsedShader.type_mapping == {"float": "f32"}

    def test_missing_input_file(self, tmp_path):
        """Missing root shader exits"""
        with pytest.raises(SystemExit):
            env_check(state_make(tmp_path, tmp_path / "out", inputFile="absent.glsl"))

    def test_missing_include_directory(self, shader_tree, tmp_path):
        """Unknown --includePath exits"""
        with pytest.raises(SystemExit):
            env_check(state_make(shader_tree, tmp_path / "out", includePath=["nowhere"]))

    def test_no_program_exits(self, tmp_path):
        """A source with no #program cannot be emitted"""
        (tmp_path / "main.glsl").write_text("#module m\nx\n#end\n")
        with pytest.raises(SystemExit):
            pipeline(state_make(tmp_path, tmp_path / "out"), env_check, source_parse, shader_emit)

    def test_strict_mode_exits_on_diagnostics(self, tmp_path):
        """--strict turns any diagnostic into a failure"""
        (tmp_path / "main.glsl").write_text("#end\n")
        with pytest.raises(SystemExit):
            pipeline(
                state_make(tmp_path, tmp_path / "out", strict=True),
                env_check,
                source_parse,
                diagnostics_report,
            )

    def test_diagnostics_reported_without_strict(self, tmp_path, capsys):
        """Diagnostics are printed and the run continues"""
        (tmp_path / "main.glsl").write_text("#bogus\n")
        state = pipeline(state_make(tmp_path, tmp_path / "out"), env_check, source_parse, diagnostics_report)

        assert state.parsedShader.diagnostic_count == 1
        assert "bogus: Invalid token." in capsys.readouterr().err


class TestEmitter:
    """Test ShaderEmitter directly"""

    def test_requires_program(self, tmp_path):
        """Emitting a parse without program raises EmitError"""
        with pytest.raises(EmitError, match="No program"):
            ShaderEmitter(ParsedShader(), str(tmp_path))

    def test_manifest_sorted(self, tmp_path):
        """Manifest lists type mappings sorted by GLSL name"""
        shader = shader_parse(
            "#vert v\nA\n#end\n#frag f\nB\n#end\n#program P v f\n#ctypedef vec4 V4\n#ctypedef mat4 M4\n"
        )
        emitter = ShaderEmitter(shader, str(tmp_path))
        assert list(emitter.manifest_build()['ctypes']) == ["mat4", "vec4"]

    def test_unwritable_output(self, tmp_path):
        """Filesystem errors surface as EmitError"""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        shader = shader_parse("#vert v\nA\n#end\n#frag f\nB\n#end\n#program P v f\n")

        with pytest.raises(EmitError):
            ShaderEmitter(shader, str(blocker / "out")).emit()

    def test_crlf_written_unchanged(self, tmp_path):
        """Carriage returns in stage sources reach the emitted files"""
        shader = shader_parse("#vert v\r\nfloat a;\r\nfloat b;\r\n#end\r\n#frag f\r\nB\r\n#end\r\n#program P v f\r\n")
        ShaderEmitter(shader, str(tmp_path)).emit()
        assert (tmp_path / "P.vert").read_bytes() == b"float a;\r\nfloat b;\n"


class TestRendering:
    """Test diagnostic rendering and the Pygments lexer"""

    def test_render_plain(self):
        """Plain rendering shows location, kind, message and the directive line"""
        diagnostic = shader_parse("#end\n").diagnostics[0]
        assert diagnostic_render(diagnostic, color=False) == (
            "<source>:1: composition: Extraneous end statement.\n    #end"
        )

    def test_render_without_statement(self):
        """End-of-parse diagnostics have no directive line"""
        diagnostic = Diagnostic(kind=DiagnosticKind.COMPOSITION, message="m: Module was never ended.")
        assert diagnostic_render(diagnostic) == "<source>:0: composition: m: Module was never ended."

    def test_render_color(self):
        """Colored rendering keeps the directive text"""
        diagnostic = shader_parse("#include x.glsl\n").diagnostics[0]
        assert "include" in diagnostic_render(diagnostic, color=True)

    def test_lexer_directive_tokens(self):
        """Module openers and their arguments get distinct tokens"""
        tokens = list(ShaderweaveLexer().get_tokens("#vert main_vs\nvec3 p;\n"))
        assert (Keyword.Declaration, "vert") in tokens
        assert (Name.Namespace, "main_vs") in tokens
        assert (Keyword.Type, "vec3") in tokens

    def test_lexer_passthrough_and_comment(self):
        """GLSL preprocessor lines and comments"""
        tokens = list(ShaderweaveLexer().get_tokens("#define X 1\n// note\n"))
        assert (Comment.Preproc, "#define X 1") in tokens
        assert (Comment.Single, "// note") in tokens

    def test_lexer_composition_tokens(self):
        """Composition directives are namespace keywords"""
        tokens = list(ShaderweaveLexer().get_tokens("#include_module lighting\n"))
        assert (Keyword.Namespace, "include_module") in tokens
        assert (Name.Namespace, "lighting") in tokens


class TestSettings:
    """Test AppSettings"""

    def test_include_candidate(self):
        """Candidate path joins directory and request with the separator"""
        assert AppSettings().includeCandidate_make("shaders", "lib/noise.glsl") == "shaders/lib/noise.glsl"

    def test_environment_override(self, monkeypatch):
        """SHADERWEAVE_ variables override defaults"""
        monkeypatch.setenv("SHADERWEAVE_MAX_INCLUDE_DEPTH", "5")
        monkeypatch.setenv("SHADERWEAVE_STRICT_MODE", "true")
        settings = AppSettings()
        assert settings.max_include_depth == 5
        assert settings.strict_mode is True
