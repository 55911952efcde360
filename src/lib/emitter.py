"""
Emitter for parsed shaders

Writes the program's two stages and a YAML manifest with the type-name
mapping for downstream code generation:

  <program>.vert   vertex stage source
  <program>.frag   fragment stage source
  ctypes.yaml      program name and GLSL -> host type mapping
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..config import appsettings
from ..models.shader import ParsedShader
from .log import LOG


class ShaderweaveError(Exception):
    """Base class for shaderweave errors outside of parse diagnostics"""
    pass


class EmitError(ShaderweaveError):
    """Raised when emitted files cannot be written"""
    pass


class ShaderEmitter:
    """
    Writes a ParsedShader to an output directory
    """

    def __init__(self, shader: ParsedShader, output_dir: str) -> None:
        """
        Args:
            shader: Parse result; must carry a program
            output_dir: Directory for emitted files (created if missing)

        Raises:
            EmitError: If the parse produced no program
        """
        if shader.program is None:
            raise EmitError("No program to emit: the source defines no valid #program")
        self.shader = shader
        self.output_dir = Path(output_dir)

    def manifest_build(self) -> Dict[str, Any]:
        """Manifest contents: program name and the type mapping"""
        return {
            'program': self.shader.program.name,
            'ctypes': dict(sorted(self.shader.type_mapping.items())),
        }

    def emit(self) -> Dict[str, Any]:
        """
        Write stage sources and the manifest

        Returns:
            dict with status, program name and the list of written files

        Raises:
            EmitError: On any filesystem or serialization failure
        """
        program = self.shader.program
        outputs = {
            self.output_dir / f"{program.name}{appsettings.vertex_suffix}": program.vertex_source,
            self.output_dir / f"{program.name}{appsettings.fragment_suffix}": program.fragment_source,
        }

        files: List[str] = []
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            for path, text in outputs.items():
                path.write_text(text + "\n", encoding=appsettings.source_encoding, newline="")
                files.append(str(path))
                LOG(f"Wrote {path}", level=2)

            manifest_path = self.output_dir / appsettings.ctypes_filename
            with open(manifest_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.manifest_build(), f, sort_keys=False)
            files.append(str(manifest_path))
            LOG(f"Wrote {manifest_path}", level=2)
        except yaml.YAMLError as e:
            raise EmitError(f"Failed to write {appsettings.ctypes_filename}: {e}")
        except OSError as e:
            raise EmitError(f"Failed to write output: {e}")

        return {
            'status': True,
            'program': program.name,
            'files': files,
        }
