"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SHADERWEAVE_ prefix (e.g., SHADERWEAVE_MAX_INCLUDE_DEPTH=8).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SHADERWEAVE_ prefix.

    Examples:
        SHADERWEAVE_MAX_INCLUDE_DEPTH=8
        SHADERWEAVE_STRICT_MODE=true
        SHADERWEAVE_CTYPES_FILENAME=types.yaml
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADERWEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scanner configuration
    directive_marker: str = Field(
        default="#",
        description="Character that starts a directive line",
    )

    comment_marker: str = Field(
        default="//",
        description="Line comment opener; directive markers after it are not recognized",
    )

    gap_skip_width: int = Field(
        default=2,
        description="Width of a span between two directives that is treated as empty",
    )

    # Include configuration
    path_separator: str = Field(
        default="/",
        description="Separator placed between a search directory and a requested include path",
    )

    max_include_depth: int = Field(
        default=32,
        description="Maximum nesting depth of #include before the include is rejected",
    )

    source_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read shader source files",
    )

    # Diagnostics configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: any diagnostic fails the run",
    )

    # Output configuration
    vertex_suffix: str = Field(
        default=".vert",
        description="File suffix for the emitted vertex stage",
    )

    fragment_suffix: str = Field(
        default=".frag",
        description="File suffix for the emitted fragment stage",
    )

    ctypes_filename: str = Field(
        default="ctypes.yaml",
        description="Name of the emitted manifest holding the type-name mapping",
    )

    def includeCandidate_make(self, directory: str, requested: str) -> str:
        """
        Build the candidate file path for an include in one search directory.

        Args:
            directory: Search directory
            requested: Path as written in the #include directive

        Returns:
            Candidate path string (e.g., "shaders/common.glsl")

        Example:
            >>> settings = AppSettings()
            >>> settings.includeCandidate_make('shaders', 'lib/noise.glsl')
            'shaders/lib/noise.glsl'
        """
        return f"{directory}{self.path_separator}{requested}"


# Singleton instance - import this in your code
appsettings = AppSettings()
