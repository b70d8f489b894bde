"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use the STUDIOLEX_ prefix (e.g., STUDIOLEX_OUTPUT_FORMAT=html).
List settings take JSON (e.g., STUDIOLEX_BUILTINS='["hab", "build"]').

Settings can also be loaded from a .env file in the working directory.
"""

from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..lib.patterns import BUILTINS, KEYWORDS


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Examples:
        STUDIOLEX_KEYWORDS='["if", "then", "fi"]'
        STUDIOLEX_WORDLISTS_FILE=docs/studio-words.yaml
        STUDIOLEX_PYGMENTS_STYLE=friendly
    """

    model_config = SettingsConfigDict(
        env_prefix="STUDIOLEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Tokenizer configuration
    keywords: List[str] = Field(
        default_factory=lambda: list(KEYWORDS),
        description="Words tagged as control-flow keywords",
    )

    builtins: List[str] = Field(
        default_factory=lambda: list(BUILTINS),
        description="Words tagged as recognized studio commands",
    )

    wordlists_file: Optional[str] = Field(
        default=None,
        description="YAML file overriding keywords and/or builtins",
    )

    # Output configuration
    output_format: Literal["tokens", "html"] = Field(
        default="tokens",
        description="Output form: token listing or highlighted HTML",
    )

    pygments_style: str = Field(
        default="monokai",
        description="Pygments style used for HTML output",
    )

    @field_validator("keywords", "builtins")
    @classmethod
    def words_strip(cls, value: List[str]) -> List[str]:
        return [word.strip() for word in value if word.strip()]

    def outputName_make(self, input_name: str, output_format: Optional[str] = None) -> str:
        """
        Output file name for an input file.

        Args:
            input_name: Source file name
            output_format: "tokens" or "html" (default: self.output_format)

        Example:
            >>> AppSettings(output_format="html").outputName_make("setup.studio")
            'setup.studio.html'
        """
        output_format = output_format or self.output_format
        suffix = ".html" if output_format == "html" else ".tokens"
        return f"{input_name}{suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
