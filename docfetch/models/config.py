"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from docfetch import __version__

DEFAULT_PACKAGES_FILE = "packages.yaml"
DEFAULT_CLEAN_PATTERN = "llms.txt"
PARSER_CHOICES = ("auto", "yaml", "yq", "line")


class FetchConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(str_strip_whitespace=True)

    # Sources
    config_path: Path = Path(DEFAULT_PACKAGES_FILE)
    base_dir: Path | None = None
    parser: str = "auto"

    # Network Settings
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    user_agent: str = f"docfetch/{__version__}"

    # Cleanup
    clean_pattern: str = DEFAULT_CLEAN_PATTERN

    # Output
    show_summary: bool = False

    @field_validator("parser")
    @classmethod
    def validate_parser(cls, v: str) -> str:
        """Ensures the parser strategy is one we know how to build."""
        v = v.lower()
        if v not in PARSER_CHOICES:
            raise ValueError(f"Parser must be one of: {', '.join(PARSER_CHOICES)}.")
        return v

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError("Connect timeout must be between 0 and 120 seconds.")
        return v

    @field_validator("read_timeout")
    @classmethod
    def validate_read_timeout(cls, v: float) -> float:
        if v <= 0 or v > 600:
            raise ValueError("Read timeout must be between 0 and 600 seconds.")
        return v

    @field_validator("clean_pattern")
    @classmethod
    def validate_clean_pattern(cls, v: str) -> str:
        """The cleanup pattern is a bare file name, never a path."""
        if not v:
            raise ValueError("Clean pattern cannot be empty.")
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("Clean pattern must be a file name, not a path.")
        return v

    @model_validator(mode="after")
    def default_base_dir(self) -> "FetchConfig":
        """Output paths resolve against the packages file's directory by default."""
        if self.base_dir is None:
            self.base_dir = self.config_path.resolve().parent
        return self
