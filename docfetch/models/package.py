"""
Pydantic model for a single documentation package descriptor.
"""

from pathlib import Path, PurePath
from typing import Any

from pathvalidate import ValidationError as PathValidationError
from pathvalidate import validate_filepath
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from docfetch.exceptions import InvalidOutputPathError

REQUIRED_FIELDS = ("name", "source", "tokens", "output")


class PackageDescriptor(BaseModel):
    """Fetch instructions for one documentation package."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = ""
    source: str = ""
    tokens: str = ""
    output: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_url_alias(cls, data: Any) -> Any:
        """Accepts `url` as an alternate key for `source`."""
        if isinstance(data, dict) and not data.get("source") and data.get("url"):
            data = {**data, "source": data["url"]}
        return data

    @field_validator("name", "source", "tokens", "output", mode="before")
    @classmethod
    def coerce_scalar(cls, v: Any) -> str:
        """YAML hands back ints and None for bare values; everything is a string here."""
        if v is None:
            return ""
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def missing_fields(self) -> list[str]:
        """Returns the names of required fields that are empty."""
        return [key for key in REQUIRED_FIELDS if not getattr(self, key)]

    def request_url(self) -> str:
        """
        Builds the request URL, appending the token budget as a query parameter.

        The source may already carry its own query string, in which case the
        parameter is joined with '&' instead of '?'.
        """
        separator = "&" if "?" in self.source else "?"
        return f"{self.source}{separator}tokens={self.tokens}"

    def resolve_output(self, base_dir: Path) -> Path:
        """
        Resolves the output path against the base directory.

        Raises:
            InvalidOutputPathError: If the output is absolute, leaves the base
            directory, or is not a valid file path.
        """
        relative = PurePath(self.output)
        if relative.is_absolute() or self.output.startswith(("/", "\\")):
            raise InvalidOutputPathError(
                f"Output path must be relative, got '{self.output}'."
            )
        if ".." in relative.parts:
            raise InvalidOutputPathError(
                f"Output path cannot contain '..': '{self.output}'."
            )
        try:
            validate_filepath(self.output, platform="auto")
        except PathValidationError as e:
            raise InvalidOutputPathError(
                f"Invalid output path '{self.output}': {e}"
            ) from e
        return base_dir / relative
