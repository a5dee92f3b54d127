"""
Reads the packages file into an ordered list of package descriptors.

Three interchangeable parsing strategies are provided. The structured ones
(PyYAML, or the external `yq` query tool) understand the full YAML syntax;
the line scanner accepts the conventional layout of the file and tolerates
malformed entries by leaving missing fields empty.
"""

import logging
import re
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from rich.markup import escape

from docfetch.exceptions import ConfigNotFoundError, ConfigParseError, ConfigurationError
from docfetch.models.package import PackageDescriptor

log = logging.getLogger(__name__)

PACKAGES_KEY = "packages"
YQ_QUERY = '.packages[] | "\\(.name)|\\(.source)|\\(.tokens)|\\(.output)"'


class PackageListParser(ABC):
    """Strategy interface for turning a packages file into descriptors."""

    name: str = ""

    @classmethod
    def is_available(cls) -> bool:
        return True

    @abstractmethod
    def parse(self, path: Path) -> list[PackageDescriptor]:
        """Parses the file at `path`, preserving declaration order."""


def _build_descriptor(fields: dict[str, Any], position: int) -> PackageDescriptor:
    try:
        return PackageDescriptor(**fields)
    except ValidationError as e:
        log.warning(
            f"[yellow]Package #{position} has invalid fields:[/yellow] "
            f"{escape(str(e))}"
        )
        return PackageDescriptor(name=str(fields.get("name") or ""))


class YamlPackageParser(PackageListParser):
    """Schema-aware parser backed by PyYAML."""

    name = "yaml"

    def load_document(self, path: Path) -> Any:
        """Loads the raw YAML document."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in '{path}': {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Could not read '{path}': {e}") from e

    def parse(self, path: Path) -> list[PackageDescriptor]:
        document = self.load_document(path)
        if not isinstance(document, dict):
            raise ConfigParseError(
                f"Expected a mapping with a '{PACKAGES_KEY}' key in '{path}'."
            )
        if PACKAGES_KEY not in document:
            raise ConfigParseError(f"Missing '{PACKAGES_KEY}' key in '{path}'.")

        entries = document[PACKAGES_KEY]
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ConfigParseError(f"'{PACKAGES_KEY}' in '{path}' must be a list.")

        packages = []
        for position, entry in enumerate(entries, 1):
            if not isinstance(entry, dict):
                log.warning(
                    f"[yellow]Package #{position} is not a mapping, ignoring its "
                    "contents.[/yellow]"
                )
                packages.append(PackageDescriptor())
                continue
            packages.append(_build_descriptor(entry, position))
        return packages


class YqPackageParser(PackageListParser):
    """Parser that delegates the query to the `yq` command-line tool."""

    name = "yq"

    @classmethod
    def is_available(cls) -> bool:
        return shutil.which("yq") is not None

    def parse(self, path: Path) -> list[PackageDescriptor]:
        try:
            result = subprocess.run(  # noqa: S603
                ["yq", "-r", YQ_QUERY, str(path)],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ConfigurationError("The 'yq' executable was not found.") from e
        except subprocess.CalledProcessError as e:
            raise ConfigParseError(
                f"yq could not parse '{path}': {e.stderr.strip() or e}"
            ) from e

        packages = []
        for position, line in enumerate(result.stdout.splitlines(), 1):
            if not line.strip():
                continue
            parts = line.split("|", 3)
            parts += [""] * (4 - len(parts))
            fields = dict(
                zip(
                    ("name", "source", "tokens", "output"),
                    ("" if p == "null" else p for p in parts),
                )
            )
            packages.append(_build_descriptor(fields, position))
        return packages


class LineScanPackageParser(PackageListParser):
    """
    Tolerant line-oriented scanner.

    A `- name:` line starts a new entry, `source:`/`tokens:`/`output:` lines
    assign fields, and the `output:` line completes the entry. Fields that never
    appear are left empty.
    """

    name = "line"

    _LINE_PATTERN = re.compile(
        r"^\s*(?P<item>-\s+)?(?P<key>name|source|url|tokens|output)\s*:\s*(?P<value>.*)$"
    )

    @staticmethod
    def _clean_value(raw: str) -> str:
        value = raw.strip()
        if value[:1] in ("'", '"'):
            quote = value[0]
            end = value.find(quote, 1)
            return value[1:end] if end != -1 else value[1:]
        return re.split(r"\s+#", value, maxsplit=1)[0].strip()

    def parse(self, path: Path) -> list[PackageDescriptor]:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Could not read '{path}': {e}") from e

        packages = []
        current: dict[str, str] = {}
        for line in lines:
            match = self._LINE_PATTERN.match(line)
            if not match:
                continue
            key = match.group("key")
            if key == "url":
                key = "source"
            value = self._clean_value(match.group("value"))

            if key == "name" and match.group("item"):
                current = {}
            current[key] = value

            if key == "output":
                packages.append(_build_descriptor(current, len(packages) + 1))
                current = {}
        return packages


PARSERS: dict[str, type[PackageListParser]] = {
    YamlPackageParser.name: YamlPackageParser,
    YqPackageParser.name: YqPackageParser,
    LineScanPackageParser.name: LineScanPackageParser,
}
AUTO_ORDER = ("yaml", "yq", "line")


def select_parser(preference: str = "auto") -> PackageListParser:
    """
    Picks a parsing strategy.

    With `auto`, the first available strategy in `AUTO_ORDER` wins. An explicit
    choice that is unavailable in this environment is a configuration error.
    """
    if preference == "auto":
        for name in AUTO_ORDER:
            if PARSERS[name].is_available():
                log.debug(f"Using '{name}' package list parser.")
                return PARSERS[name]()
        return LineScanPackageParser()

    parser_cls = PARSERS.get(preference)
    if parser_cls is None:
        raise ConfigurationError(f"Unknown parser '{preference}'.")
    if not parser_cls.is_available():
        raise ConfigurationError(
            f"The '{preference}' parser is not available in this environment."
        )
    return parser_cls()


def read_packages(
    path: Path, parser: PackageListParser | None = None
) -> list[PackageDescriptor]:
    """
    Reads the packages file at `path`.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file cannot be parsed.
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Packages file not found at '{path}'.")
    parser = parser or select_parser()
    packages = parser.parse(path)
    log.info(f"Loaded {len(packages)} packages from [dim]{escape(str(path))}[/dim]")
    return packages
