"""
JSON Schema validation for packages files.
Gives more precise messages than the parsers for structurally odd entries.
"""

from typing import Any

from jsonschema import Draft7Validator

_SCALAR = {"type": ["string", "integer", "number"]}

PACKAGES_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "docfetch packages file",
    "description": "List of documentation packages to fetch",
    "type": "object",
    "properties": {
        "packages": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {
                        **_SCALAR,
                        "minLength": 1,
                        "description": "Label shown while fetching",
                    },
                    "source": {
                        "type": "string",
                        "pattern": "^https?://",
                        "description": "URL of the document, may carry a query string",
                    },
                    "url": {
                        "type": "string",
                        "pattern": "^https?://",
                        "description": "Alternate key for source",
                    },
                    "tokens": {
                        **_SCALAR,
                        "description": "Size budget passed to the content API",
                    },
                    "output": {
                        "type": "string",
                        "minLength": 1,
                        "not": {"pattern": "^[/\\\\]|(^|[/\\\\])\\.\\.([/\\\\]|$)"},
                        "description": "Relative path of the fetched file",
                    },
                },
                "required": ["name", "tokens", "output"],
                "anyOf": [{"required": ["source"]}, {"required": ["url"]}],
            },
        },
    },
    "required": ["packages"],
}


def validate_packages_document(document: Any) -> tuple[bool, list[str]]:
    """
    Validate a loaded packages document against the JSON schema.

    Args:
        document: The parsed YAML document

    Returns:
        Tuple of (is_valid, error_messages)
    """
    validator = Draft7Validator(PACKAGES_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])

    error_messages = []
    for error in errors:
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        error_messages.append(f"{path}: {error.message}")

    return not error_messages, error_messages
