"""
metadata/validator.py — JSON Schema validation for BoxForge YAML metadata files.

Validates screen YAML files (including their declared meta boxes) against
JSON Schemas shipped with the package.

Usage:
    from boxforge.metadata.validator import validate_metadata_dir, validate_yaml_file

    issues = validate_metadata_dir(Path("metadata"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

# Map subdirectory name → schema filename
_SUBDIR_SCHEMA: dict[str, str] = {
    "screens": "screen.schema.json",
}


@dataclass
class ValidationIssue:
    """A single validation finding for a metadata YAML file."""

    file: Path
    message: str
    path: str = ""          # path within the document, e.g. "screen/metaBoxes[0]"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _load_registry() -> Registry:
    """Build a jsonschema Registry containing all BoxForge schemas."""
    resources = []
    for name in ["_defs.schema.json", *_SUBDIR_SCHEMA.values()]:
        schema = _load_schema(name)
        resources.append(
            (schema["$id"], Resource(contents=schema, specification=DRAFT202012))
        )
    return Registry().with_resources(resources)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _duplicate_box_issues(yaml_path: Path, doc: Any) -> list[ValidationIssue]:
    """Warn about box ids declared more than once on a screen.

    Later declarations move the box, so duplicates are legal but usually
    a mistake.
    """
    screen = doc.get("screen") if isinstance(doc, dict) else None
    if not isinstance(screen, dict):
        return []

    issues = []
    seen: set[str] = set()
    for index, box in enumerate(screen.get("metaBoxes") or []):
        box_id = box.get("id") if isinstance(box, dict) else None
        if box_id is None:
            continue
        if box_id in seen:
            issues.append(
                ValidationIssue(
                    file=yaml_path,
                    message=f"Meta box '{box_id}' is declared more than once",
                    path=f"screen/metaBoxes[{index}]",
                    severity="warning",
                )
            )
        seen.add(box_id)
    return issues


def validate_yaml_file(
    yaml_path: Path,
    schema_name: str,
    *,
    registry: Registry | None = None,
) -> list[ValidationIssue]:
    """
    Validate a single YAML file against the named schema.

    Args:
        yaml_path:   Path to the YAML file to validate.
        schema_name: Filename of the schema (e.g. ``"screen.schema.json"``).
        registry:    Pre-built schema registry.  Built automatically if omitted.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    if registry is None:
        registry = _load_registry()

    schema = _load_schema(schema_name)
    validator = Draft202012Validator(schema, registry=registry)

    issues = [
        ValidationIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]
    issues.extend(_duplicate_box_issues(yaml_path, doc))
    return issues


def validate_metadata_dir(
    metadata_dir: Path,
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """
    Validate all YAML files under *metadata_dir*.

    Args:
        metadata_dir: Root metadata directory (contains ``screens/``).
        strict:       If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`ValidationIssue` objects across all files.
        Empty list means all files are valid.
    """
    if not metadata_dir.is_dir():
        return [
            ValidationIssue(
                file=metadata_dir,
                message=f"Metadata directory does not exist: {metadata_dir}",
            )
        ]

    try:
        registry = _load_registry()
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        return [
            ValidationIssue(
                file=_SCHEMAS_DIR,
                message=f"Failed to load JSON Schema files: {exc}",
            )
        ]

    all_issues: list[ValidationIssue] = []

    for subdir, schema_name in _SUBDIR_SCHEMA.items():
        target = metadata_dir / subdir
        if not target.is_dir():
            continue
        for yaml_file in sorted(target.glob("*.yaml")):
            file_issues = validate_yaml_file(yaml_file, schema_name, registry=registry)
            if strict:
                for issue in file_issues:
                    if issue.severity == "warning":
                        issue.severity = "error"
            all_issues.extend(file_issues)

    return all_issues
