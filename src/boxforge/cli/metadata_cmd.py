"""Metadata CLI commands — validate."""

from pathlib import Path

import click

from boxforge.core.config import AppConfig
from boxforge.metadata.validator import _SUBDIR_SCHEMA, validate_metadata_dir, validate_yaml_file
from boxforge.screens.loader import ScreenConfigLoader


@click.group()
def metadata():
    """Metadata commands."""
    pass


@metadata.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Validate a single YAML file instead of the whole metadata directory.",
)
def validate(strict: bool, target_path: Path | None):
    """Validate metadata YAML files against JSON Schemas."""
    metadata_path = AppConfig.from_env().metadata_path

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    if target_path is not None:
        # Single-file mode: infer schema from parent directory name
        parent = target_path.parent.name
        schema_name = _SUBDIR_SCHEMA.get(parent)
        if schema_name is None:
            click.echo(
                f"Warning: cannot determine schema for directory '{parent}'. "
                f"Expected one of: {', '.join(_SUBDIR_SCHEMA)}.",
                err=True,
            )
            schema_issues = []
        else:
            schema_issues = validate_yaml_file(target_path, schema_name)
    else:
        if not metadata_path.exists():
            click.echo(f"Error: Metadata directory not found at {metadata_path}", err=True)
            raise SystemExit(1)
        schema_issues = validate_metadata_dir(metadata_path, strict=strict)

    errors = [i for i in schema_issues if i.severity == "error"]
    warnings = [i for i in schema_issues if i.severity == "warning"]

    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(
            click.style(f"{len(warnings)} warning(s) found.", fg="yellow")
        )

    # ── Semantic (loader) validation ─────────────────────────────────────────
    if target_path is None:
        try:
            loader = ScreenConfigLoader(metadata_path / "screens")
            loader.load_all()
        except Exception as e:
            click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
            raise SystemExit(1)

        screens = loader.list_screens()
        click.echo(f"\nLoaded {len(screens)} screens:")
        for screen in sorted(screens, key=lambda s: s.id):
            click.echo(f"  ✓ {screen.id} ({len(screen.meta_boxes)} meta boxes)")

    click.echo(click.style("\nAll metadata is valid.", fg="green", bold=True))
