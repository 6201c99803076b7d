"""Screen CLI commands — list screens and preview meta box layouts."""

import click

from boxforge.core.config import AppConfig
from boxforge.metaboxes import load_plugins, register_builtin_renderers
from boxforge.metaboxes.service import MetaBoxService
from boxforge.screens.loader import ScreenConfigLoader


def _load_screens() -> ScreenConfigLoader:
    config = AppConfig.from_env()
    register_builtin_renderers()
    load_plugins(config.plugins)
    loader = ScreenConfigLoader(config.screens_path)
    loader.load_all()
    return loader


def _parse_order(values: tuple[str, ...]) -> dict[str, list[str]]:
    """Parse --order options of the form context=id1,id2."""
    order: dict[str, list[str]] = {}
    for value in values:
        context, sep, ids = value.partition("=")
        if not sep or not context:
            raise click.BadParameter(
                f"Expected CONTEXT=ID[,ID...], got '{value}'", param_hint="--order"
            )
        order[context] = [box_id.strip() for box_id in ids.split(",")]
    return order


@click.group()
def screens():
    """Screen commands."""
    pass


@screens.command("list")
def list_cmd():
    """List configured screens."""
    loader = _load_screens()
    all_screens = loader.list_screens()
    if not all_screens:
        click.echo("No screens configured.")
        return

    for screen in sorted(all_screens, key=lambda s: s.id):
        click.echo(
            f"{screen.id}  {screen.name} [{screen.type}] "
            f"({len(screen.meta_boxes)} meta boxes)"
        )


@screens.command("layout")
@click.argument("screen_id")
@click.option(
    "--order",
    "order_values",
    multiple=True,
    help="Saved box order for a context, as CONTEXT=ID[,ID...]. Repeatable.",
)
def layout_cmd(screen_id: str, order_values: tuple[str, ...]):
    """Show the meta box layout of a screen in render order."""
    loader = _load_screens()
    screen = loader.get_screen(screen_id)
    if screen is None:
        click.echo(f"Error: Screen not found: {screen_id}", err=True)
        raise SystemExit(1)

    service = MetaBoxService(loader)
    registry = service.build(screen, saved_order=_parse_order(order_values))
    layout = service.layout(registry, screen.id)

    click.echo(click.style(f"{screen.name} ({screen.id})", bold=True))
    for context, boxes in layout["contexts"].items():
        click.echo(f"\n  {context}:")
        if not boxes:
            click.echo("    (empty)")
        for box in boxes:
            click.echo(f"    - {box['id']}: {box['title']}")
