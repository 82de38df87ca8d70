import asyncio

import click
from rich.console import Console
from rich.table import Table

from framescope.builder import FrameBuilder
from framescope.types import SchemaError
from framescope.util import LineTransport, Settings


class ClickMessageSink:
    """Reports user facing messages on stderr."""

    def show_message(self, title: str, text: str = "", critical: bool = False) -> None:
        prefix = "Error" if critical else "Warning"
        click.echo(f"{prefix}: {title}: {text}", err=True)


def print_tree(cmd, prefix="", parent_ctx=None):
    """Print command tree starting from given command."""
    ctx = click.Context(cmd, info_name=cmd.name, parent=parent_ctx)

    # Only print root name if no parent
    if not parent_ctx:
        click.echo(cmd.name)

    for sub in sorted(cmd.list_commands(ctx)):
        sub_cmd = cmd.get_command(ctx, sub)
        click.echo(f"{prefix}└── {sub}")
        if isinstance(sub_cmd, click.Group):
            print_tree(sub_cmd, prefix + "    ", ctx)


def tree_option(f):
    """Add --tree option to command."""

    def callback(ctx, param, value):
        if not value or ctx.resilient_parsing:
            return
        print_tree(ctx.command)
        ctx.exit()

    return click.option(
        "--tree",
        is_flag=True,
        help="Show command tree from this point",
        expose_value=False,
        is_eager=True,
        callback=callback,
    )(f)


@click.group()
@tree_option
def cli():
    """framescope - decode streamed device data into frames.

    - Validate JSON maps (project files)

    - Decode recorded or piped device output in any operation mode
    """
    pass


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def validate(ctx, path):
    """Load the JSON map at PATH and summarise its groups and datasets."""
    builder = FrameBuilder(
        LineTransport(),
        Settings(persist=False),
        asyncio.Queue(),
        message_sink=ClickMessageSink(),
    )
    try:
        builder.load_json_map(path)
    except SchemaError:
        ctx.exit(1)

    template = builder.template
    console = Console(color_system="standard")
    console.print(f"[bold]{template.title}[/bold] ({builder.json_map_filename})")
    console.print(
        f"frameStart={template.frame_start!r} frameEnd={template.frame_end!r}"
    )

    table = Table(show_header=True, box=None)
    table.add_column("Group")
    table.add_column("Widget")
    table.add_column("Index")
    table.add_column("Dataset")
    for group in builder.frame.groups:
        table.add_row(f"[bold]{group.group_id}: {group.title}[/bold]", group.widget)
        for dataset in group.datasets:
            index = str(dataset.index)
            if dataset.index < 1:
                index = f"[red]{index}[/red]"
            table.add_row("", "", index, dataset.title)
    console.print(table)
