"""CLI entry points for anchoredit.

Implements click-based CLI
"""

import asyncio
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from anchoredit import __version__
from anchoredit.core.config import EngineConfig, load_config
from anchoredit.core.exceptions import (
    AnchorEditException,
    ConfigurationError,
    format_error_for_user,
)
from anchoredit.core.logger import AnchorEditLogger
from anchoredit.core.tool_protocol import ToolCall
from anchoredit.core.workspace import Workspace
from anchoredit.engine import locate_snippet
from anchoredit.tools import SnippetEditTool, ToolContext, ToolRegistry

# Load .env file from current directory or parent directories
load_dotenv()

console = Console()

snippet_option = click.option(
    "--snippet",
    "-s",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    required=True,
    help="File holding the snippet ('-' for stdin)",
)


def _open_workspace(workspace: str, profile: str) -> tuple[Workspace, EngineConfig]:
    root = Path(workspace).resolve()
    return Workspace(str(root)), load_config(profile, root)


def _build_registry(ws: Workspace, config: EngineConfig) -> ToolRegistry:
    registry = ToolRegistry(ToolContext(workspace=ws, logger=AnchorEditLogger(), config=config))
    registry.register(SnippetEditTool())
    return registry


def _read_input(path: str) -> str:
    with click.open_file(path, "r") as f:
        return f.read()


@click.group()
@click.version_option(version=__version__, prog_name="anchoredit")
def cli() -> None:
    """Anchor an approximate snippet in a file and replace it.

    The snippet may contain small interior mistakes; its beginning and end
    should be copied from the file faithfully.
    """


@cli.command()
@click.argument("file")
@snippet_option
@click.option(
    "--replacement",
    "-r",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    required=True,
    help="File holding the replacement ('-' for stdin)",
)
@click.option("--workspace", "-w", default=".", help="Workspace directory")
@click.option("--profile", "-p", default="default", help="Configuration profile")
@click.option("--dry-run", is_flag=True, help="Show the diff without writing the file")
def apply(
    file: str, snippet: str, replacement: str, workspace: str, profile: str, dry_run: bool
) -> None:
    """Replace the region of FILE that the snippet refers to.

    Examples:
        anchoredit apply src/app.py -s old.txt -r new.txt
        anchoredit apply app.py -s - -r new.txt --dry-run < old.txt
    """
    if snippet == "-" and replacement == "-":
        raise click.UsageError("Only one of --snippet/--replacement may be read from stdin")

    try:
        ws, config = _open_workspace(workspace, profile)
        registry = _build_registry(ws, config)

        call = ToolCall(
            id="cli-apply",
            name="replace_snippet",
            arguments={
                "file_path": file,
                "snippet": _read_input(snippet),
                "replacement": _read_input(replacement),
                "dry_run": dry_run,
            },
        )
        result = asyncio.run(registry.execute(call))

    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)
    except AnchorEditException as e:
        console.print(f"[bold red]Error:[/bold red] {format_error_for_user(e)}")
        sys.exit(1)

    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        sys.exit(1)

    for diff in result.diffs or []:
        if diff["diff"]:
            console.print(Syntax(diff["diff"], "diff", theme="ansi_dark"))

    style = "yellow" if dry_run else "green"
    console.print(Panel(f"[bold {style}]{result.output}[/bold {style}]", expand=False))


@cli.command()
@click.argument("file")
@snippet_option
@click.option("--workspace", "-w", default=".", help="Workspace directory")
@click.option("--profile", "-p", default="default", help="Configuration profile")
def locate(file: str, snippet: str, workspace: str, profile: str) -> None:
    """Show which span of FILE the snippet resolves to."""
    try:
        ws, config = _open_workspace(workspace, profile)
        abs_path = ws.resolve_existing(file)
        with Path(abs_path).open(newline="") as f:
            text = f.read()
        snippet_text = _read_input(snippet)

        start, end = locate_snippet(
            text,
            snippet_text,
            target_depth=config.target_depth,
            max_workers=config.workers_for(len(snippet_text)),
        )
    except AnchorEditException as e:
        console.print(f"[bold red]Error:[/bold red] {format_error_for_user(e)}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to read file: {escape(str(e))}")
        sys.exit(1)

    line = text.count("\n", 0, start) + 1
    console.print(f"[bold]{ws.get_relative(abs_path)}[/bold] span {start}:{end} (line {line})")
    console.print(Panel(Text(text[start:end]), title="matched", expand=False))


@cli.command()
@click.option("--workspace", "-w", default=".", help="Workspace directory")
def tools(workspace: str) -> None:
    """List the tools exposed through the tool protocol."""
    try:
        ws, config = _open_workspace(workspace, "default")
    except AnchorEditException as e:
        console.print(f"[bold red]Error:[/bold red] {format_error_for_user(e)}")
        sys.exit(1)

    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")
    for definition in _build_registry(ws, config).get_definitions():
        properties = definition.parameters.get("properties", {})
        required = set(definition.parameters.get("required", []))
        arguments = ", ".join(
            name if name in required else f"[{name}]" for name in properties
        )
        table.add_row(definition.name, escape(arguments), definition.description)
    console.print(table)


@cli.group()
def config() -> None:
    """Inspect engine configuration."""


@config.command("show")
@click.argument("profile_name", default="default")
@click.option("--workspace", "-w", default=".", help="Workspace directory")
def config_show(profile_name: str, workspace: str) -> None:
    """Show the merged configuration for a profile."""
    try:
        config_data = load_config(profile_name, Path(workspace).resolve())
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title=f"Profile: {profile_name}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config_data.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
