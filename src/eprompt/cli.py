"""CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from eprompt.errors import PromptCancelled, PromptError

if TYPE_CHECKING:
    from eprompt.config import Config

app = typer.Typer(
    name="eprompt",
    help="Interactive terminal prompts - pick options from the keyboard.",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Show or change prompt settings.", no_args_is_help=True)
app.add_typer(config_app, name="config")

# Prompts draw on stderr so results on stdout can be piped
ui_console = Console(stderr=True)
console = Console()

EXIT_CANCELLED = 130


class ValueType(str, Enum):
    """Value types accepted by the input command."""

    STR = "str"
    INT = "int"
    FLOAT = "float"


_PARSERS = {
    ValueType.STR: str,
    ValueType.INT: int,
    ValueType.FLOAT: float,
}


def _get_config() -> Config:
    """Lazy import and load config."""
    from eprompt.config import Config

    return Config.load()


@contextmanager
def _prompt_errors() -> Iterator[None]:
    """Turn prompt failures into exit codes."""
    try:
        yield
    except PromptCancelled:
        raise typer.Exit(EXIT_CANCELLED)
    except PromptError as e:
        ui_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback()
def main(
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write debug logs to this file")
    ] = None,
):
    """Interactive terminal prompts."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


@app.command("select")
def select_cmd(
    options: Annotated[list[str], typer.Argument(help="Options to choose from")],
    prompt: Annotated[str, typer.Option("--prompt", "-p", help="Prompt message")] = "Choose one",
    index: Annotated[bool, typer.Option("--index", help="Print the index instead")] = False,
):
    """Pick one option."""
    from eprompt.prompts import select

    with _prompt_errors():
        i, value = select(prompt, options, console=ui_console, config=_get_config())
    typer.echo(i if index else value)


@app.command("multi")
def multi_cmd(
    options: Annotated[list[str], typer.Argument(help="Options to choose from")],
    prompt: Annotated[
        str, typer.Option("--prompt", "-p", help="Prompt message")
    ] = "Choose any (space toggles)",
    index: Annotated[bool, typer.Option("--index", help="Print indices instead")] = False,
):
    """Pick any number of options, one result per line."""
    from eprompt.prompts import multi_select

    with _prompt_errors():
        chosen = list(multi_select(prompt, options, console=ui_console, config=_get_config()))
    for i, value in chosen:
        typer.echo(i if index else value)


@app.command("fuzzy")
def fuzzy_cmd(
    options: Annotated[list[str] | None, typer.Argument(help="Options to filter")] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Read options from a file, one per line"),
    ] = None,
):
    """Filter options by typing and pick one."""
    from eprompt.prompts import fuzzy_select

    choices = list(options or [])
    if file:
        try:
            choices.extend(line for line in file.read_text().splitlines() if line.strip())
        except OSError as e:
            ui_console.print(f"[red]Error:[/red] Cannot read {escape(str(file))}: {e.strerror}")
            raise typer.Exit(1)

    with _prompt_errors():
        value = fuzzy_select(choices, console=ui_console, config=_get_config())
    typer.echo(value)


@app.command("input")
def input_cmd(
    prompt: Annotated[str, typer.Argument(help="Question to ask")],
    type_: Annotated[
        ValueType, typer.Option("--type", "-t", help="Re-ask until the answer parses as this")
    ] = ValueType.STR,
):
    """Ask for a value on one line."""
    from eprompt.input import read_and_parse

    with _prompt_errors():
        value = read_and_parse(
            prompt, _PARSERS[type_], console=ui_console, config=_get_config()
        )
    typer.echo(value)


@app.command()
def demo():
    """Walk through every prompt type."""
    from eprompt.input import read_and_parse
    from eprompt.prompts import multi_select, select

    cfg = _get_config()
    with _prompt_errors():
        plans = [
            plan
            for _, plan in multi_select(
                "What would you like to do today?",
                ["Eat a cake", "Go to work", "Go on a hike"],
                console=ui_console,
                config=cfg,
            )
        ]
        console.print(f"Lets do it! {plans}", highlight=False)

        _, fun = select(
            "How much fun is this library out of 5?",
            [1, 2, 3, 4, 5],
            console=ui_console,
            config=cfg,
        )
        console.print(f"Excellent: {fun}", highlight=False)

        age = read_and_parse("Enter your age", int, console=ui_console, config=cfg)
        console.print(f"Wow you're already {age}!", highlight=False)


@config_app.command("show")
def config_show():
    """Show current settings."""
    cfg = _get_config()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for name, desc, value in cfg.get_settings():
        table.add_row(name, escape(repr(value)), desc)

    console.print(table)
    console.print(f"[dim]{escape(str(cfg.config_file))}[/dim]")


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Setting name")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Change a setting."""
    cfg = _get_config()
    try:
        cfg.set(key, value)
    except KeyError:
        console.print(f"[red]Error:[/red] Unknown setting '{escape(key)}'")
        raise typer.Exit(1)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid value for {key}: {escape(value)}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] {key} = {escape(value)}")
