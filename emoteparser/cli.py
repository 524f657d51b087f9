import logging
from pathlib import Path
from typing import Optional

import typer
from decouple import config as env_config
from lark.exceptions import UnexpectedCharacters, UnexpectedToken
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .answers import Character, Gender, LogMessageAnswers
from .cache import cached_reduce
from .errors import EmoteParserError, MessageNotFound, ParseError, RepositoryError
from .repository import EmoteRepository, Language, render_emote
from .validation import check_repository

app = typer.Typer(help="emoteparser: render game emote log messages")

logger = logging.getLogger(__name__)

DEFAULT_DATA = Path(env_config("EMOTEPARSER_DATA", default="emotes.json"))
DEFAULT_LANGUAGE = Language(env_config("EMOTEPARSER_LANGUAGE", default="en"))


def format_parse_error(e: ParseError) -> str:
    """Format a parse error with the underlying lark details."""
    parts = [str(e)]
    original = e.original_error
    if isinstance(original, UnexpectedToken):
        parts.append(f"  Got: {original.token.type} ({original.token.value!r})")
    elif isinstance(original, UnexpectedCharacters):
        parts.append(f"  Got: {original.char!r}")
    return "\n".join(parts)


def _report_error(e: EmoteParserError):
    if isinstance(e, ParseError):
        typer.echo(format_parse_error(e), err=True)
    else:
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
    raise typer.Exit(1)


def _characters(
    origin: str,
    origin_gender: Gender,
    origin_npc: bool,
    origin_self: bool,
    target: Optional[str],
    target_gender: Gender,
    target_npc: bool,
    target_self: bool,
):
    origin_character = Character(
        name=origin, gender=origin_gender, is_player=not origin_npc, is_self=origin_self
    )
    target_character = None
    if target:
        target_character = Character(
            name=target, gender=target_gender, is_player=not target_npc, is_self=target_self
        )
    return origin_character, target_character


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@app.command()
def render(
    markup: str = typer.Argument(..., help="Log message markup"),
    origin: str = typer.Option(..., help="Name of the character performing the emote"),
    origin_gender: Gender = typer.Option(Gender.MALE, help="Origin gender (M or F)"),
    origin_npc: bool = typer.Option(False, help="Origin is not a player character"),
    origin_self: bool = typer.Option(False, help="Origin is the reader's own character"),
    target: Optional[str] = typer.Option(None, help="Name of the targeted character"),
    target_gender: Gender = typer.Option(Gender.MALE, help="Target gender (M or F)"),
    target_npc: bool = typer.Option(False, help="Target is not a player character"),
    target_self: bool = typer.Option(False, help="Target is the reader's own character"),
    verbose: bool = typer.Option(False, help="Enable debug logging"),
):
    """
    Render a markup string for the given participants.
    """
    _configure_logging(verbose)
    try:
        origin_character, target_character = _characters(
            origin, origin_gender, origin_npc, origin_self,
            target, target_gender, target_npc, target_self,
        )
        answers = LogMessageAnswers(origin_character, target_character)
        typer.echo(cached_reduce(markup).evaluate(answers))
    except EmoteParserError as e:
        _report_error(e)


@app.command()
def emote(
    command: str = typer.Argument(..., help="Emote text command, e.g. /surprised"),
    origin: str = typer.Option(..., help="Name of the character performing the emote"),
    origin_gender: Gender = typer.Option(Gender.MALE, help="Origin gender (M or F)"),
    origin_npc: bool = typer.Option(False, help="Origin is not a player character"),
    origin_self: bool = typer.Option(False, help="Origin is the reader's own character"),
    target: Optional[str] = typer.Option(None, help="Name of the targeted character"),
    target_gender: Gender = typer.Option(Gender.MALE, help="Target gender (M or F)"),
    target_npc: bool = typer.Option(False, help="Target is not a player character"),
    target_self: bool = typer.Option(False, help="Target is the reader's own character"),
    data: Path = typer.Option(DEFAULT_DATA, help="Emote data json (overrides EMOTEPARSER_DATA)"),
    language: Language = typer.Option(DEFAULT_LANGUAGE, help="Message language"),
    verbose: bool = typer.Option(False, help="Enable debug logging"),
):
    """
    Look up an emote by command and render it.
    """
    _configure_logging(verbose)
    try:
        repository = EmoteRepository.from_file(data)
        origin_character, target_character = _characters(
            origin, origin_gender, origin_npc, origin_self,
            target, target_gender, target_npc, target_self,
        )
        typer.echo(
            render_emote(repository, command, language, origin_character, target_character)
        )
    except MessageNotFound:
        typer.echo(f"Error: unknown emote {command}", err=True)
        raise typer.Exit(1)
    except EmoteParserError as e:
        _report_error(e)


@app.command()
def check(
    data: Path = typer.Option(DEFAULT_DATA, help="Emote data json (overrides EMOTEPARSER_DATA)"),
    verbose: bool = typer.Option(False, help="Enable debug logging"),
):
    """
    Reduce every message in the emote data and report failures.
    """
    _configure_logging(verbose)
    console = Console(stderr=True)
    try:
        repository = EmoteRepository.from_file(data)
    except RepositoryError as e:
        _report_error(e)

    total = len(repository.all_messages()) * len(Language) * 2
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Checking messages", total=total)
        results = check_repository(repository, on_checked=lambda _: progress.advance(task))

    failures = [r for r in results if not r.ok]
    if failures:
        table = Table(title=f"{len(failures)} of {len(results)} messages failed")
        table.add_column("Emote")
        table.add_column("Language")
        table.add_column("Targeted")
        table.add_column("Error")
        for r in failures:
            table.add_row(r.emote, r.language.value, str(r.targeted), f"{r.error_type}: {r.error}")
        console.print(table)
        raise typer.Exit(1)

    typer.echo(f"All {len(results)} messages reduced successfully")


@app.command("version")
def show_version():
    """Print the installed version."""
    typer.echo(__version__)


if __name__ == "__main__":
    app()
