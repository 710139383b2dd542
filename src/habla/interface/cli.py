"""habla CLI — quiz, answer checking, stats and configuration."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer

from habla.application.config import AppConfig, resolve_config
from habla.application.matching.matcher import FuzzyMatcher

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="habla: Spaced-repetition Spanish phrase trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage habla configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING if verbose <= 1 else logging.INFO if verbose == 2 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

PhrasesOpt = Annotated[
    Path | None, typer.Option("--phrases", help="Phrase file (JSON or YAML).")
]
ProgressOpt = Annotated[
    Path | None, typer.Option("--progress-file", help="Progress JSON file.")
]
BackendOpt = Annotated[str | None, typer.Option("--backend", help="Progress store: json, memory.")]


def _resolve_with_overrides(ctx: typer.Context, **overrides: Any) -> AppConfig:
    overrides["verbose"] = (ctx.obj or {}).get("verbose", 1)
    try:
        return resolve_config(overrides)
    except ValueError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _build_service(config: AppConfig):
    from habla.application.factory import build_quiz_service

    try:
        return build_quiz_service(config)
    except (OSError, ValueError) as e:
        typer.secho(f"Could not load phrases: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _run(coro):
    try:
        return asyncio.run(coro)
    except (OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for habla."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def check(
    ctx: typer.Context,
    answer: Annotated[str, typer.Argument(help="The typed answer.")],
    expected: Annotated[str, typer.Argument(help="The expected phrase.")],
    max_distance: Annotated[
        int | None,
        typer.Option(help="Max edit distance. Default: from config, else one per 5 characters."),
    ] = None,
    min_similarity: Annotated[
        float | None, typer.Option(help="Minimum similarity ratio. Default: from config.")
    ] = None,
    strict_accents: Annotated[
        bool | None,
        typer.Option(
            "--strict-accents/--lenient-accents",
            help="Count missing accents as errors. Default: from config.",
        ),
    ] = None,
):
    """[bold green]Check[/bold green] an answer against an expected phrase."""
    config = _resolve_with_overrides(
        ctx,
        max_distance=max_distance,
        min_similarity=min_similarity,
        strict_accents=strict_accents,
    )
    matcher = FuzzyMatcher(config.match_options())
    result = matcher.match(answer, expected)
    feedback = matcher.feedback(answer, expected)

    out = asdict(result)
    out["feedback"] = {"type": feedback.type.value, "message": feedback.message}
    typer.echo(json.dumps(out, indent=2))


@app.command("next")
def next_phrase(
    ctx: typer.Context,
    phrases: PhrasesOpt = None,
    progress_file: ProgressOpt = None,
    backend: BackendOpt = None,
):
    """Show the phrase that would be reviewed next."""
    config = _resolve_with_overrides(
        ctx, phrases_file=phrases, progress_file=progress_file, store_backend=backend
    )
    service = _build_service(config)

    phrase = _run(service.next_phrase())
    if phrase is None:
        typer.secho("No phrases available.", fg="yellow")
        raise typer.Exit(1)

    prompt = phrase.english or phrase.text
    label = f"{phrase.emoji} {prompt}" if phrase.emoji else prompt
    typer.echo(f"#{phrase.id} {label}")


@app.command()
def quiz(
    ctx: typer.Context,
    rounds: Annotated[int, typer.Option(help="Number of phrases to ask.")] = 10,
    phrases: PhrasesOpt = None,
    progress_file: ProgressOpt = None,
    backend: BackendOpt = None,
):
    """Run an interactive review session.

    Type the Spanish phrase for each prompt. Leave the answer empty to
    skip, or type [bold]:q[/bold] to stop.
    """
    config = _resolve_with_overrides(
        ctx, phrases_file=phrases, progress_file=progress_file, store_backend=backend
    )
    service = _build_service(config)

    async def run():
        correct = 0
        asked = 0
        for _ in range(rounds):
            phrase = await service.next_phrase()
            if phrase is None:
                typer.secho("No phrases available.", fg="yellow")
                break

            prompt = phrase.english or f"Phrase #{phrase.id}"
            answer = typer.prompt(f"{phrase.emoji or '?'} {prompt}", default="", show_default=False)
            if answer.strip() == ":q":
                break

            asked += 1
            if not answer.strip():
                await service.skip(phrase.id)
                typer.secho(f"Skipped. Answer: {phrase.text}", fg="yellow")
                continue

            result = await service.submit(phrase.id, answer)
            if result.match.matches:
                correct += 1
                typer.secho(f"{result.feedback.message} {phrase.text}", fg="green")
            else:
                typer.secho(f"{result.feedback.message} Answer: {phrase.text}", fg="red")
            typer.echo(f"  next review in {result.progress.interval} day(s)")

        typer.echo(f"Session: {correct}/{asked} correct")

    _run(run())


@app.command()
def stats(
    ctx: typer.Context,
    phrases: PhrasesOpt = None,
    progress_file: ProgressOpt = None,
    backend: BackendOpt = None,
):
    """Show learning statistics as JSON."""
    config = _resolve_with_overrides(
        ctx, phrases_file=phrases, progress_file=progress_file, store_backend=backend
    )
    service = _build_service(config)

    result = _run(service.scheduler.get_stats())
    typer.echo(json.dumps(asdict(result), indent=2))


@app.command()
def reset(
    ctx: typer.Context,
    progress_file: ProgressOpt = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Bypass confirmation.")
    ] = False,
):
    """Delete all review progress in the progress file."""
    from habla.infrastructure.stores.json_store import JsonProgressStore

    config = _resolve_with_overrides(ctx, progress_file=progress_file)
    if not force and not typer.confirm("Delete all review progress?"):
        raise typer.Abort()

    _run(JsonProgressStore(config.progress_file).clear_all())
    typer.secho(f"Progress cleared in {config.progress_file}.", fg="green")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port.")] = 8777,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on changes.")] = False,
):
    """Start the HTTP API used by the browser extension."""
    import uvicorn

    uvicorn.run("habla.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()
