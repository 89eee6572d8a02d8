from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sentiment_analyzer.analysis.handler import HEALTH_MESSAGE, AnalysisRequestHandler
from sentiment_analyzer.analysis.service import SentimentAnalysisService
from sentiment_analyzer.config import ClassifierBackend, get_settings
from sentiment_analyzer.core.logger import get_logger, setup_logging
from sentiment_analyzer.core.models import AnalysisResult

log = get_logger("cli")
cli_app = typer.Typer(help="Sentence-level text sentiment analyzer.")
console = Console()


def _read_text(text: Optional[str], file: Optional[Path]) -> Optional[str]:
    """Resolve input from the argument, a file, or piped stdin."""
    if text is not None:
        return text
    if file is not None:
        return file.read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def _render(result: AnalysisResult) -> None:
    table = Table(title=f"Sentiment: {result.sentiment.value}", show_header=True)
    table.add_column("Score")
    table.add_column("Value", justify="right")
    table.add_row("confidence", f"{result.confidence:.3f}")
    table.add_row("positive", f"{result.positive_score:.3f}")
    table.add_row("negative", f"{result.negative_score:.3f}")
    table.add_row("neutral", f"{result.neutral_score:.3f}")
    console.print(table)


@cli_app.command()
def analyze(
    text: Optional[str] = typer.Argument(None, help="Text to analyze (omit to read --file or stdin)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read text from a file"),
    backend: Optional[ClassifierBackend] = typer.Option(None, "--backend", "-b", help="Classifier backend"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Analyze the sentiment of a block of text."""
    if text is not None and file is not None:
        raise typer.BadParameter("Pass either TEXT or --file, not both.", param_hint="--file")

    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    if backend is not None:
        settings = settings.model_copy(update={"classifier_backend": backend.value})

    try:
        service = SentimentAnalysisService.from_settings(settings)
    except ValueError as e:
        log.error(f"Configuration error: {e}")
        raise typer.Exit(code=1)

    handler = AnalysisRequestHandler(service, echo_length=settings.error_echo_length)
    try:
        response = handler.handle(_read_text(text, file))
    finally:
        service.close()

    if as_json:
        typer.echo(json.dumps(response.result.to_dict()))
    elif response.ok:
        _render(response.result)
    else:
        console.print("[red]Unable to analyze the provided text.[/red]")

    if not response.ok:
        raise typer.Exit(code=1)


@cli_app.command()
def validate():
    """Validate configuration without analyzing anything."""
    setup_logging("INFO")

    try:
        settings = get_settings()
        settings.validate_llm_credentials()
        log.info("Configuration validation passed!")
        log.info(f"  Length limits: {settings.min_text_length}..{settings.max_text_length}")
        log.info(f"  Special char ratio: {settings.max_special_char_ratio}")
        log.info(f"  Classifier backend: {settings.classifier_backend}")

        if settings.use_llm:
            log.info(f"  LLM: {settings.llm_model} at {settings.llm_base_url}")
        else:
            log.info("  LLM: not used (local rule classifier)")

    except Exception as e:
        log.error(f"Configuration validation failed: {e}")
        raise typer.Exit(code=1)


@cli_app.command()
def health():
    """Report that the analyzer is available."""
    typer.echo(HEALTH_MESSAGE)


if __name__ == "__main__":
    cli_app()
