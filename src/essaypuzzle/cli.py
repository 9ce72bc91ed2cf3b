"""CLI entry point for Essay Puzzle."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.text import Text

from essaypuzzle import __version__
from essaypuzzle.models.analysis import AnalysisStatus, SENTENCE_STYLES, SentenceType
from essaypuzzle.models.config import Config, DEFAULT_CONFIG_PATH
from essaypuzzle.models.essay_block import BlockType
from essaypuzzle.services.llm_client import LLMClient, build_llm_client
from essaypuzzle.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()

SENTENCE_TYPE_NAMES = {
    SentenceType.CLAIM: "påstand",
    SentenceType.EVIDENCE: "bevis",
    SentenceType.REFLECTION: "drøfting",
    SentenceType.NEUTRAL: "nøytral",
}


def load_config() -> Config:
    """
    Load configuration from ~/.config/essaypuzzle/config.yaml and the environment.

    Returns:
        Validated Config instance

    Raises:
        click.ClickException: If the config file has invalid permissions or fails validation
    """
    try:
        config = Config.load(DEFAULT_CONFIG_PATH)
        logger.info("config_loaded", path=str(DEFAULT_CONFIG_PATH), has_api_key=config.llm.has_api_key)
        return config
    except PermissionError as e:
        logger.error("config_permission_error", path=str(DEFAULT_CONFIG_PATH))
        raise click.ClickException(str(e))
    except Exception as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


def parse_block_types(values: tuple[str, ...]) -> list[BlockType]:
    """
    Parse block type names given on the command line.

    Args:
        values: Type names, case-insensitive (e.g. "claim", "EVIDENCE")

    Returns:
        List of BlockType in the given order

    Raises:
        click.BadParameter: If a name is not a block type
    """
    types = []
    for value in values:
        try:
            types.append(BlockType(value.strip().upper()))
        except ValueError:
            valid = ", ".join(t.value.lower() for t in BlockType)
            raise click.BadParameter(f"'{value}' is not a block type. Choose from: {valid}")
    return types


def _get_llm_client() -> Optional[LLMClient]:
    config = load_config()
    client = build_llm_client(config.llm)
    if client is None:
        click.echo(
            "Warning: no API key configured; AI feedback is disabled. "
            "Set ESSAYPUZZLE_LLM_API_KEY to enable it.",
            err=True,
        )
    return client


@click.group()
@click.version_option(version=__version__, prog_name="essaypuzzle")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON log file (default: ~/.cache/essaypuzzle/logs/essaypuzzle.log, or $ESSAYPUZZLE_LOG_FILE)",
)
def cli(log_file: Optional[Path]):
    """Essay Puzzle: arrange essay blocks on a timeline and get LLM feedback on their balance."""
    configure_logging(log_file)


@cli.command()
def run():
    """
    Open the essay timeline in the terminal UI.

    Starts with five blocks: introduction, claim, evidence, reflection and conclusion.
    """
    logger.info("run_command_started")

    config = load_config()
    llm_client = build_llm_client(config.llm)

    from essaypuzzle.tui.app import EssayPuzzleApp

    logger.info("launching_tui", ai_enabled=llm_client is not None)
    app = EssayPuzzleApp(llm_client=llm_client, config=config)
    app.run()


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def analyze(source):
    """
    Analyze the sentence balance of a text.

    SOURCE is a text file, or "-" (the default) to read from stdin.

    Examples:
        essaypuzzle analyze paragraph.txt
        echo "Schools should start later. Studies show..." | essaypuzzle analyze
    """
    from essaypuzzle.services.llm_wrappers import analyze_essay_block

    text = source.read()
    logger.info("analyze_command_started", text_length=len(text))

    llm_client = _get_llm_client() if text.strip() else None
    outcome = asyncio.run(analyze_essay_block(llm_client, text))

    if not outcome.ok:
        console.print(Text("Ikke analysert ennå", style="dim italic"), f"({outcome.status.value})")
        if outcome.error:
            console.print(Text(outcome.error, style="dim"))
        if outcome.status != AnalysisStatus.SKIPPED:
            sys.exit(1)
        return

    result = outcome.result
    breakdown = Text()
    for sentence in result.sentences:
        breakdown.append(sentence.text.strip(), style=SENTENCE_STYLES.get(sentence.type, ""))
        breakdown.append(" ")
    console.print(breakdown)

    counts = result.count_by_type()
    summary = Text(f"{len(result.sentences)} setninger: ", style="dim")
    summary.append(", ".join(
        f"{count} {SENTENCE_TYPE_NAMES[sentence_type]}"
        for sentence_type, count in counts.items()
        if count
    ))
    console.print(summary)
    console.print()

    for label, value, style in result.balance_score.slices():
        console.print(Text(f"{label:<17}", style=style), f"{value:.0f}%")

    console.print()
    console.print(Text(f'"{result.feedback}"', style="italic"))

    for sentence in result.sentences:
        if sentence.suggestion:
            console.print(Text(f"• {sentence.suggestion}", style="dim"))


@cli.command()
@click.argument("block_types", nargs=-1, required=True)
def advise(block_types: tuple[str, ...]):
    """
    Ask whether a sequence of block types is a logical essay flow.

    Examples:
        essaypuzzle advise introduction claim evidence reflection conclusion
        essaypuzzle advise claim claim conclusion
    """
    from essaypuzzle.services.llm_wrappers import get_structural_advice

    types = parse_block_types(block_types)
    logger.info("advise_command_started", block_types=[t.value for t in types])

    llm_client = _get_llm_client()
    advice = asyncio.run(get_structural_advice(llm_client, types))
    click.echo(advice)


def main():
    cli()
