"""
pwcycle CLI - shared helpers for the command line interface.
"""
from typing import Any, List, Optional
import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..core.config import CycleConfig, ConfigError, load_config
from ..core.fixtures import FixtureError, load_fixtures
from ..core.models import FixtureSet
from ..automation.runner import RunSummary
from ..automation.types import OutcomeStatus, RunOutcome

logger = logging.getLogger(__name__)

# Create console for rich output
console = Console()

STATUS_STYLES = {
    OutcomeStatus.PASSED: "green",
    OutcomeStatus.FAILED: "red",
    OutcomeStatus.SKIPPED: "yellow",
}


class CycleCLI:
    """State shared by the CLI commands."""

    def __init__(self, config_path: Optional[str] = None, debug: bool = False):
        self.config_path = config_path
        self.debug = debug

        if debug:
            logging.getLogger().setLevel(logging.DEBUG)
            logger.debug("Debug mode enabled")

    def load_config(self, **overrides: Any) -> CycleConfig:
        try:
            return load_config(self.config_path, **overrides)
        except ConfigError as e:
            raise click.ClickException(f"Invalid configuration: {e}")

    def load_fixtures(self, config: CycleConfig) -> FixtureSet:
        try:
            return load_fixtures(config)
        except FixtureError as e:
            if self.debug:
                logger.exception("Error loading fixtures")
            raise click.ClickException(f"Failed to load fixtures: {e}")


def create_engine(name: str, wait_timeout_ms: int):
    """Instantiate the named engine; it still has to be started."""
    if name == "playwright":
        from ..automation.playwright_engine import PlaywrightEngine
        return PlaywrightEngine(wait_timeout_ms=wait_timeout_ms)
    if name == "selenium":
        from ..automation.selenium_engine import SeleniumEngine
        return SeleniumEngine(wait_timeout_ms=wait_timeout_ms)
    raise click.BadParameter(f"Unknown engine: {name}")


def print_outcome_table(outcomes: List[RunOutcome]) -> None:
    """Print one row per credential."""
    if not outcomes:
        console.print("[yellow]No credentials were run.[/]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Username")
    table.add_column("Status")
    table.add_column("Committed", style="dim")
    table.add_column("Reason")

    for index, outcome in enumerate(outcomes, start=1):
        style = STATUS_STYLES.get(outcome.status, "white")
        table.add_row(
            str(index),
            outcome.username,
            f"[{style}]{outcome.status.value}[/]",
            "yes" if outcome.committed else "no",
            outcome.reason,
        )

    console.print(table)


def print_summary(summary: RunSummary) -> None:
    console.print(
        f"[bold]Summary[/bold]: [green]{summary.passed} passed[/], "
        f"[red]{summary.failed} failed[/], [yellow]{summary.skipped} skipped[/]"
    )


def write_report(path: str, outcomes: List[RunOutcome], config: CycleConfig) -> Path:
    """Write the outcomes as JSON; passwords are not included."""
    output_path = Path(path).expanduser().resolve()
    settings = config.to_dict()
    report = {
        'base_url': settings['base_url'],
        'engine': settings['engine'],
        'on_failure': settings['on_failure'],
        'summary': vars(RunSummary.of(outcomes)),
        'outcomes': [o.to_dict() for o in outcomes],
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2))
    return output_path
