"""
pwcycle CLI - run the login / change-password / logout check over a credential list.
"""
import sys
import logging
from typing import Optional

import click
from rich.logging import RichHandler

from . import (
    CycleCLI,
    console,
    create_engine,
    print_outcome_table,
    print_summary,
    write_report,
)
from ..automation.engine import EngineError
from ..automation.flow import PasswordCycleFlow
from ..automation.runner import CycleRunner, RunSummary
from ..automation.sites import SITES, get_site
from ..core.config import ENGINES, FailurePolicy

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("pwcycle")


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with run settings"
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug output",
    show_default=True
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], debug: bool) -> None:
    """pwcycle - login, change password and logout for every listed user."""
    ctx.obj = CycleCLI(config_path=config_path, debug=debug)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Directory holding the fixture files")
@click.pass_obj
def check_fixtures(cli: CycleCLI, data_dir: Optional[str]) -> None:
    """Load the fixture files and report what a run would use, without a browser."""
    config = cli.load_config(data_dir=data_dir)
    fixtures = cli.load_fixtures(config)

    console.print(f"[green]✓[/] {len(fixtures.usernames)} usernames from [bold]{config.fixture_path(config.usernames_file)}[/]")
    console.print(f"[green]✓[/] current password from [bold]{config.fixture_path(config.password_file)}[/]")
    console.print(f"[green]✓[/] new password from [bold]{config.fixture_path(config.new_password_file)}[/]")
    duplicates = len(fixtures.usernames) - len(set(fixtures.usernames))
    if duplicates:
        console.print(f"[yellow]![/] {duplicates} duplicate username rows; they will run again in file order")


@cli.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Directory holding the fixture files")
@click.option("--base-url", default=None, help="Base URL of the target application")
@click.option("--site", type=click.Choice(sorted(SITES)), default="salesforce", show_default=True)
@click.option("--engine", type=click.Choice(ENGINES), default=None, help="Browser automation engine")
@click.option("--headless/--no-headless", default=None, help="Run the browser without a window")
@click.option("--timeout-ms", "wait_timeout_ms", type=int, default=None, help="Bounded wait for each element")
@click.option(
    "--on-failure",
    type=click.Choice([p.value for p in FailurePolicy]),
    default=None,
    help="continue: isolate failures per credential; abort: stop at the first failure"
)
@click.option("--user-data-dir", type=str, default=None, help="Browser user data dir for persistent sessions")
@click.option("--report", type=click.Path(dir_okay=False), default=None, help="Write a JSON report to this file")
@click.option("--dry-run", is_flag=True, default=False, help="Load fixtures and show the password plan only")
@click.pass_obj
def run(
    cli: CycleCLI,
    data_dir: Optional[str],
    base_url: Optional[str],
    site: str,
    engine: Optional[str],
    headless: Optional[bool],
    wait_timeout_ms: Optional[int],
    on_failure: Optional[str],
    user_data_dir: Optional[str],
    report: Optional[str],
    dry_run: bool,
) -> None:
    """Run the password cycle for every username in the fixtures, in file order."""
    config = cli.load_config(
        data_dir=data_dir,
        base_url=base_url,
        engine=engine,
        headless=headless,
        wait_timeout_ms=wait_timeout_ms,
        on_failure=on_failure,
    )
    # Fixture problems end the run before any browser is started
    fixtures = cli.load_fixtures(config)
    flow = PasswordCycleFlow.from_config(config, site=get_site(site))

    if dry_run:
        runner = CycleRunner(None, flow, config.on_failure)
        outcomes = runner.run(fixtures.credentials, fixtures.password, fixtures.new_password, dry_run=True)
    else:
        eng = create_engine(config.engine, config.wait_timeout_ms)
        try:
            eng.start(headless=config.headless, user_data_dir=user_data_dir)
        except EngineError as e:
            raise click.ClickException(str(e))
        try:
            runner = CycleRunner(eng, flow, config.on_failure)
            outcomes = runner.run(fixtures.credentials, fixtures.password, fixtures.new_password)
        finally:
            eng.stop()

    print_outcome_table(outcomes)
    summary = RunSummary.of(outcomes)
    print_summary(summary)

    if report:
        path = write_report(report, outcomes, config)
        console.print(f"[green]✓[/] Report written to {path}")

    if not summary.ok:
        sys.exit(1)


def main() -> None:
    """Entry point for the pwcycle CLI."""
    try:
        cli()
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.debug("Unhandled error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
