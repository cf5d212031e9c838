"""Main CLI interface for npm-compromised-scan."""

from pathlib import Path
from typing import Optional
import typer
from rich.console import Console

from .. import __version__
from ..config import DEFAULT_FAIL_EXIT_CODE, DEFAULT_LIST_FILE, OutputFormat, ScanConfig
from ..core.denylist import load_denylist
from ..core.errors import ConfigurationError, ScanError
from ..core.matcher import DenylistMatcher, ScanResult
from ..output.formatters import JSONFormatter, TextFormatter
from ..sources import resolve_tree_source
from ..utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="npm-compromised-scan",
    help="Compare npm dependency tree (npm ls --all --json) to a list of compromised packages.",
    add_completion=False
)

console = Console()
error_console = Console(stderr=True)
logger = get_logger("CLI")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"npm-compromised-scan {__version__}", highlight=False)
        raise typer.Exit()


def run_scan(config: ScanConfig) -> ScanResult:
    """Load the denylist and dependency tree, then match them.

    Args:
        config: Scan configuration

    Returns:
        Scan result

    Raises:
        ScanError: If any input cannot be loaded
    """
    lists = load_denylist(config.list_file)
    logger.info(f"Loaded {len(lists.names)} compromised names, {len(lists.exact)} exact entries")

    source = resolve_tree_source(config)
    logger.info(f"Loading dependency tree from {source.describe()}")
    document = source.load()

    return DenylistMatcher(lists).scan(document)


def render_result(config: ScanConfig, result: ScanResult) -> None:
    """Render a scan result in the configured format.

    Args:
        config: Scan configuration
        result: Scan result
    """
    json_formatter = JSONFormatter(console, config.output_file)
    if config.output_format is OutputFormat.JSON:
        json_formatter.render(result)
    else:
        TextFormatter(console).render(result)

    if config.output_file:
        json_formatter.save_results(result)


@app.command()
def scan(
    list_file: Path = typer.Option(
        DEFAULT_LIST_FILE,
        "--list",
        "-l",
        envvar="NPM_COMPROMISED_LIST",
        help="Path to compromised list file"
    ),
    npm_json: Optional[str] = typer.Option(
        None,
        "--npm-json",
        help="Existing npm ls JSON file path, or '-' to read from stdin. If omitted, runs `npm ls --all --json`."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        help="Output format: text or json"
    ),
    fail_exit_code: int = typer.Option(
        DEFAULT_FAIL_EXIT_CODE,
        "--fail-exit-code",
        help="Exit code to use when any matches are found (0-255)"
    ),
    no_run_npm: bool = typer.Option(
        False,
        "--no-run-npm",
        help="Suppress running npm (error if no JSON source is provided)"
    ),
    npm_executable: str = typer.Option(
        "npm",
        "--npm",
        envvar="NPM_COMPROMISED_NPM",
        help="npm executable to run"
    ),
    project_dir: Optional[Path] = typer.Option(
        None,
        "--project-dir",
        "-C",
        help="Directory to run npm in (defaults to the current directory)"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON report to this file"
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Scan an npm dependency tree for compromised packages."""

    try:
        try:
            setup_logging(verbose=verbose, log_file=log_file)
        except OSError as e:
            raise ConfigurationError(f"Unable to open log file: {e}") from e

        config = ScanConfig(
            list_file=list_file,
            npm_json=npm_json,
            output_format=output_format,
            fail_exit_code=fail_exit_code,
            run_npm=not no_run_npm,
            npm_executable=npm_executable,
            project_dir=project_dir,
            output_file=output,
            log_file=log_file,
            verbose=verbose,
        )
        result = run_scan(config)
        render_result(config, result)
    except (ScanError, OSError) as e:
        logger.debug(f"Scan failed: {e}")
        error_console.print(f"Error: {e}", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    if result.any_match:
        raise typer.Exit(config.fail_exit_code)


def main() -> None:
    """Main entry point for npm-compromised-scan."""
    app()


if __name__ == "__main__":
    main()
