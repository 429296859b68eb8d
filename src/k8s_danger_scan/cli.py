"""Command-line interface for k8s-danger-scan."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from k8s_danger_scan import __version__
from k8s_danger_scan.config import ScanConfig
from k8s_danger_scan.exceptions import DangerScanError, ReportError
from k8s_danger_scan.models import ExitCode, OutputFormat, ScanResult
from k8s_danger_scan.reporter import create_reporter
from k8s_danger_scan.scanner import diff_paths, scan_paths

PROG_NAME = "k8s-danger-scan"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

err_console = Console(stderr=True, soft_wrap=True)


class DangerScanGroup(click.Group):
    """Command group that turns usage errors into exit code 3."""

    def main(self, args=None, prog_name=None, standalone_mode=True, **extra):
        try:
            rv = super().main(args=args, prog_name=prog_name, standalone_mode=False, **extra)
        except click.ClickException as e:
            e.show()
            rv = ExitCode.ERROR
        except click.Abort:
            err_console.print("Aborted!", markup=False)
            rv = ExitCode.ERROR

        if not standalone_mode:
            return rv
        sys.exit(int(rv or 0))


def _configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )
    logging.getLogger("k8s_danger_scan").setLevel(level)


def _print_error(message: str) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False, highlight=False)


def _report_options(func):
    """Options shared by the scan and diff commands."""
    func = click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write output to file",
    )(func)
    func = click.option(
        "--include-medium",
        is_flag=True,
        default=False,
        help="Include MEDIUM severity findings (default: HIGH only)",
    )(func)
    func = click.option(
        "--json",
        "json_output",
        is_flag=True,
        default=False,
        help="Output in JSON format",
    )(func)
    return func


def _command_config(ctx: click.Context, json_output: bool, include_medium: bool) -> ScanConfig:
    config: ScanConfig = ctx.find_object(ScanConfig) or ScanConfig.from_env()
    if include_medium:
        config.include_medium = True
    if json_output:
        config.output_format = OutputFormat.JSON
    return config


def _output_result(result: ScanResult, config: ScanConfig, output: Optional[Path]) -> None:
    """Render the result and write it to stdout or a file."""
    report = create_reporter(config.output_format).generate(result)

    try:
        if output:
            output.write_text(report, encoding="utf-8")
            err_console.print(f"Report written to {output}", style="green", markup=False)
        else:
            click.echo(report, nl=False)
    except OSError as e:
        raise ReportError(f"failed to write report: {e}") from e


@click.group(cls=DangerScanGroup, invoke_without_command=True)
@click.version_option(
    version=__version__,
    prog_name=PROG_NAME,
    message="%(prog)s version %(version)s",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity for diagnostics on stderr",
)
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str]) -> None:
    """k8s-danger-scan - Detect catastrophic Kubernetes misconfigurations.

    \b
    Exit codes:
      0  No findings
      1  Medium risk only
      2  At least one high risk
      3  Error occurred

    \b
    Examples:
      k8s-danger-scan scan ./manifests
      k8s-danger-scan scan deployment.yaml --include-medium
      k8s-danger-scan diff old.yaml new.yaml
      k8s-danger-scan scan . --json --include-medium
    """
    config = ScanConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()
    _configure_logging(config.log_level)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(ExitCode.ERROR)


@main.command("scan")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@_report_options
@click.pass_context
def scan(
    ctx: click.Context,
    paths: tuple[Path, ...],
    json_output: bool,
    include_medium: bool,
    output: Optional[Path],
) -> None:
    """Scan manifest files or directories.

    PATHS are manifest files, or directories searched recursively for
    .yaml/.yml files.
    """
    config = _command_config(ctx, json_output, include_medium)

    try:
        result = scan_paths(paths, config=config)
        _output_result(result, config, output)
    except DangerScanError as e:
        _print_error(str(e))
        ctx.exit(ExitCode.ERROR)

    ctx.exit(result.exit_code)


@main.command("diff")
@click.argument("old", type=click.Path(path_type=Path))
@click.argument("new", type=click.Path(path_type=Path))
@_report_options
@click.pass_context
def diff(
    ctx: click.Context,
    old: Path,
    new: Path,
    json_output: bool,
    include_medium: bool,
    output: Optional[Path],
) -> None:
    """Compare manifests and show new risks only.

    OLD and NEW are manifest files or directories. Only findings present in
    NEW and absent from OLD are reported.
    """
    config = _command_config(ctx, json_output, include_medium)

    try:
        result = diff_paths(old, new, config=config)
        _output_result(result, config, output)
    except DangerScanError as e:
        _print_error(str(e))
        ctx.exit(ExitCode.ERROR)

    ctx.exit(result.exit_code)


if __name__ == "__main__":
    main()
