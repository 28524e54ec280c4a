"""CLI entry point for logpress."""

from __future__ import annotations

import logging
import sys
from contextlib import nullcontext
from pathlib import Path

import click

from logpress import __version__
from logpress.compressors.registry import ALIASES, COMPRESSORS
from logpress.types.config import Settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SCAN_FAILED = 1
EXIT_USAGE = 2
EXIT_ALREADY_RUNNING = 3


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directories", nargs=-1, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--size", "-s", type=int, default=None,
    help="Minimum size: 0 = all, 1 = non-empty, 2-1023 = KiB, >= 1024 = bytes",
)
@click.option("--age", "-a", type=int, default=None, help="Minimum age in days")
@click.option(
    "--dry-run/--no-dry-run", "-n", default=None,
    help="Show what would be compressed (--no-dry-run overrides config)",
)
@click.option(
    "--algorithm",
    type=click.Choice(sorted([*COMPRESSORS, *ALIASES]), case_sensitive=False),
    default=None,
    help="Compression algorithm (default: gzip)",
)
@click.option("--level", type=int, default=None, help="Compression level 0-9")
@click.option("--pid-file", type=click.Path(dir_okay=False), default=None, help="Single-instance lock file")
@click.option("--log-file", default=None, help="Also log to this file (strftime codes allowed)")
@click.option("--nice", type=int, default=None, help="Niceness increment, 0 disables (default: 19)")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--rich/--no-rich", default=None, help="Rich terminal output (default: auto)")
@click.version_option(__version__, prog_name="logpress")
def cli(
    directories: tuple[Path, ...],
    size: int | None,
    age: int | None,
    dry_run: bool | None,
    algorithm: str | None,
    level: int | None,
    pid_file: str | None,
    log_file: str | None,
    nice: int | None,
    config_path: Path | None,
    verbose: bool,
    rich: bool | None,
) -> None:
    """Compress stale, oversized .log files in place.

    \b
    Usage:
      logpress /var/log/myapp
      logpress --size 1 --age 3 /srv/a /srv/b
      logpress --dry-run --size 4096 /var/log
    """
    from logpress.core.config import resolve_settings
    from logpress.errors import AlreadyRunningError, ConfigError

    try:
        settings = resolve_settings(
            {
                "directories": list(directories),
                "min_size": size,
                "min_age": age,
                "dry_run": dry_run,
                "algorithm": algorithm,
                "level": level,
                "pid_file": pid_file,
                "log_file": log_file,
                "nice": nice,
            },
            config_path=config_path,
        )
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_USAGE)

    use_rich = rich if rich is not None else sys.stderr.isatty()

    from logpress.runtime import PidFile, configure_logging, lower_priority

    try:
        log_path = configure_logging(verbose=verbose, log_file=settings.log_file, use_rich=use_rich)
    except OSError as exc:
        click.echo(f"Error: cannot open log file: {exc}", err=True)
        sys.exit(EXIT_USAGE)
    if log_path is not None:
        logger.debug("Logging to %s", log_path)

    lock = PidFile(settings.pid_file) if settings.pid_file else nullcontext()
    try:
        with lock:
            lower_priority(settings.nice)
            code = _run(settings, use_rich)
    except AlreadyRunningError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ALREADY_RUNNING)
    sys.exit(code)


def _run(settings: Settings, use_rich: bool) -> int:
    """Scan every configured directory and print the summary. Returns an exit code."""
    from logpress.compressors.registry import create_compressor
    from logpress.core.scanner import Scanner

    policy = settings.policy()
    logger.info(
        "Scanning %d director%s (min size %d bytes, min age %d days%s)",
        len(settings.directories),
        "y" if len(settings.directories) == 1 else "ies",
        policy.min_size_bytes,
        policy.min_age_days,
        ", dry run" if policy.dry_run else "",
    )
    compressor = create_compressor(settings.algorithm, settings.level)
    outcome = Scanner(policy, compressor).scan(settings.directories)

    if use_rich:
        from logpress.ui.terminal import RichSummary

        RichSummary().print_summary(outcome, dry_run=policy.dry_run)
    else:
        from logpress.cli.output import print_summary

        print_summary(outcome, dry_run=policy.dry_run)
    return EXIT_OK if outcome.ok else EXIT_SCAN_FAILED


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
