"""Basic text output for non-interactive mode."""

from __future__ import annotations

import click

from logpress.core.sizes import format_size
from logpress.types.scan import ScanOutcome


def summary_lines(outcome: ScanOutcome, *, dry_run: bool = False) -> list[str]:
    """Summary of a scan as plain text lines."""
    stats = outcome.stats
    verb = "Would compress" if dry_run else "Compressed"
    lines = [f"{verb} {stats.file_count} file(s): {format_size(stats.uncompressed_bytes)}"]
    if not dry_run and stats.uncompressed_bytes:
        lines.append(
            f"Result: {format_size(stats.compressed_bytes)} "
            f"(saved {format_size(stats.saved_bytes)}, ratio {stats.ratio:.1%})"
        )
    if outcome.error is not None:
        lines.append(f"Aborted at {outcome.error.path}: {outcome.error.cause}")
        lines.append("Totals above are partial.")
    return lines


def print_summary(outcome: ScanOutcome, *, dry_run: bool = False) -> None:
    """Print the scan summary to stdout (errors to stderr)."""
    for line in summary_lines(outcome, dry_run=dry_run):
        click.echo(line, err=line.startswith("Aborted"))
