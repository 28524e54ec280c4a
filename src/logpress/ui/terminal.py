"""Rich-powered summary output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from logpress.core.sizes import format_size
from logpress.types.scan import ScanOutcome

STYLE_LABEL = "bold #94a3b8"   # slate
STYLE_VALUE = "#e2e8f0"        # light
STYLE_SAVED = "#34d399"        # green
STYLE_ERROR = "bold #f87171"   # red


class RichSummary:
    """Renders a :class:`ScanOutcome` as a compact table."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, outcome: ScanOutcome, *, dry_run: bool = False) -> Table:
        stats = outcome.stats
        table = Table.grid(padding=(0, 2))
        table.add_column(style=STYLE_LABEL)
        table.add_column(style=STYLE_VALUE)
        table.add_row("Files", str(stats.file_count))
        table.add_row("Original", format_size(stats.uncompressed_bytes))
        if not dry_run:
            table.add_row("Compressed", format_size(stats.compressed_bytes))
            if stats.uncompressed_bytes:
                table.add_row(
                    "Saved",
                    Text(
                        f"{format_size(stats.saved_bytes)} ({1 - stats.ratio:.1%})",
                        style=STYLE_SAVED,
                    ),
                )
        if outcome.error is not None:
            table.add_row(
                Text("Aborted", style=STYLE_ERROR),
                Text(f"{outcome.error.path}: {outcome.error.cause}", style=STYLE_ERROR),
            )
        return table

    def print_summary(self, outcome: ScanOutcome, *, dry_run: bool = False) -> None:
        if dry_run:
            title = "logpress (dry run)"
        elif outcome.ok:
            title = "logpress"
        else:
            title = "logpress (partial)"
        border = "red" if not outcome.ok else "#a78bfa"
        self._console.print(
            Panel(self.render(outcome, dry_run=dry_run), title=title, border_style=border, expand=False)
        )
