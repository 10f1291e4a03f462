"""Console output helpers using Rich."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from confluence_scanner.config.models import DisplayConfig
from confluence_scanner.core.models import SIGNAL_THRESHOLD, ScanState, ViewTab
from confluence_scanner.presentation.dashboard import render_dashboard
from confluence_scanner.scanner.selection import PairSelection


class ScanLogger:
    _LEVEL_STYLES = {
        "info": "cyan",
        "warning": "yellow",
    }

    def __init__(
        self,
        console: Optional[Console] = None,
        display: Optional[DisplayConfig] = None,
        threshold: float = SIGNAL_THRESHOLD,
    ) -> None:
        self._console = console or Console()
        self._display = display or DisplayConfig()
        self._threshold = threshold

    @property
    def console(self) -> Console:
        return self._console

    def log_event(self, message: str, *, level: str = "info") -> None:
        style = self._LEVEL_STYLES.get(level, "white")
        self._console.print(f"[bold {style}]{message}[/bold {style}]")

    def warning(self, message: str) -> None:
        self.log_event(message, level="warning")

    def log_selection(self, selection: PairSelection) -> None:
        table = Table(title="Chagua Pairs za Kufanyia Analysis", show_lines=False)
        table.add_column("#", justify="right")
        table.add_column("Pair")
        table.add_column("Selected", justify="center")
        for index, pair in enumerate(selection.catalog, start=1):
            mark = "[green]✔[/green]" if pair in selection else ""
            table.add_row(str(index), pair, mark)
        self._console.print(table)

    def log_dashboard(self, state: ScanState, tab: ViewTab) -> None:
        self._console.print(render_dashboard(state, tab, self._display, self._threshold))
