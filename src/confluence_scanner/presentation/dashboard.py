"""Whole-screen rendering of a scan: header, tab bar and results area."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from confluence_scanner.config.models import DisplayConfig
from confluence_scanner.core.models import SIGNAL_THRESHOLD, AnalysisResult, ScanState, ViewTab
from confluence_scanner.presentation.cards import build_card, render_card
from confluence_scanner.presentation.filters import count_signals, select_view

APP_TITLE = "CONFLUENCE PRO"
ERROR_TITLE = "Makosa Yametokea"
EMPTY_TITLE = "Hakuna Analysis Bado"
EMPTY_HINT = (
    'Bonyeza "Anza Scan Sasa" ili kupata confluence signals kulingana na data za '
    "TradingView na habari za masoko."
)
NO_SIGNALS_TEXT = "Hakuna signal inayopatikana kwa sasa inayofikia vigezo vya {threshold:g}%."
SCANNING_TEXT = "Inascan..."


def format_last_updated(timestamp: Optional[datetime]) -> str:
    return timestamp.strftime("%H:%M:%S") if timestamp else "--:--:--"


def tab_labels(results: Sequence[AnalysisResult]) -> dict[ViewTab, str]:
    return {
        ViewTab.ALL: f"Pairs Zote ({len(results)})",
        ViewTab.SIGNALS: f"Signals Pekee ({count_signals(results)})",
    }


def render_header(state: ScanState, threshold: float = SIGNAL_THRESHOLD) -> Text:
    header = Text()
    header.append(APP_TITLE, style="bold white")
    header.append(f"  {threshold:g}% Threshold Analysis", style="bold green")
    header.append(f"   Last Update {format_last_updated(state.last_updated)}", style="dim")
    return header


def render_tabs(state: ScanState, active: ViewTab) -> Text:
    bar = Text()
    for tab, label in tab_labels(state.results).items():
        style = "bold reverse" if tab is active else "dim"
        bar.append(f" {label} ", style=style)
        bar.append(" ")
    return bar


def render_results(
    state: ScanState,
    tab: ViewTab,
    display: Optional[DisplayConfig] = None,
    threshold: float = SIGNAL_THRESHOLD,
) -> RenderableType:
    """Pick exactly one of: error panel, empty state, no-signals notice, card grid."""
    display = display or DisplayConfig()
    if state.error:
        return Panel(
            Text(state.error, justify="center"),
            title=ERROR_TITLE,
            border_style="red",
        )
    if not state.results:
        if state.is_scanning:
            return Text(SCANNING_TEXT, style="bold green")
        return Panel(Text(EMPTY_HINT, justify="center", style="dim"), title=EMPTY_TITLE)

    visible = select_view(state.results, tab)
    if not visible:
        return Text(NO_SIGNALS_TEXT.format(threshold=threshold), style="dim", justify="center")
    cards = [
        render_card(build_card(r, display.max_sources, display.source_title_chars))
        for r in visible
    ]
    return Columns(cards, equal=True)


def render_dashboard(
    state: ScanState,
    tab: ViewTab,
    display: Optional[DisplayConfig] = None,
    threshold: float = SIGNAL_THRESHOLD,
) -> Group:
    return Group(
        render_header(state, threshold),
        render_tabs(state, tab),
        render_results(state, tab, display, threshold),
    )
