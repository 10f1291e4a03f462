"""Per-pair analysis cards.

``build_card`` decides what a card shows; ``render_card`` turns that into a
Rich renderable. Trade levels are only ever shown for actionable signals, no
matter what the provider put in the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from confluence_scanner.core.models import AnalysisResult, Direction, Signal

DEFAULT_MAX_SOURCES = 3
DEFAULT_TITLE_CHARS = 15

_DIRECTION_STYLES = {
    Direction.BUY: "bold green",
    Direction.SELL: "bold red",
    Direction.NEUTRAL: "bold white",
}


@dataclass(frozen=True)
class TradeLevels:
    entry: str
    stop_loss: str
    take_profit: str


@dataclass(frozen=True)
class SourceLink:
    label: str
    uri: str


@dataclass(frozen=True)
class AnalysisCard:
    pair: str
    direction: Direction
    score_label: str
    signal: Signal
    levels: Optional[TradeLevels]
    reasoning: Tuple[str, ...]
    sources: Tuple[SourceLink, ...]

    @property
    def is_actionable(self) -> bool:
        return self.signal is Signal.TAKE_TRADE


def build_card(
    result: AnalysisResult,
    max_sources: int = DEFAULT_MAX_SOURCES,
    title_chars: int = DEFAULT_TITLE_CHARS,
) -> AnalysisCard:
    levels = None
    if result.is_actionable:
        levels = TradeLevels(
            entry=result.entry or "",
            stop_loss=result.stop_loss or "",
            take_profit=result.take_profit or "",
        )
    return AnalysisCard(
        pair=result.pair,
        direction=result.direction,
        score_label=f"{result.confluence_score:g}%",
        signal=result.signal,
        levels=levels,
        reasoning=tuple(result.reasoning),
        sources=tuple(
            SourceLink(label=f"{source.title[:title_chars]}...", uri=source.uri)
            for source in result.sources[:max_sources]
        ),
    )


def render_card(card: AnalysisCard) -> Panel:
    accent = "green" if card.is_actionable else "bright_black"

    header = Table.grid(expand=True)
    header.add_column(ratio=1)
    header.add_column(justify="right")
    header.add_row(
        Text(card.pair, style="bold"),
        Text(card.score_label, style=f"bold {accent}"),
    )
    header.add_row(
        Text(card.direction.value, style=_DIRECTION_STYLES[card.direction]),
        Text("Confluence", style="dim"),
    )

    banner_style = "bold white on green" if card.is_actionable else "bold white on grey23"
    parts = [header, Text(f" {card.signal.value} ", style=banner_style)]

    if card.levels is not None:
        levels = Table(show_header=True, header_style="dim", expand=True, box=None)
        levels.add_column("Entry")
        levels.add_column("Stop Loss", style="red")
        levels.add_column("Take Profit", style="green")
        levels.add_row(card.levels.entry, card.levels.stop_loss, card.levels.take_profit)
        parts.append(levels)

    parts.append(Text("Analysis Reasoning", style="bold dim"))
    for item in card.reasoning:
        parts.append(Text(f"• {item}"))

    if card.sources:
        parts.append(Text("Verified Sources", style="bold dim"))
        for link in card.sources:
            parts.append(Text(link.label, style=Style(link=link.uri)))

    return Panel(Group(*parts), border_style=accent, width=44)
