"""Shared data models used across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

SIGNAL_THRESHOLD = 89.0

SUPPORTED_PAIRS: Tuple[str, ...] = (
    "EUR/USD",
    "GBP/USD",
    "USD/JPY",
    "USD/CHF",
    "AUD/USD",
    "USD/CAD",
    "NZD/USD",
    "XAU/USD",
    "BTC/USD",
    "ETH/USD",
)

DEFAULT_SELECTION: Tuple[str, ...] = ("EUR/USD", "XAU/USD", "BTC/USD")


class Signal(str, Enum):
    TAKE_TRADE = "TAKE TRADE"
    NO_TRADE = "NOT TAKE TRADE"

    @classmethod
    def from_score(cls, score: float, threshold: float = SIGNAL_THRESHOLD) -> "Signal":
        """Strictly above the threshold is actionable, everything else is not."""
        return cls.TAKE_TRADE if score > threshold else cls.NO_TRADE


class Direction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class ViewTab(str, Enum):
    ALL = "all"
    SIGNALS = "signals"


@dataclass(frozen=True)
class Source:
    title: str
    uri: str


@dataclass(frozen=True)
class AnalysisResult:
    pair: str
    confluence_score: float
    signal: Signal
    direction: Direction
    reasoning: Tuple[str, ...] = ()
    entry: Optional[str] = None
    stop_loss: Optional[str] = None
    take_profit: Optional[str] = None
    sources: Tuple[Source, ...] = ()

    @property
    def is_actionable(self) -> bool:
        return self.signal is Signal.TAKE_TRADE


@dataclass(frozen=True)
class ScanOutcome:
    results: Tuple[AnalysisResult, ...]
    completed_at: datetime


@dataclass
class ScanState:
    is_scanning: bool = False
    results: Tuple[AnalysisResult, ...] = field(default_factory=tuple)
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
