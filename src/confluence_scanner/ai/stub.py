from __future__ import annotations

import asyncio
import random
from typing import Optional

from confluence_scanner.ai.base import AnalysisProvider
from confluence_scanner.core.models import SIGNAL_THRESHOLD, AnalysisResult, Direction, Signal, Source

_REFERENCE_PRICES = {
    "EUR/USD": 1.0850,
    "GBP/USD": 1.2700,
    "USD/JPY": 151.20,
    "USD/CHF": 0.8800,
    "AUD/USD": 0.6550,
    "USD/CAD": 1.3600,
    "NZD/USD": 0.6000,
    "XAU/USD": 2350.0,
    "BTC/USD": 65000.0,
    "ETH/USD": 3200.0,
}


class StubAnalysisProvider(AnalysisProvider):
    """Offline provider that synthesizes plausible analyses."""

    def __init__(
        self,
        seed: Optional[int] = None,
        max_delay: float = 0.0,
        threshold: float = SIGNAL_THRESHOLD,
    ) -> None:
        self._rng = random.Random(seed)
        self._max_delay = max_delay
        self._threshold = threshold

    async def analyze(self, pair: str) -> AnalysisResult:
        if self._max_delay:
            await asyncio.sleep(self._rng.uniform(0, self._max_delay))
        score = round(self._rng.uniform(40, 100), 1)
        signal = Signal.from_score(score, self._threshold)
        direction = self._rng.choice(list(Direction))
        if signal is Signal.TAKE_TRADE and direction is Direction.NEUTRAL:
            direction = Direction.BUY

        entry = stop_loss = take_profit = None
        if signal is Signal.TAKE_TRADE:
            price = _REFERENCE_PRICES.get(pair, 100.0) * (1 + self._rng.uniform(-0.005, 0.005))
            risk = price * 0.004
            side = 1 if direction is Direction.BUY else -1
            entry = _fmt(price)
            stop_loss = _fmt(price - side * risk)
            take_profit = _fmt(price + side * risk * 2)

        return AnalysisResult(
            pair=pair,
            confluence_score=score,
            signal=signal,
            direction=direction,
            reasoning=(
                f"Synthetic confluence score {score:g} for {pair}",
                "RSI, MACD and moving averages sampled at random",
            ),
            entry=entry,
            stop_loss=stop_loss,
            take_profit=take_profit,
            sources=(Source(title="Synthetic Market Feed", uri="#"),),
        )


def _fmt(price: float) -> str:
    return f"{price:.2f}" if price >= 100 else f"{price:.4f}"
