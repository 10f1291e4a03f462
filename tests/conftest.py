import asyncio
from typing import Dict, Optional

import pytest

from confluence_scanner.ai.base import AnalysisProvider
from confluence_scanner.core.errors import AnalysisError
from confluence_scanner.core.models import AnalysisResult, Direction, Signal, Source


def make_result(
    pair: str,
    score: float,
    direction: Direction = Direction.BUY,
    with_levels: bool = True,
    sources: tuple = (),
) -> AnalysisResult:
    return AnalysisResult(
        pair=pair,
        confluence_score=score,
        signal=Signal.from_score(score),
        direction=direction,
        reasoning=(f"{pair} reasoning",),
        entry="1.1000" if with_levels else None,
        stop_loss="1.0950" if with_levels else None,
        take_profit="1.1100" if with_levels else None,
        sources=sources,
    )


class FakeProvider(AnalysisProvider):
    """Scripted provider: per-pair scores, delays and failures."""

    def __init__(
        self,
        scores: Dict[str, float],
        delays: Optional[Dict[str, float]] = None,
        failing: tuple = (),
    ) -> None:
        self.scores = scores
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls: list[str] = []
        self.cancelled: list[str] = []

    async def analyze(self, pair: str) -> AnalysisResult:
        self.calls.append(pair)
        try:
            await asyncio.sleep(self.delays.get(pair, 0))
        except asyncio.CancelledError:
            self.cancelled.append(pair)
            raise
        if pair in self.failing:
            raise AnalysisError(pair, "provider exploded")
        score = self.scores[pair]
        direction = Direction.BUY if score > 89 else Direction.NEUTRAL
        return make_result(pair, score, direction, sources=(Source("Reuters FX coverage", "https://example.com/fx"),))


@pytest.fixture
def fake_provider():
    return FakeProvider({"EUR/USD": 92, "XAU/USD": 70, "BTC/USD": 95, "GBP/USD": 55})
