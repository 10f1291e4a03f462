from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Sequence

from confluence_scanner.ai.base import AnalysisProvider
from confluence_scanner.config.models import DEFAULT_ERROR_MESSAGE
from confluence_scanner.core.errors import ScanError
from confluence_scanner.core.models import AnalysisResult, ScanOutcome

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Fan one analysis request per pair out to the provider and join them all.

    Results keep the order of the requested pairs. Any single failure fails the
    whole scan with ``ScanError`` and cancels requests still in flight.
    """

    def __init__(
        self,
        provider: AnalysisProvider,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._provider = provider
        self._error_message = error_message
        self._clock = clock

    async def run_scan(self, pairs: Sequence[str]) -> ScanOutcome:
        pairs = list(pairs)
        if not pairs:
            return ScanOutcome(results=(), completed_at=self._clock())

        logger.info("Scanning %d pair(s): %s", len(pairs), ", ".join(pairs))
        tasks = [
            asyncio.create_task(self._provider.analyze(pair), name=f"analyze-{pair}")
            for pair in pairs
        ]
        try:
            results: list[AnalysisResult] = await asyncio.gather(*tasks)
        except Exception as exc:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error("Scan failed: %s", exc)
            raise ScanError(self._error_message) from exc

        outcome = ScanOutcome(results=tuple(results), completed_at=self._clock())
        logger.info(
            "Scan complete: %d result(s), %d actionable",
            len(outcome.results),
            sum(1 for r in outcome.results if r.is_actionable),
        )
        return outcome
