from __future__ import annotations

from abc import ABC, abstractmethod

from confluence_scanner.core.models import AnalysisResult


class AnalysisProvider(ABC):
    """Produce a confluence analysis for one pair.

    Implementations raise ``AnalysisError`` for any failure.
    """

    @abstractmethod
    async def analyze(self, pair: str) -> AnalysisResult:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
