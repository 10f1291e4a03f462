from __future__ import annotations

from typing import Sequence, Tuple

from confluence_scanner.core.models import AnalysisResult, ViewTab


def select_view(results: Sequence[AnalysisResult], tab: ViewTab) -> Tuple[AnalysisResult, ...]:
    if ViewTab(tab) is ViewTab.SIGNALS:
        return tuple(r for r in results if r.is_actionable)
    return tuple(results)


def count_signals(results: Sequence[AnalysisResult]) -> int:
    return sum(1 for r in results if r.is_actionable)
