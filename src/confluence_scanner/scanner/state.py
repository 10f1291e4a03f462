"""Scan state container with explicit transitions."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from confluence_scanner.core.models import AnalysisResult, ScanState, ViewTab


class ScanStateMachine:
    """Own the ``ScanState`` and the active view tab.

    State only changes at scan start and scan end. A failed scan sets the error
    slot and leaves the previous results and timestamp untouched.
    """

    def __init__(self, tab: ViewTab = ViewTab.ALL) -> None:
        self._state = ScanState()
        self._tab = tab

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def tab(self) -> ViewTab:
        return self._tab

    def start_scan(self) -> bool:
        if self._state.is_scanning:
            return False
        self._state.is_scanning = True
        self._state.error = None
        return True

    def complete_scan(self, results: Sequence[AnalysisResult], timestamp: datetime) -> None:
        self._state = ScanState(
            is_scanning=False,
            results=tuple(results),
            last_updated=timestamp,
            error=None,
        )

    def fail_scan(self, message: str) -> None:
        self._state.is_scanning = False
        self._state.error = message

    def set_view_tab(self, tab: ViewTab) -> None:
        self._tab = ViewTab(tab)
