from __future__ import annotations

import logging
from typing import Optional, Tuple

from confluence_scanner.config.models import AppConfig
from confluence_scanner.core.errors import ScanError
from confluence_scanner.core.models import AnalysisResult, ScanState, ViewTab
from confluence_scanner.presentation.filters import select_view
from confluence_scanner.scanner.orchestrator import ScanOrchestrator
from confluence_scanner.scanner.selection import PairSelection
from confluence_scanner.scanner.state import ScanStateMachine

logger = logging.getLogger(__name__)


class ScannerSession:
    """Single owned context tying selection, scan state and the orchestrator together."""

    def __init__(
        self,
        orchestrator: ScanOrchestrator,
        selection: PairSelection,
        state_machine: Optional[ScanStateMachine] = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._selection = selection
        self._machine = state_machine or ScanStateMachine()

    @classmethod
    def from_config(cls, config: AppConfig, orchestrator: ScanOrchestrator) -> "ScannerSession":
        selection = PairSelection(config.scanner.supported_pairs, config.scanner.default_pairs)
        return cls(orchestrator, selection, ScanStateMachine(config.display.default_tab))

    @property
    def state(self) -> ScanState:
        return self._machine.state

    @property
    def selection(self) -> PairSelection:
        return self._selection

    @property
    def tab(self) -> ViewTab:
        return self._machine.tab

    @property
    def can_scan(self) -> bool:
        return not self._selection.is_empty() and not self._machine.state.is_scanning

    def toggle_selection(self, pair: str) -> bool:
        return self._selection.toggle(pair)

    def set_view_tab(self, tab: ViewTab) -> None:
        self._machine.set_view_tab(tab)

    def visible_results(self) -> Tuple[AnalysisResult, ...]:
        return select_view(self._machine.state.results, self._machine.tab)

    async def scan(self) -> bool:
        """Run one scan over the current selection; returns False when the trigger is disabled."""
        if not self.can_scan or not self._machine.start_scan():
            logger.debug("Scan trigger disabled")
            return False
        try:
            outcome = await self._orchestrator.run_scan(self._selection.ordered())
        except ScanError as exc:
            self._machine.fail_scan(exc.message)
        else:
            self._machine.complete_scan(outcome.results, outcome.completed_at)
        return True
