import asyncio
from datetime import datetime

import pytest

from confluence_scanner.core.errors import ScanError
from confluence_scanner.core.models import Signal
from confluence_scanner.scanner.orchestrator import ScanOrchestrator

from conftest import FakeProvider

FIXED_NOW = datetime(2026, 10, 19, 14, 30, 5)


def test_results_follow_request_order_not_completion_order():
    provider = FakeProvider(
        {"EUR/USD": 92, "XAU/USD": 70, "BTC/USD": 95},
        delays={"EUR/USD": 0.05, "XAU/USD": 0.0, "BTC/USD": 0.02},
    )
    orchestrator = ScanOrchestrator(provider, clock=lambda: FIXED_NOW)

    outcome = asyncio.run(orchestrator.run_scan(["EUR/USD", "XAU/USD", "BTC/USD"]))

    assert [r.pair for r in outcome.results] == ["EUR/USD", "XAU/USD", "BTC/USD"]
    assert outcome.completed_at == FIXED_NOW
    assert sorted(provider.calls) == ["BTC/USD", "EUR/USD", "XAU/USD"]


def test_requests_run_concurrently():
    pairs = ["EUR/USD", "XAU/USD", "BTC/USD", "GBP/USD"]
    provider = FakeProvider({p: 50 for p in pairs}, delays={p: 0.1 for p in pairs})
    orchestrator = ScanOrchestrator(provider)

    async def run():
        loop = asyncio.get_running_loop()
        start = loop.time()
        outcome = await orchestrator.run_scan(pairs)
        return outcome, loop.time() - start

    outcome, elapsed = asyncio.run(run())
    assert len(outcome.results) == 4
    assert elapsed < 0.3


def test_duplicates_are_requested_each_time(fake_provider):
    orchestrator = ScanOrchestrator(fake_provider)
    outcome = asyncio.run(orchestrator.run_scan(["EUR/USD", "EUR/USD"]))
    assert len(outcome.results) == 2
    assert fake_provider.calls == ["EUR/USD", "EUR/USD"]


def test_single_failure_fails_whole_scan_with_generic_message():
    provider = FakeProvider(
        {"EUR/USD": 92, "XAU/USD": 70, "BTC/USD": 95},
        delays={"EUR/USD": 0.5, "BTC/USD": 0.5},
        failing=("XAU/USD",),
    )
    orchestrator = ScanOrchestrator(provider, error_message="scan broke")

    with pytest.raises(ScanError) as excinfo:
        asyncio.run(orchestrator.run_scan(["EUR/USD", "XAU/USD", "BTC/USD"]))

    assert excinfo.value.message == "scan broke"
    assert excinfo.value.__cause__ is not None
    assert sorted(provider.cancelled) == ["BTC/USD", "EUR/USD"]


def test_empty_selection_makes_no_requests(fake_provider):
    orchestrator = ScanOrchestrator(fake_provider)
    outcome = asyncio.run(orchestrator.run_scan([]))
    assert outcome.results == ()
    assert fake_provider.calls == []


def test_signal_threshold_is_strict():
    assert Signal.from_score(89) is Signal.NO_TRADE
    assert Signal.from_score(89.1) is Signal.TAKE_TRADE
    assert Signal.from_score(0) is Signal.NO_TRADE
    assert Signal.from_score(100) is Signal.TAKE_TRADE
