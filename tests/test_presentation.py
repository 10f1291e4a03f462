from dataclasses import replace
from datetime import datetime

from rich.console import Console

from confluence_scanner.core.models import Direction, ScanState, Source, ViewTab
from confluence_scanner.presentation.cards import build_card, render_card
from confluence_scanner.presentation.dashboard import (
    EMPTY_TITLE,
    ERROR_TITLE,
    NO_SIGNALS_TEXT,
    format_last_updated,
    render_dashboard,
    tab_labels,
)
from confluence_scanner.presentation.filters import count_signals, select_view

from conftest import make_result


def _results():
    return (
        make_result("EUR/USD", 92),
        make_result("XAU/USD", 70, Direction.NEUTRAL),
        make_result("BTC/USD", 97, Direction.SELL),
        make_result("GBP/USD", 89),
    )


def _render(renderable) -> str:
    console = Console(record=True, width=140)
    console.print(renderable)
    return console.export_text()


def test_all_tab_is_identity():
    results = _results()
    assert select_view(results, ViewTab.ALL) == results


def test_signals_tab_is_ordered_subset():
    results = _results()
    signals = select_view(results, ViewTab.SIGNALS)
    assert [r.pair for r in signals] == ["EUR/USD", "BTC/USD"]
    assert all(r in select_view(results, ViewTab.ALL) for r in signals)
    assert count_signals(results) == 2


def test_filtering_is_idempotent_and_pure():
    results = list(_results())
    once = select_view(results, ViewTab.SIGNALS)
    assert select_view(once, ViewTab.SIGNALS) == once
    assert select_view(results, ViewTab.SIGNALS) == once
    assert len(results) == 4


def test_card_hides_levels_for_no_trade_even_when_supplied():
    result = make_result("XAU/USD", 70, Direction.NEUTRAL, with_levels=True)
    card = build_card(result)
    assert card.levels is None

    text = _render(render_card(card))
    assert "NOT TAKE TRADE" in text
    assert "Entry" not in text
    assert "1.0950" not in text


def test_card_shows_levels_for_take_trade():
    card = build_card(make_result("EUR/USD", 92))
    assert card.score_label == "92%"
    assert (card.levels.entry, card.levels.stop_loss, card.levels.take_profit) == (
        "1.1000",
        "1.0950",
        "1.1100",
    )
    text = _render(render_card(card))
    assert "EUR/USD" in text
    assert "BUY" in text
    assert "Take Profit" in text


def test_card_take_trade_with_missing_levels_renders_blank():
    card = build_card(make_result("EUR/USD", 95, with_levels=False))
    assert card.levels.entry == ""


def test_card_caps_and_truncates_sources():
    sources = tuple(Source(f"Very long market headline {i}", f"https://news/{i}") for i in range(5))
    card = build_card(make_result("EUR/USD", 92, sources=sources))
    assert len(card.sources) == 3
    assert card.sources[0].label == "Very long marke..."
    assert card.sources[2].uri == "https://news/2"


def test_card_with_empty_reasoning():
    result = replace(make_result("EUR/USD", 50), reasoning=())
    card = build_card(result)
    assert card.reasoning == ()
    assert "•" not in _render(render_card(card))


def test_dashboard_empty_state():
    text = _render(render_dashboard(ScanState(), ViewTab.ALL))
    assert EMPTY_TITLE in text
    assert "--:--:--" in text
    assert "Pairs Zote (0)" in text


def test_dashboard_error_replaces_results():
    state = ScanState(results=_results(), error="Kuna tatizo")
    text = _render(render_dashboard(state, ViewTab.ALL))
    assert ERROR_TITLE in text
    assert "Kuna tatizo" in text
    assert "EUR/USD" not in text


def test_dashboard_without_signals_shows_notice():
    state = ScanState(results=(make_result("XAU/USD", 70, Direction.NEUTRAL),))
    text = _render(render_dashboard(state, ViewTab.SIGNALS))
    assert NO_SIGNALS_TEXT.format(threshold=89) in text
    assert "vigezo vya 89%" in text


def test_dashboard_tab_counts_and_timestamp():
    state = ScanState(results=_results(), last_updated=datetime(2026, 1, 2, 8, 5, 9))
    labels = tab_labels(state.results)
    assert labels[ViewTab.ALL] == "Pairs Zote (4)"
    assert labels[ViewTab.SIGNALS] == "Signals Pekee (2)"
    assert format_last_updated(state.last_updated) == "08:05:09"

    text = _render(render_dashboard(state, ViewTab.SIGNALS))
    assert "BTC/USD" in text
    assert "GBP/USD" not in text


def test_dashboard_uses_configured_threshold():
    state = ScanState(results=(make_result("XAU/USD", 70, Direction.NEUTRAL),))
    text = _render(render_dashboard(state, ViewTab.SIGNALS, threshold=80))
    assert "80% Threshold Analysis" in text
    assert "vigezo vya 80%" in text
    assert "89%" not in text
