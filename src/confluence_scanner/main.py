"""Entry point for one-shot and interactive scans."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from rich.prompt import Prompt

from confluence_scanner.ai.base import AnalysisProvider
from confluence_scanner.ai.gemini_client import GeminiAnalysisProvider
from confluence_scanner.ai.stub import StubAnalysisProvider
from confluence_scanner.config.loader import load_config, update_section
from confluence_scanner.config.models import AppConfig
from confluence_scanner.core.errors import ConfigError
from confluence_scanner.core.models import ViewTab
from confluence_scanner.monitoring.logger import ScanLogger
from confluence_scanner.presentation.dashboard import SCANNING_TEXT
from confluence_scanner.scanner.orchestrator import ScanOrchestrator
from confluence_scanner.scanner.session import ScannerSession

logger = logging.getLogger(__name__)

INTERACTIVE_HELP = "[dim]number = toggle pair, s = scan, t = switch tab, q = quit[/dim]"


def build_provider(config: AppConfig) -> AnalysisProvider:
    if config.ai.provider == "stub":
        return StubAnalysisProvider(max_delay=0.5, threshold=config.ai.signal_threshold)
    return GeminiAnalysisProvider(config.ai)


def build_session(config: AppConfig, provider: AnalysisProvider) -> ScannerSession:
    orchestrator = ScanOrchestrator(provider, error_message=config.scanner.error_message)
    return ScannerSession.from_config(config, orchestrator)


async def run_scan_once(session: ScannerSession, out: ScanLogger) -> None:
    if not session.can_scan:
        out.warning("Chagua angalau pair moja kabla ya kuscan.")
        return
    with out.console.status(SCANNING_TEXT):
        await session.scan()
    out.log_dashboard(session.state, session.tab)


async def run_interactive(session: ScannerSession, out: ScanLogger) -> None:
    catalog = session.selection.catalog
    while True:
        out.log_selection(session.selection)
        out.console.print(INTERACTIVE_HELP)
        choice = (await asyncio.to_thread(Prompt.ask, "Command", console=out.console)).strip().lower()
        if choice in {"q", "quit", "exit"}:
            return
        if choice == "s":
            await run_scan_once(session, out)
        elif choice == "t":
            next_tab = ViewTab.SIGNALS if session.tab is ViewTab.ALL else ViewTab.ALL
            session.set_view_tab(next_tab)
            out.log_dashboard(session.state, session.tab)
        elif choice.isdigit() and 1 <= int(choice) <= len(catalog):
            session.toggle_selection(catalog[int(choice) - 1])
        else:
            out.warning(f"Unknown command: {choice}")


async def run_app(config: AppConfig, interactive: bool = False) -> None:
    provider = build_provider(config)
    out = ScanLogger(display=config.display, threshold=config.ai.signal_threshold)
    session = build_session(config, provider)
    try:
        if interactive:
            await run_interactive(session, out)
        else:
            await run_scan_once(session, out)
    finally:
        await provider.aclose()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AI confluence market scanner")
    parser.add_argument("--config", type=str, help="Path to YAML/TOML/JSON config", default=None)
    parser.add_argument("--pairs", nargs="+", help="Pairs to scan (overrides the default selection)")
    parser.add_argument("--tab", choices=[t.value for t in ViewTab], default=None)
    parser.add_argument("--stub", action="store_true", help="Use the offline stub provider")
    parser.add_argument("--interactive", action="store_true", help="Toggle pairs and re-scan")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def apply_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.stub:
        config = update_section(config, "ai", {"provider": "stub"})
    if args.pairs:
        config = update_section(config, "scanner", {"default_pairs": list(args.pairs)})
    if args.tab:
        config = update_section(config, "display", {"default_tab": args.tab})
    return config


def cli(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    try:
        config = apply_args(load_config(args.config), args)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc
    asyncio.run(run_app(config, interactive=args.interactive))


if __name__ == "__main__":
    cli()
