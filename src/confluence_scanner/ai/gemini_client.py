"""Gemini-backed confluence analysis with search grounding."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_fixed

from confluence_scanner.ai.base import AnalysisProvider
from confluence_scanner.ai.models import RESPONSE_SCHEMA, AnalysisPayload
from confluence_scanner.config.models import AiConfig
from confluence_scanner.core.errors import AnalysisError
from confluence_scanner.core.models import AnalysisResult, Signal, Source

logger = logging.getLogger(__name__)

FALLBACK_SOURCE_TITLE = "Market Source"
FALLBACK_SOURCE_URI = "#"


def build_prompt(pair: str, threshold: float) -> str:
    limit = f"{threshold:g}"
    return (
        f"Perform a professional technical and fundamental analysis for {pair} using current "
        "real-time data from sources like TradingView and market news.\n"
        'Calculate a "Confluence Score" from 0 to 100 based on RSI, MACD, Moving Averages, '
        "Support/Resistance levels, and recent economic news.\n\n"
        "Strict Rule:\n"
        f'- If Confluence Score > {limit}, signal MUST be "{Signal.TAKE_TRADE.value}".\n'
        f'- If Confluence Score <= {limit}, signal MUST be "{Signal.NO_TRADE.value}".\n\n'
        "Direction MUST be one of BUY, SELL or NEUTRAL.\n"
        "Provide Entry, Stop Loss, and Take Profit if a trade is recommended.\n"
        "Explain the reasoning clearly in a list."
    )


def extract_sources(candidate: Dict[str, Any]) -> Tuple[Source, ...]:
    metadata = candidate.get("groundingMetadata") or {}
    sources = []
    for chunk in metadata.get("groundingChunks") or []:
        web = chunk.get("web") or {}
        sources.append(
            Source(
                title=web.get("title") or FALLBACK_SOURCE_TITLE,
                uri=web.get("uri") or FALLBACK_SOURCE_URI,
            )
        )
    return tuple(sources)


def _candidate_text(candidate: Dict[str, Any]) -> str:
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts).strip()
    # Grounded responses occasionally wrap the JSON in a markdown fence.
    if text.startswith("```"):
        text = text.strip("`").strip()
        if text.lower().startswith("json"):
            text = text[4:]
    return text.strip()


class GeminiAnalysisProvider(AnalysisProvider):
    """Call the Gemini ``generateContent`` endpoint with a structured prompt."""

    def __init__(self, config: AiConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        self._cfg = config
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    async def analyze(self, pair: str) -> AnalysisResult:
        if not self._cfg.api_key:
            raise AnalysisError(pair, "no API key configured")
        try:
            data = await self._generate(pair)
            return self._to_result(pair, data)
        except AnalysisError:
            logger.error("Error analyzing %s: unusable response", pair)
            raise
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.exception("Error analyzing %s", pair)
            raise AnalysisError(pair, str(exc)) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_request(self, pair: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(pair, self._cfg.signal_threshold)}]}],
            "tools": [{"google_search": {}}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    async def _generate(self, pair: str) -> Dict[str, Any]:
        url = f"{self._cfg.api_url.rstrip('/')}/models/{self._cfg.model}:generateContent"
        headers = {"x-goog-api-key": self._cfg.api_key or ""}
        body = self.build_request(pair)
        async for attempt in self._retrying():
            with attempt:
                response = await self._client.post(url, headers=headers, json=body)
                response.raise_for_status()
                return response.json()
        raise RuntimeError("Gemini analysis retries exhausted")

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            wait=wait_fixed(2),
            stop=stop_after_attempt(self._cfg.retry_attempts),
            reraise=True,
        )

    def _to_result(self, pair: str, data: Dict[str, Any]) -> AnalysisResult:
        candidates = data.get("candidates") or []
        if not candidates:
            raise AnalysisError(pair, "empty response")
        candidate = candidates[0]
        text = _candidate_text(candidate)
        if not text:
            raise AnalysisError(pair, "empty response")

        payload = AnalysisPayload.model_validate_json(text)
        if payload.pair != pair:
            logger.debug("Provider echoed %r for %s", payload.pair, pair)
        return AnalysisResult(
            pair=pair,
            confluence_score=payload.confluence_score,
            signal=self._resolve_signal(pair, payload),
            direction=payload.direction,
            reasoning=tuple(payload.reasoning),
            entry=payload.entry,
            stop_loss=payload.stop_loss,
            take_profit=payload.take_profit,
            sources=extract_sources(candidate),
        )

    def _resolve_signal(self, pair: str, payload: AnalysisPayload) -> Signal:
        try:
            reported: Optional[Signal] = Signal(payload.signal)
        except ValueError:
            reported = None

        if not self._cfg.enforce_threshold:
            if reported is None:
                raise AnalysisError(pair, f"unknown signal {payload.signal!r}")
            return reported

        derived = Signal.from_score(payload.confluence_score, self._cfg.signal_threshold)
        if reported is not derived:
            logger.warning(
                "%s: provider signal %r disagrees with score %.1f, using %s",
                pair,
                payload.signal,
                payload.confluence_score,
                derived.value,
            )
        return derived
