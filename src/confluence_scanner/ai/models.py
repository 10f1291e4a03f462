"""Wire schema of the structured analysis returned by the AI provider."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from confluence_scanner.core.models import Direction

REQUIRED_FIELDS = ("pair", "confluenceScore", "signal", "direction", "reasoning")

# Gemini responseSchema (OpenAPI subset); ``sources`` come from grounding metadata.
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "pair": {"type": "STRING"},
        "confluenceScore": {"type": "NUMBER"},
        "signal": {"type": "STRING"},
        "direction": {"type": "STRING"},
        "entry": {"type": "STRING"},
        "stopLoss": {"type": "STRING"},
        "takeProfit": {"type": "STRING"},
        "reasoning": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": list(REQUIRED_FIELDS),
}


class AnalysisPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pair: str = Field(min_length=1)
    confluence_score: float = Field(alias="confluenceScore")
    signal: str
    direction: Direction
    reasoning: List[str]
    entry: Optional[str] = None
    stop_loss: Optional[str] = Field(default=None, alias="stopLoss")
    take_profit: Optional[str] = Field(default=None, alias="takeProfit")

    @field_validator("direction", mode="before")
    @classmethod
    def _normalise_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("signal", mode="before")
    @classmethod
    def _normalise_signal(cls, value: Any) -> Any:
        if isinstance(value, str):
            return " ".join(value.upper().split())
        return value

    @field_validator("entry", "stop_loss", "take_profit", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None
