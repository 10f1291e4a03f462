"""Configuration models for the scanner."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from confluence_scanner.core.models import (
    DEFAULT_SELECTION,
    SIGNAL_THRESHOLD,
    SUPPORTED_PAIRS,
    ViewTab,
)

DEFAULT_ERROR_MESSAGE = "Kuna tatizo la kuunganisha data. Tafadhali jaribu tena baadae."


class AiConfig(BaseModel):
    provider: Literal["gemini", "stub"] = "gemini"
    api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: Optional[str] = None
    model: str = "gemini-3-flash-preview"
    timeout_seconds: Optional[float] = None  # None waits forever
    retry_attempts: int = Field(default=1, ge=1)
    enforce_threshold: bool = True
    signal_threshold: float = SIGNAL_THRESHOLD


class ScannerConfig(BaseModel):
    supported_pairs: List[str] = Field(default_factory=lambda: list(SUPPORTED_PAIRS))
    default_pairs: List[str] = Field(default_factory=lambda: list(DEFAULT_SELECTION))
    error_message: str = DEFAULT_ERROR_MESSAGE

    @field_validator("supported_pairs", "default_pairs")
    @classmethod
    def _strip_pairs(cls, value: List[str]) -> List[str]:
        pairs = [p.strip() for p in value]
        if any(not p for p in pairs):
            raise ValueError("pair identifiers must be non-empty")
        return pairs


class DisplayConfig(BaseModel):
    max_sources: int = Field(default=3, ge=0)
    source_title_chars: int = Field(default=15, ge=1)
    default_tab: ViewTab = ViewTab.ALL


class AppConfig(BaseModel):
    ai: AiConfig = Field(default_factory=AiConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def default_config() -> AppConfig:
    return AppConfig()
