"""Top-level package for the AI confluence market scanner."""

__all__ = [
    "config",
    "core",
    "ai",
    "scanner",
    "presentation",
    "monitoring",
]
