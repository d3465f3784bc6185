"""
Logging utilities for the LearnPath backend.

Provides standardized logger configuration following privacy rules.

PRIVACY RULES:
- NEVER log Supabase Auth tokens, passwords, API keys, or secrets
- NEVER log full student profile text (interests, grades, aspirations)
- NEVER log raw model responses beyond a short preview

Acceptable logging:
- High-level events (e.g., "Recommendation pipeline invoked")
- Non-sensitive metadata (e.g., "parsed 6 records", "fallback used")
- Truncated previews via preview()
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from learnpath.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: Optional[str], limit: int = 50) -> str:
    """Shorten free text for log lines."""
    if not text:
        return ""
    text = " ".join(text.split())
    return text if len(text) <= limit else f"{text[:limit]}..."
