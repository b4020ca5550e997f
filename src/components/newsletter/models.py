"""
Newsletter component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PublishInput:
    """One newsletter issue, in both renderings."""

    title: str
    html_body: str
    text_body: str


@dataclass(frozen=True)
class PublishOutput:
    """Fan-out summary for a publish that ran to completion."""

    delivered: int = 0
    skipped: int = 0  # Confirmed rows with an unusable stored email
