"""Public interface for the email classifier payload adapter."""

from __future__ import annotations

from .schema import EmailAnalysisPayload
from .translator import parse_email_analysis

__all__ = [
    "EmailAnalysisPayload",
    "parse_email_analysis",
]
