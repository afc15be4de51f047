"""Translate classifier payloads into domain email analyses."""

from __future__ import annotations

from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING

from jobtracker.domain.email_tracking import EmailAnalysis

from .schema import EmailAnalysisPayload

if TYPE_CHECKING:
    from collections.abc import Mapping


log = getLogger(__name__)


def parse_email_analysis(payload: EmailAnalysisPayload | Mapping[str, object]) -> EmailAnalysis:
    """Validate a classifier payload and convert it to an :class:`EmailAnalysis`."""

    model = (
        payload
        if isinstance(payload, EmailAnalysisPayload)
        else EmailAnalysisPayload.model_validate(payload)
    )
    received_at = model.received_date
    if received_at.tzinfo is None:
        received_at = received_at.replace(tzinfo=UTC)

    log.debug("Parsed email analysis for message %s", model.message_id)
    return EmailAnalysis(
        message_id=model.message_id,
        subject=model.subject,
        received_at=received_at.astimezone(UTC),
        company_name=model.company_name,
        job_title=model.job_title,
        status=model.status,
        key_phrases=tuple(phrase.strip() for phrase in model.key_phrases if phrase.strip()),
        suggested_actions=model.suggested_actions,
    )
