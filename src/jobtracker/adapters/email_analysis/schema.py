"""Pydantic models describing the payload produced by the email classifier."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobtracker.domain.model import UserJobStatus


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class EmailAnalysisBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EmailAnalysisPayload(EmailAnalysisBaseModel):
    message_id: str = Field(alias="messageId", min_length=1)
    subject: str = ""
    received_date: datetime = Field(alias="receivedDate")
    company_name: str | None = Field(default=None, alias="companyName")
    job_title: str | None = Field(default=None, alias="jobTitle")
    status: UserJobStatus = UserJobStatus.APPLIED
    key_phrases: list[str] = Field(default_factory=list[str], alias="keyPhrases")
    suggested_actions: str | None = Field(default=None, alias="suggestedActions")

    _normalize_company = field_validator("company_name", mode="before")(_blank_to_none)
    _normalize_title = field_validator("job_title", mode="before")(_blank_to_none)
    _normalize_actions = field_validator("suggested_actions", mode="before")(_blank_to_none)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> object:
        if isinstance(value, UserJobStatus) or not isinstance(value, str):
            return value
        token = value.strip()
        for status in UserJobStatus:
            if token.lower() in {status.value, status.name.lower()}:
                return status
            if token.replace(" ", "").lower() == status.value.replace("_", ""):
                return status
        return token

    @field_validator("key_phrases", mode="before")
    @classmethod
    def _drop_null_phrases(cls, value: object) -> object:
        if value is None:
            return []
        return value
