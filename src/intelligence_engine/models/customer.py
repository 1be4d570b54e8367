"""
Input models: the raw customer-interaction bundle for one company.

Every collection defaults to empty so downstream stages can iterate
unconditionally. Only company_name is guaranteed non-empty.
"""

from typing import Any

from pydantic import Field, field_validator

from .base import EngineModel, none_to_empty


class Participant(EngineModel):
    """A person who attended a meeting."""

    name: str = Field(default='', description='Full name')
    title: str = Field(default='', description='Job title')
    email: str = Field(default='', description='Email address (used for de-duplication)')
    role: str | None = Field(
        default=None,
        description='Explicit buying role: decision_maker, champion, influencer, '
        'end_user, blocker (free text otherwise)',
    )


class Meeting(EngineModel):
    """A meeting transcript with its attendees."""

    date: str = Field(default='', description='Meeting date (ISO 8601 preferred)')
    participants: list[Participant] = Field(default_factory=list)
    transcript: str = Field(default='', description='Full transcript text')
    duration: float = Field(default=0, description='Duration in minutes')
    topics: list[str] = Field(default_factory=list)

    @field_validator('participants', 'topics', mode='before')
    @classmethod
    def _none_is_empty_list(cls, value: Any) -> Any:
        return none_to_empty(value, [])

    @field_validator('transcript', mode='before')
    @classmethod
    def _none_is_empty_text(cls, value: Any) -> Any:
        return none_to_empty(value, '')


class EmailRecord(EngineModel):
    """An email exchanged with the customer."""

    subject: str = ''
    body: str = ''
    sender: str = ''
    date: str = ''


class TicketRecord(EngineModel):
    """A support ticket raised by the customer."""

    ticket_id: str = ''
    subject: str = ''
    description: str = ''
    priority: str = ''
    status: str = ''
    date: str = ''


class ProductUsage(EngineModel):
    """Aggregated product-usage telemetry."""

    total_sessions: int = 0
    avg_session_duration: float = 0
    features_used: list[str] = Field(default_factory=list)
    last_activity: str = ''

    @field_validator('features_used', mode='before')
    @classmethod
    def _none_is_empty_list(cls, value: Any) -> Any:
        return none_to_empty(value, [])


class CrmRecord(EngineModel):
    """Current CRM state of the account."""

    account_id: str = ''
    stage: str = ''
    value: float = 0
    probability: float = Field(default=0, description='Win probability in percent (0-100)')


class CustomerData(EngineModel):
    """
    The full raw input bundle (meetings, emails, tickets, usage, CRM state)
    for one company.
    """

    company_name: str = Field(..., min_length=1, description='Company name (REQUIRED)')
    meetings: list[Meeting] = Field(default_factory=list)
    emails: list[EmailRecord] = Field(default_factory=list)
    support_tickets: list[TicketRecord] = Field(default_factory=list)
    product_usage: ProductUsage = Field(default_factory=ProductUsage)
    crm_data: CrmRecord = Field(default_factory=CrmRecord)

    @field_validator('meetings', 'emails', 'support_tickets', mode='before')
    @classmethod
    def _none_is_empty_list(cls, value: Any) -> Any:
        return none_to_empty(value, [])

    @field_validator('product_usage', 'crm_data', mode='before')
    @classmethod
    def _none_is_default(cls, value: Any) -> Any:
        return none_to_empty(value, {})

    @property
    def has_text_sources(self) -> bool:
        """True if any meeting, email or ticket carries text to analyze."""
        return (
            any(m.transcript.strip() for m in self.meetings)
            or any((e.subject + e.body).strip() for e in self.emails)
            or any((t.subject + t.description).strip() for t in self.support_tickets)
        )
