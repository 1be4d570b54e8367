"""
Insight extraction prompt and expected response schema.

One prompt per processing call summarizes every available text source
(meetings, emails, support tickets) plus usage and CRM context, and asks
for a JSON object of insights, opportunities and stakeholders.
"""

from typing import Any

from pydantic import Field, field_validator

from ..models.base import EngineModel
from ..models.customer import CustomerData

# =============================================================================
# Response Models
# =============================================================================


class ExtractedStakeholder(EngineModel):
    """A stakeholder as described by the model (used for enrichment only)."""

    name: str
    title: str = ''
    department: str | None = None
    pain_points: list[str] = Field(default_factory=list)


class ExtractionPayload(EngineModel):
    """
    Top-level shape of the completion body.

    Insight entries stay untyped here so that one bad entry can be dropped
    without discarding the rest.
    """

    insights: list[Any] = Field(..., description='List of insight objects')
    opportunities: list[Any] = Field(default_factory=list)
    stakeholders: dict[str, list[Any]] = Field(default_factory=dict)

    # Only 'insights' is load-bearing; malformed side sections are discarded.
    @field_validator('opportunities', mode='before')
    @classmethod
    def _discard_non_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @field_validator('stakeholders', mode='before')
    @classmethod
    def _discard_non_mapping(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return {k: v for k, v in value.items() if isinstance(v, list)}


# =============================================================================
# Prompt Templates
# =============================================================================

EXTRACTION_SYSTEM_PROMPT = """You are a B2B sales intelligence analyst. You read customer interaction records (meeting transcripts, emails, support tickets) and extract structured insights for the account team.

Extract:
1. Pain points mentioned by the customer
2. Feature requests or product feedback
3. Objections or concerns raised
4. Success criteria or goals mentioned
5. Budget or timeline indicators

For each insight provide:
- **type**: one of "pain_point", "opportunity", "feature_request", "objection"
- **description**: one sentence in plain language
- **priority**: "high", "medium" or "low" (high = urgent, repeated, or raised by a decision maker)
- **source**: where it came from (e.g. "Meeting 2024-01-15", "Support ticket T-102")
- **date**: date of the source record
- **quotes**: direct quotes supporting the insight (verbatim, may be empty)

Also list sales opportunities ("title", "need", "validation": strong/medium/weak, "product") and the stakeholders you can identify, grouped under "decisionMakers", "champions", "influencers", "endUsers", "blockers" (each with "name", "title", "department", "painPoints").

Respond with a single JSON object and nothing else:
{"insights": [...], "opportunities": [...], "stakeholders": {...}}

Guidelines:
- Only extract what the records support; do not invent quotes
- Merge repeated mentions of the same issue into one insight with several quotes
- If the records contain no insights, return {"insights": [], "opportunities": [], "stakeholders": {}}"""

EXTRACTION_USER_PROMPT_TEMPLATE = """Analyze the customer records for {company_name}.

{sources}

{account_context}"""


def _truncate(text: str, max_chars: int) -> str:
    text = text.strip()
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + ' [truncated]'


def _format_meetings(data: CustomerData, max_chars: int) -> list[str]:
    sections = []
    for i, meeting in enumerate(data.meetings, 1):
        if not meeting.transcript.strip():
            continue
        attendees = ', '.join(
            f'{p.name} ({p.title})' if p.title else p.name
            for p in meeting.participants
            if p.name
        )
        header = f'Meeting {i} | date: {meeting.date or "unknown"}'
        if meeting.topics:
            header += f" | topics: {', '.join(meeting.topics)}"
        if attendees:
            header += f' | participants: {attendees}'
        sections.append(
            f'<meeting>\n{header}\n{_truncate(meeting.transcript, max_chars)}\n</meeting>'
        )
    return sections


def _format_emails(data: CustomerData, max_chars: int) -> list[str]:
    sections = []
    for email in data.emails:
        if not (email.subject + email.body).strip():
            continue
        header = f'Email | date: {email.date or "unknown"} | from: {email.sender or "unknown"}'
        sections.append(
            f'<email>\n{header}\nSubject: {email.subject}\n'
            f'{_truncate(email.body, max_chars)}\n</email>'
        )
    return sections


def _format_tickets(data: CustomerData, max_chars: int) -> list[str]:
    sections = []
    for ticket in data.support_tickets:
        if not (ticket.subject + ticket.description).strip():
            continue
        header = (
            f'Support ticket {ticket.ticket_id or ""} | date: {ticket.date or "unknown"}'
            f' | priority: {ticket.priority or "unknown"} | status: {ticket.status or "unknown"}'
        )
        sections.append(
            f'<ticket>\n{header}\nSubject: {ticket.subject}\n'
            f'{_truncate(ticket.description, max_chars)}\n</ticket>'
        )
    return sections


def _format_account_context(data: CustomerData) -> str:
    usage = data.product_usage
    crm = data.crm_data
    lines = []
    if usage.total_sessions or usage.features_used:
        lines.append(
            f'Product usage: {usage.total_sessions} sessions, '
            f'avg {usage.avg_session_duration} min, '
            f"features used: {', '.join(usage.features_used) or 'none'}, "
            f'last activity: {usage.last_activity or "unknown"}'
        )
    if crm.stage or crm.value:
        lines.append(
            f'CRM: stage {crm.stage or "unknown"}, value {crm.value:,.0f}, '
            f'probability {crm.probability:.0f}%'
        )
    return '\n'.join(lines)


def build_insight_prompt(
    customer_data: CustomerData,
    max_source_chars: int = 6000,
) -> list[dict[str, str]]:
    """
    Build the single extraction prompt for a processing call.

    Args:
        customer_data: Normalized customer data
        max_source_chars: Per-source truncation limit for transcript/body text

    Returns:
        List of message dicts for OpenAI chat completion
    """
    sources = [
        *_format_meetings(customer_data, max_source_chars),
        *_format_emails(customer_data, max_source_chars),
        *_format_tickets(customer_data, max_source_chars),
    ]

    user_prompt = EXTRACTION_USER_PROMPT_TEMPLATE.format(
        company_name=customer_data.company_name,
        sources='\n\n'.join(sources),
        account_context=_format_account_context(customer_data),
    ).strip()

    return [
        {'role': 'system', 'content': EXTRACTION_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
