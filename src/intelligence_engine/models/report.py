"""
Output models: the stakeholder map and the assembled IntelligenceReport.

Every section is always present and typed, even when empty.
"""

from typing import Literal

from pydantic import Field

from .base import EngineModel
from .insight import Insight, Opportunity

EngagementLevel = Literal['high', 'medium', 'low']


class Stakeholder(EngineModel):
    """A classified meeting participant."""

    name: str
    title: str = ''
    email: str | None = None
    department: str | None = None
    pain_points: list[str] = Field(default_factory=list)
    engagement_level: EngagementLevel = 'low'
    meeting_count: int = 0


class StakeholderMap(EngineModel):
    """Meeting participants bucketed by decision-influence role."""

    decision_makers: list[Stakeholder] = Field(default_factory=list)
    champions: list[Stakeholder] = Field(default_factory=list)
    influencers: list[Stakeholder] = Field(default_factory=list)
    end_users: list[Stakeholder] = Field(default_factory=list)
    blockers: list[Stakeholder] = Field(default_factory=list)

    def all_stakeholders(self) -> list[Stakeholder]:
        """Every stakeholder, bucket by bucket."""
        return [
            *self.decision_makers,
            *self.champions,
            *self.influencers,
            *self.end_users,
            *self.blockers,
        ]

    @property
    def total(self) -> int:
        return len(self.all_stakeholders())


class SalesStrategy(EngineModel):
    """Templated account strategy derived from opportunities and stakeholders."""

    primary_focus: str | None = None
    approach: str = ''
    key_messages: list[str] = Field(default_factory=list)
    executive_sponsors: list[str] = Field(default_factory=list)
    entry_points: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


class EmailTemplate(EngineModel):
    subject: str
    body: str
    call_to_action: str


class EmailSequence(EngineModel):
    """Three-touch outreach sequence: hook, value, call to action."""

    email1: EmailTemplate
    email2: EmailTemplate
    email3: EmailTemplate


class MeetingHighlight(EngineModel):
    date: str
    topics: list[str] = Field(default_factory=list)
    participant_count: int = 0
    duration: float = 0
    summary: str = ''


class KeyQuote(EngineModel):
    quote: str
    source: str = ''
    date: str = ''


class TimelineEvent(EngineModel):
    date: str
    event_type: str
    description: str


class Appendix(EngineModel):
    meeting_highlights: list[MeetingHighlight] = Field(default_factory=list)
    key_quotes: list[KeyQuote] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)


class ExecutiveSummary(EngineModel):
    headline: str = ''
    top_opportunities: list[str] = Field(default_factory=list)
    insight_breakdown: dict[str, int] = Field(default_factory=dict)
    key_stakeholders: list[str] = Field(default_factory=list)


class IntelligenceReport(EngineModel):
    """The complete structured output of the pipeline for one company."""

    company_name: str
    executive_summary: ExecutiveSummary = Field(default_factory=ExecutiveSummary)
    insights: list[Insight] = Field(default_factory=list)
    opportunities: list[Opportunity] = Field(default_factory=list)
    stakeholder_map: StakeholderMap = Field(default_factory=StakeholderMap)
    sales_strategy: SalesStrategy = Field(default_factory=SalesStrategy)
    outreach: dict[str, EmailSequence] = Field(default_factory=dict)
    appendix: Appendix = Field(default_factory=Appendix)
