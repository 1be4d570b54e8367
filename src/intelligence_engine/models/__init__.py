"""
Data models for the Intelligence Processing Engine.
"""

from .customer import (
    CustomerData,
    Meeting,
    Participant,
    EmailRecord,
    TicketRecord,
    ProductUsage,
    CrmRecord,
)
from .insight import Insight, InsightType, Opportunity
from .report import (
    Stakeholder,
    StakeholderMap,
    SalesStrategy,
    EmailTemplate,
    EmailSequence,
    MeetingHighlight,
    KeyQuote,
    TimelineEvent,
    Appendix,
    ExecutiveSummary,
    IntelligenceReport,
)

__all__ = [
    'CustomerData',
    'Meeting',
    'Participant',
    'EmailRecord',
    'TicketRecord',
    'ProductUsage',
    'CrmRecord',
    'Insight',
    'InsightType',
    'Opportunity',
    'Stakeholder',
    'StakeholderMap',
    'SalesStrategy',
    'EmailTemplate',
    'EmailSequence',
    'MeetingHighlight',
    'KeyQuote',
    'TimelineEvent',
    'Appendix',
    'ExecutiveSummary',
    'IntelligenceReport',
]
