"""
Insight and Opportunity models.

Insights are immutable once produced by the extractor; opportunities are
synthesized from theme groups of insights.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import EngineModel, none_to_empty

PriorityType = Literal['high', 'medium', 'low']
ValidationType = Literal['strong', 'medium', 'weak']

PRIORITY_ORDER: dict[str, int] = {'high': 0, 'medium': 1, 'low': 2}


class InsightType(str, Enum):
    """Known insight categories. Other strings are tolerated on Insight.type."""

    PAIN_POINT = 'pain_point'
    OPPORTUNITY = 'opportunity'
    FEATURE_REQUEST = 'feature_request'
    OBJECTION = 'objection'


class Insight(EngineModel):
    """A discrete observation extracted from customer interaction text."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1, description='pain_point, opportunity, feature_request, objection')
    description: str = Field(..., min_length=1)
    priority: PriorityType = Field(default='medium')
    source: str = Field(default='', description='Free-text provenance (e.g. "Meeting 2024-01-15")')
    date: str = Field(default='')
    quotes: list[str] = Field(default_factory=list, description='Supporting verbatim quotes')

    @field_validator('type', 'priority', mode='before')
    @classmethod
    def _normalize_token(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace(' ', '_').replace('-', '_')
        return value

    @field_validator('quotes', mode='before')
    @classmethod
    def _coerce_quotes(cls, value: Any) -> Any:
        value = none_to_empty(value, [])
        if isinstance(value, str):
            return [value]
        return value

    @field_validator('source', 'date', mode='before')
    @classmethod
    def _none_is_empty_text(cls, value: Any) -> Any:
        return none_to_empty(value, '')


class Opportunity(EngineModel):
    """A synthesized sales-relevant need backed by one theme's insights."""

    title: str
    need: str
    validation: ValidationType
    product: str | None = None
    theme: str = ''
    source: str = ''
    value_proposition: str = ''
    deal_accelerators: list[str] = Field(default_factory=list)
    insight_count: int = 0
