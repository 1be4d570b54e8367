"""
Insight extraction service.

Sends one structured-extraction request per processing call and parses the
completion body into Insight objects. Parsing never raises: a body that is
not the expected JSON shape is routed to a degraded outcome with empty
insights. Upstream (API) failures are not caught here.
"""

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, get_settings
from ..errors import MalformedResponseError
from ..logging import get_logger
from ..models.customer import CustomerData
from ..models.insight import PRIORITY_ORDER, Insight
from ..prompts.extract_insights import ExtractionPayload, build_insight_prompt

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r'^\s*```(?:json)?\s*(.*?)\s*```\s*$', re.DOTALL | re.IGNORECASE)


class CompletionClient(Protocol):
    """Anything that turns chat messages into a completion body."""

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = True,
    ) -> str: ...


# =============================================================================
# Tagged parse result
# =============================================================================


@dataclass(frozen=True)
class Parsed:
    """The completion body decoded into the expected top-level shape."""

    payload: ExtractionPayload


@dataclass(frozen=True)
class Unparsed:
    """The completion body could not be decoded; kept for diagnostics."""

    raw_text: str
    error: MalformedResponseError


ParseResult = Parsed | Unparsed


def _strip_code_fence(body: str) -> str:
    match = _CODE_FENCE.match(body)
    return match.group(1) if match else body.strip()


def parse_completion(body: str | None) -> ParseResult:
    """
    Decode a completion body into an ExtractionPayload.

    Tolerates a markdown code fence around the JSON. Anything else that is
    not a JSON object with an 'insights' list yields Unparsed.
    """
    raw_text = body or ''
    text = _strip_code_fence(raw_text)

    if not text:
        return Unparsed(raw_text, MalformedResponseError('Empty completion body'))

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        return Unparsed(
            raw_text,
            MalformedResponseError('Completion body is not valid JSON', context={'error': str(e)}),
        )

    if not isinstance(decoded, dict):
        return Unparsed(
            raw_text,
            MalformedResponseError(
                'Completion body is not a JSON object',
                context={'decoded_type': type(decoded).__name__},
            ),
        )

    try:
        payload = ExtractionPayload.model_validate(decoded)
    except PydanticValidationError as e:
        return Unparsed(
            raw_text,
            MalformedResponseError(
                'Completion body does not match the extraction schema',
                context={'errors': [err['msg'] for err in e.errors()]},
            ),
        )

    return Parsed(payload)


# =============================================================================
# Extraction outcome
# =============================================================================


class ExtractionStatus(str, Enum):
    """How the extraction step went. Only UpstreamServiceError is fatal."""

    PARSED = 'parsed'
    PARTIAL = 'partial'
    DEGRADED = 'degraded'
    SKIPPED = 'skipped'


@dataclass
class ExtractionOutcome:
    """Output from the extraction process."""

    status: ExtractionStatus
    insights: list[Insight] = field(default_factory=list)
    stakeholders: dict[str, list[Any]] = field(default_factory=dict)
    suggested_opportunities: list[Any] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of insights extracted."""
        return len(self.insights)

    @property
    def degraded(self) -> bool:
        return self.status in (ExtractionStatus.PARTIAL, ExtractionStatus.DEGRADED)


def _validate_insights(entries: Sequence[Any]) -> tuple[list[Insight], list[str]]:
    """Validate insight entries one by one, dropping the invalid ones."""
    insights: list[Insight] = []
    warnings: list[str] = []
    for index, entry in enumerate(entries):
        try:
            insights.append(Insight.model_validate(entry))
        except PydanticValidationError as e:
            warnings.append(f'Dropped insight {index}: {e.errors()[0]["msg"]}')
    return insights, warnings


def consolidate_insights(insights: Sequence[Insight]) -> list[Insight]:
    """
    Merge duplicate insights.

    Two insights are duplicates when type and whitespace/case-normalized
    description match. The first occurrence keeps its position; quotes are
    merged and the highest priority kept.
    """
    merged: dict[tuple[str, str], Insight] = {}
    for insight in insights:
        key = (insight.type, ' '.join(insight.description.lower().split()))
        existing = merged.get(key)
        if existing is None:
            merged[key] = insight
            continue
        quotes = existing.quotes + [q for q in insight.quotes if q not in existing.quotes]
        priority = min(
            existing.priority, insight.priority, key=PRIORITY_ORDER.__getitem__
        )
        merged[key] = existing.model_copy(update={'quotes': quotes, 'priority': priority})
    return list(merged.values())


class InsightExtractor:
    """
    Extracts insights from customer interaction text.

    Uses a completion client for the single extraction request.
    """

    def __init__(self, completion_client: CompletionClient, settings: Settings | None = None):
        """
        Initialize the extractor.

        Args:
            completion_client: Client exposing async chat_completion()
            settings: Engine settings (defaults to get_settings())
        """
        self.completion_client = completion_client
        self.settings = settings or get_settings()

    async def extract(self, customer_data: CustomerData) -> ExtractionOutcome:
        """
        Extract insights from all text sources in one request.

        Args:
            customer_data: Normalized customer data

        Returns:
            ExtractionOutcome; DEGRADED when the body was unusable

        Raises:
            Whatever the completion client raises (propagated unchanged)
        """
        if not customer_data.has_text_sources:
            logger.info('extraction.skipped_no_sources')
            return ExtractionOutcome(status=ExtractionStatus.SKIPPED)

        messages = build_insight_prompt(
            customer_data,
            max_source_chars=self.settings.MAX_SOURCE_CHARS,
        )
        body = await self.completion_client.chat_completion(
            messages=messages,
            temperature=self.settings.OPENAI_TEMPERATURE,
        )

        return self._outcome_from_body(body)

    def _outcome_from_body(self, body: str | None) -> ExtractionOutcome:
        result = parse_completion(body)

        if isinstance(result, Unparsed):
            logger.warning(
                'extraction.degraded',
                reason=result.error.message,
                body_preview=result.raw_text[:200],
                **result.error.context,
            )
            return ExtractionOutcome(
                status=ExtractionStatus.DEGRADED,
                warnings=[result.error.message],
            )

        insights, warnings = _validate_insights(result.payload.insights)
        insights = consolidate_insights(insights)
        status = ExtractionStatus.PARTIAL if warnings else ExtractionStatus.PARSED

        if warnings:
            logger.warning('extraction.partial', dropped=len(warnings), kept=len(insights))

        logger.info('extraction.complete', insight_count=len(insights), status=status.value)

        return ExtractionOutcome(
            status=status,
            insights=insights,
            stakeholders=result.payload.stakeholders,
            suggested_opportunities=result.payload.opportunities,
            warnings=warnings,
        )
