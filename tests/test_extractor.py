"""
Tests for insight extraction.

Covers completion-body parsing (well-formed, fenced, malformed, partial)
and the single-request contract of InsightExtractor.
"""

import json
from unittest.mock import AsyncMock

import pytest

from intelligence_engine.config import Settings
from intelligence_engine.errors import UpstreamRateLimitError
from intelligence_engine.models import CustomerData
from intelligence_engine.pipeline.extractor import (
    ExtractionStatus,
    InsightExtractor,
    Parsed,
    Unparsed,
    consolidate_insights,
    parse_completion,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(OPENAI_API_KEY='test-api-key', OPENAI_TEMPERATURE=0.3, MAX_SOURCE_CHARS=500)


def _client(body: str) -> AsyncMock:
    client = AsyncMock()
    client.chat_completion = AsyncMock(return_value=body)
    return client


class TestParseCompletion:
    def test_well_formed_body(self, intelligence_response):
        result = parse_completion(intelligence_response)

        assert isinstance(result, Parsed)
        assert len(result.payload.insights) == 1
        assert 'decisionMakers' in result.payload.stakeholders

    def test_code_fenced_body(self, intelligence_response):
        result = parse_completion(f'```json\n{intelligence_response}\n```')

        assert isinstance(result, Parsed)

    @pytest.mark.parametrize(
        'body',
        [
            'Sorry, I cannot help with that.',
            '',
            None,
            '[1, 2, 3]',
            '{"opportunities": []}',
            '{"insights": "none"}',
        ],
    )
    def test_malformed_bodies_are_unparsed(self, body):
        result = parse_completion(body)

        assert isinstance(result, Unparsed)
        assert result.raw_text == (body or '')
        assert result.error.message

    def test_malformed_side_sections_are_discarded(self):
        result = parse_completion(json.dumps({'insights': [], 'opportunities': 'n/a', 'stakeholders': []}))

        assert isinstance(result, Parsed)
        assert result.payload.opportunities == []
        assert result.payload.stakeholders == {}


class TestConsolidateInsights:
    def test_duplicates_merged(self, insight_factory):
        insights = [
            insight_factory('Reports are slow', priority='low', quotes=['too slow']),
            insight_factory('Dashboard is missing'),
            insight_factory('  reports are   SLOW ', priority='high', quotes=['too slow', 'hours']),
        ]

        merged = consolidate_insights(insights)

        assert [i.description for i in merged] == ['Reports are slow', 'Dashboard is missing']
        assert merged[0].priority == 'high'
        assert merged[0].quotes == ['too slow', 'hours']

    def test_different_types_not_merged(self, insight_factory):
        insights = [
            insight_factory('Reports are slow'),
            insight_factory('Reports are slow', insight_type='feature_request'),
        ]

        assert len(consolidate_insights(insights)) == 2


class TestInsightExtractor:
    @pytest.mark.asyncio
    async def test_extracts_insights_with_one_request(self, sample_customer_data, mock_completion_client, settings):
        extractor = InsightExtractor(mock_completion_client, settings=settings)

        outcome = await extractor.extract(CustomerData.model_validate(sample_customer_data))

        assert outcome.status == ExtractionStatus.PARSED
        assert outcome.count == 1
        assert outcome.insights[0].type == 'pain_point'
        assert outcome.insights[0].priority == 'high'
        assert outcome.suggested_opportunities
        assert not outcome.degraded
        mock_completion_client.chat_completion.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prompt_includes_sources(self, sample_customer_data, mock_completion_client, settings):
        extractor = InsightExtractor(mock_completion_client, settings=settings)

        await extractor.extract(CustomerData.model_validate(sample_customer_data))

        kwargs = mock_completion_client.chat_completion.call_args.kwargs
        user_message = kwargs['messages'][-1]['content']
        assert 'TechCorp Inc' in user_message
        assert 'performance review consistency' in user_message
        assert kwargs['temperature'] == 0.3

    @pytest.mark.asyncio
    async def test_no_text_sources_skips_request(self, empty_customer_data, mock_completion_client, settings):
        extractor = InsightExtractor(mock_completion_client, settings=settings)

        outcome = await extractor.extract(CustomerData.model_validate(empty_customer_data))

        assert outcome.status == ExtractionStatus.SKIPPED
        assert outcome.insights == []
        mock_completion_client.chat_completion.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_json_body_degrades(self, sample_customer_data, settings):
        extractor = InsightExtractor(_client('not json at all'), settings=settings)

        outcome = await extractor.extract(CustomerData.model_validate(sample_customer_data))

        assert outcome.status == ExtractionStatus.DEGRADED
        assert outcome.insights == []
        assert outcome.warnings

    @pytest.mark.asyncio
    async def test_invalid_entries_dropped_individually(self, sample_customer_data, settings):
        body = json.dumps(
            {
                'insights': [
                    {'type': 'pain_point', 'description': 'Reports are slow', 'priority': 'High'},
                    {'type': 'pain_point', 'priority': 'high'},
                    {'type': 'objection', 'description': 'Too expensive', 'priority': 'urgent'},
                    'not an object',
                ]
            }
        )
        extractor = InsightExtractor(_client(body), settings=settings)

        outcome = await extractor.extract(CustomerData.model_validate(sample_customer_data))

        assert outcome.status == ExtractionStatus.PARTIAL
        assert [i.description for i in outcome.insights] == ['Reports are slow']
        assert outcome.insights[0].priority == 'high'
        assert len(outcome.warnings) == 3

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, sample_customer_data, settings):
        client = AsyncMock()
        client.chat_completion = AsyncMock(side_effect=UpstreamRateLimitError('API rate limit exceeded'))
        extractor = InsightExtractor(client, settings=settings)

        with pytest.raises(UpstreamRateLimitError, match='API rate limit exceeded'):
            await extractor.extract(CustomerData.model_validate(sample_customer_data))
