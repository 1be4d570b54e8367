"""
Pytest configuration and shared fixtures.

Key fixtures:
- openai_api_key: OpenAI API key from environment (live tests only)
- sample_customer_data: TechCorp bundle with one decision-maker meeting
- empty_customer_data: bundle with no interaction records
- intelligence_response: completion body matching the extraction schema
- mock_completion_client: AsyncMock standing in for OpenAIClient

All tests except the live OpenAI ones run without network access.
"""

import json
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from intelligence_engine.models.insight import Insight


@pytest.fixture
def openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv('OPENAI_API_KEY')
    if not key:
        pytest.skip('OPENAI_API_KEY not set')
    return key


@pytest.fixture
def sample_customer_data() -> dict:
    """Customer bundle in the camelCase wire shape callers send."""
    return {
        'companyName': 'TechCorp Inc',
        'meetings': [
            {
                'date': '2024-01-15',
                'participants': [
                    {
                        'name': 'Sarah Johnson',
                        'title': 'VP of People',
                        'email': 'sarah@techcorp.com',
                        'role': 'decision_maker',
                    }
                ],
                'transcript': 'We are struggling with performance review consistency across our '
                'teams. Our current process is very manual and time-consuming.',
                'duration': 30,
                'topics': ['performance reviews', 'HR processes'],
            }
        ],
        'emails': [],
        'supportTickets': [],
        'productUsage': {
            'totalSessions': 45,
            'avgSessionDuration': 15,
            'featuresUsed': ['reports', 'analytics'],
            'lastActivity': '2024-01-20',
        },
        'crmData': {
            'accountId': 'acc-123',
            'stage': 'qualification',
            'value': 50000,
            'probability': 60,
        },
    }


@pytest.fixture
def empty_customer_data() -> dict:
    """Customer bundle with no interaction records."""
    return {
        'companyName': 'EmptyCompany',
        'meetings': [],
        'emails': [],
        'supportTickets': [],
        'productUsage': {
            'totalSessions': 0,
            'avgSessionDuration': 0,
            'featuresUsed': [],
            'lastActivity': '',
        },
        'crmData': {'accountId': 'empty-123', 'stage': 'prospect', 'value': 0, 'probability': 0},
    }


@pytest.fixture
def intelligence_response() -> str:
    """Well-formed completion body for the TechCorp meeting."""
    return json.dumps(
        {
            'insights': [
                {
                    'type': 'pain_point',
                    'description': 'Difficulty with performance reviews consistency',
                    'priority': 'high',
                    'source': 'Meeting transcript',
                    'date': '2024-01-15',
                    'quotes': ['We struggle with standardizing our review process across teams'],
                }
            ],
            'opportunities': [
                {
                    'title': 'Performance Review Standardization',
                    'need': 'Consistent review framework across organization',
                    'validation': 'strong',
                    'product': 'TalentGuard Performance Suite',
                }
            ],
            'stakeholders': {
                'decisionMakers': [
                    {
                        'name': 'Sarah Johnson',
                        'title': 'VP of People',
                        'department': 'HR',
                        'painPoints': ['Inconsistent reviews', 'Manual processes'],
                    }
                ]
            },
        }
    )


@pytest.fixture
def mock_completion_client(intelligence_response: str) -> AsyncMock:
    """Completion client returning the well-formed response."""
    client = AsyncMock()
    client.chat_completion = AsyncMock(return_value=intelligence_response)
    return client


def make_insight(
    description: str,
    priority: str = 'medium',
    insight_type: str = 'pain_point',
    source: str = 'meeting',
    quotes: list[str] | None = None,
) -> Insight:
    """Helper to build an Insight for testing."""
    return Insight(
        type=insight_type,
        description=description,
        priority=priority,
        source=source,
        date='2024-01-15',
        quotes=quotes or [],
    )


@pytest.fixture
def insight_factory():
    """Factory fixture wrapping make_insight."""
    return make_insight
