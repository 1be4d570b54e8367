"""Tests for extraction prompt construction."""

from intelligence_engine.models import CustomerData
from intelligence_engine.prompts import EXTRACTION_SYSTEM_PROMPT, build_insight_prompt


def test_prompt_messages(sample_customer_data):
    messages = build_insight_prompt(CustomerData.model_validate(sample_customer_data))

    assert [m['role'] for m in messages] == ['system', 'user']
    assert messages[0]['content'] == EXTRACTION_SYSTEM_PROMPT
    user = messages[1]['content']
    assert 'Sarah Johnson (VP of People)' in user
    assert 'topics: performance reviews, HR processes' in user
    assert 'CRM: stage qualification, value 50,000, probability 60%' in user


def test_prompt_covers_emails_and_tickets():
    data = CustomerData.model_validate(
        {
            'companyName': 'Acme',
            'emails': [{'subject': 'Renewal', 'body': 'Pricing is a concern', 'sender': 'cfo@acme.com'}],
            'supportTickets': [{'ticketId': 'T-7', 'subject': 'SSO broken', 'description': 'Login loops'}],
        }
    )

    user = build_insight_prompt(data)[1]['content']

    assert 'Pricing is a concern' in user
    assert 'Support ticket T-7' in user
    assert 'Login loops' in user


def test_long_sources_truncated():
    data = CustomerData.model_validate(
        {'companyName': 'Acme', 'meetings': [{'date': '2024-01-01', 'transcript': 'x' * 100}]}
    )

    user = build_insight_prompt(data, max_source_chars=10)[1]['content']

    assert 'x' * 10 + ' [truncated]' in user
    assert 'x' * 11 not in user
