#!/usr/bin/env python3
"""
Example: Process one company's customer data into an intelligence report.

This script demonstrates:
1. Building a CustomerData bundle (meetings, emails, tickets, usage, CRM)
2. Running it through the IntelligenceProcessor
3. Printing the ranked opportunities, stakeholder map and outreach

Prerequisites:
    - Set environment variables:
        OPENAI_API_KEY=your_key

Usage:
    python examples/process_customer.py [--json]
"""

import asyncio
import json
import os
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from intelligence_engine import IntelligenceProcessor


SAMPLE_CUSTOMER_DATA = {
    'companyName': 'TechCorp Inc',
    'meetings': [
        {
            'date': '2024-01-15',
            'participants': [
                {'name': 'Sarah Johnson', 'title': 'VP of People', 'email': 'sarah@techcorp.com', 'role': 'decision_maker'},
                {'name': 'Mike Chen', 'title': 'HR Operations Manager', 'email': 'mike@techcorp.com', 'role': 'champion'},
            ],
            'transcript': """
Sarah: We are struggling with performance review consistency across our teams.
Mike: The current process is very manual. Calibration alone takes us two weeks.
Sarah: And the executives keep asking for a dashboard with goal status that we can't produce.
Mike: Our HRIS doesn't sync with the review tool, so data is always out of date.
""",
            'duration': 30,
            'topics': ['performance reviews', 'HR processes'],
        }
    ],
    'emails': [
        {
            'subject': 'Re: Reporting follow-up',
            'body': 'Could you send an example of the executive reports you mentioned?',
            'sender': 'sarah@techcorp.com',
            'date': '2024-01-17',
        }
    ],
    'supportTickets': [
        {
            'ticketId': 'T-102',
            'subject': 'Review form confusing',
            'description': 'Managers cannot find where to submit calibration notes.',
            'priority': 'high',
            'status': 'open',
            'date': '2024-01-18',
        }
    ],
    'productUsage': {
        'totalSessions': 45,
        'avgSessionDuration': 15,
        'featuresUsed': ['reports', 'analytics'],
        'lastActivity': '2024-01-20',
    },
    'crmData': {'accountId': 'acc-123', 'stage': 'qualification', 'value': 50000, 'probability': 60},
}


async def main():
    """Run the example processing demonstration."""
    print("=" * 60)
    print("Intelligence Processing Example")
    print("=" * 60)

    # Check for required environment variables
    if not os.getenv('OPENAI_API_KEY'):
        print("ERROR: OPENAI_API_KEY not set")
        return

    processor = IntelligenceProcessor.from_env()

    try:
        report = await processor.process_customer_data(SAMPLE_CUSTOMER_DATA)

        if '--json' in sys.argv:
            print(json.dumps(report.model_dump(by_alias=True), indent=2))
            return

        print(f"\n{report.executive_summary.headline}")

        print("\n" + "-" * 60)
        print(f"Insights ({len(report.insights)}):")
        print("-" * 60)
        for insight in report.insights:
            print(f"  [{insight.priority:6}] {insight.type}: {insight.description}")

        print("\n" + "-" * 60)
        print("Opportunities:")
        print("-" * 60)
        for opp in report.opportunities:
            print(f"  {opp.title} ({opp.validation}, {opp.insight_count} insights)")
            print(f"    Need: {opp.need}")
            if opp.product:
                print(f"    Product: {opp.product}")
            for accelerator in opp.deal_accelerators:
                print(f"    - {accelerator}")

        print("\n" + "-" * 60)
        print("Stakeholders:")
        print("-" * 60)
        for bucket in ('decision_makers', 'champions', 'influencers', 'end_users', 'blockers'):
            names = [s.name for s in getattr(report.stakeholder_map, bucket)]
            if names:
                print(f"  {bucket}: {', '.join(names)}")

        print("\n" + "-" * 60)
        print("Next steps:")
        print("-" * 60)
        for step in report.sales_strategy.next_steps:
            print(f"  - {step}")

        for name, sequence in report.outreach.items():
            print(f"\n  Outreach for {name}: {sequence.email1.subject}")

    finally:
        await processor.close()

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == '__main__':
    asyncio.run(main())
