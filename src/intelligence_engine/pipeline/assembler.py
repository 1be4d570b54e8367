"""
Report assembly.

Fills the strategy, outreach, appendix and executive-summary sections from
the computed insights, opportunities and stakeholder map. All content is
templated; only its structure is contractual.
"""

from collections import Counter
from collections.abc import Mapping, Sequence

from ..models.customer import CustomerData
from ..models.insight import PRIORITY_ORDER, Insight, Opportunity
from ..models.report import (
    Appendix,
    EmailSequence,
    EmailTemplate,
    ExecutiveSummary,
    IntelligenceReport,
    KeyQuote,
    MeetingHighlight,
    SalesStrategy,
    Stakeholder,
    StakeholderMap,
    TimelineEvent,
)
from .themes import theme_matches

TOP_OPPORTUNITIES = 3
MAX_KEY_QUOTES = 10
HIGHLIGHT_SUMMARY_CHARS = 200


def _names(stakeholders: Sequence[Stakeholder]) -> list[str]:
    return [s.name for s in stakeholders]


def build_executive_summary(
    company_name: str,
    insights: Sequence[Insight],
    opportunities: Sequence[Opportunity],
    stakeholder_map: StakeholderMap,
) -> ExecutiveSummary:
    breakdown = Counter(i.priority for i in insights)
    if opportunities:
        lead = opportunities[0]
        headline = (
            f'{company_name}: {len(opportunities)} opportunities identified; '
            f'strongest is "{lead.title}" ({lead.validation} validation)'
        )
    else:
        headline = f'{company_name}: no validated opportunities yet'

    return ExecutiveSummary(
        headline=headline,
        top_opportunities=[o.title for o in opportunities[:TOP_OPPORTUNITIES]],
        insight_breakdown={p: breakdown.get(p, 0) for p in ('high', 'medium', 'low')},
        key_stakeholders=_names(stakeholder_map.decision_makers) + _names(stakeholder_map.champions),
    )


def build_sales_strategy(
    opportunities: Sequence[Opportunity],
    stakeholder_map: StakeholderMap,
    customer_data: CustomerData,
) -> SalesStrategy:
    """Derive the account strategy from ranked opportunities and stakeholders."""
    sponsors = _names(stakeholder_map.decision_makers)
    entry_points = _names(stakeholder_map.champions) or _names(stakeholder_map.influencers)
    top = list(opportunities[:TOP_OPPORTUNITIES])

    if not top:
        approach = 'Run discovery to surface concrete pain points before proposing a solution.'
    elif top[0].validation == 'strong':
        approach = f'Lead with "{top[0].title}" and move to a scoped pilot.'
    else:
        approach = f'Validate "{top[0].title}" with more stakeholders before proposing.'

    risks = [f'{b.name} ({b.title or "unknown title"}) is a potential blocker' for b in stakeholder_map.blockers]
    if not sponsors:
        risks.append('No decision maker identified')
    risks.extend(f'"{o.title}" has only weak validation' for o in top if o.validation == 'weak')

    next_steps: list[str] = []
    if entry_points:
        next_steps.append(f'Align with {entry_points[0]} on the business case')
    if sponsors:
        next_steps.append(f'Secure executive sponsorship from {sponsors[0]}')
    if top and top[0].deal_accelerators:
        next_steps.append(f'Propose: {top[0].deal_accelerators[0]}')
    elif top:
        next_steps.append(f'Propose a next step on "{top[0].title}"')
    if customer_data.crm_data.stage:
        next_steps.append(f'Update CRM stage ({customer_data.crm_data.stage}) after next meeting')

    return SalesStrategy(
        primary_focus=top[0].title if top else None,
        approach=approach,
        key_messages=[o.value_proposition for o in top if o.value_proposition],
        executive_sponsors=sponsors,
        entry_points=entry_points,
        risks=risks,
        next_steps=next_steps,
    )


def matches_persona_needs(opportunity: Opportunity, persona: Stakeholder) -> bool:
    """True if any of the persona's pain points falls in the opportunity's theme."""
    return any(theme_matches(opportunity.theme, point) for point in persona.pain_points)


def create_email_sequence(
    persona: Stakeholder,
    opportunities: Sequence[Opportunity],
    company_name: str,
) -> EmailSequence:
    """Three-touch sequence: pain-point hook, value, call to action."""
    first_name = persona.name.split()[0] if persona.name else 'there'
    pain = persona.pain_points[0] if persona.pain_points else (
        opportunities[0].need if opportunities else f'priorities at {company_name}'
    )
    solutions = ', '.join(o.title for o in opportunities) or 'our platform'
    value = opportunities[0].value_proposition if opportunities else 'measurable gains for your team'

    return EmailSequence(
        email1=EmailTemplate(
            subject=f'{company_name}: {pain}'[:120],
            body=f'Hi {first_name}, you mentioned {pain.lower()}. Teams in a similar spot have '
            f'addressed this with {solutions}.',
            call_to_action='Worth a 15-minute conversation?',
        ),
        email2=EmailTemplate(
            subject=f'How peers approached {solutions}'[:120],
            body=f'Hi {first_name}, a quick example: {value}. Happy to share how a comparable '
            f'organization got there.',
            call_to_action='Should I send the case study?',
        ),
        email3=EmailTemplate(
            subject=f'Next step for {company_name}'[:120],
            body=f'Hi {first_name}, I can put together a short pilot plan around {solutions} '
            f'for your team.',
            call_to_action='Can we book 30 minutes this week?',
        ),
    )


def _outreach_key(persona: Stakeholder, shared_name: bool, taken: Mapping[str, object]) -> str:
    base = f'{persona.name} <{persona.email}>' if shared_name and persona.email else persona.name
    key, suffix = base, 2
    while key in taken:
        key = f'{base} ({suffix})'
        suffix += 1
    return key


def build_outreach(
    stakeholder_map: StakeholderMap,
    opportunities: Sequence[Opportunity],
    company_name: str,
) -> dict[str, EmailSequence]:
    """
    Outreach sequences for decision makers and champions, keyed by name.

    Personas sharing a name are keyed "name <email>" (or "name (n)" without an
    email) so no sequence is overwritten.
    """
    personas = [*stakeholder_map.decision_makers, *stakeholder_map.champions]
    name_counts = Counter(p.name for p in personas)
    templates: dict[str, EmailSequence] = {}
    for persona in personas:
        relevant = [o for o in opportunities if matches_persona_needs(o, persona)]
        if not relevant:
            relevant = list(opportunities[:TOP_OPPORTUNITIES])
        key = _outreach_key(persona, name_counts[persona.name] > 1, templates)
        templates[key] = create_email_sequence(persona, relevant, company_name)
    return templates


def build_appendix(customer_data: CustomerData, insights: Sequence[Insight]) -> Appendix:
    """Meeting highlights, key quotes and a dated timeline of interactions."""
    highlights = [
        MeetingHighlight(
            date=m.date,
            topics=m.topics,
            participant_count=len(m.participants),
            duration=m.duration,
            summary=' '.join(m.transcript.split())[:HIGHLIGHT_SUMMARY_CHARS],
        )
        for m in customer_data.meetings
    ]

    key_quotes: list[KeyQuote] = []
    seen_quotes: set[str] = set()
    for insight in sorted(insights, key=lambda i: PRIORITY_ORDER[i.priority]):
        for quote in insight.quotes:
            if quote in seen_quotes:
                continue
            seen_quotes.add(quote)
            key_quotes.append(KeyQuote(quote=quote, source=insight.source, date=insight.date))
    key_quotes = key_quotes[:MAX_KEY_QUOTES]

    timeline: list[TimelineEvent] = []
    for m in customer_data.meetings:
        topics = ', '.join(m.topics) or 'general discussion'
        timeline.append(TimelineEvent(date=m.date, event_type='meeting', description=f'Meeting: {topics}'))
    for e in customer_data.emails:
        timeline.append(TimelineEvent(date=e.date, event_type='email', description=f'Email: {e.subject or "(no subject)"}'))
    for t in customer_data.support_tickets:
        timeline.append(TimelineEvent(date=t.date, event_type='support_ticket', description=f'Ticket: {t.subject or t.ticket_id}'))
    if customer_data.product_usage.last_activity:
        timeline.append(
            TimelineEvent(
                date=customer_data.product_usage.last_activity,
                event_type='product_activity',
                description='Last product activity',
            )
        )
    # Undated events sort last
    timeline.sort(key=lambda ev: (ev.date == '', ev.date))

    return Appendix(meeting_highlights=highlights, key_quotes=key_quotes, timeline=timeline)


def assemble_report(
    customer_data: CustomerData,
    insights: Sequence[Insight],
    opportunities: Sequence[Opportunity],
    stakeholder_map: StakeholderMap,
) -> IntelligenceReport:
    """Compose the final IntelligenceReport."""
    company_name = customer_data.company_name
    return IntelligenceReport(
        company_name=company_name,
        executive_summary=build_executive_summary(company_name, insights, opportunities, stakeholder_map),
        insights=list(insights),
        opportunities=list(opportunities),
        stakeholder_map=stakeholder_map,
        sales_strategy=build_sales_strategy(opportunities, stakeholder_map, customer_data),
        outreach=build_outreach(stakeholder_map, opportunities, company_name),
        appendix=build_appendix(customer_data, insights),
    )
