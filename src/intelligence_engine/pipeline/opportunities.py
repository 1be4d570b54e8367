"""
Opportunity synthesis.

Two steps:
1. group_insights_by_theme partitions insights by categorize_theme,
   in first-seen theme order.
2. identify_opportunities builds one Opportunity per non-empty group and
   orders the result by validation strength (stable among ties).
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.customer import CustomerData
from ..models.insight import PRIORITY_ORDER, Insight, Opportunity
from .themes import DEFAULT_THEME, categorize_theme, theme_matches
from .validation import calculate_validation, rank_validation


@dataclass(frozen=True)
class OpportunityTemplate:
    """Catalog entry describing the offer that addresses a theme."""

    title: str
    product: str | None
    value_proposition: str
    accelerators: tuple[str, ...] = field(default_factory=tuple)


OPPORTUNITY_CATALOG: dict[str, OpportunityTemplate] = {
    'reporting': OpportunityTemplate(
        title='Reliable Goal Status Dashboards',
        product='Check-ins and Reviews',
        value_proposition='Restores HR credibility with executives; improves accountability',
        accelerators=('Executive-ready dashboard mockup',),
    ),
    'user_experience': OpportunityTemplate(
        title='Persona-Based UX Simplification',
        product='Persona-based Configuration + Microlearning',
        value_proposition='Empowers all HR roles, reduces training load',
        accelerators=('Role-specific walkthrough of the simplified workflow',),
    ),
    'analytics': OpportunityTemplate(
        title='Function-Level Development Insights',
        product='Talent Frameworks + Career Pathing Analytics',
        value_proposition='Strategic development focus by region and function',
        accelerators=('Sample analytics built on their own workforce data',),
    ),
    'integration': OpportunityTemplate(
        title='Dynamic, HRIS-Integrated Reporting',
        product='Reporting Suite + HRIS Integration Layer',
        value_proposition='One source of truth for talent data',
        accelerators=('Technical integration review with their HRIS owner',),
    ),
    'performance_management': OpportunityTemplate(
        title='Consistent Performance Review Framework',
        product='Performance Reviews + Calibration',
        value_proposition='Fair, comparable reviews across teams with less manual effort',
        accelerators=('Review template workshop with HR leadership',),
    ),
    'adoption': OpportunityTemplate(
        title='Guided Rollout and Enablement',
        product='Onboarding Programs + Microlearning',
        value_proposition='Faster time to value and higher adoption across the organization',
        accelerators=('Adoption plan tied to their rollout calendar',),
    ),
    DEFAULT_THEME: OpportunityTemplate(
        title='Emerging Customer Needs',
        product=None,
        value_proposition='Addresses needs raised outside the core product themes',
        accelerators=('Discovery call to qualify the need',),
    ),
}

_STANDARD_ACCELERATORS = ('60-day pilot program',)


def group_insights_by_theme(insights: Sequence[Insight]) -> dict[str, list[Insight]]:
    """
    Partition insights by theme.

    Themes appear in first-seen order; insights keep their input order within
    a group. Every insight lands in exactly one group.
    """
    groups: dict[str, list[Insight]] = {}
    for insight in insights:
        groups.setdefault(categorize_theme(insight), []).append(insight)
    return groups


def summarize_need(insights: Sequence[Insight]) -> str:
    """Describe a group's need from its highest-priority insight."""
    if not insights:
        return ''
    ranked = sorted(insights, key=lambda i: PRIORITY_ORDER[i.priority])
    need = ranked[0].description.strip().rstrip('.')
    others = len(insights) - 1
    if others == 1:
        need += ' (plus 1 related signal)'
    elif others > 1:
        need += f' (plus {others} related signals)'
    return need


def identify_accelerators(
    theme: str,
    template: OpportunityTemplate,
    customer_data: CustomerData | None,
) -> list[str]:
    """Deal accelerators from the catalog, CRM state and product usage."""
    accelerators: list[str] = []
    if template.product:
        accelerators.append(f'Fast-start fix on {template.product}')
    accelerators.extend(template.accelerators)
    accelerators.extend(_STANDARD_ACCELERATORS)

    if customer_data is not None:
        crm = customer_data.crm_data
        if crm.probability >= 50 and crm.stage:
            accelerators.append(f'Tie the pilot to the {crm.stage} stage close plan')
        adopted = [
            feature
            for feature in customer_data.product_usage.features_used
            if theme_matches(theme, feature)
        ]
        if adopted:
            accelerators.append(f"Build on existing adoption of {', '.join(adopted)}")

    return accelerators


def create_opportunity(
    theme: str,
    insights: Sequence[Insight],
    customer_data: CustomerData | None = None,
) -> Opportunity:
    """Build the Opportunity for one non-empty theme group."""
    template = OPPORTUNITY_CATALOG.get(theme, OPPORTUNITY_CATALOG[DEFAULT_THEME])
    return Opportunity(
        title=template.title,
        need=summarize_need(insights),
        validation=calculate_validation(insights),
        product=template.product,
        theme=theme,
        source=insights[0].source,
        value_proposition=template.value_proposition,
        deal_accelerators=identify_accelerators(theme, template, customer_data),
        insight_count=len(insights),
    )


def identify_opportunities(
    insights: Sequence[Insight],
    customer_data: CustomerData | None = None,
) -> list[Opportunity]:
    """
    Synthesize ranked opportunities from insights.

    Args:
        insights: All insights for the account
        customer_data: Normalized input, used for deal accelerators

    Returns:
        One opportunity per theme group, strongest validation first. Equal
        validations keep theme first-seen order.
    """
    opportunities = [
        create_opportunity(theme, group, customer_data)
        for theme, group in group_insights_by_theme(insights).items()
        if group
    ]
    # sorted() is stable, so ties keep grouping order
    return sorted(opportunities, key=lambda o: -rank_validation(o.validation))
