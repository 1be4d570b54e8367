"""Tests for opportunity synthesis."""

from intelligence_engine.models import CustomerData
from intelligence_engine.pipeline.opportunities import (
    OPPORTUNITY_CATALOG,
    group_insights_by_theme,
    identify_accelerators,
    identify_opportunities,
    summarize_need,
)
from intelligence_engine.pipeline.themes import DEFAULT_THEME


class TestGroupInsightsByTheme:
    def test_partition_covers_every_insight_once(self, insight_factory):
        insights = [
            insight_factory('Reports are slow'),
            insight_factory('Review process is manual'),
            insight_factory('Dashboard is missing goal status'),
            insight_factory('Budget approval is pending'),
        ]

        groups = group_insights_by_theme(insights)

        flattened = [i for group in groups.values() for i in group]
        assert len(flattened) == len(insights)
        assert all(i in flattened for i in insights)

    def test_first_seen_theme_order(self, insight_factory):
        insights = [
            insight_factory('Review process is manual'),
            insight_factory('Reports are slow'),
            insight_factory('Calibration takes a week'),
        ]

        groups = group_insights_by_theme(insights)

        assert list(groups) == ['performance_management', 'reporting']
        assert [i.description for i in groups['performance_management']] == [
            'Review process is manual',
            'Calibration takes a week',
        ]

    def test_empty_input(self):
        assert group_insights_by_theme([]) == {}


class TestIdentifyOpportunities:
    def test_empty_insights_yield_no_opportunities(self):
        assert identify_opportunities([]) == []

    def test_one_opportunity_per_theme(self, insight_factory):
        insights = [
            insight_factory('Reports are slow'),
            insight_factory('Dashboard lacks filters'),
            insight_factory('Sync with HRIS fails nightly'),
        ]

        opportunities = identify_opportunities(insights)

        assert [o.theme for o in opportunities] == ['reporting', 'integration']
        assert opportunities[0].insight_count == 2
        assert opportunities[0].title == OPPORTUNITY_CATALOG['reporting'].title

    def test_ordered_by_validation_strength(self, insight_factory):
        insights = [
            insight_factory('Onboarding guide is outdated', priority='low'),
            insight_factory('Reports are slow', priority='high'),
            insight_factory('Dashboard lacks filters', priority='high'),
            insight_factory('Metrics are inconsistent', priority='high'),
        ]

        opportunities = identify_opportunities(insights)

        assert [o.validation for o in opportunities] == ['strong', 'weak']
        assert opportunities[0].theme == 'reporting'

    def test_ties_keep_first_seen_order(self, insight_factory):
        insights = [
            insight_factory('Sync with HRIS fails nightly', priority='high'),
            insight_factory('Reports are slow', priority='high'),
            insight_factory('Review process is manual', priority='high'),
        ]

        opportunities = identify_opportunities(insights)

        assert all(o.validation == 'medium' for o in opportunities)
        assert [o.theme for o in opportunities] == ['integration', 'reporting', 'performance_management']

    def test_uncategorized_insights_still_produce_an_opportunity(self, insight_factory):
        opportunities = identify_opportunities([insight_factory('Budget approval is pending')])

        assert len(opportunities) == 1
        assert opportunities[0].theme == DEFAULT_THEME
        assert opportunities[0].product is None

    def test_need_comes_from_highest_priority_insight(self, insight_factory):
        insights = [
            insight_factory('Reports are slow', priority='low'),
            insight_factory('Dashboard is missing for executives.', priority='high'),
        ]

        assert summarize_need(insights) == 'Dashboard is missing for executives (plus 1 related signal)'


class TestIdentifyAccelerators:
    def test_catalog_and_standard_accelerators(self):
        template = OPPORTUNITY_CATALOG['reporting']

        accelerators = identify_accelerators('reporting', template, None)

        assert accelerators[0] == f'Fast-start fix on {template.product}'
        assert 'Executive-ready dashboard mockup' in accelerators
        assert '60-day pilot program' in accelerators

    def test_crm_and_usage_accelerators(self, sample_customer_data):
        customer_data = CustomerData.model_validate(sample_customer_data)

        accelerators = identify_accelerators(
            'reporting', OPPORTUNITY_CATALOG['reporting'], customer_data
        )

        assert 'Tie the pilot to the qualification stage close plan' in accelerators
        assert 'Build on existing adoption of reports' in accelerators

    def test_low_probability_skips_crm_accelerator(self, sample_customer_data):
        sample_customer_data['crmData']['probability'] = 20
        customer_data = CustomerData.model_validate(sample_customer_data)

        accelerators = identify_accelerators(
            'integration', OPPORTUNITY_CATALOG['integration'], customer_data
        )

        assert not any('close plan' in a for a in accelerators)
        assert not any('existing adoption' in a for a in accelerators)
