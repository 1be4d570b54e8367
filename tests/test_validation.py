"""Tests for validation scoring."""

import pytest

from intelligence_engine.pipeline.validation import calculate_validation, rank_validation


class TestCalculateValidation:
    def test_empty_group_is_weak(self):
        assert calculate_validation([]) == 'weak'

    def test_single_low_priority_is_weak(self, insight_factory):
        assert calculate_validation([insight_factory('a', priority='low')]) == 'weak'

    def test_one_high_priority_is_medium(self, insight_factory):
        assert calculate_validation([insight_factory('a', priority='high')]) == 'medium'

    def test_three_insights_is_medium(self, insight_factory):
        group = [insight_factory(str(n), priority='low') for n in range(3)]
        assert calculate_validation(group) == 'medium'

    def test_three_high_priority_is_strong(self, insight_factory):
        group = [insight_factory(str(n), priority='high') for n in range(3)]
        assert calculate_validation(group) == 'strong'

    def test_five_insights_is_strong(self, insight_factory):
        group = [insight_factory(str(n), priority='low') for n in range(5)]
        assert calculate_validation(group) == 'strong'

    @pytest.mark.parametrize('priority', ['high', 'medium', 'low'])
    def test_adding_an_insight_never_lowers_validation(self, insight_factory, priority):
        group = [insight_factory('a', priority='high'), insight_factory('b', priority='low')]
        before = rank_validation(calculate_validation(group))

        after = rank_validation(calculate_validation([*group, insight_factory('c', priority=priority)]))

        assert after >= before

    def test_rank_order(self):
        assert rank_validation('strong') > rank_validation('medium') > rank_validation('weak')
        assert rank_validation('bogus') == 0
