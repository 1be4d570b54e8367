"""
Validation scoring for groups of insights.

A group is rated on two counts: how many of its insights are high priority
and how many insights it has overall.

    strong  high >= 3  or total >= 5
    medium  high >= 1  or total >= 3
    weak    otherwise

Both counts only ever raise the rating, so adding an insight (of any
priority) never lowers it.
"""

from collections.abc import Sequence

from ..models.insight import Insight, ValidationType

VALIDATION_RANK: dict[str, int] = {'strong': 3, 'medium': 2, 'weak': 1}

STRONG_HIGH_PRIORITY = 3
STRONG_TOTAL = 5
MEDIUM_HIGH_PRIORITY = 1
MEDIUM_TOTAL = 3


def calculate_validation(insights: Sequence[Insight]) -> ValidationType:
    """Rate a group of insights as strong, medium or weak."""
    high_priority_count = sum(1 for i in insights if i.priority == 'high')
    total_count = len(insights)

    if high_priority_count >= STRONG_HIGH_PRIORITY or total_count >= STRONG_TOTAL:
        return 'strong'
    if high_priority_count >= MEDIUM_HIGH_PRIORITY or total_count >= MEDIUM_TOTAL:
        return 'medium'
    return 'weak'


def rank_validation(validation: str) -> int:
    """Numeric rank of a validation level (strong=3, medium=2, weak=1)."""
    return VALIDATION_RANK.get(validation, 0)
