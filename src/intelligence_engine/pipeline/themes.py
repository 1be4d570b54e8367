"""
Theme categorization.

Maps an insight to a topical bucket by keyword matching on its description.
Keyword groups are checked in order and the first match wins. A keyword
matches at the start of a word, so "report" matches "reports" and
"reporting" but "ui" does not match "build".
"""

import re

from ..models.insight import Insight

DEFAULT_THEME = 'other'

# Order matters: earlier groups win when a description matches several.
THEME_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('reporting', ('report', 'dashboard', 'metrics', 'visibility', 'data')),
    ('user_experience', ('ui', 'ux', 'interface', 'navigation', 'confusing', 'usability', 'intuitive')),
    ('analytics', ('insight', 'analytics', 'trends', 'patterns', 'forecast')),
    ('integration', ('integrat', 'sync', 'hris', 'api', 'connect')),
    ('performance_management', ('performance', 'review', 'goal', 'feedback', 'calibration')),
    ('adoption', ('training', 'onboarding', 'adoption', 'learning', 'rollout')),
)

_THEME_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (theme, re.compile(r'\b(?:' + '|'.join(re.escape(k) for k in keywords) + r')', re.IGNORECASE))
    for theme, keywords in THEME_KEYWORDS
)


def categorize_text(text: str) -> str:
    """Return the theme key for free text, or DEFAULT_THEME."""
    for theme, pattern in _THEME_PATTERNS:
        if pattern.search(text):
            return theme
    return DEFAULT_THEME


def categorize_theme(insight: Insight) -> str:
    """
    Return the theme key for an insight.

    Pure and deterministic: the same description always yields the same key.
    """
    return categorize_text(insight.description)


def theme_matches(theme: str, text: str) -> bool:
    """True if text contains any keyword of the given theme."""
    for name, pattern in _THEME_PATTERNS:
        if name == theme:
            return bool(pattern.search(text))
    return False
