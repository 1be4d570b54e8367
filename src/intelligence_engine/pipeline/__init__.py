"""
Pipeline components for insight extraction, opportunity synthesis,
stakeholder mapping and report assembly.
"""

from .normalizer import normalize_customer_data
from .extractor import (
    InsightExtractor,
    ExtractionOutcome,
    ExtractionStatus,
    Parsed,
    Unparsed,
    parse_completion,
    consolidate_insights,
)
from .themes import categorize_theme, DEFAULT_THEME, THEME_KEYWORDS
from .validation import calculate_validation, rank_validation, VALIDATION_RANK
from .opportunities import group_insights_by_theme, identify_opportunities, OPPORTUNITY_CATALOG
from .stakeholders import map_stakeholders, classify_role, DEFAULT_BUCKET
from .assembler import (
    assemble_report,
    build_sales_strategy,
    build_outreach,
    build_appendix,
    build_executive_summary,
)
from .processor import IntelligenceProcessor

__all__ = [
    # Main Processor
    'IntelligenceProcessor',
    # Normalization
    'normalize_customer_data',
    # Extraction
    'InsightExtractor',
    'ExtractionOutcome',
    'ExtractionStatus',
    'Parsed',
    'Unparsed',
    'parse_completion',
    'consolidate_insights',
    # Themes / Validation
    'categorize_theme',
    'DEFAULT_THEME',
    'THEME_KEYWORDS',
    'calculate_validation',
    'rank_validation',
    'VALIDATION_RANK',
    # Opportunities
    'group_insights_by_theme',
    'identify_opportunities',
    'OPPORTUNITY_CATALOG',
    # Stakeholders
    'map_stakeholders',
    'classify_role',
    'DEFAULT_BUCKET',
    # Assembly
    'assemble_report',
    'build_sales_strategy',
    'build_outreach',
    'build_appendix',
    'build_executive_summary',
]
