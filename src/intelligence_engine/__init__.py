"""
Intelligence Processing Engine

Turns meeting transcripts, emails, support tickets, product usage and CRM
state into a sales-intelligence report: ranked insights, scored
opportunities, a stakeholder map and templated strategy/outreach content.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    IntelligenceProcessor,
    InsightExtractor,
    ExtractionOutcome,
    ExtractionStatus,
    normalize_customer_data,
    categorize_theme,
    calculate_validation,
    group_insights_by_theme,
    identify_opportunities,
    map_stakeholders,
    assemble_report,
)
from .models import (
    CustomerData,
    Meeting,
    Participant,
    Insight,
    Opportunity,
    StakeholderMap,
    IntelligenceReport,
)
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    IntelligenceEngineError,
    ConfigurationError,
    InputValidationError,
    UpstreamServiceError,
    UpstreamRateLimitError,
    UpstreamAuthenticationError,
    MalformedResponseError,
)

__all__ = [
    # Version
    '__version__',
    # Main Processor
    'IntelligenceProcessor',
    # Components
    'InsightExtractor',
    'ExtractionOutcome',
    'ExtractionStatus',
    'normalize_customer_data',
    'categorize_theme',
    'calculate_validation',
    'group_insights_by_theme',
    'identify_opportunities',
    'map_stakeholders',
    'assemble_report',
    # Models
    'CustomerData',
    'Meeting',
    'Participant',
    'Insight',
    'Opportunity',
    'StakeholderMap',
    'IntelligenceReport',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'IntelligenceEngineError',
    'ConfigurationError',
    'InputValidationError',
    'UpstreamServiceError',
    'UpstreamRateLimitError',
    'UpstreamAuthenticationError',
    'MalformedResponseError',
]
