"""
LLM prompts for the Intelligence Processing Engine.
"""

from .extract_insights import (
    ExtractedStakeholder,
    ExtractionPayload,
    build_insight_prompt,
    EXTRACTION_SYSTEM_PROMPT,
)

__all__ = [
    'ExtractedStakeholder',
    'ExtractionPayload',
    'build_insight_prompt',
    'EXTRACTION_SYSTEM_PROMPT',
]
