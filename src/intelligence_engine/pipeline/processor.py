"""
Main orchestrator for customer intelligence processing.

Provides end-to-end processing:
1. Normalize the CustomerData input
2. Extract insights with one completion request
3. Group insights by theme and synthesize ranked opportunities
4. Map meeting participants to stakeholder buckets
5. Assemble the IntelligenceReport
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from ..clients.openai_client import OpenAIClient
from ..config import Settings, get_settings
from ..errors import ConfigurationError
from ..logging import PipelineTimer, get_logger, logging_context
from ..models.customer import CustomerData
from ..models.report import IntelligenceReport
from .assembler import assemble_report
from .extractor import CompletionClient, InsightExtractor
from .normalizer import normalize_customer_data
from .opportunities import identify_opportunities
from .stakeholders import map_stakeholders

logger = get_logger(__name__)


class IntelligenceProcessor:
    """
    Converts raw customer-interaction records into an IntelligenceReport.

    Stateless apart from its credential and completion client, so concurrent
    process_customer_data calls on one instance are independent.

    Usage:
        processor = IntelligenceProcessor(api_key)
        report = await processor.process_customer_data(customer_data)
    """

    def __init__(
        self,
        credential: str,
        *,
        completion_client: CompletionClient | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the processor.

        Args:
            credential: Completion-service API key (must be non-empty)
            completion_client: Optional client override (defaults to OpenAIClient)
            settings: Engine settings (defaults to get_settings())

        Raises:
            ConfigurationError: credential is empty
        """
        if not credential or not credential.strip():
            raise ConfigurationError('IntelligenceProcessor requires a non-empty credential')

        self._credential = credential
        self.settings = settings or get_settings()
        self.completion_client = completion_client or OpenAIClient(
            api_key=credential,
            chat_model=self.settings.OPENAI_CHAT_MODEL,
        )
        self.extractor = InsightExtractor(self.completion_client, settings=self.settings)

    @classmethod
    def from_env(cls) -> IntelligenceProcessor:
        """
        Create a processor from environment variables.

        Expects:
            OPENAI_API_KEY: OpenAI API key
            OPENAI_CHAT_MODEL: Chat model (optional)

        Returns:
            Configured IntelligenceProcessor
        """
        settings = get_settings()
        missing = settings.validate_required()
        if missing:
            raise ConfigurationError('Missing required configuration', context={'missing': missing})
        return cls(settings.OPENAI_API_KEY, settings=settings)

    @property
    def credential(self) -> str:
        return self._credential

    async def close(self) -> None:
        """Close the completion client if it holds a connection."""
        close = getattr(self.completion_client, 'close', None)
        if close is not None:
            await close()

    async def process_customer_data(
        self,
        data: CustomerData | Mapping[str, Any],
        trace_id: str | None = None,
    ) -> IntelligenceReport:
        """
        Process one company's customer data into an IntelligenceReport.

        Args:
            data: CustomerData or a mapping of the same shape
            trace_id: Optional trace identifier for log correlation

        Returns:
            IntelligenceReport; insights/opportunities may be empty when the
            completion body was malformed

        Raises:
            InputValidationError: company_name missing or blank
            UpstreamServiceError: the completion service failed (propagated
                unchanged, as is anything a custom completion client raises)
        """
        timer = PipelineTimer()

        with timer.stage('normalize'):
            customer_data = normalize_customer_data(data)

        with logging_context(
            trace_id=trace_id or str(uuid4()),
            company_name=customer_data.company_name,
            account_id=customer_data.crm_data.account_id or None,
        ):
            logger.info(
                'processing_started',
                meetings=len(customer_data.meetings),
                emails=len(customer_data.emails),
                support_tickets=len(customer_data.support_tickets),
            )

            try:
                with timer.stage('extraction'):
                    extraction = await self.extractor.extract(customer_data)
            except Exception as e:
                logger.error(
                    'processor.upstream_failed',
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            if extraction.degraded:
                logger.warning(
                    'processor.extraction_degraded',
                    status=extraction.status.value,
                    warnings=extraction.warnings,
                )

            with timer.stage('opportunities'):
                opportunities = identify_opportunities(extraction.insights, customer_data)

            with timer.stage('stakeholders'):
                stakeholder_map = map_stakeholders(customer_data, extraction.stakeholders)

            with timer.stage('assembly'):
                report = assemble_report(
                    customer_data,
                    extraction.insights,
                    opportunities,
                    stakeholder_map,
                )

            logger.info(
                'processing_complete',
                insights=len(report.insights),
                opportunities=len(report.opportunities),
                stakeholders=stakeholder_map.total,
                extraction_status=extraction.status.value,
                **timer.summary(),
            )

            return report
