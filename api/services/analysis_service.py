"""
Analysis Service Implementation

Bridges the HTTP layer and the mail intelligence engine: converts request
payloads into engine value types, applies configured defaults and maps
results back into response models.

Design Considerations:
- Stateless service design
- Engine and baseline provider injectable for testing
- Request-level logging of analysis outcomes
"""

import logging
from typing import Dict, List, Optional

from api.config import APISettings, get_settings
from api.models.analysis import (
    AnomalyRequest,
    AnomalyResponse,
    AnomalyScanRequest,
    AnomalyScanResponse,
    AnomalyStatsResponse,
    ContentSuggestionRequest,
    ContentSuggestionResponse,
    DepartmentBaselinesResponse,
    DescriptionSuggestionResponse,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    FlaggedMailResponse,
    MailPayload,
    PriorityResponse,
)
from src.mail_intelligence import (
    AnomalyResult,
    BaselineProvider,
    MailIntelligenceEngine,
    StaticBaselineProvider,
)
from src.mail_intelligence.anomaly import AnomalyDetector

# Configure logging
logger = logging.getLogger(__name__)


def _anomaly_response(result: AnomalyResult) -> AnomalyResponse:
    return AnomalyResponse(
        is_anomaly=result.is_anomaly,
        days_delayed=result.days_delayed,
        average_processing_time=result.average_processing_time,
        department=result.department,
        reason=result.reason,
        severity=result.severity
    )


class AnalysisService:
    """
    Mail analysis service implementation.

    Holds no per-request state. Department baselines come from the injected
    provider whenever a request does not carry its own table.
    """

    def __init__(self,
                 engine: Optional[MailIntelligenceEngine] = None,
                 baseline_provider: Optional[BaselineProvider] = None,
                 settings: Optional[APISettings] = None):
        """
        Initialize analysis service with its collaborators.

        Args:
            engine: Engine instance; built from settings when omitted
            baseline_provider: Source of department baselines
            settings: Settings override (for testing)
        """
        self.settings = settings or get_settings()
        self.engine = engine or MailIntelligenceEngine(
            anomaly_detector=AnomalyDetector(
                pending_status=self.settings.PENDING_STATUS,
                default_processing_days=self.settings.DEFAULT_PROCESSING_DAYS
            )
        )
        self.baseline_provider = baseline_provider or StaticBaselineProvider(
            self.settings.DEPARTMENT_AVERAGES
        )
        logger.info("Analysis service initialized")

    def _department_averages(self, override: Optional[Dict[str, float]]) -> Dict[str, float]:
        if override is not None:
            return override
        return self.baseline_provider.get_department_averages()

    def check_duplicate(self, request: DuplicateCheckRequest) -> DuplicateCheckResponse:
        """
        Run duplicate detection for a new mail.

        Args:
            request: Candidate mail, comparison corpus and optional threshold

        Returns:
            Best match details
        """
        threshold = request.threshold
        if threshold is None:
            threshold = self.settings.DUPLICATE_THRESHOLD

        result = self.engine.detect_duplicate(
            request.mail.to_record(),
            [mail.to_record() for mail in request.existing_mails],
            threshold
        )
        logger.info(
            f"Duplicate check against {len(request.existing_mails)} mails: "
            f"duplicate={result.is_duplicate}, similarity={result.similarity:.3f}"
        )
        return DuplicateCheckResponse(
            is_duplicate=result.is_duplicate,
            similarity=result.similarity,
            similarity_label=result.similarity_label,
            matched_mail=MailPayload.from_record(result.matched_mail) if result.matched_mail else None,
            matched_fields=result.matched_fields
        )

    def assign_priority(self, content: str) -> PriorityResponse:
        """Classify text into a priority level."""
        result = self.engine.assign_priority(content)
        logger.info(f"Priority assigned: {result.priority.value} ({result.confidence:.2f})")
        return PriorityResponse(
            priority=result.priority,
            confidence=result.confidence,
            keywords=result.keywords,
            reason=result.reason
        )

    def detect_anomaly(self, request: AnomalyRequest) -> AnomalyResponse:
        """Check one mail for a processing delay."""
        result = self.engine.detect_anomaly(
            request.mail.to_record(),
            self._department_averages(request.department_averages)
        )
        logger.info(f"Anomaly check for department {request.mail.department}: {result.is_anomaly}")
        return _anomaly_response(result)

    def scan_anomalies(self, request: AnomalyScanRequest) -> AnomalyScanResponse:
        """
        Check a batch of mails for processing delays.

        Raises:
            ValueError: If the severity filter is unknown
        """
        report = self.engine.scan_for_anomalies(
            [mail.to_record() for mail in request.mails],
            self._department_averages(request.department_averages),
            severity=request.severity
        )
        return AnomalyScanResponse(
            anomalies=[
                FlaggedMailResponse(
                    mail=MailPayload.from_record(item.mail),
                    anomaly=_anomaly_response(item.result)
                )
                for item in report.anomalies
            ],
            stats=AnomalyStatsResponse(
                total=report.stats.total,
                critical=report.stats.critical,
                high=report.stats.high,
                medium=report.stats.medium
            ),
            severity_filter=report.severity_filter
        )

    def suggest_descriptions(self, subject: str) -> List[DescriptionSuggestionResponse]:
        """Template descriptions for a subject line."""
        return [
            DescriptionSuggestionResponse(
                text=suggestion.text,
                confidence=suggestion.confidence,
                category=suggestion.category
            )
            for suggestion in self.engine.get_description_suggestions(subject)
        ]

    def suggest_content(self, request: ContentSuggestionRequest) -> List[ContentSuggestionResponse]:
        """Values for the empty fields of a draft."""
        suggestions = self.engine.get_content_suggestions(
            request.current_mail.to_draft(),
            [mail.to_record() for mail in request.existing_mails]
        )
        logger.info(f"Generated {len(suggestions)} content suggestions")
        return [
            ContentSuggestionResponse(
                type=suggestion.type,
                suggestion=suggestion.suggestion,
                confidence=suggestion.confidence,
                reason=suggestion.reason,
                based_on=suggestion.based_on
            )
            for suggestion in suggestions
        ]

    def get_department_baselines(self) -> DepartmentBaselinesResponse:
        """Configured department processing baselines."""
        return DepartmentBaselinesResponse(
            averages=self.baseline_provider.get_department_averages(),
            default_processing_days=self.settings.DEFAULT_PROCESSING_DAYS
        )


_analysis_service: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Provide analysis service instance for dependency injection."""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = AnalysisService()
    return _analysis_service
