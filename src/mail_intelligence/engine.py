"""
Mail intelligence engine.

Single entry point for the heuristic mail analyses: duplicate detection,
priority assignment, delay anomaly detection, description suggestions and
content suggestions. Every operation is synchronous and side-effect free;
the engine only holds constant lookup tables, so one shared instance can
serve concurrent callers.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from src.mail_intelligence.anomaly import AnomalyDetector
from src.mail_intelligence.duplicates import DuplicateDetector
from src.mail_intelligence.models import (
    AnomalyReport,
    AnomalyResult,
    ContentSuggestion,
    DescriptionSuggestion,
    DuplicateResult,
    MailDraft,
    MailRecord,
    PriorityResult,
)
from src.mail_intelligence.priority import PriorityClassifier
from src.mail_intelligence.suggestions import ContentSuggester, DescriptionSuggester

logger = logging.getLogger(__name__)


class MailIntelligenceEngine:
    """
    Facade over the individual analysers.

    Components can be injected for alternative tables or thresholds;
    by default each one uses the built-in configuration.
    """

    def __init__(self,
                 duplicate_detector: Optional[DuplicateDetector] = None,
                 priority_classifier: Optional[PriorityClassifier] = None,
                 anomaly_detector: Optional[AnomalyDetector] = None,
                 description_suggester: Optional[DescriptionSuggester] = None,
                 content_suggester: Optional[ContentSuggester] = None):
        self.duplicate_detector = duplicate_detector or DuplicateDetector()
        self.priority_classifier = priority_classifier or PriorityClassifier()
        self.anomaly_detector = anomaly_detector or AnomalyDetector()
        self.description_suggester = description_suggester or DescriptionSuggester()
        self.content_suggester = content_suggester or ContentSuggester(self.description_suggester)

    def detect_duplicate(self,
                         new_mail: MailRecord,
                         existing_mails: Sequence[MailRecord],
                         threshold: Optional[float] = None) -> DuplicateResult:
        """Find the existing mail most similar to new_mail."""
        return self.duplicate_detector.detect(new_mail, existing_mails, threshold)

    def assign_priority(self, content: Optional[str]) -> PriorityResult:
        """Classify free text into a priority level."""
        return self.priority_classifier.classify(content)

    def detect_anomaly(self,
                       mail: MailRecord,
                       department_averages: Mapping[str, float],
                       now: Optional[datetime] = None) -> AnomalyResult:
        """Check whether a pending mail exceeds its department's usual processing time."""
        return self.anomaly_detector.detect(mail, department_averages, now=now)

    def get_description_suggestions(self, subject: Optional[str]) -> List[DescriptionSuggestion]:
        """Up to three template descriptions for a subject line."""
        return self.description_suggester.suggest(subject)

    def get_content_suggestions(self,
                                current_mail: MailDraft,
                                existing_mails: Sequence[MailRecord]) -> List[ContentSuggestion]:
        """Up to three values for empty draft fields, mined from existing mails."""
        return self.content_suggester.suggest(current_mail, existing_mails)

    def scan_for_anomalies(self,
                           mails: Iterable[MailRecord],
                           department_averages: Mapping[str, float],
                           severity: str = "all",
                           now: Optional[datetime] = None) -> AnomalyReport:
        """Run anomaly detection over a batch and summarize by severity."""
        return self.anomaly_detector.scan(mails, department_averages, severity=severity, now=now)


mail_intelligence = MailIntelligenceEngine()


def get_mail_intelligence() -> MailIntelligenceEngine:
    """Provide the shared engine instance for dependency injection."""
    return mail_intelligence
