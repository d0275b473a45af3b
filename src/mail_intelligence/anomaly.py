"""
Processing delay detection for pending mails.

A pending mail is anomalous when its age exceeds its department's average
processing time by more than the configured multiplier (1.5x by default).
The monitoring scan applies the same check to a batch and groups the
results into severity bands by delay ratio.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Mapping, Optional

from src.config.intelligence_config import INTELLIGENCE_CONFIG
from src.mail_intelligence.models import (
    AnomalyReport,
    AnomalyResult,
    AnomalyStats,
    FlaggedMail,
    MailRecord,
)
from src.utils.date_utils import days_between, utc_now

logger = logging.getLogger(__name__)

SEVERITY_FILTERS = ("all", "critical", "high", "medium")


class AnomalyDetector:
    """
    Flags pending mails that have waited too long.

    The status comparison is a literal match against ``pending_status``
    ("Pending" by default). Records stored with another spelling, such as
    lower-case "pending", are not checked.
    """

    def __init__(self,
                 pending_status: Optional[str] = None,
                 default_processing_days: Optional[float] = None):
        config = INTELLIGENCE_CONFIG["anomaly_detection"]
        self.pending_status = pending_status or config["pending_status"]
        self.default_processing_days = default_processing_days or config["default_processing_days"]
        self.threshold_multiplier: float = config["threshold_multiplier"]
        self.severity_ratios: Mapping[str, float] = config["severity_ratios"]

    def _baseline(self, department: str, department_averages: Mapping[str, float]) -> float:
        # Missing, zero and negative baselines all fall back to the default
        average = department_averages.get(department)
        if average is None or average <= 0:
            return self.default_processing_days
        return average

    def detect(self,
               mail: MailRecord,
               department_averages: Mapping[str, float],
               now: Optional[datetime] = None) -> AnomalyResult:
        """
        Check one mail against its department baseline.

        Args:
            mail: Mail to check; needs created_at, department and a pending status
            department_averages: Average processing days keyed by department
            now: Reference time, defaults to the current UTC time

        Returns:
            AnomalyResult; not applicable mails report no anomaly and zero delay
        """
        if not mail.created_at or not mail.department or mail.status != self.pending_status:
            return AnomalyResult(
                is_anomaly=False,
                days_delayed=0,
                average_processing_time=0.0,
                reason="Mail not in pending status or missing required data"
            )

        days_since_creation = days_between(mail.created_at, now or utc_now())
        average_processing_time = self._baseline(mail.department, department_averages)
        threshold = average_processing_time * self.threshold_multiplier

        is_anomaly = days_since_creation > threshold
        if is_anomaly:
            reason = (
                f"Mail is {days_since_creation} days old, which exceeds the "
                f"department average of {average_processing_time:g} days"
            )
            logger.debug(f"Delay anomaly in {mail.department}: {days_since_creation} days > {threshold:g}")
        else:
            reason = "Processing time within normal range"

        return AnomalyResult(
            is_anomaly=is_anomaly,
            days_delayed=days_since_creation,
            average_processing_time=average_processing_time,
            department=mail.department,
            reason=reason
        )

    def _passes_filter(self, result: AnomalyResult, severity: str) -> bool:
        if severity == "all":
            return True
        return result.delay_ratio >= self.severity_ratios[severity]

    def _summarize(self, flagged: List[FlaggedMail]) -> AnomalyStats:
        stats = AnomalyStats(total=len(flagged))
        for item in flagged:
            ratio = item.result.delay_ratio
            if ratio >= self.severity_ratios["critical"]:
                stats.critical += 1
            elif ratio >= self.severity_ratios["high"]:
                stats.high += 1
            elif ratio >= self.severity_ratios["medium"]:
                stats.medium += 1
        return stats

    def scan(self,
             mails: Iterable[MailRecord],
             department_averages: Mapping[str, float],
             severity: str = "all",
             now: Optional[datetime] = None) -> AnomalyReport:
        """
        Check a batch of mails and keep the anomalies.

        Args:
            mails: Mails to check
            department_averages: Average processing days keyed by department
            severity: "all", or the minimum band to keep ("critical", "high", "medium")
            now: Reference time shared by every check in the batch

        Returns:
            AnomalyReport with the kept anomalies and per-band counts

        Raises:
            ValueError: If severity is not a known filter
        """
        if severity not in SEVERITY_FILTERS:
            raise ValueError(
                f"Unknown severity filter '{severity}', expected one of {', '.join(SEVERITY_FILTERS)}"
            )

        reference_time = now or utc_now()
        flagged = []
        for mail in mails:
            result = self.detect(mail, department_averages, now=reference_time)
            if result.is_anomaly and self._passes_filter(result, severity):
                flagged.append(FlaggedMail(mail=mail, result=result))

        stats = self._summarize(flagged)
        logger.info(
            f"Anomaly scan ({severity}): {stats.total} flagged - "
            f"{stats.critical} critical, {stats.high} high, {stats.medium} medium"
        )
        return AnomalyReport(anomalies=flagged, stats=stats, severity_filter=severity)
