"""
Unit tests for processing delay detection and the monitoring scan.

All checks use a fixed reference time so day counts are exact.

Note on status values: the detector compares against the literal
"Pending". Mails stored with lower-case "pending" elsewhere in the
tracking system are therefore never flagged unless the detector is
configured with that spelling; the tests pin this behaviour down.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.mail_intelligence.anomaly import AnomalyDetector
from src.mail_intelligence.models import AnomalyResult, MailRecord

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)
AVERAGES = {"Legal": 8, "Finance": 4, "Operations": 10}


def pending_mail(department="Finance", days_ago=1.0, status="Pending", **kwargs):
    return MailRecord(
        subject=kwargs.pop("subject", "Pending correspondence"),
        department=department,
        status=status,
        created_at=NOW - timedelta(days=days_ago),
        **kwargs
    )


@pytest.fixture
def detector():
    return AnomalyDetector()


class TestAnomalyGating:
    """Mails that are not pending or lack data are never checked."""

    @pytest.mark.parametrize("status", ["pending", "Completed", "In Progress", None])
    def test_non_pending_status_never_anomalous(self, detector, status):
        mail = pending_mail(days_ago=100, status=status)

        result = detector.detect(mail, AVERAGES, now=NOW)

        assert result.is_anomaly is False
        assert result.days_delayed == 0
        assert result.average_processing_time == 0.0
        assert result.reason == "Mail not in pending status or missing required data"

    def test_missing_created_at(self, detector):
        mail = MailRecord(subject="x", department="Finance", status="Pending")
        assert detector.detect(mail, AVERAGES, now=NOW).is_anomaly is False

    def test_missing_department(self, detector):
        mail = pending_mail(department=None, days_ago=100)

        result = detector.detect(mail, AVERAGES, now=NOW)

        assert result.is_anomaly is False
        assert result.department is None

    def test_configured_pending_status(self):
        detector = AnomalyDetector(pending_status="pending")
        mail = pending_mail(days_ago=30, status="pending")

        assert detector.detect(mail, AVERAGES, now=NOW).is_anomaly is True


class TestAnomalyThreshold:
    """Test suite for the 1.5x baseline boundary."""

    def test_exactly_at_threshold_is_normal(self, detector):
        """Finance baseline 4 days gives a threshold of 6; the boundary is strict."""
        result = detector.detect(pending_mail(days_ago=6), AVERAGES, now=NOW)

        assert result.is_anomaly is False
        assert result.days_delayed == 6
        assert result.average_processing_time == 4
        assert result.department == "Finance"
        assert result.reason == "Processing time within normal range"

    def test_one_day_past_threshold_is_anomalous(self, detector):
        result = detector.detect(pending_mail(days_ago=7), AVERAGES, now=NOW)

        assert result.is_anomaly is True
        assert result.days_delayed == 7
        assert result.reason == (
            "Mail is 7 days old, which exceeds the department average of 4 days"
        )

    def test_partial_days_round_up(self, detector):
        result = detector.detect(pending_mail(days_ago=6 + 1 / 24), AVERAGES, now=NOW)

        assert result.days_delayed == 7
        assert result.is_anomaly is True

    def test_unknown_department_uses_default_baseline(self, detector):
        within = detector.detect(pending_mail(department="Archives", days_ago=10), AVERAGES, now=NOW)
        beyond = detector.detect(pending_mail(department="Archives", days_ago=11), AVERAGES, now=NOW)

        assert within.average_processing_time == 7
        assert within.is_anomaly is False
        assert beyond.is_anomaly is True

    def test_zero_baseline_uses_default(self, detector):
        result = detector.detect(pending_mail(days_ago=3), {"Finance": 0}, now=NOW)

        assert result.average_processing_time == 7
        assert result.is_anomaly is False

    def test_negative_baseline_uses_default(self, detector):
        result = detector.detect(pending_mail(days_ago=1), {"Finance": -2}, now=NOW)

        assert result.average_processing_time == 7
        assert result.is_anomaly is False
        assert result.severity is None

    def test_future_creation_date_uses_absolute_difference(self, detector):
        result = detector.detect(pending_mail(days_ago=-7), AVERAGES, now=NOW)

        assert result.days_delayed == 7
        assert result.is_anomaly is True

    def test_naive_created_at_treated_as_utc(self, detector):
        mail = MailRecord(
            subject="x",
            department="Finance",
            status="Pending",
            created_at=datetime(2024, 6, 24, 12, 0)
        )

        assert detector.detect(mail, AVERAGES, now=NOW).days_delayed == 6

    def test_defaults_to_current_time(self, detector):
        mail = MailRecord(
            subject="x",
            department="Legal",
            status="Pending",
            created_at=datetime.now(timezone.utc) - timedelta(days=30)
        )

        result = detector.detect(mail, AVERAGES)

        assert result.days_delayed in (30, 31)
        assert result.is_anomaly is True


class TestAnomalySeverity:
    """Test suite for severity bands of anomaly results."""

    def test_critical_band(self, detector):
        result = detector.detect(pending_mail(days_ago=8), AVERAGES, now=NOW)

        assert result.delay_ratio == pytest.approx(2.0)
        assert result.severity == "Critical"

    def test_high_band(self, detector):
        result = detector.detect(pending_mail(days_ago=7), AVERAGES, now=NOW)

        assert result.delay_ratio == pytest.approx(1.75)
        assert result.severity == "High"

    def test_medium_band(self):
        result = AnomalyResult(
            is_anomaly=True,
            days_delayed=13,
            average_processing_time=10,
            reason="manual"
        )
        assert result.severity == "Medium"

    def test_no_severity_without_anomaly(self, detector):
        result = detector.detect(pending_mail(days_ago=1), AVERAGES, now=NOW)
        assert result.severity is None

    def test_ratio_with_zero_baseline(self):
        result = AnomalyResult(
            is_anomaly=False,
            days_delayed=0,
            average_processing_time=0.0,
            reason="n/a"
        )
        assert result.delay_ratio == 0.0


@pytest.fixture
def monitored_mails():
    return [
        pending_mail(department="Legal", days_ago=20, subject="Emergency Court Case Notice"),
        pending_mail(department="Finance", days_ago=7, subject="Budget Approval Request"),
        pending_mail(department="Operations", days_ago=16, subject="Fleet maintenance"),
        pending_mail(department="Operations", days_ago=5, subject="Office supplies"),
        pending_mail(department="Finance", days_ago=50, status="Completed", subject="Closed file"),
    ]


class TestAnomalyScan:
    """Test suite for batch monitoring."""

    def test_all_anomalies(self, detector, monitored_mails):
        report = detector.scan(monitored_mails, AVERAGES, now=NOW)

        subjects = [item.mail.subject for item in report.anomalies]
        assert subjects == ["Emergency Court Case Notice", "Budget Approval Request", "Fleet maintenance"]
        assert report.stats.total == 3
        assert report.stats.critical == 1
        assert report.stats.high == 2
        assert report.stats.medium == 0
        assert report.severity_filter == "all"

    def test_critical_filter(self, detector, monitored_mails):
        report = detector.scan(monitored_mails, AVERAGES, severity="critical", now=NOW)

        assert [item.mail.subject for item in report.anomalies] == ["Emergency Court Case Notice"]
        assert report.stats.total == 1
        assert report.stats.critical == 1

    @pytest.mark.parametrize("severity", ["high", "medium"])
    def test_lower_filters_include_higher_bands(self, detector, monitored_mails, severity):
        report = detector.scan(monitored_mails, AVERAGES, severity=severity, now=NOW)
        assert report.stats.total == 3

    def test_unknown_filter_rejected(self, detector, monitored_mails):
        with pytest.raises(ValueError) as excinfo:
            detector.scan(monitored_mails, AVERAGES, severity="severe", now=NOW)
        assert "Unknown severity filter" in str(excinfo.value)

    def test_empty_batch(self, detector):
        report = detector.scan([], AVERAGES, now=NOW)

        assert report.anomalies == []
        assert report.stats.total == 0
