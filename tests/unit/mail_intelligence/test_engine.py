"""
Unit tests for the engine facade, the collaborator providers and
record construction from loosely shaped mappings.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from src.config.intelligence_config import DEFAULT_DEPARTMENT_AVERAGES
from src.mail_intelligence import (
    InMemoryCorpusProvider,
    MailDraft,
    MailIntelligenceEngine,
    MailRecord,
    PriorityLevel,
    StaticBaselineProvider,
    SuggestionType,
    get_mail_intelligence,
    mail_intelligence,
)
from src.utils.date_utils import DateParsingError

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    return MailIntelligenceEngine()


class TestMailIntelligenceEngine:
    """Test suite for the engine entry points."""

    def test_shared_instance(self):
        assert get_mail_intelligence() is mail_intelligence
        assert isinstance(mail_intelligence, MailIntelligenceEngine)

    def test_detect_duplicate(self, engine):
        existing = [MailRecord(subject="Budget Approval Request", sender="Finance Department")]
        candidate = MailRecord(subject="Budget Approval Request", sender="Finance Department")

        result = engine.detect_duplicate(candidate, existing)

        assert result.is_duplicate is True
        assert result.similarity_label == "Very High"
        assert result.matched_fields == ["subject", "sender"]

    def test_assign_priority(self, engine):
        result = engine.assign_priority("Emergency Court Case Notice")

        assert result.priority == PriorityLevel.CRITICAL
        assert result.keywords == ["emergency", "court case"]

    def test_detect_anomaly(self, engine):
        mail = MailRecord(
            subject="Contract dispute",
            department="Legal",
            status="Pending",
            created_at=NOW - timedelta(days=13)
        )

        result = engine.detect_anomaly(mail, DEFAULT_DEPARTMENT_AVERAGES, now=NOW)

        assert result.is_anomaly is True
        assert result.average_processing_time == 8

    def test_scan_for_anomalies(self, engine):
        mails = [
            MailRecord(subject="a", department="Legal", status="Pending", created_at=NOW - timedelta(days=20)),
            MailRecord(subject="b", department="Legal", status="Pending", created_at=NOW - timedelta(days=2)),
        ]

        report = engine.scan_for_anomalies(mails, DEFAULT_DEPARTMENT_AVERAGES, severity="critical", now=NOW)

        assert [item.mail.subject for item in report.anomalies] == ["a"]
        assert report.severity_filter == "critical"

    def test_get_description_suggestions(self, engine):
        suggestions = engine.get_description_suggestions("Permission for leave")

        assert len(suggestions) == 3
        assert suggestions[0].category == "Approval Request"

    def test_get_content_suggestions(self, engine):
        corpus = [MailRecord(subject="Annual leave request", department="Human Resources", priority="Low")]

        suggestions = engine.get_content_suggestions(MailDraft(department="Human Resources"), corpus)

        assert [s.type for s in suggestions] == [SuggestionType.SUBJECT, SuggestionType.PRIORITY]

    def test_injected_components_are_used(self):
        classifier = MagicMock()
        engine = MailIntelligenceEngine(priority_classifier=classifier)

        engine.assign_priority("anything")

        classifier.classify.assert_called_once_with("anything")

    def test_content_suggester_shares_description_suggester(self):
        description_suggester = MagicMock()
        description_suggester.suggest.return_value = []
        engine = MailIntelligenceEngine(description_suggester=description_suggester)

        result = engine.get_content_suggestions(MailDraft(subject="Hello", recipient="X"), [])

        assert result == []
        description_suggester.suggest.assert_called_once_with("Hello")


class TestProviders:
    """Test suite for the in-memory collaborators."""

    def test_corpus_provider_returns_copy(self):
        mails = [MailRecord(subject="Budget")]
        provider = InMemoryCorpusProvider(mails)

        served = provider.get_mails()
        served.append(MailRecord(subject="Other"))

        assert provider.get_mails() == mails

    def test_empty_corpus_provider(self):
        assert InMemoryCorpusProvider().get_mails() == []

    def test_default_baselines(self):
        averages = StaticBaselineProvider().get_department_averages()

        assert averages == DEFAULT_DEPARTMENT_AVERAGES
        assert averages["Audit & Compliance"] == 10

    def test_custom_baselines_returned_as_copy(self):
        provider = StaticBaselineProvider({"Finance": 3})

        provider.get_department_averages()["Finance"] = 99

        assert provider.get_department_averages() == {"Finance": 3}

    def test_empty_baseline_table_is_respected(self):
        assert StaticBaselineProvider({}).get_department_averages() == {}


class TestMailRecordFromDict:
    """Test suite for building records from mappings."""

    def test_camel_case_timestamps(self):
        record = MailRecord.from_dict({
            "subject": "Budget Approval Request",
            "status": "Pending",
            "createdAt": "2024-06-24T12:00:00Z",
            "updatedAt": datetime(2024, 6, 25, 9, 30),
        })

        assert record.created_at == datetime(2024, 6, 24, 12, 0, tzinfo=timezone.utc)
        assert record.updated_at == datetime(2024, 6, 25, 9, 30, tzinfo=timezone.utc)
        assert record.status == "Pending"

    def test_unknown_keys_ignored(self):
        record = MailRecord.from_dict({"subject": "x", "id": 42, "attachments": []})
        assert record == MailRecord(subject="x")

    def test_missing_subject_becomes_empty(self):
        assert MailRecord.from_dict({"department": "Finance"}).subject == ""

    def test_unparseable_timestamp(self):
        with pytest.raises(DateParsingError):
            MailRecord.from_dict({"subject": "x", "createdAt": "not a date"})

    def test_records_are_immutable(self):
        record = MailRecord(subject="x")
        with pytest.raises(AttributeError):
            record.subject = "y"
