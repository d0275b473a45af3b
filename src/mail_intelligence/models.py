"""
Shared data models for mail intelligence.

Records are supplied by callers and never created or mutated by the engine.
Results are ephemeral values produced per call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from src.config.intelligence_config import INTELLIGENCE_CONFIG
from src.utils.date_utils import parse_timestamp

SEVERITY_RATIOS = INTELLIGENCE_CONFIG["anomaly_detection"]["severity_ratios"]


class PriorityLevel(str, Enum):
    """Priority labels assigned by keyword classification."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SuggestionType(str, Enum):
    """Mail fields a content suggestion can fill in."""
    SUBJECT = "subject"
    DESCRIPTION = "description"
    RECIPIENT = "recipient"
    PRIORITY = "priority"


# camelCase keys as sent by the tracking front-end
_FIELD_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


@dataclass(frozen=True)
class MailRecord:
    """One inward or outward correspondence item."""
    subject: str
    description: Optional[str] = None
    sender: Optional[str] = None
    recipient: Optional[str] = None
    department: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MailRecord":
        """
        Build a record from a loosely shaped mapping.

        Unknown keys are ignored, camelCase timestamp keys are accepted and
        timestamps may be datetimes or date strings.

        Raises:
            DateParsingError: If a timestamp string cannot be parsed
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value

        values["subject"] = values.get("subject") or ""
        for name in ("created_at", "updated_at"):
            values[name] = parse_timestamp(values.get(name))
        return cls(**values)


@dataclass(frozen=True)
class MailDraft:
    """Partially filled mail, as seen while a user is composing it."""
    subject: Optional[str] = None
    description: Optional[str] = None
    recipient: Optional[str] = None
    department: Optional[str] = None
    priority: Optional[str] = None


@dataclass
class DuplicateResult:
    """Best corpus match for a candidate mail."""
    is_duplicate: bool
    similarity: float
    matched_mail: Optional[MailRecord] = None
    matched_fields: List[str] = field(default_factory=list)

    @property
    def similarity_label(self) -> Optional[str]:
        """Coarse label for display next to duplicate warnings; None without a duplicate."""
        if not self.is_duplicate:
            return None
        if self.similarity >= 0.9:
            return "Very High"
        if self.similarity >= 0.8:
            return "High"
        return "Medium"


@dataclass
class PriorityResult:
    """Keyword classification outcome."""
    priority: PriorityLevel
    confidence: float
    keywords: List[str]
    reason: str


@dataclass
class AnomalyResult:
    """Delay check of a pending mail against its department baseline."""
    is_anomaly: bool
    days_delayed: int
    average_processing_time: float
    reason: str
    department: Optional[str] = None

    @property
    def delay_ratio(self) -> float:
        if not self.average_processing_time:
            return 0.0
        return self.days_delayed / self.average_processing_time

    @property
    def severity(self) -> Optional[str]:
        """
        Severity band of a detected anomaly.

        Returns:
            "Critical", "High" or "Medium" for anomalies, None otherwise
        """
        if not self.is_anomaly:
            return None
        ratio = self.delay_ratio
        if ratio >= SEVERITY_RATIOS["critical"]:
            return "Critical"
        if ratio >= SEVERITY_RATIOS["high"]:
            return "High"
        return "Medium"


@dataclass
class DescriptionSuggestion:
    """Template description proposed for a subject line."""
    text: str
    confidence: float
    category: str


@dataclass
class ContentSuggestion:
    """Field value mined from the corpus for a mail being composed."""
    type: SuggestionType
    suggestion: str
    confidence: float
    reason: str
    based_on: str


@dataclass
class AnomalyStats:
    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0


@dataclass
class FlaggedMail:
    mail: MailRecord
    result: AnomalyResult


@dataclass
class AnomalyReport:
    """Outcome of scanning a batch of mails for processing delays."""
    anomalies: List[FlaggedMail]
    stats: AnomalyStats
    severity_filter: str = "all"
