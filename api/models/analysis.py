"""
Analysis Data Models

Defines request and response models for the mail intelligence endpoints.
Field names are exposed in camelCase on the wire (``isDuplicate``,
``createdAt``) to match the tracking front-end, while Python code uses
snake_case; both spellings are accepted on input.

Design Considerations:
- Validation of thresholds and payload shapes at the boundary
- Lossless conversion to and from engine value types
- Proper documentation of data requirements
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.mail_intelligence.models import (
    MailDraft,
    MailRecord,
    PriorityLevel,
    SuggestionType,
)
from src.utils.date_utils import parse_timestamp


def reject_negative_averages(value: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
    """Raise ValueError naming every department with a negative baseline."""
    if value is None:
        return value
    negative = [name for name, days in value.items() if days < 0]
    if negative:
        raise ValueError(f"Department averages must be non-negative: {', '.join(negative)}")
    return value


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MailPayload(CamelModel):
    """
    Mail record as exchanged with API clients.

    Only the fields relevant to the requested analysis need to be set.
    """
    subject: str = Field(
        default="",
        description="Mail subject line"
    )
    description: Optional[str] = Field(default=None, description="Mail description or body")
    sender: Optional[str] = Field(default=None, description="Sender name or office")
    recipient: Optional[str] = Field(default=None, description="Recipient name or office")
    department: Optional[str] = Field(default=None, description="Owning department")
    priority: Optional[str] = Field(default=None, description="Priority label")
    status: Optional[str] = Field(default=None, description="Processing status")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_mail_timestamp(cls, value: Any) -> Optional[datetime]:
        """Accept ISO and RFC 2822 strings; unparseable values raise DateParsingError."""
        if isinstance(value, (int, float)):
            return value
        return parse_timestamp(value)

    def to_record(self) -> MailRecord:
        return MailRecord(
            subject=self.subject,
            description=self.description,
            sender=self.sender,
            recipient=self.recipient,
            department=self.department,
            priority=self.priority,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at
        )

    @classmethod
    def from_record(cls, record: MailRecord) -> "MailPayload":
        return cls(
            subject=record.subject,
            description=record.description,
            sender=record.sender,
            recipient=record.recipient,
            department=record.department,
            priority=record.priority,
            status=record.status,
            created_at=record.created_at,
            updated_at=record.updated_at
        )


class MailDraftPayload(CamelModel):
    """Partially composed mail used for content suggestions."""
    subject: Optional[str] = None
    description: Optional[str] = None
    recipient: Optional[str] = None
    department: Optional[str] = None
    priority: Optional[str] = None

    def to_draft(self) -> MailDraft:
        return MailDraft(
            subject=self.subject,
            description=self.description,
            recipient=self.recipient,
            department=self.department,
            priority=self.priority
        )


class DuplicateCheckRequest(CamelModel):
    """Request model for duplicate detection."""
    mail: MailPayload = Field(..., description="Mail being registered")
    existing_mails: List[MailPayload] = Field(
        default_factory=list,
        description="Existing mails to compare against"
    )
    threshold: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Similarity a match must exceed; defaults to the configured threshold"
    )


class DuplicateCheckResponse(CamelModel):
    """Response model for duplicate detection."""
    is_duplicate: bool = Field(..., description="Whether the best match exceeds the threshold")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Similarity of the best match")
    similarity_label: Optional[str] = Field(default=None, description="Very High, High or Medium; null without a duplicate")
    matched_mail: Optional[MailPayload] = Field(default=None, description="Best matching mail")
    matched_fields: List[str] = Field(
        default_factory=list,
        description="Fields of the best match individually above the threshold"
    )


class PriorityRequest(CamelModel):
    """Request model for priority assignment."""
    content: str = Field(..., description="Subject and/or body text to classify")


class PriorityResponse(CamelModel):
    """Response model for priority assignment."""
    priority: PriorityLevel = Field(..., description="Assigned priority level")
    confidence: float = Field(..., ge=0.0, description="Classification confidence")
    keywords: List[str] = Field(default_factory=list, description="Matched urgency keywords")
    reason: str = Field(..., description="Human-readable explanation")


class AnomalyRequest(CamelModel):
    """Request model for delay anomaly detection."""
    mail: MailPayload = Field(..., description="Mail to check")
    department_averages: Optional[Dict[str, float]] = Field(
        default=None,
        description="Average processing days per department; defaults to configured baselines"
    )

    @field_validator("department_averages")
    @classmethod
    def validate_department_averages(cls, value: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        """Reject negative baselines before they reach the engine."""
        return reject_negative_averages(value)


class AnomalyResponse(CamelModel):
    """Response model for delay anomaly detection."""
    is_anomaly: bool
    days_delayed: int = Field(..., ge=0)
    average_processing_time: float = Field(..., ge=0.0)
    department: Optional[str] = None
    reason: str
    severity: Optional[str] = Field(
        default=None,
        description="Critical, High or Medium for anomalies"
    )


class AnomalyScanRequest(CamelModel):
    """Request model for batch anomaly monitoring."""
    mails: List[MailPayload] = Field(default_factory=list, description="Mails to check")
    department_averages: Optional[Dict[str, float]] = Field(
        default=None,
        description="Average processing days per department; defaults to configured baselines"
    )
    severity: Literal["all", "critical", "high", "medium"] = Field(
        default="all",
        description="Minimum severity to keep: all, critical, high or medium"
    )

    @field_validator("department_averages")
    @classmethod
    def validate_department_averages(cls, value: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        """Reject negative baselines before they reach the engine."""
        return reject_negative_averages(value)


class FlaggedMailResponse(CamelModel):
    mail: MailPayload
    anomaly: AnomalyResponse


class AnomalyStatsResponse(CamelModel):
    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0


class AnomalyScanResponse(CamelModel):
    """Response model for batch anomaly monitoring."""
    anomalies: List[FlaggedMailResponse] = Field(default_factory=list)
    stats: AnomalyStatsResponse
    severity_filter: str


class DescriptionSuggestionRequest(CamelModel):
    """Request model for description suggestions."""
    subject: str = Field(..., description="Subject line being composed")


class DescriptionSuggestionResponse(CamelModel):
    text: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    category: str


class ContentSuggestionRequest(CamelModel):
    """Request model for content suggestions."""
    current_mail: MailDraftPayload = Field(..., description="Draft being composed")
    existing_mails: List[MailPayload] = Field(
        default_factory=list,
        description="Existing mails to mine for patterns"
    )


class ContentSuggestionResponse(CamelModel):
    type: SuggestionType
    suggestion: str
    confidence: float = Field(..., ge=0.0)
    reason: str
    based_on: str


class DepartmentBaselinesResponse(CamelModel):
    """Configured department processing baselines."""
    averages: Dict[str, float] = Field(..., description="Average processing days per department")
    default_processing_days: float = Field(..., description="Baseline for unlisted departments")
