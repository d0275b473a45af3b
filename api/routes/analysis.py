"""
Analysis API Routes

Exposes the mail intelligence operations as JSON endpoints. Every endpoint
is a pure computation over the request body; nothing is stored.

Design Considerations:
- Consistent route organization
- Clear endpoint documentation
- Invalid analysis parameters reported as client errors
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.models.analysis import (
    AnomalyRequest,
    AnomalyResponse,
    AnomalyScanRequest,
    AnomalyScanResponse,
    ContentSuggestionRequest,
    ContentSuggestionResponse,
    DepartmentBaselinesResponse,
    DescriptionSuggestionRequest,
    DescriptionSuggestionResponse,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    PriorityRequest,
    PriorityResponse,
)
from api.services.analysis_service import AnalysisService, get_analysis_service

# Configure logging
logger = logging.getLogger(__name__)

# Create router with prefix
router = APIRouter(prefix="/analysis", tags=["Analysis"])


@router.post(
    "/duplicates",
    response_model=DuplicateCheckResponse,
    summary="Detect duplicate mail"
)
async def detect_duplicate(
    request: DuplicateCheckRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """
    Compare a new mail against existing mails.

    Subject, description and sender are compared with a normalized edit
    distance; the best match is reported with the fields that matched.
    """
    return analysis_service.check_duplicate(request)


@router.post(
    "/priority",
    response_model=PriorityResponse,
    summary="Assign priority from content"
)
async def assign_priority(
    request: PriorityRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """Classify mail text as Critical, High, Medium or Low."""
    return analysis_service.assign_priority(request.content)


@router.post(
    "/anomaly",
    response_model=AnomalyResponse,
    summary="Detect processing delay"
)
async def detect_anomaly(
    request: AnomalyRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """
    Check whether a pending mail has exceeded its department's usual
    processing time by more than 50%.
    """
    return analysis_service.detect_anomaly(request)


@router.post(
    "/anomalies/scan",
    response_model=AnomalyScanResponse,
    summary="Scan mails for processing delays"
)
async def scan_anomalies(
    request: AnomalyScanRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """
    Check a batch of mails and summarize delays by severity.

    Unknown severity filters are rejected during request validation.

    Returns:
        Flagged mails and counts per severity band
    """
    return analysis_service.scan_anomalies(request)


@router.post(
    "/description-suggestions",
    response_model=List[DescriptionSuggestionResponse],
    summary="Suggest descriptions for a subject"
)
async def suggest_descriptions(
    request: DescriptionSuggestionRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """Up to three formal description templates matching the subject."""
    return analysis_service.suggest_descriptions(request.subject)


@router.post(
    "/content-suggestions",
    response_model=List[ContentSuggestionResponse],
    summary="Suggest values for empty draft fields"
)
async def suggest_content(
    request: ContentSuggestionRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """Up to three field suggestions mined from existing mails."""
    return analysis_service.suggest_content(request)


@router.get(
    "/department-baselines",
    response_model=DepartmentBaselinesResponse,
    summary="Get department processing baselines"
)
async def get_department_baselines(
    analysis_service: AnalysisService = Depends(get_analysis_service)
):
    """Average processing days used when a request carries no baseline table."""
    return analysis_service.get_department_baselines()
