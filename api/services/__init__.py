# api/services/__init__.py
"""
API Services Package

Keeps analysis orchestration separate from route handlers.
"""

from api.services.analysis_service import AnalysisService, get_analysis_service

__all__ = ["AnalysisService", "get_analysis_service"]
