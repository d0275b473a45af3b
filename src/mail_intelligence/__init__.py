"""
Mail intelligence package initialization.
"""

from .models import (
    AnomalyReport,
    AnomalyResult,
    AnomalyStats,
    ContentSuggestion,
    DescriptionSuggestion,
    DuplicateResult,
    FlaggedMail,
    MailDraft,
    MailRecord,
    PriorityLevel,
    PriorityResult,
    SuggestionType,
)
from .engine import MailIntelligenceEngine, mail_intelligence, get_mail_intelligence
from .providers import (
    BaselineProvider,
    CorpusProvider,
    InMemoryCorpusProvider,
    StaticBaselineProvider,
)

__all__ = [
    'AnomalyReport',
    'AnomalyResult',
    'AnomalyStats',
    'ContentSuggestion',
    'DescriptionSuggestion',
    'DuplicateResult',
    'FlaggedMail',
    'MailDraft',
    'MailRecord',
    'PriorityLevel',
    'PriorityResult',
    'SuggestionType',
    'MailIntelligenceEngine',
    'mail_intelligence',
    'get_mail_intelligence',
    'BaselineProvider',
    'CorpusProvider',
    'InMemoryCorpusProvider',
    'StaticBaselineProvider',
]
