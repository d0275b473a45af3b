"""
Suggestion mining for mails being composed.

Two sources feed the suggestions:
- Fixed formal-register description templates, keyed by trigger words in
  the subject line.
- Patterns in existing mails: common subject openings and priorities per
  department, and recipients of mails with similar subjects.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.config.intelligence_config import (
    DESCRIPTION_TEMPLATES,
    GENERIC_CATEGORY,
    GENERIC_DESCRIPTIONS,
    INTELLIGENCE_CONFIG,
)
from src.mail_intelligence.models import (
    ContentSuggestion,
    DescriptionSuggestion,
    MailDraft,
    MailRecord,
    SuggestionType,
)
from src.mail_intelligence.similarity import string_similarity

logger = logging.getLogger(__name__)


def most_common_label(labels: Iterable[Optional[str]]) -> Optional[Tuple[str, int]]:
    """
    Most frequent non-empty label and its count.

    Ties go to the label seen last among those sharing the top count.

    Returns:
        (label, count), or None when no label is present
    """
    counts = Counter(label for label in labels if label)
    best: Optional[Tuple[str, int]] = None
    for label, count in counts.items():
        if best is None or count >= best[1]:
            best = (label, count)
    return best


class DescriptionSuggester:
    """Proposes description text from subject keywords."""

    def __init__(self, template_groups: Optional[Sequence[Dict]] = None):
        config = INTELLIGENCE_CONFIG["description_suggestions"]
        self.template_groups = DESCRIPTION_TEMPLATES if template_groups is None else template_groups
        self.max_results: int = config["max_results"]
        self.index_discount: float = config["index_discount"]

    def suggest(self, subject: Optional[str]) -> List[DescriptionSuggestion]:
        """
        Rank template descriptions for a subject line.

        Confidence is the share of a group's trigger words found in the
        subject, discounted by 10% per template position within the group.

        Args:
            subject: Subject line being composed

        Returns:
            Up to three suggestions, highest confidence first
        """
        subject_lower = (subject or "").lower()
        suggestions: List[DescriptionSuggestion] = []

        for group in self.template_groups:
            keywords = group["keywords"]
            match_count = sum(1 for keyword in keywords if keyword in subject_lower)
            if match_count == 0:
                continue

            confidence = min(match_count / len(keywords), 1.0)
            for index, text in enumerate(group["templates"]):
                suggestions.append(DescriptionSuggestion(
                    text=text,
                    confidence=confidence * (1 - index * self.index_discount),
                    category=group["category"]
                ))

        if not suggestions:
            suggestions = [
                DescriptionSuggestion(text=text, confidence=confidence, category=GENERIC_CATEGORY)
                for text, confidence in GENERIC_DESCRIPTIONS
            ]

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        return suggestions[:self.max_results]


class ContentSuggester:
    """
    Fills in missing fields of a draft from patterns in existing mails.

    Each analysis contributes at most one suggestion, and only for fields
    the draft leaves empty.
    """

    def __init__(self, description_suggester: Optional[DescriptionSuggester] = None):
        config = INTELLIGENCE_CONFIG["content_suggestions"]
        self.description_suggester = description_suggester or DescriptionSuggester()
        self.max_results: int = config["max_results"]
        self.pattern_words: int = config["pattern_words"]
        self.recipient_similarity_threshold: float = config["recipient_similarity_threshold"]

    def _subject_pattern(self, subject: str) -> str:
        return " ".join(subject.lower().split(" ")[:self.pattern_words])

    def _suggest_subject(self, department: str, dept_mails: List[MailRecord]) -> Optional[ContentSuggestion]:
        subjects = [mail.subject for mail in dept_mails if mail.subject]
        if not subjects:
            return None

        # Counter keeps first-seen order, so ties go to the earliest pattern
        pattern, count = Counter(self._subject_pattern(s) for s in subjects).most_common(1)[0]
        return ContentSuggestion(
            type=SuggestionType.SUBJECT,
            suggestion=pattern,
            confidence=count / len(subjects),
            reason=f"Common subject pattern for {department}",
            based_on=f"{count} similar mails"
        )

    def _suggest_priority(self, department: str, dept_mails: List[MailRecord]) -> Optional[ContentSuggestion]:
        common = most_common_label(mail.priority for mail in dept_mails)
        if common is None:
            return None

        priority, count = common
        return ContentSuggestion(
            type=SuggestionType.PRIORITY,
            suggestion=priority,
            confidence=count / len(dept_mails),
            reason=f"Most common priority for {department}",
            based_on=f"{count} out of {len(dept_mails)} mails"
        )

    def _suggest_recipient(self, subject: str, corpus: Sequence[MailRecord]) -> Optional[ContentSuggestion]:
        subject_lower = subject.lower()
        similar_mails = [
            mail for mail in corpus
            if mail.subject and string_similarity(
                subject_lower, mail.subject.lower()
            ) > self.recipient_similarity_threshold
        ]
        if not similar_mails:
            return None

        common = most_common_label(mail.recipient for mail in similar_mails)
        if common is None:
            return None

        recipient, count = common
        return ContentSuggestion(
            type=SuggestionType.RECIPIENT,
            suggestion=recipient,
            confidence=count / len(similar_mails),
            reason="Common recipient for similar subjects",
            based_on=f"{count} similar mails"
        )

    def _suggest_description(self, subject: str) -> Optional[ContentSuggestion]:
        descriptions = self.description_suggester.suggest(subject)
        if not descriptions:
            return None

        top = descriptions[0]
        return ContentSuggestion(
            type=SuggestionType.DESCRIPTION,
            suggestion=top.text,
            confidence=top.confidence,
            reason="Suggested description based on subject content",
            based_on="Subject analysis"
        )

    def suggest(self, current: MailDraft, corpus: Sequence[MailRecord]) -> List[ContentSuggestion]:
        """
        Suggest values for the empty fields of a draft.

        Args:
            current: Draft being composed
            corpus: Existing mails; read only

        Returns:
            Up to three suggestions, highest confidence first
        """
        candidates: List[Optional[ContentSuggestion]] = []

        if current.department:
            dept_mails = [mail for mail in corpus if mail.department == current.department]
            if dept_mails:
                if not current.subject:
                    candidates.append(self._suggest_subject(current.department, dept_mails))
                if not current.priority:
                    candidates.append(self._suggest_priority(current.department, dept_mails))

        if current.subject and not current.recipient:
            candidates.append(self._suggest_recipient(current.subject, corpus))

        if current.subject and not current.description:
            candidates.append(self._suggest_description(current.subject))

        suggestions = [c for c in candidates if c is not None]
        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        logger.debug(f"Content suggestions: {[s.type.value for s in suggestions]}")
        return suggestions[:self.max_results]
