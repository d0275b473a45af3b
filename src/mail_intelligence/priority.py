import logging
from typing import Dict, List, Optional, Sequence, Tuple

from src.config.intelligence_config import INTELLIGENCE_CONFIG, PRIORITY_KEYWORDS
from src.mail_intelligence.models import PriorityLevel, PriorityResult

logger = logging.getLogger(__name__)

KeywordTable = Dict[str, Sequence[Tuple[str, float]]]


class PriorityClassifier:
    """
    Assigns a priority label from weighted urgency keywords.

    Each tier (critical, high, medium) accumulates the weights of its
    phrases found in the text. Every phrase is checked once by substring
    containment, so repeated occurrences do not add up.
    """

    TIERS = ("critical", "high", "medium")

    def __init__(self, keywords: Optional[KeywordTable] = None):
        config = INTELLIGENCE_CONFIG["priority_assignment"]
        self.keywords: KeywordTable = PRIORITY_KEYWORDS if keywords is None else keywords
        self.tier_thresholds: Dict[str, float] = config["tier_thresholds"]
        self.low_confidence: float = config["low_confidence"]
        self.max_confidence: float = config["max_confidence"]

    def _score(self, text: str) -> Tuple[Dict[str, float], List[str]]:
        """Per-tier scores and matched phrases, critical tier first."""
        scores = {tier: 0.0 for tier in self.TIERS}
        found: List[str] = []
        for tier in self.TIERS:
            for word, weight in self.keywords.get(tier, ()):
                if word in text:
                    found.append(word)
                    scores[tier] += weight
        return scores, found

    def classify(self, content: Optional[str]) -> PriorityResult:
        """
        Classify free text into Critical, High, Medium or Low.

        Args:
            content: Subject and/or body text

        Returns:
            PriorityResult with the matched keywords in table order
        """
        text = (content or "").lower()
        scores, found = self._score(text)

        if scores["critical"] >= self.tier_thresholds["critical"]:
            priority = PriorityLevel.CRITICAL
            confidence = min(scores["critical"], self.max_confidence)
            reason = f"Critical priority assigned due to urgent keywords: {', '.join(found)}"
        elif scores["high"] >= self.tier_thresholds["high"]:
            priority = PriorityLevel.HIGH
            confidence = min(scores["high"], self.max_confidence)
            reason = f"High priority assigned due to important keywords: {', '.join(found)}"
        elif scores["medium"] >= self.tier_thresholds["medium"]:
            priority = PriorityLevel.MEDIUM
            confidence = min(scores["medium"], self.max_confidence)
            reason = "Medium priority assigned based on content analysis"
        else:
            priority = PriorityLevel.LOW
            confidence = self.low_confidence
            reason = "Low priority - no urgent indicators found"

        logger.debug(f"Priority {priority.value} (confidence {confidence:.2f}), keywords: {found}")
        return PriorityResult(
            priority=priority,
            confidence=confidence,
            keywords=found,
            reason=reason
        )
