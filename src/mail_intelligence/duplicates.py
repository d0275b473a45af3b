import logging
from typing import List, Optional, Sequence, Tuple

from src.config.intelligence_config import INTELLIGENCE_CONFIG
from src.mail_intelligence.models import DuplicateResult, MailRecord
from src.mail_intelligence.similarity import field_similarity

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """
    Finds the existing mail most similar to a candidate.

    Subject, description and sender are compared pairwise with a normalized
    edit-distance score. Fields missing on either side are left out of the
    average instead of counting as zero.
    """

    def __init__(self, compared_fields: Optional[Sequence[str]] = None):
        config = INTELLIGENCE_CONFIG["duplicate_detection"]
        self.default_threshold: float = config["threshold"]
        self.compared_fields: Tuple[str, ...] = tuple(
            config["compared_fields"] if compared_fields is None else compared_fields
        )

    def _field_scores(self, candidate: MailRecord, existing: MailRecord) -> List[Tuple[str, float]]:
        """Similarity per field, for fields populated on both records."""
        scores = []
        for name in self.compared_fields:
            score = field_similarity(getattr(candidate, name), getattr(existing, name))
            if score is not None:
                scores.append((name, score))
        return scores

    def detect(self,
               candidate: MailRecord,
               corpus: Sequence[MailRecord],
               threshold: Optional[float] = None) -> DuplicateResult:
        """
        Compare a candidate mail against existing mails.

        Args:
            candidate: Mail being registered
            corpus: Existing mails; read only
            threshold: Similarity a match must strictly exceed

        Returns:
            DuplicateResult for the best-scoring record. Records sharing no
            populated field with the candidate score 0 and never match.
        """
        if threshold is None:
            threshold = self.default_threshold

        highest_similarity = 0.0
        best_match: Optional[MailRecord] = None
        matched_fields: List[str] = []

        for existing in corpus:
            scores = self._field_scores(candidate, existing)
            if not scores:
                continue

            avg_similarity = sum(score for _, score in scores) / len(scores)
            if avg_similarity > highest_similarity:
                highest_similarity = avg_similarity
                best_match = existing
                matched_fields = [name for name, score in scores if score > threshold]

        result = DuplicateResult(
            is_duplicate=highest_similarity > threshold,
            similarity=highest_similarity,
            matched_mail=best_match,
            matched_fields=matched_fields
        )
        logger.debug(
            f"Duplicate check against {len(corpus)} mails: "
            f"similarity={highest_similarity:.3f}, duplicate={result.is_duplicate}"
        )
        return result
