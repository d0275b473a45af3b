"""
Collaborator interfaces feeding the engine.

The engine never fetches data itself. Callers obtain the comparison corpus
and department baselines from whatever backs them (a mail service, a
database, a fixed table) and pass plain values in.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

from src.config.intelligence_config import DEFAULT_DEPARTMENT_AVERAGES
from src.mail_intelligence.models import MailRecord

logger = logging.getLogger(__name__)


class CorpusProvider(Protocol):
    """Anything able to list existing mails."""

    def get_mails(self) -> List[MailRecord]:
        ...


class BaselineProvider(Protocol):
    """Anything able to report average processing days per department."""

    def get_department_averages(self) -> Dict[str, float]:
        ...


class InMemoryCorpusProvider:
    """Serves a fixed list of mails."""

    def __init__(self, mails: Optional[Iterable[MailRecord]] = None):
        self._mails = list(mails or [])

    def get_mails(self) -> List[MailRecord]:
        return list(self._mails)


class StaticBaselineProvider:
    """
    Serves a fixed department baseline table.

    Defaults to the built-in table until averages are computed from
    historical processing times.
    """

    def __init__(self, averages: Optional[Mapping[str, float]] = None):
        self._averages = dict(DEFAULT_DEPARTMENT_AVERAGES if averages is None else averages)
        logger.debug(f"Baseline provider loaded {len(self._averages)} departments")

    def get_department_averages(self) -> Dict[str, float]:
        return dict(self._averages)
