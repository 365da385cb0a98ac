from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ScoreService(Protocol):
    """What the engine needs from a scoring collaborator."""

    @property
    def score(self) -> Optional[int]:
        ...

    def increment_score(self) -> None:
        ...


class ScoreKeeper:
    """In-memory score for a single session.

    ``score`` stays ``None`` until the first food is eaten, so a front end can
    tell "nothing scored yet" apart from zero.
    """

    def __init__(self) -> None:
        self._score: Optional[int] = None

    @property
    def score(self) -> Optional[int]:
        return self._score

    def increment_score(self) -> None:
        self._score = (self._score or 0) + 1
        logger.debug("Score is now %d", self._score)
