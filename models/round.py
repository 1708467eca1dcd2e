"""Playoff rounds and series id classification.

Series ids follow the bracket generator's naming:
- First round:           E1v8, E2v7, E3v6, E4v5 (and W...)
- Conference semifinals: ESF1, ESF2 or E1v4, E2v3
- Conference finals:     ECF or E1v2
- Finals:                Finals or EWF
"""

import re
from dataclasses import dataclass
from enum import Enum

import config


class Round(str, Enum):
    FIRST_ROUND = "FIRST_ROUND"
    CONFERENCE_SEMIFINALS = "CONFERENCE_SEMIFINALS"
    CONFERENCE_FINALS = "CONFERENCE_FINALS"
    FINALS = "FINALS"

    @property
    def number(self) -> int:
        """1-based position of the round in the tournament."""
        return _ROUND_ORDER.index(self) + 1

    def __str__(self):
        return self.value.replace("_", " ").title()


_ROUND_ORDER = list(Round)


@dataclass(frozen=True)
class ScoringRule:
    base_points: int   # correct winner
    bonus_points: int  # correct series length (winner must also be correct)

    @property
    def max_points(self) -> int:
        return self.base_points + self.bonus_points


SCORING_TABLE: dict[Round, ScoringRule] = {
    Round(name): ScoringRule(base, bonus)
    for name, (base, bonus) in config.ROUND_POINTS.items()
}

_PATTERNS = [(Round(name), re.compile(pattern)) for name, pattern in config.SERIES_ID_PATTERNS]


def classify_round(series_id: str) -> Round | None:
    """Get the round a series belongs to, or None if the id is not recognised."""
    if not isinstance(series_id, str):
        return None
    for round_, pattern in _PATTERNS:
        if pattern.fullmatch(series_id):
            return round_
    return None


def score_of(round_: Round) -> ScoringRule:
    """Get the (base, bonus) points for a round."""
    return SCORING_TABLE[round_]
