"""Pool data model: picks, participants, official results and outcomes."""

from dataclasses import dataclass, field

import config
from models.round import Round


def normalize_team(name) -> str | None:
    """Turn a raw team value into a team name, or None if there is no team.

    The results document marks undecided series with a "TBD" placeholder;
    that (and blanks) become None so nothing downstream mistakes it for a team.
    """
    if name is None:
        return None
    name = str(name).strip()
    if not name or name.upper() == config.UNDECIDED_WINNER:
        return None
    return name


def same_team(a: str | None, b: str | None) -> bool:
    """Case-insensitive team comparison. None never matches anything."""
    if a is None or b is None:
        return False
    return a.casefold() == b.casefold()


@dataclass(frozen=True)
class Pick:
    winner: str | None
    games: int | None = None

    @property
    def is_made(self) -> bool:
        return self.winner is not None


@dataclass
class Participant:
    id: str
    picks: dict[str, Pick] = field(default_factory=dict)

    def pick_for(self, series_id: str) -> Pick | None:
        """Get the participant's pick for a series, None if they did not make one."""
        pick = self.picks.get(series_id)
        if pick is None or not pick.is_made:
            return None
        return pick

    def __str__(self):
        return self.id


@dataclass(frozen=True)
class SeriesResult:
    """Official result of a series. winner=None means not decided yet."""
    winner: str | None
    games: int | None = None

    @property
    def is_decided(self) -> bool:
        return self.winner is not None


@dataclass(frozen=True)
class Series:
    """An undecided series as seen by one solve."""
    id: str
    round: Round | None
    candidates: tuple[str, ...] = ()

    @property
    def is_degenerate(self) -> bool:
        """True when the result of this series cannot change anyone's score."""
        return self.round is None or not self.candidates


@dataclass(frozen=True)
class Outcome:
    """A hypothesized result of one undecided series.

    winner and games are both None for a "don't care" outcome: the series
    cannot affect any score, so any result will do.
    """
    series_id: str
    winner: str | None
    games: int | None

    @property
    def is_wildcard(self) -> bool:
        return self.winner is None

    def __str__(self):
        if self.is_wildcard:
            return f"{self.series_id}: any result"
        return f"{self.series_id}: {self.winner} in {self.games}"


Path = tuple[Outcome, ...]
