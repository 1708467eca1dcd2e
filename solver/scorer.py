"""Pool scoring.

Scores a participant's picks against official results using the round
scoring table. The same per-series rule is used by the live scoreboard
and by the road-to-victory search, so hypothetical paths score exactly
the way real results will.
"""

from dataclasses import dataclass

from models.pool import Participant, Pick, SeriesResult, same_team
from models.round import Round, ScoringRule, classify_round, score_of


def series_points(pick: Pick | None, winner: str | None, games: int | None,
                  rule: ScoringRule) -> int:
    """Points a single pick earns for one series result.

    Base points for the correct winner; bonus points for the correct
    length, but only when the winner is also correct.
    """
    if pick is None or not same_team(pick.winner, winner):
        return 0
    points = rule.base_points
    if games is not None and pick.games == games:
        points += rule.bonus_points
    return points


def calculate_score(picks: dict[str, Pick], results: dict[str, SeriesResult]) -> int:
    """Score a set of picks against official results.

    Args:
        picks: {series_id: Pick}
        results: {series_id: SeriesResult}, undecided series are ignored

    Returns:
        Total score
    """
    return sum(score_by_round(picks, results).values())


def score_by_round(picks: dict[str, Pick], results: dict[str, SeriesResult]) -> dict[Round, int]:
    """Score a set of picks broken down by round.

    Returns:
        {round: points_earned}
    """
    by_round = {r: 0 for r in Round}

    for series_id, result in results.items():
        round_ = classify_round(series_id)
        if round_ is None or not result.is_decided:
            continue
        by_round[round_] += series_points(picks.get(series_id), result.winner, result.games,
                                          score_of(round_))

    return by_round


def eliminated_teams(picks: dict[str, Pick], results: dict[str, SeriesResult]) -> set[str]:
    """Teams known to be out, as far as this participant's picks can tell.

    Without the bracket structure the loser of a series is only known when
    it was the team the participant picked.
    """
    out = set()
    for series_id, result in results.items():
        pick = picks.get(series_id)
        if not result.is_decided or pick is None or pick.winner is None:
            continue
        if not same_team(pick.winner, result.winner):
            out.add(pick.winner.casefold())
    return out


def potential_points(picks: dict[str, Pick], results: dict[str, SeriesResult]) -> int:
    """Maximum score a participant can still reach.

    Current score plus full points for every undecided series whose picked
    winner has not already been knocked out.
    """
    total = calculate_score(picks, results)
    out = eliminated_teams(picks, results)

    for series_id, pick in picks.items():
        result = results.get(series_id)
        if result is not None and result.is_decided:
            continue
        round_ = classify_round(series_id)
        if round_ is None or pick.winner is None:
            continue
        if pick.winner.casefold() in out:
            continue
        total += score_of(round_).max_points

    return total


def current_scores(participants: list[Participant],
                   results: dict[str, SeriesResult]) -> dict[str, int]:
    """Score every participant against the decided results."""
    return {p.id: calculate_score(p.picks, results) for p in participants}


@dataclass
class ScoreboardEntry:
    rank: int
    participant_id: str
    score: int
    potential_points: int
    by_round: dict[Round, int]


def build_scoreboard(participants: list[Participant],
                     results: dict[str, SeriesResult]) -> list[ScoreboardEntry]:
    """Rank participants by score, then potential points, then name.

    Participants level on both score and potential points share a rank.
    """
    rows = []
    for p in participants:
        by_round = score_by_round(p.picks, results)
        rows.append((p.id, sum(by_round.values()), potential_points(p.picks, results), by_round))

    rows.sort(key=lambda r: (-r[1], -r[2], r[0]))

    entries = []
    for i, (pid, score, potential, by_round) in enumerate(rows):
        if entries and (entries[-1].score, entries[-1].potential_points) == (score, potential):
            rank = entries[-1].rank
        else:
            rank = i + 1
        entries.append(ScoreboardEntry(rank, pid, score, potential, by_round))

    return entries
