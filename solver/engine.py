"""Road to victory search.

Given the standings so far and every participant's picks for the series
still to be played, find sequences of results under which a target
participant finishes alone at the top.

The search is a depth-first walk over the undecided series in a fixed
order. At each series it tries every winner somebody picked and every
series length, scores the hypothesis for everyone, and drops the branch
when the target could not catch the current leader even by getting every
remaining series exactly right. The walk stops after max_paths winning
paths (or max_nodes visited nodes), so an empty answer is only a proof of
elimination when the up-front ceiling check fired.
"""

from dataclasses import dataclass, field
from typing import Callable

import config
from models.pool import Outcome, Participant, Path, Series
from models.round import classify_round, score_of
from solver.bounds import is_eliminated, suffix_ceilings
from solver.candidates import build_series, series_lengths
from solver.leadership import is_sole_leader
from solver.scorer import series_points

LeaderPredicate = Callable[[dict[str, int], str], bool]


class SolverError(ValueError):
    """The question cannot be asked with these inputs."""


@dataclass
class SearchEvent:
    kind: str  # visit, prune, leaf, found, eliminated, truncated
    depth: int
    series_id: str | None
    path: Path
    scores: dict[str, int]


@dataclass
class SearchResult:
    paths: list[Path] = field(default_factory=list)
    eliminated: bool = False  # proven: no path exists
    truncated: bool = False   # stopped early on max_paths or max_nodes
    nodes_visited: int = 0
    nodes_pruned: int = 0
    ceilings: dict[str, int] = field(default_factory=dict)

    @property
    def can_win(self) -> bool:
        return bool(self.paths)


def solve(target_id: str,
          participants: list[Participant],
          remaining_series_ids: list[str],
          current_scores: dict[str, int],
          is_leader: LeaderPredicate = is_sole_leader,
          max_paths: int = config.DEFAULT_MAX_PATHS,
          max_nodes: int | None = config.DEFAULT_MAX_NODES,
          on_event: Callable[[SearchEvent], None] | None = None) -> SearchResult:
    """Search for results that leave the target as the leader.

    Args:
        target_id: Participant to find a road to victory for
        participants: Everyone in the pool with their picks
        remaining_series_ids: Undecided series, in the order paths should list them
        current_scores: {participant_id: points} from the decided series
        is_leader: Predicate on a final score snapshot; defaults to sole leader
        max_paths: Stop after this many winning paths
        max_nodes: Stop after visiting this many search nodes (None = no limit)
        on_event: Optional callback invoked for every node visited or pruned

    Returns:
        SearchResult with the winning paths found and how the search ended
    """
    target = next((p for p in participants if p.id == target_id), None)
    if target is None:
        raise SolverError(f"Unknown participant: {target_id}")
    if max_paths < 1:
        raise SolverError(f"max_paths must be at least 1, got {max_paths}")
    if max_nodes is not None and max_nodes < 1:
        raise SolverError(f"max_nodes must be at least 1, got {max_nodes}")

    scores = dict(current_scores)
    for p in participants:
        scores.setdefault(p.id, 0)

    series = build_series(list(remaining_series_ids), participants, prefer=target)
    suffix = suffix_ceilings(participants, series)

    search = _Search(target, participants, series, suffix, is_leader,
                     max_paths, max_nodes, on_event)
    search.result.ceilings = {pid: s[0] for pid, s in suffix.items()}

    if is_eliminated(target_id, scores, search.result.ceilings):
        search.result.eliminated = True
        search.emit("eliminated", 0, None, (), scores)
        return search.result

    search.explore(0, scores, ())
    return search.result


def find_road_to_victory(target_id: str,
                         participants: list[Participant],
                         remaining_series_ids: list[str],
                         current_scores: dict[str, int],
                         is_leader: LeaderPredicate = is_sole_leader,
                         max_paths: int = config.DEFAULT_MAX_PATHS,
                         max_nodes: int | None = config.DEFAULT_MAX_NODES,
                         on_event: Callable[[SearchEvent], None] | None = None) -> list[Path]:
    """Winning paths for the target; empty if none were found."""
    return solve(target_id, participants, remaining_series_ids, current_scores,
                 is_leader, max_paths, max_nodes, on_event).paths


def outcome_deltas(outcome: Outcome, participants: list[Participant]) -> dict[str, int]:
    """Points each participant earns if a series ends as hypothesized."""
    round_ = classify_round(outcome.series_id)
    if round_ is None or outcome.is_wildcard:
        return {p.id: 0 for p in participants}
    rule = score_of(round_)
    return {
        p.id: series_points(p.pick_for(outcome.series_id), outcome.winner, outcome.games, rule)
        for p in participants
    }


def replay_path(path: Path, participants: list[Participant],
                current_scores: dict[str, int]) -> dict[str, int]:
    """Final standings if every outcome on a path comes true."""
    scores = dict(current_scores)
    for p in participants:
        scores.setdefault(p.id, 0)
    for outcome in path:
        for pid, delta in outcome_deltas(outcome, participants).items():
            scores[pid] += delta
    return scores


class _Search:
    """State shared by one depth-first walk. Score maps are never shared between branches."""

    def __init__(self, target: Participant, participants: list[Participant],
                 series: list[Series], suffix: dict[str, list[int]],
                 is_leader: LeaderPredicate, max_paths: int, max_nodes: int | None,
                 on_event):
        self.target = target
        self.participants = participants
        self.series = series
        self.suffix = suffix
        self.is_leader = is_leader
        self.max_paths = max_paths
        self.max_nodes = max_nodes
        self.on_event = on_event
        self.result = SearchResult()
        self.stopped = False

    def emit(self, kind, depth, series_id, path, scores):
        if self.on_event is not None:
            self.on_event(SearchEvent(kind, depth, series_id, path, scores))

    def explore(self, depth: int, scores: dict[str, int], path: Path):
        if self.stopped:
            return
        if self.max_nodes is not None and self.result.nodes_visited >= self.max_nodes:
            self._stop(depth, path, scores)
            return

        self.result.nodes_visited += 1
        series_id = self.series[depth].id if depth < len(self.series) else None
        self.emit("visit", depth, series_id, path, scores)

        if depth == len(self.series):
            self.emit("leaf", depth, None, path, scores)
            if self.is_leader(scores, self.target.id):
                self.result.paths.append(path)
                self.emit("found", depth, None, path, scores)
                if len(self.result.paths) >= self.max_paths:
                    self._stop(depth, path, scores)
            return

        series = self.series[depth]
        if series.is_degenerate:
            self.explore(depth + 1, scores, path + (Outcome(series.id, None, None),))
            return

        rule = score_of(series.round)
        target_pick = self.target.pick_for(series.id)

        for winner in series.candidates:
            for games in series_lengths(target_pick):
                if self.stopped:
                    return

                outcome = Outcome(series.id, winner, games)
                next_scores = dict(scores)
                for p in self.participants:
                    next_scores[p.id] += series_points(p.pick_for(series.id), winner, games, rule)

                if self._hopeless(depth + 1, next_scores):
                    self.result.nodes_pruned += 1
                    self.emit("prune", depth, series.id, path + (outcome,), next_scores)
                    continue

                self.explore(depth + 1, next_scores, path + (outcome,))

    def _hopeless(self, depth: int, scores: dict[str, int]) -> bool:
        """The target cannot reach a rival's current total even with a perfect finish."""
        tid = self.target.id
        best = scores[tid] + self.suffix[tid][depth]
        return any(pid != tid and best < v for pid, v in scores.items())

    def _stop(self, depth, path, scores):
        self.stopped = True
        self.result.truncated = True
        self.emit("truncated", depth, None, path, scores)
