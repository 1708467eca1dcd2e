"""Upper bounds on the points a participant can still earn.

The bounds assume a participant gets every remaining series exactly right.
That is only achievable for one hypothesis per series, so they are loose,
but they are never below the truth, which is all pruning needs.
"""

from models.pool import Participant, Series
from models.round import score_of


def remaining_ceilings(participants: list[Participant], series: list[Series]) -> dict[str, int]:
    """Maximum additional points per participant over all remaining series."""
    return {pid: suffix[0] for pid, suffix in suffix_ceilings(participants, series).items()}


def suffix_ceilings(participants: list[Participant], series: list[Series]) -> dict[str, list[int]]:
    """Per participant, the ceiling over series[depth:] for every depth.

    Each list has len(series) + 1 entries; the last one is 0. A series adds
    to a participant's ceiling only if it can be scored and they picked it.
    """
    out = {}
    for p in participants:
        suffix = [0] * (len(series) + 1)
        for depth in range(len(series) - 1, -1, -1):
            s = series[depth]
            gain = 0
            if s.round is not None and p.pick_for(s.id) is not None:
                gain = score_of(s.round).max_points
            suffix[depth] = suffix[depth + 1] + gain
        out[p.id] = suffix
    return out


def is_eliminated(target_id: str, scores: dict[str, int], ceilings: dict[str, int]) -> bool:
    """True if some rival already has more points than the target can ever reach."""
    best = scores.get(target_id, 0) + ceilings.get(target_id, 0)
    return any(pid != target_id and best < v for pid, v in scores.items())
