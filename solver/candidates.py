"""Outcome candidates for undecided series.

The bracket's surviving teams are not modelled separately: the winners the
participants picked are the only results that can move the standings, so
they are the only winners worth exploring.
"""

import config
from models.pool import Participant, Pick, Series, SeriesResult
from models.round import classify_round


def candidate_winners(series_id: str, participants: list[Participant],
                      prefer: Participant | None = None) -> tuple[str, ...]:
    """Distinct winners anyone picked for a series.

    Names are de-duplicated case-insensitively, keeping the first spelling
    seen. Order follows the participants list, except that the pick of
    `prefer` (if any) comes first.
    """
    ordered = list(participants)
    if prefer is not None:
        ordered = [prefer] + [p for p in ordered if p.id != prefer.id]

    seen = {}
    for p in ordered:
        pick = p.pick_for(series_id)
        if pick is None:
            continue
        seen.setdefault(pick.winner.casefold(), pick.winner)
    return tuple(seen.values())


def series_lengths(prefer: Pick | None = None) -> tuple[int, ...]:
    """Series lengths to try, the preferred pick's length first."""
    if prefer is None or prefer.games not in config.SERIES_LENGTHS:
        return config.SERIES_LENGTHS
    return (prefer.games,) + tuple(g for g in config.SERIES_LENGTHS if g != prefer.games)


def build_series(series_ids: list[str], participants: list[Participant],
                 prefer: Participant | None = None) -> list[Series]:
    """Classify and collect candidates for each remaining series, in order."""
    return [
        Series(sid, classify_round(sid), candidate_winners(sid, participants, prefer))
        for sid in series_ids
    ]


def undecided_series(participants: list[Participant],
                     results: dict[str, SeriesResult]) -> list[str]:
    """Series ids with no decided result, ordered by round then id.

    Ids that do not classify to a round are left out; see
    unclassifiable_series().
    """
    ids = _known_series(participants, results)
    remaining = []
    for sid in ids:
        round_ = classify_round(sid)
        result = results.get(sid)
        if round_ is None or (result is not None and result.is_decided):
            continue
        remaining.append((round_.number, sid))
    return [sid for _, sid in sorted(remaining)]


def unclassifiable_series(participants: list[Participant],
                          results: dict[str, SeriesResult]) -> list[str]:
    """Series ids in the picks or results that do not belong to any round."""
    return sorted(sid for sid in _known_series(participants, results)
                  if classify_round(sid) is None)


def _known_series(participants, results) -> set[str]:
    ids = set(results)
    for p in participants:
        ids.update(p.picks)
    return ids
