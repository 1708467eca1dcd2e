"""Leadership predicates: is the target on top of a score snapshot?

A predicate takes ({participant_id: score}, target_id) and returns a bool.
The search prunes on the assumption that a leader is never behind anyone,
so custom predicates must at least require that.
"""


def is_sole_leader(scores: dict[str, int], target_id: str) -> bool:
    """Target has the top score and nobody else has it. Ties do not count."""
    mine = scores.get(target_id, 0)
    return all(v < mine for pid, v in scores.items() if pid != target_id)


def is_co_leader(scores: dict[str, int], target_id: str) -> bool:
    """Target has the top score, possibly shared."""
    mine = scores.get(target_id, 0)
    return all(v <= mine for v in scores.values())
