"""Pretty-print scoreboard and road-to-victory output."""

from tabulate import tabulate

from models.pool import Participant, Path
from models.round import Round
from solver.engine import SearchResult, replay_path
from solver.scorer import ScoreboardEntry


def print_scoreboard(entries: list[ScoreboardEntry]):
    """Print the ranked scoreboard with a per-round breakdown."""
    print("\n" + "=" * 60)
    print("           SCOREBOARD")
    print("=" * 60 + "\n")

    headers = ["#", "Participant", "Score", "Potential"] + [str(r) for r in Round]
    rows = [
        [e.rank, e.participant_id, e.score, e.potential_points] + [e.by_round[r] for r in Round]
        for e in entries
    ]
    print(tabulate(rows, headers=headers, tablefmt="simple"))


def print_paths(target_id: str, result: SearchResult, participants: list[Participant],
                current_scores: dict[str, int]):
    """Print each winning path and the standings it leads to."""
    print("\n" + "=" * 60)
    print(f"           ROAD TO VICTORY: {target_id}")
    print("=" * 60)

    if result.eliminated:
        print(f"\n  {target_id} is mathematically eliminated.")
        return
    if not result.paths:
        if result.truncated:
            print(f"\n  No path found within the search budget ({result.nodes_visited} nodes).")
        else:
            print(f"\n  {target_id} cannot finish alone in first place.")
        return

    for i, path in enumerate(result.paths, 1):
        print(f"\n--- Path {i} ---\n")
        print(tabulate(_path_rows(path), headers=["Series", "Winner", "Games"], tablefmt="simple"))

        final = replay_path(path, participants, current_scores)
        standings = sorted(final.items(), key=lambda kv: (-kv[1], kv[0]))
        print("\n  Final standings: " + ", ".join(f"{pid} {pts}" for pid, pts in standings[:3]))

    more = " (stopped early, more may exist)" if result.truncated else ""
    print(f"\n  {len(result.paths)} path(s) found, {result.nodes_visited} nodes visited, "
          f"{result.nodes_pruned} pruned{more}")


def print_contenders(results: dict[str, SearchResult]):
    """Print a one-line verdict per participant."""
    print("\n=== WHO CAN STILL WIN ===\n")

    rows = []
    for pid, result in results.items():
        if result.eliminated:
            verdict = "eliminated"
        elif result.paths:
            verdict = "alive"
        elif result.truncated:
            verdict = "unknown (budget)"
        else:
            verdict = "no path"
        rows.append([pid, verdict, len(result.paths), result.ceilings.get(pid, 0), result.nodes_visited])

    headers = ["Participant", "Verdict", "Paths", "Max gain", "Nodes"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))


def _path_rows(path: Path) -> list[list]:
    rows = []
    for outcome in path:
        if outcome.is_wildcard:
            rows.append([outcome.series_id, "(any)", "-"])
        else:
            rows.append([outcome.series_id, outcome.winner, outcome.games])
    return rows
