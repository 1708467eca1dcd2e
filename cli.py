"""Playoff Prediction Pool - CLI entry point.

Usage:
    python cli.py load-picks --file picks.json|picks.csv
    python cli.py fetch-submissions --index-bin BIN_ID
    python cli.py load-results (--file results.json | --bin BIN_ID)
    python cli.py scoreboard
    python cli.py road --player "Uri Klar" [--max-paths 5] [--max-nodes N] [--allow-ties] [--trace]
    python cli.py contenders [--max-nodes N]
"""

import argparse
import os
import pickle
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config

STATE_FILE = os.path.join(config.DATA_DIR, "state.pkl")


def save_state(state: dict):
    """Save intermediate state to disk."""
    os.makedirs(config.DATA_DIR, exist_ok=True)
    with open(STATE_FILE, "wb") as f:
        pickle.dump(state, f)


def load_state() -> dict:
    """Load intermediate state from disk."""
    if os.path.exists(STATE_FILE):
        with open(STATE_FILE, "rb") as f:
            return pickle.load(f)
    return {}


def _require_pool(state: dict) -> bool:
    if not state.get("participants"):
        print("ERROR: No picks loaded. Run 'python cli.py load-picks' first.")
        return False
    if "results" not in state:
        print("ERROR: No results loaded. Run 'python cli.py load-results' first.")
        return False
    return True


def _solver_inputs(state: dict):
    from solver.candidates import undecided_series, unclassifiable_series
    from solver.scorer import current_scores

    participants = state["participants"]
    results = state["results"]

    skipped = unclassifiable_series(participants, results)
    if skipped:
        print(f"WARNING: Ignoring series with unknown ids: {', '.join(skipped)}")

    return participants, undecided_series(participants, results), current_scores(participants, results)


# --- Commands ---

def cmd_load_picks(args):
    """Load every participant's picks."""
    state = load_state()

    if args.file.lower().endswith(".csv"):
        from ingestion.picks_loader import load_picks_from_csv
        participants = load_picks_from_csv(args.file)
    else:
        from ingestion.picks_loader import load_picks_from_json
        participants = load_picks_from_json(args.file)

    state["participants"] = participants
    save_state(state)


def cmd_fetch_submissions(args):
    """Fetch picks from the remote submission index."""
    state = load_state()

    from ingestion.results_loader import fetch_submissions
    participants = fetch_submissions(args.index_bin)
    if not participants:
        return

    state["participants"] = participants
    save_state(state)


def cmd_load_results(args):
    """Load official results."""
    state = load_state()

    if args.file:
        from ingestion.results_loader import load_results_from_json
        results = load_results_from_json(args.file)
    elif args.bin:
        from ingestion.results_loader import fetch_results
        results = fetch_results(args.bin)
        if not results:
            print("No results retrieved; keeping previously loaded results.")
            return
    else:
        print("ERROR: Provide --file or --bin.")
        return

    state["results"] = results
    save_state(state)


def cmd_scoreboard(args):
    """Display the current scoreboard."""
    state = load_state()
    if not _require_pool(state):
        return

    from output.printer import print_scoreboard
    from solver.scorer import build_scoreboard
    print_scoreboard(build_scoreboard(state["participants"], state["results"]))


def cmd_road(args):
    """Find roads to victory for one participant."""
    state = load_state()
    if not _require_pool(state):
        return

    participants, remaining, scores = _solver_inputs(state)
    if args.player not in scores:
        print(f"ERROR: Unknown participant '{args.player}'.")
        print(f"Known participants: {', '.join(p.id for p in participants)}")
        return

    from output.printer import print_paths
    from solver.engine import solve
    from solver.leadership import is_co_leader, is_sole_leader

    print(f"\n{len(remaining)} series left: {', '.join(remaining) or '(none)'}")

    result = solve(
        target_id=args.player,
        participants=participants,
        remaining_series_ids=remaining,
        current_scores=scores,
        is_leader=is_co_leader if args.allow_ties else is_sole_leader,
        max_paths=args.max_paths,
        max_nodes=args.max_nodes,
        on_event=_print_event if args.trace else None,
    )
    print_paths(args.player, result, participants, scores)


def cmd_contenders(args):
    """Check every participant for a road to victory."""
    state = load_state()
    if not _require_pool(state):
        return

    from tqdm import tqdm

    from output.printer import print_contenders
    from solver.engine import solve

    participants, remaining, scores = _solver_inputs(state)

    verdicts = {}
    for p in tqdm(participants, desc="Searching"):
        verdicts[p.id] = solve(p.id, participants, remaining, scores,
                               max_paths=1, max_nodes=args.max_nodes)

    print_contenders(verdicts)


def _print_event(event):
    indent = "  " * event.depth
    if event.kind == "visit":
        print(f"{indent}depth {event.depth} {event.series_id or '(end)'} scores={event.scores}")
    elif event.kind == "prune":
        print(f"{indent}  skip {event.path[-1]}: cannot catch the leader")
    elif event.kind in ("found", "eliminated", "truncated"):
        print(f"{indent}{event.kind.upper()}")


# --- Main ---

def main():
    parser = argparse.ArgumentParser(
        description="Playoff Prediction Pool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. python cli.py load-picks --file picks.json        # Everyone's predictions
  2. python cli.py load-results --file results.json    # Official results so far
  3. python cli.py scoreboard                          # Current standings
  4. python cli.py road --player "Uri Klar"            # How can Uri still win?
  5. python cli.py contenders                          # Who is still alive?
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # load-picks
    p_picks = subparsers.add_parser("load-picks", help="Load participants' picks")
    p_picks.add_argument("--file", required=True, help="JSON or CSV file with picks")

    # fetch-submissions
    p_subs = subparsers.add_parser("fetch-submissions", help="Fetch picks from remote submissions")
    p_subs.add_argument("--index-bin", required=True, help="Bin id of the master index")

    # load-results
    p_results = subparsers.add_parser("load-results", help="Load official results")
    p_results.add_argument("--file", help="JSON file with results")
    p_results.add_argument("--bin", help="Remote bin id holding results")

    # scoreboard
    subparsers.add_parser("scoreboard", help="Display current standings")

    # road
    p_road = subparsers.add_parser("road", help="Find roads to victory for a participant")
    p_road.add_argument("--player", required=True)
    p_road.add_argument("--max-paths", type=int, default=config.DEFAULT_MAX_PATHS)
    p_road.add_argument("--max-nodes", type=int, default=config.CLI_MAX_NODES,
                        help="Search budget per participant (default: %(default)s)")
    p_road.add_argument("--allow-ties", action="store_true", help="Count a shared first place as winning")
    p_road.add_argument("--trace", action="store_true", help="Print every search step")

    # contenders
    p_cont = subparsers.add_parser("contenders", help="Check who can still win")
    p_cont.add_argument("--max-nodes", type=int, default=config.CLI_MAX_NODES,
                        help="Search budget per participant (default: %(default)s)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    commands = {
        "load-picks": cmd_load_picks,
        "fetch-submissions": cmd_fetch_submissions,
        "load-results": cmd_load_results,
        "scoreboard": cmd_scoreboard,
        "road": cmd_road,
        "contenders": cmd_contenders,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        cmd_func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
