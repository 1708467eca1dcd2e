"""Participant picks loader.

Supports:
1. JSON file keyed by participant name
2. CSV file with one row per (participant, series)
3. Programmatic construction from raw dicts (e.g. remote submissions)
"""

import json

import pandas as pd

import config
from models.pool import Participant, Pick, normalize_team


def parse_pick(raw: dict) -> Pick:
    """Build a Pick from {"winner": ..., "inGames": ...} ("games" also accepted)."""
    if not isinstance(raw, dict):
        raise ValueError(f"Pick must be an object, got {raw!r}")

    winner = raw.get("winner")
    if isinstance(winner, dict):
        # Bracket submissions store the full team object
        winner = winner.get("name")

    games = raw.get("inGames", raw.get("games"))
    return Pick(winner=normalize_team(winner), games=parse_games(games))


def participant_from_dict(participant_id: str, picks: dict) -> Participant:
    """Build a Participant from {series_id: raw_pick}."""
    if not isinstance(picks, dict):
        raise ValueError(f"Picks for {participant_id} must be an object")
    return Participant(
        id=participant_id,
        picks={str(sid): parse_pick(raw) for sid, raw in picks.items() if raw is not None},
    )


def load_picks_from_json(filepath: str) -> list[Participant]:
    """Load every participant's picks from a JSON file.

    Expected format:
    {
        "Uri Klar": {
            "E1v8": {"winner": "Cleveland Cavaliers", "inGames": 5},
            ...
        },
        ...
    }
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: expected an object keyed by participant")

    participants = [participant_from_dict(name, picks) for name, picks in data.items()]
    print(f"Loaded picks for {len(participants)} participants from {filepath}")
    return participants


def load_picks_from_csv(filepath: str) -> list[Participant]:
    """Load picks from a CSV file.

    Expected columns: participant, series, winner, games
    Participants keep the order they first appear in.
    """
    df = pd.read_csv(filepath, dtype={"participant": str, "series": str, "winner": str})

    missing = {"participant", "series", "winner", "games"} - set(df.columns)
    if missing:
        raise ValueError(f"{filepath}: missing columns {sorted(missing)}")

    by_name: dict[str, dict[str, Pick]] = {}
    for _, row in df.iterrows():
        name = str(row["participant"]).strip()
        winner = None if pd.isna(row["winner"]) else row["winner"]
        games = None if pd.isna(row["games"]) else row["games"]
        by_name.setdefault(name, {})[str(row["series"]).strip()] = Pick(
            winner=normalize_team(winner), games=parse_games(games)
        )

    participants = [Participant(id=name, picks=picks) for name, picks in by_name.items()]
    print(f"Loaded picks for {len(participants)} participants from {filepath}")
    return participants


def save_picks_to_json(participants: list[Participant], filepath: str):
    """Save participants' picks in the JSON format load_picks_from_json reads."""
    data = {
        p.id: {
            sid: {"winner": pick.winner, "inGames": pick.games}
            for sid, pick in p.picks.items()
        }
        for p in participants
    }
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"Saved picks to {filepath}")


def parse_games(value) -> int | None:
    """Series length as an int, None if missing.

    0 is the placeholder that goes with "TBD". Any other value must be a
    possible best-of-seven length.
    """
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid series length: {value!r}") from None
    if number == 0:
        return None
    if not number.is_integer() or int(number) not in config.SERIES_LENGTHS:
        raise ValueError(f"Invalid series length: {value!r}")
    return int(number)
