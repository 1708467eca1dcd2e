"""Official results ingestion.

Results live either in a local JSON file or in a JSON document store
("bin") that the pool site updates as series finish. Remote access is
read-only; the API key comes from the environment.
"""

import json
import os

import requests

import config
from ingestion.picks_loader import parse_games, participant_from_dict
from models.pool import Participant, SeriesResult, normalize_team


def parse_results(data: dict) -> dict[str, SeriesResult]:
    """Parse a results document.

    Accepts {"results": {series_id: {"winner": ..., "inGames": ...}}} or the
    inner mapping directly. "TBD" winners are undecided.
    """
    if not isinstance(data, dict):
        raise ValueError("Results document must be an object")
    if isinstance(data.get("results"), dict):
        data = data["results"]

    results = {}
    for series_id, raw in data.items():
        if not isinstance(raw, dict):
            raise ValueError(f"Result for {series_id} must be an object, got {raw!r}")
        winner = normalize_team(raw.get("winner"))
        games = parse_games(raw.get("inGames", raw.get("games")))
        results[str(series_id)] = SeriesResult(winner=winner, games=games if winner else None)
    return results


def load_results_from_json(filepath: str) -> dict[str, SeriesResult]:
    """Load official results from a JSON file."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    results = parse_results(data)
    decided = sum(1 for r in results.values() if r.is_decided)
    print(f"Loaded results from {filepath}: {decided} of {len(results)} series decided")
    return results


def fetch_bin(bin_id: str, api_key: str | None = None) -> dict | None:
    """Fetch the latest version of a bin's record.

    Returns:
        The record, or None if the key is missing or the request failed
    """
    api_key = api_key or os.environ.get(config.JSONBIN_API_KEY_ENV)
    if not api_key:
        print(f"ERROR: No API key. Set {config.JSONBIN_API_KEY_ENV} to read remote bins.")
        return None

    url = f"{config.JSONBIN_BASE_URL}/b/{bin_id}/latest"
    try:
        resp = requests.get(url, headers={"X-Master-Key": api_key}, timeout=config.HTTP_TIMEOUT)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        print(f"Warning: Could not fetch bin {bin_id}: {e}")
        return None
    except ValueError as e:
        print(f"Warning: Bin {bin_id} did not return JSON: {e}")
        return None

    return payload.get("record", payload) if isinstance(payload, dict) else None


def fetch_results(bin_id: str, api_key: str | None = None) -> dict[str, SeriesResult]:
    """Fetch official results from a remote bin. Empty on failure."""
    print(f"Fetching official results from bin {bin_id}...")
    record = fetch_bin(bin_id, api_key)
    if record is None:
        return {}
    results = parse_results(record)
    decided = sum(1 for r in results.values() if r.is_decided)
    print(f"  {decided} of {len(results)} series decided")
    return results


def fetch_submissions(index_bin_id: str, api_key: str | None = None) -> list[Participant]:
    """Fetch every participant's picks via the master index bin.

    The index holds {"submissions": [{"binId", "userId", "name"}, ...]};
    each submission bin holds that participant's picks. Malformed entries and
    submissions that cannot be fetched are skipped with a warning.
    """
    print(f"Fetching submission index from bin {index_bin_id}...")
    index = fetch_bin(index_bin_id, api_key)
    if not isinstance(index, dict) or not index.get("submissions"):
        print("No submissions found in master index.")
        return []

    participants = []
    for entry in index["submissions"]:
        if not isinstance(entry, dict) or not entry.get("binId"):
            print(f"  Skipping malformed index entry: {entry!r}")
            continue
        name = entry.get("name") or entry.get("userId") or entry["binId"]
        record = fetch_bin(entry["binId"], api_key)
        if record is None:
            print(f"  Skipping {name}: submission unavailable")
            continue
        picks = record.get("guesses", record) if isinstance(record, dict) else record
        try:
            participants.append(participant_from_dict(name, picks))
        except ValueError as e:
            print(f"  Skipping {name}: {e}")

    print(f"Loaded {len(participants)} submissions")
    return participants
