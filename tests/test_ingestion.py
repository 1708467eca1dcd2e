"""Tests for picks and results ingestion."""

import json

import pytest
import requests

import config
from ingestion import results_loader
from ingestion.picks_loader import (
    load_picks_from_csv,
    load_picks_from_json,
    parse_games,
    parse_pick,
    save_picks_to_json,
)
from ingestion.results_loader import fetch_bin, fetch_results, load_results_from_json, parse_results
from models.pool import Pick, SeriesResult


def test_parse_pick_variants():
    assert parse_pick({"winner": "Boston", "inGames": 5}) == Pick("Boston", 5)
    assert parse_pick({"winner": "Boston", "games": "6"}) == Pick("Boston", 6)
    assert parse_pick({"winner": {"name": "Boston", "seed": 2}, "inGames": 7}) == Pick("Boston", 7)
    assert parse_pick({"winner": "TBD", "inGames": 0}) == Pick(None, None)


def test_parse_pick_rejects_bad_length():
    with pytest.raises(ValueError):
        parse_pick({"winner": "Boston", "inGames": "five"})


@pytest.mark.parametrize("games", [9, -2, 3, 8, "10", 5.5])
def test_parse_pick_rejects_out_of_range_length(games):
    with pytest.raises(ValueError):
        parse_pick({"winner": "Boston", "inGames": games})


def test_parse_games_accepts_series_lengths():
    assert [parse_games(g) for g in (4, "5", 6.0, "7")] == [4, 5, 6, 7]
    assert parse_games(0) is None
    assert parse_games("0") is None
    assert parse_games(None) is None


def test_json_picks_round_trip(tmp_path):
    path = tmp_path / "picks.json"
    path.write_text(json.dumps({
        "Uri Klar": {"E1v8": {"winner": "Cleveland Cavaliers", "inGames": 5}},
        "Dana Erez": {"E1v8": {"winner": "Miami Heat", "inGames": 7}},
    }))

    participants = load_picks_from_json(str(path))

    assert [p.id for p in participants] == ["Uri Klar", "Dana Erez"]
    assert participants[0].pick_for("E1v8") == Pick("Cleveland Cavaliers", 5)

    out = tmp_path / "out.json"
    save_picks_to_json(participants, str(out))
    assert load_picks_from_json(str(out)) == participants


def test_json_picks_must_be_keyed_by_participant(tmp_path):
    path = tmp_path / "picks.json"
    path.write_text(json.dumps([{"E1v8": {"winner": "A", "inGames": 4}}]))
    with pytest.raises(ValueError):
        load_picks_from_json(str(path))


def test_csv_picks(tmp_path):
    path = tmp_path / "picks.csv"
    path.write_text(
        "participant,series,winner,games\n"
        "Uri,E1v8,Cleveland,5\n"
        "Dana,E1v8,Miami,7\n"
        "Uri,Finals,,\n"
    )

    participants = load_picks_from_csv(str(path))

    assert [p.id for p in participants] == ["Uri", "Dana"]
    assert participants[0].picks["E1v8"] == Pick("Cleveland", 5)
    assert participants[0].pick_for("Finals") is None


def test_csv_picks_missing_columns(tmp_path):
    path = tmp_path / "picks.csv"
    path.write_text("participant,series,winner\nUri,E1v8,Cleveland\n")
    with pytest.raises(ValueError):
        load_picks_from_csv(str(path))


def test_parse_results_handles_placeholders():
    results = parse_results({"results": {
        "E1v8": {"winner": "Cleveland", "inGames": 5},
        "ESF1": {"winner": "TBD", "inGames": 0},
    }})

    assert results["E1v8"] == SeriesResult("Cleveland", 5)
    assert results["ESF1"] == SeriesResult(None, None)
    assert not results["ESF1"].is_decided


def test_load_results_from_json(tmp_path):
    path = tmp_path / "results.json"
    path.write_text(json.dumps({"E1v8": {"winner": "Cleveland", "inGames": 5}}))
    assert load_results_from_json(str(path)) == {"E1v8": SeriesResult("Cleveland", 5)}


class _FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


def test_fetch_results_reads_record(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, headers, timeout))
        return _FakeResponse({"record": {"results": {"E1v8": {"winner": "Boston", "inGames": 6}}}})

    monkeypatch.setattr(results_loader.requests, "get", fake_get)

    results = fetch_results("abc123", api_key="secret")

    assert results == {"E1v8": SeriesResult("Boston", 6)}
    assert calls == [(f"{config.JSONBIN_BASE_URL}/b/abc123/latest", {"X-Master-Key": "secret"},
                      config.HTTP_TIMEOUT)]


def test_fetch_bin_without_key(monkeypatch):
    monkeypatch.delenv(config.JSONBIN_API_KEY_ENV, raising=False)
    assert fetch_bin("abc123") is None


def test_fetch_bin_network_failure(monkeypatch):
    def fake_get(url, headers=None, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(results_loader.requests, "get", fake_get)
    assert fetch_bin("abc123", api_key="secret") is None
    assert fetch_results("abc123", api_key="secret") == {}


def test_fetch_submissions(monkeypatch):
    bins = {
        "index": {"submissions": [
            {"binId": "b1", "userId": "u1", "name": "Uri"},
            {"binId": "b2", "userId": "u2", "name": ""},
            {"binId": "missing", "userId": "u3", "name": "Ghost"},
        ]},
        "b1": {"E1v8": {"winner": "Cleveland", "inGames": 5}},
        "b2": {"E1v8": {"winner": "Miami", "inGames": 7}},
    }

    def fake_get(url, headers=None, timeout=None):
        bin_id = url.rsplit("/", 2)[-2]
        if bin_id not in bins:
            return _FakeResponse({}, status=404)
        return _FakeResponse({"record": bins[bin_id]})

    monkeypatch.setattr(results_loader.requests, "get", fake_get)

    participants = results_loader.fetch_submissions("index", api_key="secret")

    assert [p.id for p in participants] == ["Uri", "u2"]
    assert participants[1].pick_for("E1v8") == Pick("Miami", 7)


def test_fetch_submissions_skips_malformed_entries(monkeypatch, capsys):
    bins = {
        "index": {"submissions": [
            "b1",
            {"userId": "u2", "name": "No Bin"},
            {"binId": "", "name": "Empty Bin"},
            {"binId": "b1", "userId": "u1", "name": "Uri"},
        ]},
        "b1": {"E1v8": {"winner": "Cleveland", "inGames": 5}},
    }

    def fake_get(url, headers=None, timeout=None):
        return _FakeResponse({"record": bins[url.rsplit("/", 2)[-2]]})

    monkeypatch.setattr(results_loader.requests, "get", fake_get)

    participants = results_loader.fetch_submissions("index", api_key="secret")

    assert [p.id for p in participants] == ["Uri"]
    assert capsys.readouterr().out.count("Skipping malformed index entry") == 3


def test_fetch_submissions_index_not_an_object(monkeypatch):
    monkeypatch.setattr(results_loader.requests, "get",
                        lambda url, headers=None, timeout=None: _FakeResponse({"record": ["b1"]}))
    assert results_loader.fetch_submissions("index", api_key="secret") == []
