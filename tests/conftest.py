"""
Shared fixtures for the player inference test suite.
"""

import json

import pytest

from player_core import EMPTY_NAME_DICT, NameDict


@pytest.fixture
def empty_dict():
    """The absent-dictionary state."""
    return EMPTY_NAME_DICT


@pytest.fixture
def sample_dict():
    """A small reference table covering first, last and full names."""
    return NameDict(
        first=frozenset({"sam", "jane", "alex"}),
        last=frozenset({"rivera", "okafor"}),
        full=frozenset({"cher"}),
    )


@pytest.fixture
def names_csv(tmp_path):
    """Header-less first,last,full CSV on disk."""
    path = tmp_path / "names.csv"
    path.write_text("Sam,Okafor,Sam Okafor\n Jane , ,\n,Rivera,\n", encoding="utf-8")
    return path


@pytest.fixture
def events_file(tmp_path):
    """Events JSON as handed over by the calendar reader."""
    events = [
        {
            "uid": "ev-1",
            "summary": "Harold Night",
            "description": "Harold Night with the Regulars\nCast: Jane Doe, John Smith",
            "start": "2026-10-23T19:00:00Z",
            "allDay": False,
        },
        {
            "uid": "ev-2",
            "summary": "Open Mic",
            "description": "Hosted by: Alex Lee\nSign up at the door.",
        },
    ]
    path = tmp_path / "events.json"
    path.write_text(json.dumps(events), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings deterministic regardless of the caller's environment."""
    for name in ("DATA_DIR", "NAMES_CSV", "TEAMS_PATH", "EVENTS_JSONL_PATH", "LOG_LEVEL", "INFER_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
