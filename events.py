# events.py
# Event records handed over by the calendar reader + player/team attachment

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from player_core import EMPTY_NAME_DICT, NameDict, infer_player_names

logger = logging.getLogger(__name__)

MIN_TEAM_NAME_LEN = 5
SUMMARY_DESC_LEN = 50
SUMMARY_RULE = "-" * 60

@dataclass
class Event:
    uid: str = ""
    summary: str = ""
    description: str = ""
    location: str = ""
    url: str = ""
    organizer: str = ""
    start: Optional[str] = None
    end: Optional[str] = None
    all_day: bool = False
    players: List[str] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    team_ids: List[str] = field(default_factory=list)

# -----------------------------
# JSON (camelCase wire keys)
# -----------------------------

_STR_KEYS = ("uid", "summary", "description", "location", "url", "organizer")
_LIST_KEYS = {"players": "players", "teams": "teams", "team_ids": "teamIds"}

def _str_list(key: str, v: object) -> List[str]:
    if v is None:
        return []
    if isinstance(v, str):
        return [v] if v else []
    if not isinstance(v, (list, tuple)) or not all(isinstance(x, str) for x in v):
        raise ValueError(f"{key} must be a list of strings")
    return list(v)

def _str_field(key: str, v: object) -> str:
    if v is None:
        return ""
    if isinstance(v, bool) or not isinstance(v, (str, int, float)):
        raise ValueError(f"{key} must be a string")
    return str(v)

def event_from_dict(d: Dict[str, object]) -> Event:
    if not isinstance(d, dict):
        raise ValueError(f"event must be an object, got {type(d).__name__}")
    ev = Event(**{k: _str_field(k, d.get(k)) for k in _STR_KEYS})
    ev.start = _str_field("start", d.get("start")) or None
    ev.end = _str_field("end", d.get("end")) or None
    ev.all_day = bool(d.get("allDay", False))
    for attr, key in _LIST_KEYS.items():
        setattr(ev, attr, _str_list(key, d.get(key)))
    return ev

def event_to_dict(ev: Event) -> Dict[str, object]:
    out: Dict[str, object] = {k: getattr(ev, k) for k in _STR_KEYS}
    if ev.start:
        out["start"] = ev.start
    if ev.end:
        out["end"] = ev.end
    out["allDay"] = ev.all_day
    for attr, key in _LIST_KEYS.items():
        vals = getattr(ev, attr)
        if vals:
            out[key] = list(vals)
    return out

def load_events_json(text: str) -> List[Event]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid events JSON: {e}") from e
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("events JSON must be an array of objects")
    return [event_from_dict(d) for d in data]

def events_to_json(events: Sequence[Event]) -> str:
    return json.dumps([event_to_dict(e) for e in events], indent=2, ensure_ascii=False)

# -----------------------------
# Player inference
# -----------------------------

def infer_players_batch(
    descriptions: Sequence[str],
    name_dict: NameDict = EMPTY_NAME_DICT,
    max_workers: Optional[int] = None,
) -> List[List[str]]:
    """Order of results follows `descriptions`. The dictionary is shared read-only."""
    if max_workers is not None and max_workers <= 1:
        return [infer_player_names(d, name_dict) for d in descriptions]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda d: infer_player_names(d, name_dict), descriptions))

def attach_players(
    events: Sequence[Event],
    name_dict: NameDict = EMPTY_NAME_DICT,
    max_workers: Optional[int] = 1,
) -> List[Event]:
    results = infer_players_batch([e.description for e in events], name_dict, max_workers=max_workers)
    for ev, players in zip(events, results):
        ev.players = players
    logger.info(
        "Inferred players for %d event(s), %d with at least one name",
        len(events), sum(1 for p in results if p),
    )
    return list(events)

# -----------------------------
# Teams
# -----------------------------

def read_team_names(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]

def find_teams(description: str, team_names: Sequence[str]) -> List[str]:
    out: List[str] = []
    for t in team_names:
        # skip short/generic names
        if len(t) < MIN_TEAM_NAME_LEN:
            continue
        if t in description and t not in out:
            out.append(t)
    return out

def attach_teams(events: Sequence[Event], team_names: Sequence[str]) -> List[Event]:
    for ev in events:
        ev.teams = find_teams(ev.description, team_names)
        if not ev.teams:
            logger.info("Event %r matches no teams", ev.summary)
    return list(events)

# -----------------------------
# Text summary
# -----------------------------

def _coalesce(s: str, default: str) -> str:
    if not s.strip():
        return default
    if len(s) > SUMMARY_DESC_LEN:
        return s[:SUMMARY_DESC_LEN] + "..."
    return s

def summarize_events(events: Sequence[Event]) -> str:
    if not events:
        return "No events found."
    lines: List[str] = []
    for ev in events:
        lines.append(f"UID:         {ev.uid}")
        lines.append(f"Summary:     {ev.summary}")
        lines.append(f"URL:         {ev.url}")
        if ev.start:
            lines.append(f"Start:       {ev.start}")
        lines.append(f"Players:     {', '.join(ev.players)}")
        lines.append(f"Description:\n{_coalesce(ev.description, '(none)')}")
        lines.append(f"Teams:       {', '.join(ev.teams)}")
        lines.append(SUMMARY_RULE)
    return "\n".join(lines)
