# review.py
# Review-table helpers shared by the Streamlit app (editor rows <-> event records)

from typing import Dict, List

import pandas as pd

from events import Event, event_from_dict, event_to_dict

EDITOR_COLUMNS = ["approve", "uid", "summary", "players_str", "teams_str", "description"]

def players_to_str(players: List[str]) -> str:
    return ", ".join(players or [])

def parse_players(s: str) -> List[str]:
    seen = set()
    out: List[str] = []
    for p in (x.strip() for x in s.split(",")):
        if not p or p.lower() in seen:
            continue
        seen.add(p.lower())
        out.append(p)
    return out

def event_to_row(ev: Event) -> Dict[str, object]:
    r = event_to_dict(ev)
    r["approve"] = bool(ev.players)
    r["players_str"] = players_to_str(ev.players)
    r["teams_str"] = players_to_str(ev.teams)
    return r

def as_editor_df(rows: List[Dict[str, object]]) -> pd.DataFrame:
    df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=EDITOR_COLUMNS)
    for col in EDITOR_COLUMNS:
        if col not in df.columns:
            df[col] = True if col == "approve" else ""
    return df[EDITOR_COLUMNS].copy()

def approved_events(rows: List[Dict[str, object]], edited: pd.DataFrame) -> List[Dict[str, object]]:
    """
    Rebuild approved events from the edited table. Rows are matched by position,
    since UIDs repeat for recurring events and may be blank.
    """
    out: List[Dict[str, object]] = []
    for i, rec in edited[edited["approve"] == True].iterrows():
        ev = event_from_dict(rows[int(i)])
        ev.players = parse_players(str(rec.get("players_str", "")))
        out.append(event_to_dict(ev))
    return out
