import io
import os
import json
from typing import List, Dict, Set

import streamlit as st

from config import configure_logging, load_settings
from events import Event, attach_players, attach_teams, event_to_dict, load_events_json, read_team_names
from name_dict import NameDictError, load_name_dict, name_dict_from_frame, read_name_frame
from player_core import EMPTY_NAME_DICT, NameDict
from review import approved_events, as_editor_df, event_to_row

SETTINGS = load_settings()
configure_logging(SETTINGS.log_level)

st.set_page_config(page_title="Event Players", layout="wide")
st.title("Event Players")
st.caption("Upload events JSON or paste a description. Review inferred players, then save approved events to JSONL (append-only).")

# -----------------------------
# Helpers
# -----------------------------

def ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

@st.cache_data(show_spinner=False)
def load_existing_uids(path: str) -> Set[str]:
    uids: Set[str] = set()
    if not os.path.exists(path):
        return uids
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    obj = json.loads(line)
                    if isinstance(obj, dict) and obj.get("uid"):
                        uids.add(str(obj["uid"]))
                except json.JSONDecodeError:
                    continue
    except OSError:
        return set()
    return uids

def append_jsonl(path: str, rows: List[Dict[str, object]]) -> int:
    ensure_parent_dir(path)
    with open(path, "a", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")
    return len(rows)

@st.cache_resource(show_spinner=False)
def cached_name_dict(path: str) -> NameDict:
    return load_name_dict(path)

@st.cache_data(show_spinner=False)
def cached_infer(
    events_json: str,
    names_path: str,
    uploaded_names: bytes,
    teams_path: str,
    max_workers: int,
) -> List[Dict[str, object]]:
    if uploaded_names:
        name_dict = name_dict_from_frame(read_name_frame(io.BytesIO(uploaded_names)))
    elif names_path:
        name_dict = cached_name_dict(names_path)
    else:
        name_dict = EMPTY_NAME_DICT

    events = attach_players(load_events_json(events_json), name_dict, max_workers=max_workers)
    if teams_path:
        attach_teams(events, read_team_names(teams_path))

    return [event_to_row(ev) for ev in events]

# -----------------------------
# Sidebar settings
# -----------------------------

with st.sidebar:
    st.header("Settings")

    jsonl_path = st.text_input("JSONL output path", value=SETTINGS.events_jsonl_path)

    st.subheader("Name dictionary")
    names_path = st.text_input("Names CSV path (first,last,full)", value=SETTINGS.names_csv)
    names_upload = st.file_uploader("…or upload a names CSV", type=["csv"])

    st.subheader("Teams")
    teams_path = st.text_input("Teams file (one per line)", value=SETTINGS.teams_path)

    max_workers = st.number_input("Worker threads", min_value=1, max_value=32, value=max(1, SETTINGS.max_workers))

# -----------------------------
# Dataset info
# -----------------------------

existing_uids = load_existing_uids(jsonl_path)
st.info(f"Current dataset: **{len(existing_uids)}** event(s) in `{jsonl_path}` (by UID).")

# -----------------------------
# Input section
# -----------------------------

col1, col2 = st.columns(2)
with col1:
    uploaded = st.file_uploader("Drop an events .json file here", type=["json"])
with col2:
    pasted = st.text_area("…or paste one event description", height=240, placeholder="Cast: Jane Doe, John Smith")

events_json = ""
if uploaded is not None:
    events_json = uploaded.read().decode("utf-8", errors="replace")
elif pasted.strip():
    events_json = json.dumps([event_to_dict(Event(uid="pasted", summary="Pasted description", description=pasted))])

if "rows" not in st.session_state:
    st.session_state["rows"] = []

infer_clicked = st.button("Infer players", type="primary", disabled=not bool(events_json))
clear_clicked = st.button("Clear results", disabled=not bool(st.session_state["rows"]))

if infer_clicked:
    try:
        st.session_state["rows"] = cached_infer(
            events_json=events_json,
            names_path=names_path.strip(),
            uploaded_names=names_upload.getvalue() if names_upload is not None else b"",
            teams_path=teams_path.strip(),
            max_workers=int(max_workers),
        )
    except (NameDictError, ValueError, OSError) as e:
        st.error(str(e))
        st.stop()

if clear_clicked:
    st.session_state["rows"] = []
    st.rerun()

rows = st.session_state["rows"]

# -----------------------------
# Review + save
# -----------------------------

if not rows:
    st.write("Upload events or paste a description, then click **Infer players**.")
    st.stop()

st.subheader(f"Review ({len(rows)} event(s))")
st.caption("Edit players (comma-separated). Uncheck approve to discard.")

edited = st.data_editor(
    as_editor_df(rows),
    use_container_width=True,
    num_rows="fixed",
    disabled=["uid", "summary", "teams_str", "description"],
    column_config={
        "approve": st.column_config.CheckboxColumn("Approve", width="small"),
        "uid": st.column_config.TextColumn("UID", width="small"),
        "summary": st.column_config.TextColumn("Summary", width="medium"),
        "players_str": st.column_config.TextColumn("Players (comma-separated)", width="medium"),
        "teams_str": st.column_config.TextColumn("Teams", width="small"),
        "description": st.column_config.TextColumn("Description", width="large"),
    },
)

approve_count = int(edited["approve"].sum())
st.write(f"Approved: **{approve_count}** / {len(edited)}")

approved = edited[edited["approve"] == True].copy()
approved_rows = approved_events(rows, edited)

if approved_rows:
    st.download_button(
        "Download approved as CSV (preview)",
        data=approved[["uid", "summary", "players_str", "teams_str"]].to_csv(index=False).encode("utf-8"),
        file_name="approved_events_preview.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download approved as JSON",
        data=json.dumps(approved_rows, indent=2, ensure_ascii=False).encode("utf-8"),
        file_name="approved_events.json",
        mime="application/json",
    )

save_clicked = st.button("Save approved to JSONL", disabled=(approve_count == 0))
if not save_clicked:
    st.stop()

existing_uids_now = set(load_existing_uids(jsonl_path))

to_write: List[Dict[str, object]] = []
skipped_dupe = 0
skipped_invalid = 0

for rec in approved_rows:
    uid = str(rec.get("uid", "")).strip()
    if not uid:
        skipped_invalid += 1
        continue
    if uid in existing_uids_now:
        skipped_dupe += 1
        continue
    to_write.append(rec)
    existing_uids_now.add(uid)

if to_write:
    appended = append_jsonl(jsonl_path, to_write)
    st.success(f"Saved **{appended}** new event(s) to `{jsonl_path}`.")
    load_existing_uids.clear()  # refresh dataset count next run
else:
    st.warning("No new events to save after validation/dedupe.")

if skipped_dupe:
    st.info(f"Skipped events already in dataset: **{skipped_dupe}**")
if skipped_invalid:
    st.info(f"Skipped events without a UID: **{skipped_invalid}**")

st.session_state["rows"] = []
st.rerun()
