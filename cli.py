# cli.py
# Command-line driver: events JSON (or one raw description) in, players out

import argparse
import logging
import sys
from typing import List, Optional

from config import configure_logging, load_settings
from events import attach_players, attach_teams, events_to_json, load_events_json, read_team_names, summarize_events
from name_dict import NameDictError, load_name_dict
from player_core import infer_player_names

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Infer player names from event descriptions")
    parser.add_argument("src", help="Path to an events JSON file, or '-' for stdin")
    parser.add_argument("--text", action="store_true",
                        help="Treat SRC as one raw description instead of events JSON")
    parser.add_argument("--names", default=settings.names_csv,
                        help="CSV of first,last,full names used to disambiguate")
    parser.add_argument("--teams", default=settings.teams_path,
                        help="Newline-separated team names to match against descriptions")
    parser.add_argument("--format", choices=["json", "summary"], default="json",
                        help="Output format for events")
    parser.add_argument("--workers", type=int, default=settings.max_workers,
                        help="Worker threads for batch inference")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser

def _read_src(src: str) -> str:
    if src == "-":
        return sys.stdin.read()
    with open(src, "r", encoding="utf-8") as f:
        return f.read()

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        name_dict = load_name_dict(args.names)
        raw = _read_src(args.src)

        if args.text:
            for name in infer_player_names(raw, name_dict):
                print(name)
            return 0

        events = load_events_json(raw)
        logger.info("Loaded %d event(s) from %s", len(events), args.src)
        attach_players(events, name_dict, max_workers=args.workers)
        if args.teams:
            attach_teams(events, read_team_names(args.teams))
    except (NameDictError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.format == "summary":
        print(summarize_events(events))
    else:
        print(events_to_json(events))
    return 0

if __name__ == "__main__":
    sys.exit(main())
