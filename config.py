# config.py
# Environment-driven settings (.env supported) + logging setup

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

LOG_FORMAT = "[%(asctime)s] [%(levelname)-7s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

@dataclass(frozen=True)
class Settings:
    data_dir: str
    names_csv: str
    teams_path: str
    events_jsonl_path: str
    log_level: str
    max_workers: int

def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e

def load_settings() -> Settings:
    load_dotenv()
    data_dir = os.environ.get("DATA_DIR", "/data")
    return Settings(
        data_dir=data_dir,
        names_csv=os.environ.get("NAMES_CSV", ""),
        teams_path=os.environ.get("TEAMS_PATH", ""),
        events_jsonl_path=os.environ.get("EVENTS_JSONL_PATH", os.path.join(data_dir, "events.jsonl")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        max_workers=_int_env("INFER_MAX_WORKERS", 4),
    )

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
