# name_dict.py
# Load the optional first/last/full name reference table (header-less CSV)

import logging
from typing import Iterable, List, Optional, Set

import pandas as pd

from player_core import EMPTY_NAME_DICT, NameDict

logger = logging.getLogger(__name__)

# column order in the CSV: first, last, full
NAME_COLUMNS = ("first", "last", "full")

class NameDictError(ValueError):
    """The name table could not be read; no partial dictionary is ever returned."""

def _fold(values: Iterable[object]) -> Set[str]:
    out: Set[str] = set()
    for v in values:
        if v is None or (isinstance(v, float) and pd.isna(v)):
            continue
        s = str(v).strip().lower()
        if s:
            out.add(s)
    return out

def name_dict_from_frame(df: pd.DataFrame) -> NameDict:
    """Columns by position: 0 = first name, 1 = last name, 2 = full name. Extra columns are ignored."""
    sets: List[Set[str]] = []
    for i in range(len(NAME_COLUMNS)):
        sets.append(_fold(df.iloc[:, i]) if i < df.shape[1] else set())
    nd = NameDict(first=frozenset(sets[0]), last=frozenset(sets[1]), full=frozenset(sets[2]))
    logger.info(
        "Name dictionary: %d first, %d last, %d full name(s)",
        len(nd.first), len(nd.last), len(nd.full),
    )
    return nd

def read_name_frame(source) -> pd.DataFrame:
    """`source` is a path or a file-like object (e.g. a Streamlit upload)."""
    try:
        return pd.read_csv(
            source,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()

def load_name_dict(path: Optional[str]) -> NameDict:
    if not path:
        return EMPTY_NAME_DICT
    try:
        df = read_name_frame(path)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise NameDictError(f"cannot load name dictionary {path!r}: {e}") from e
    if df.empty:
        logger.warning("Name dictionary %s is empty", path)
        return EMPTY_NAME_DICT
    return name_dict_from_frame(df)
