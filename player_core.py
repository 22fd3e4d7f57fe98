# player_core.py
# Lean player-name inference for free-text event descriptions (cue lines, title-case chunks, name dictionary)

import logging
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------
# Tunables
# -----------------------------

MAX_NAME_WORDS = 3
MAX_INITIAL_LEN = 3

# -----------------------------
# Name dictionary
# -----------------------------

@dataclass(frozen=True)
class NameDict:
    """Lower-cased reference names. Immutable, safe to share across threads."""
    first: FrozenSet[str] = field(default_factory=frozenset)
    last: FrozenSet[str] = field(default_factory=frozenset)
    full: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not (self.first or self.last or self.full)

EMPTY_NAME_DICT = NameDict()

# -----------------------------
# Regex: normalization + small helpers
# -----------------------------

_WS_MULTI_RE = re.compile(r"\s+")
_QUOTE_CHARS = "\"'“”‘’"
_APOSTROPHES = "'’"

def normalize_ws(s: str) -> str:
    return _WS_MULTI_RE.sub(" ", s).strip()

def normalize_key(s: str) -> str:
    return normalize_ws(s).lower()

# -----------------------------
# Stop tables (static, read-only)
# -----------------------------

# Phrases that indicate non-player roles or team/group names
STOP_PHRASES: FrozenSet[str] = frozenset({
    "doors open", "general admission", "improv jam", "open mic", "musical guest",
    "guest team", "on tech", "improv from", "vs", "vs.", "team",
})

# Single title-case words commonly capitalized but not person names
STOP_SINGLES: FrozenSet[str] = frozenset({
    "Show", "Jam", "Night", "The", "Team", "House", "Doors", "Open", "Admission",
    "Free", "Improv", "Guest", "Guests", "Special", "Musical", "Featuring",
})

_STOP_SINGLES_LOWER = frozenset(s.lower() for s in STOP_SINGLES)

def is_stop_single(word: str) -> bool:
    return word in STOP_SINGLES

def is_stop_name(s: str) -> bool:
    """Whole-candidate check: the name is itself a stop entry, in any case."""
    k = normalize_key(s)
    return k in STOP_PHRASES or k in _STOP_SINGLES_LOWER

def is_stop_phrase(chunk: str) -> bool:
    k = normalize_key(chunk)
    if k in STOP_PHRASES:
        return True
    parts = k.split()
    if len(parts) == 1:
        return parts[0] in _STOP_SINGLES_LOWER
    if len(parts) == 2:
        return parts[0].title() in STOP_SINGLES or parts[1].title() in STOP_SINGLES
    return False

def contains_stop_context(line: str) -> bool:
    l = line.lower()
    return any(p in l for p in STOP_PHRASES)

# -----------------------------
# Name-token predicate + cleaner
# -----------------------------

def _all_letters_dot(tok: str) -> bool:
    return all(ch.isalpha() or ch == "." or ch in _APOSTROPHES for ch in tok)

def looks_like_name_token(tok: str) -> bool:
    if not tok:
        return False
    # Initials like "J." or "JR"
    if (
        len(tok) <= MAX_INITIAL_LEN
        and _all_letters_dot(tok)
        and any(ch.isalpha() for ch in tok)
        and tok.upper() == tok
    ):
        return True
    # Title-Case, unicode aware (Renée, O'Nay, Ó Briain)
    return tok[0].isupper()

_ASIDE_RE = re.compile(r"[(\[{-]")

def clean_name(s: str) -> str:
    """
    Tidy one raw segment from a cue line into a name, or "" when it does not look like one.
    Anything after an opening bracket or hyphen is an aside ("Jane Doe (Tuesdays only)").
    """
    s = s.strip()
    m = _ASIDE_RE.search(s)
    if m:
        s = s[: m.start()].strip()
    s = normalize_ws(s.strip(_QUOTE_CHARS))
    parts = s.split()
    if not parts or len(parts) > MAX_NAME_WORDS:
        return ""
    if all(looks_like_name_token(p) for p in parts):
        return s
    return ""

# -----------------------------
# Stage 1: cue lines
# -----------------------------

CUE_LINE_RE = re.compile(
    r"^(players?|cast|featuring|with|lineup|performers?|host(?:ed)?\s*by|guests?|special\s+guests?|musical\s+guest)"
    r"\s*[:\-]\s*(.+)$",
    re.IGNORECASE,
)
SEP_RE = re.compile(r"\s*(?:,|&| and |;|\+)\s*", re.IGNORECASE)

# hosts and musical guests are named on cue lines but are not players
_NON_PLAYER_ROLES = ("host", "musical")

def cue_line_candidates(desc: str) -> Tuple[List[str], str]:
    """
    Returns the names found on cue lines, plus the description with host and
    musical-guest lines removed so later stages cannot pick those names up again.
    """
    out: List[str] = []
    kept: List[str] = []
    for raw_line in desc.split("\n"):
        line = raw_line.strip()
        m = CUE_LINE_RE.match(line) if line else None
        if not m:
            kept.append(raw_line)
            continue
        role = m.group(1).strip().lower()
        if any(r in role for r in _NON_PLAYER_ROLES):
            continue
        kept.append(raw_line)
        if contains_stop_context(line):
            continue
        for part in SEP_RE.split(m.group(2)):
            name = clean_name(part)
            if name and not is_stop_name(name):
                out.append(name)
    return out, "\n".join(kept)

# -----------------------------
# Stage 2: title-case chunks
# -----------------------------

_WORD_SPLIT_RE = re.compile(r"[\s,;:!?()\[\]{}|/\\+\-–—]+")

def _is_dotted_initial(w: str) -> bool:
    body = w[:-1]
    return (
        w.endswith(".")
        and 0 < len(body) < MAX_INITIAL_LEN
        and body.isalpha()
        and body.isupper()
    )

def split_words(text: str) -> List[str]:
    """
    Whitespace + punctuation tokenization. Periods split words, except the one
    closing a short initial ("J." stays "J.").
    """
    words: List[str] = []
    for piece in _WORD_SPLIT_RE.split(text):
        piece = piece.strip(_QUOTE_CHARS)
        if not piece:
            continue
        if _is_dotted_initial(piece):
            words.append(piece)
            continue
        for w in piece.split("."):
            w = w.strip(_QUOTE_CHARS)
            if w:
                words.append(w)
    return words

def title_case_chunks(text: str) -> List[str]:
    chunks: List[str] = []
    buf: List[str] = []

    def flush() -> None:
        if 1 <= len(buf) <= MAX_NAME_WORDS:
            chunks.append(" ".join(buf))
        buf.clear()

    for w in split_words(text):
        if looks_like_name_token(w) and not is_stop_single(w):
            buf.append(w)
        else:
            flush()
    flush()

    # Prefer multi-word first (sort is stable)
    chunks.sort(key=lambda c: -len(c.split()))
    return chunks

def single_title_tokens(text: str) -> List[str]:
    return [w for w in split_words(text) if looks_like_name_token(w) and not is_stop_single(w)]

# -----------------------------
# Stage 3: dictionary disambiguation
# -----------------------------

def accept_by_dict(chunk: str, name_dict: NameDict) -> bool:
    parts = chunk.lower().split()
    if name_dict.is_empty:
        # a lone capitalized word is too ambiguous without reference data
        return len(parts) >= 2
    if " ".join(parts) in name_dict.full:
        return True
    # NOTE: first-OR-last acceptance trades precision for recall
    if len(parts) == 1:
        return parts[0] in name_dict.first
    if len(parts) == 2:
        return parts[0] in name_dict.first or parts[1] in name_dict.last
    if len(parts) == 3:
        return parts[0] in name_dict.first or parts[2] in name_dict.last
    return False

# -----------------------------
# Stage 4: normalize + dedupe
# -----------------------------

def normalize_and_dedup(names: Iterable[str]) -> List[str]:
    """Keeps the longest name per (case-folded) first token, sorted ascending."""
    best = {}
    for s in names:
        sn = normalize_ws(s)
        if not sn:
            continue
        base = sn.split()[0].lower()
        cur = best.get(base)
        if cur is None or len(sn) > len(cur):
            best[base] = sn

    seen = set()
    out: List[str] = []
    for v in best.values():
        k = v.lower()
        if k in seen:
            continue
        seen.add(k)
        out.append(v)
    out.sort()
    return out

# -----------------------------
# Main inference
# -----------------------------

def infer_player_names(desc: Optional[str], name_dict: NameDict = EMPTY_NAME_DICT) -> List[str]:
    """
    Pure function of (description, dictionary): no I/O, no shared mutable state.

    1) Cue lines ("Cast: A, B & C"). Host and musical-guest lines are dropped
       from the text before any later stage runs.
    2) Title-case chunks filtered by stop tables and the dictionary.
    3) Single tokens that are known first names.
    """
    desc = (desc or "").replace("\r\n", "\n").replace("\r", "\n")

    candidates, desc = cue_line_candidates(desc)
    if candidates:
        logger.debug("cue lines produced %d candidate(s)", len(candidates))
        return normalize_and_dedup(candidates)

    candidates = [
        chunk for chunk in title_case_chunks(desc)
        if not is_stop_phrase(chunk) and accept_by_dict(chunk, name_dict)
    ]
    if candidates:
        logger.debug("title-case chunks produced %d candidate(s)", len(candidates))
        return normalize_and_dedup(candidates)

    if name_dict.first:
        candidates = [
            tok for tok in single_title_tokens(desc)
            if tok.lower() in name_dict.first and not is_stop_name(tok)
        ]
        logger.debug("first-name tokens produced %d candidate(s)", len(candidates))

    return normalize_and_dedup(candidates)
