import os
import sqlite3
from typing import Iterable, List, Optional, Sequence

from .toplists import TIER_PRIORITY, table_for


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def read_wordlist(path: str, limit: Optional[int] = None, encoding: str = "utf-8") -> List[str]:
    """
    Read a SecLists-style password file: one password per line, most common first.
    Only the line break is stripped; surrounding spaces belong to the password.
    Empty lines and repeated entries are skipped.
    Decoding is strict: bytes invalid in 'encoding' raise UnicodeDecodeError.
    """
    if limit is not None and limit < 0:
        raise ValueError("limit must be >= 0")
    words: List[str] = []
    seen = set()
    with open(path, "r", encoding=encoding) as f:
        for line in f:
            if limit is not None and len(words) >= limit:
                break
            word = line.rstrip("\r\n")
            if not word or word in seen:
                continue
            seen.add(word)
            words.append(word)
    return words


def build_toplist_db(path: str, top10: Iterable[str], top25: Iterable[str], top50: Iterable[str]) -> str:
    """
    Atomically (re)create the top list database at 'path' by writing to a
    temp file and renaming. Returns the path.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    if os.path.exists(tmp):
        os.remove(tmp)
    lists = dict(zip(TIER_PRIORITY, (top10, top25, top50)))
    try:
        conn = sqlite3.connect(tmp)
        try:
            with conn:
                for tier in TIER_PRIORITY:
                    table, column = table_for(tier)
                    conn.execute(f"CREATE TABLE {table} ({column} TEXT NOT NULL PRIMARY KEY)")
                    conn.executemany(
                        f"INSERT OR IGNORE INTO {table} ({column}) VALUES (?)",
                        ((w,) for w in lists[tier]),
                    )
        finally:
            conn.close()
    except BaseException:
        # no half-built database left next to the real one
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    # atomic replace
    os.replace(tmp, path)
    return path


def build_from_seclist(path: str, source: str, sizes: Sequence[int] = (10, 25, 50), encoding: str = "utf-8") -> str:
    """
    Fill the three tiers from one ranked password file: the first sizes[0]
    entries go to Top 10, the first sizes[1] to Top 25 and so on, so the
    tiers overlap the way the SecLists top lists do.
    """
    if len(sizes) != 3:
        raise ValueError("sizes must hold exactly three values")
    if any(s < 0 for s in sizes):
        raise ValueError("sizes must be >= 0")
    if not sizes[0] <= sizes[1] <= sizes[2]:
        raise ValueError("sizes must be increasing")
    words = read_wordlist(source, limit=sizes[2], encoding=encoding)
    return build_toplist_db(path, words[:sizes[0]], words[:sizes[1]], words[:sizes[2]])
