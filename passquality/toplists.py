"""
passquality.toplists

Known-password lookups for the SecLists Top 10 / Top 25 / Top 50 lists.

Every lookup answers tier_of(password) by checking Top 10 first, then Top 25,
then Top 50, and returns the first tier that contains the password.
"""

import logging
import os
import sqlite3
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Protocol, Tuple

logger = logging.getLogger(__name__)


class KnownListTier(IntEnum):
    """Top list a password is known in; NONE when it is in no list."""
    NONE = 0
    TOP10 = 10
    TOP25 = 25
    TOP50 = 50


# lookup order, first match wins
TIER_PRIORITY: Tuple[KnownListTier, ...] = (
    KnownListTier.TOP10,
    KnownListTier.TOP25,
    KnownListTier.TOP50,
)


class LookupUnavailable(Exception):
    """The known-password lists could not be queried."""


class KnownPasswordLookup(Protocol):
    def tier_of(self, password: str) -> KnownListTier:
        ...


def lookup_tier(password: str, lookup: KnownPasswordLookup) -> KnownListTier:
    """
    Ask the lookup for the password tier.

    Any failure of the lookup is raised as LookupUnavailable, including a
    result that is not a KnownListTier.
    """
    try:
        tier = lookup.tier_of(password)
    except LookupUnavailable:
        raise
    except Exception as e:
        raise LookupUnavailable(f"known-password lookup failed: {e}") from e
    if not isinstance(tier, KnownListTier):
        raise LookupUnavailable(f"known-password lookup returned an invalid tier: {tier!r}")
    return tier


class InMemoryLookup:
    """Exact, case-sensitive membership test against in-memory lists."""

    def __init__(self, top10: Iterable[str] = (), top25: Iterable[str] = (), top50: Iterable[str] = ()):
        self._lists = {
            KnownListTier.TOP10: frozenset(top10),
            KnownListTier.TOP25: frozenset(top25),
            KnownListTier.TOP50: frozenset(top50),
        }

    def tier_of(self, password: str) -> KnownListTier:
        for tier in TIER_PRIORITY:
            if password in self._lists[tier]:
                return tier
        return KnownListTier.NONE


def table_for(tier: KnownListTier) -> Tuple[str, str]:
    """Table and column names holding the given tier, e.g. ("pwd_top10", "p10_password")."""
    n = int(tier)
    return f"pwd_top{n}", f"p{n}_password"


class SQLiteLookup:
    """
    Lookup backed by a SQLite top-list database (see storage.build_toplist_db).

    A read-only connection is opened per call, so one instance can be shared
    between threads.
    """

    def __init__(self, path: str):
        self.path = path

    def _connect(self) -> sqlite3.Connection:
        if not os.path.exists(self.path):
            raise LookupUnavailable(f"Top list database not found at {self.path}")
        uri = Path(self.path).resolve().as_uri() + "?mode=ro"
        try:
            return sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            logger.error("Failed to open top list database %s: %s", self.path, e)
            raise LookupUnavailable(f"Cannot open top list database: {e}") from e

    def tier_of(self, password: str) -> KnownListTier:
        conn = self._connect()
        try:
            for tier in TIER_PRIORITY:
                table, column = table_for(tier)
                row = conn.execute(f"SELECT COUNT(*) FROM {table} WHERE {column} = ?", (password,)).fetchone()
                if row and int(row[0]) > 0:
                    logger.debug("Password found in %s", table)
                    return tier
        except sqlite3.Error as e:
            logger.error("Top list query failed on %s: %s", self.path, e)
            raise LookupUnavailable(f"Top list query failed: {e}") from e
        finally:
            conn.close()
        logger.debug("Password not found in any top list")
        return KnownListTier.NONE
