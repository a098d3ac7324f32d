import os
import sqlite3

import pytest

from passquality.storage import build_from_seclist, build_toplist_db, read_wordlist
from passquality.toplists import KnownListTier, SQLiteLookup


def _write(path, lines):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("".join(lines))


def test_read_wordlist_keeps_spaces_and_skips_blanks(tmp_path):
    src = tmp_path / "list.txt"
    _write(src, ["123456\r\n", "\n", " pass \n", "123456\n", "qwerty"])
    assert read_wordlist(str(src)) == ["123456", " pass ", "qwerty"]


def test_read_wordlist_limit(tmp_path):
    src = tmp_path / "list.txt"
    _write(src, [f"pw{i}\n" for i in range(100)])
    words = read_wordlist(str(src), limit=10)
    assert words == [f"pw{i}" for i in range(10)]
    with pytest.raises(ValueError):
        read_wordlist(str(src), limit=-1)


def test_build_toplist_db_creates_dirs_and_replaces(tmp_path):
    path = str(tmp_path / "nested" / "dir" / "toplists.sqlite")
    build_toplist_db(path, ["a"], ["a", "b"], ["a", "b", "c"])
    assert os.path.exists(path)
    assert not os.path.exists(path + ".tmp")
    # rebuild replaces old content
    build_toplist_db(path, ["z"], [], [])
    conn = sqlite3.connect(path)
    try:
        rows = conn.execute("SELECT p10_password FROM pwd_top10").fetchall()
        count50 = conn.execute("SELECT COUNT(*) FROM pwd_top50").fetchone()[0]
    finally:
        conn.close()
    assert rows == [("z",)]
    assert count50 == 0


def test_build_from_seclist_overlapping_tiers(tmp_path):
    src = tmp_path / "10-million-password-list-top-100.txt"
    _write(src, [f"pw{i}\n" for i in range(100)])
    path = build_from_seclist(str(tmp_path / "t.sqlite"), str(src))
    db = SQLiteLookup(path)
    assert db.tier_of("pw0") is KnownListTier.TOP10
    assert db.tier_of("pw9") is KnownListTier.TOP10
    assert db.tier_of("pw10") is KnownListTier.TOP25
    assert db.tier_of("pw49") is KnownListTier.TOP50
    assert db.tier_of("pw50") is KnownListTier.NONE


def test_build_from_seclist_rejects_bad_sizes(tmp_path):
    src = tmp_path / "l.txt"
    _write(src, ["a\n"])
    with pytest.raises(ValueError):
        build_from_seclist(str(tmp_path / "t.sqlite"), str(src), sizes=(25, 10, 50))
    with pytest.raises(ValueError):
        build_from_seclist(str(tmp_path / "t.sqlite"), str(src), sizes=(10, 25))


def test_build_from_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        build_from_seclist(str(tmp_path / "t.sqlite"), str(tmp_path / "nope.txt"))


def test_non_utf8_source_is_rejected(tmp_path):
    src = tmp_path / "latin1.txt"
    src.write_bytes("contraseña\n".encode("latin-1"))
    path = str(tmp_path / "t.sqlite")
    with pytest.raises(UnicodeDecodeError):
        build_from_seclist(path, str(src))
    assert not os.path.exists(path)


def test_source_encoding_is_honoured(tmp_path):
    src = tmp_path / "latin1.txt"
    src.write_bytes("contraseña\n".encode("latin-1"))
    path = build_from_seclist(str(tmp_path / "t.sqlite"), str(src), encoding="latin-1")
    assert SQLiteLookup(path).tier_of("contraseña") is KnownListTier.TOP10


def test_failed_build_removes_temp_and_keeps_old_db(tmp_path):
    path = str(tmp_path / "t.sqlite")
    build_toplist_db(path, ["old"], [], [])
    with pytest.raises(sqlite3.Error):
        build_toplist_db(path, ["new", object()], [], [])
    assert not os.path.exists(path + ".tmp")
    assert SQLiteLookup(path).tier_of("old") is KnownListTier.TOP10
