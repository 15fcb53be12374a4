"""Shared fixtures: minimal Chromium and Firefox history databases."""

import sqlite3

import pytest


def _make_chromium_db(path, rows):
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("""
        CREATE TABLE urls (
            id INTEGER PRIMARY KEY,
            url LONGVARCHAR,
            title LONGVARCHAR,
            visit_count INTEGER DEFAULT 0 NOT NULL,
            typed_count INTEGER DEFAULT 0 NOT NULL,
            last_visit_time INTEGER NOT NULL,
            hidden INTEGER DEFAULT 0 NOT NULL
        )
    """)
    conn.executemany(
        "INSERT INTO urls (url, title, visit_count, last_visit_time) VALUES (?, ?, ?, ?)",
        rows,
    )
    conn.commit()
    conn.close()
    return path


def _make_firefox_db(path, rows):
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("""
        CREATE TABLE moz_places (
            id INTEGER PRIMARY KEY,
            url LONGVARCHAR,
            title LONGVARCHAR,
            rev_host LONGVARCHAR,
            visit_count INTEGER DEFAULT 0,
            last_visit_date INTEGER
        )
    """)
    conn.executemany(
        "INSERT INTO moz_places (url, title, visit_count, last_visit_date) VALUES (?, ?, ?, ?)",
        rows,
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def make_chromium_db():
    """Factory: make_chromium_db(path, [(url, title, visit_count, last_visit_time), ...])."""
    return _make_chromium_db


@pytest.fixture
def make_firefox_db():
    """Factory: make_firefox_db(path, [(url, title, visit_count, last_visit_date), ...])."""
    return _make_firefox_db


@pytest.fixture
def snapshot_dir(tmp_path):
    """Isolated temp dir so tests can assert no snapshot files are left behind."""
    d = tmp_path / "snapshots"
    d.mkdir()
    return d
