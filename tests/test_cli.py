from __future__ import annotations

import io
import sqlite3
import sys
from typing import List

import pytest


PAGE = (
    "<html><head>"
    '<meta property="og:title" content="Jane Doe (@janedoe) • Instagram photos and videos">'
    '<meta property="og:description" content="16M Followers, 405 Following, 870 Posts - Bio text here">'
    "</head><body></body></html>"
)


def _run_cli_with_args(args_list: List[str]) -> None:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh to ensure clean parser each time
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            code = int(getattr(e, "code", 0) or 0)
            if code not in (0, None):
                raise
    finally:
        sys.argv = argv_backup


def test_cli_scrape_writes_db_and_lists(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ID", "test-run")
    db_path = tmp_path / "cli.db"
    html_path = tmp_path / "janedoe.html"
    html_path.write_text(PAGE, encoding="utf-8")

    _run_cli_with_args(["--db", str(db_path), "bootstrap"])
    _run_cli_with_args([
        "--db", str(db_path),
        "scrape",
        "--url", "https://www.instagram.com/janedoe/",
        "--html-file", str(html_path),
        "--write-db",
    ])
    out = capsys.readouterr().out
    assert '"saved": true' in out
    assert '"follower_count": 16000000' in out

    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute("SELECT username, post_count FROM instagram_profiles")
        assert cur.fetchall() == [("janedoe", 870)]
    finally:
        conn.close()

    _run_cli_with_args(["--db", str(db_path), "profiles", "instagram", "--limit", "5"])
    out = capsys.readouterr().out
    assert '"count": 1' in out
    assert '"username": "janedoe"' in out


def test_cli_scrape_reads_stdin(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ID", "test-run")
    monkeypatch.setattr(sys, "stdin", io.StringIO(PAGE))
    _run_cli_with_args([
        "--db", str(tmp_path / "unused.db"),
        "scrape",
        "--url", "https://www.instagram.com/janedoe/",
    ])
    out = capsys.readouterr().out
    assert '"saved": false' in out
    assert '"display_name": "Jane Doe"' in out


def test_cli_scrape_unsupported_url_exits_nonzero(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ID", "test-run")
    html_path = tmp_path / "page.html"
    html_path.write_text(PAGE, encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args([
            "--db", str(tmp_path / "unused.db"),
            "scrape",
            "--url", "https://example.com/janedoe",
            "--html-file", str(html_path),
        ])
    assert exc.value.code == 1
    assert '"Invalid request"' in capsys.readouterr().out


def test_cli_platforms(capsys):
    _run_cli_with_args(["platforms"])
    out = capsys.readouterr().out
    assert '"linkedin"' in out and '"instagram"' in out
