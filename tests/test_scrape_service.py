from __future__ import annotations

import sqlite3

from db import schema
from scrapers.coordinator import ExtractionCoordinator
from services.scrape_service import handle_scrape_request, list_profiles, supported_platforms_response


URL = "https://www.instagram.com/janedoe/"

PAGE = (
    "<html><head>"
    '<meta property="og:title" content="Jane Doe (@janedoe) • Instagram photos and videos">'
    '<meta property="og:description" content="16M Followers, 405 Following, 870 Posts - Bio text here">'
    "</head><body></body></html>"
)


def _conn(tmp_path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(tmp_path / "svc.db"))
    schema.bootstrap(conn)
    return conn


def test_invalid_request_returns_400():
    status, body = handle_scrape_request({"url": None})
    assert status == 400
    assert body["success"] is False
    assert body["message"] == "Invalid request"
    assert "URL is required and must be a string" in body["errors"]
    assert "HTML is required and must be a string" in body["errors"]


def test_unsupported_url_returns_400():
    status, body = handle_scrape_request({"url": "https://example.com/janedoe", "html": PAGE})
    assert status == 400
    assert body["errors"] == ["Unsupported URL. Supported platforms: linkedin, instagram"]


def test_non_mapping_payload_is_invalid():
    status, body = handle_scrape_request("not a payload")
    assert status == 400
    assert len(body["errors"]) == 2


def test_scrape_without_connection_is_not_saved():
    status, body = handle_scrape_request({"url": URL, "html": PAGE})
    assert status == 200
    assert body["success"] is True
    assert body["platform"] == "instagram"
    assert body["message"] == "Successfully scraped instagram profile"
    assert body["saved"] is False
    data = body["data"]
    assert data["username"] == "janedoe"
    assert data["display_name"] == "Jane Doe"
    assert data["bio"] == "Bio text here"
    assert (data["follower_count"], data["following_count"], data["post_count"]) == (16000000, 405, 870)


def test_scrape_twice_upserts_one_row(tmp_path):
    conn = _conn(tmp_path)
    try:
        status, body = handle_scrape_request({"url": URL, "html": PAGE}, conn)
        assert status == 200 and body["saved"] is True
        updated = PAGE.replace("16M Followers", "17M Followers")
        status, body = handle_scrape_request({"url": URL, "html": updated}, conn)
        assert status == 200 and body["saved"] is True

        cur = conn.cursor()
        cur.execute("SELECT COUNT(*), follower_count FROM instagram_profiles WHERE username = 'janedoe'")
        assert cur.fetchone() == (1, 17000000)
    finally:
        conn.close()


def test_storage_failure_is_absorbed(tmp_path):
    # No schema: the upsert hits a missing table
    conn = sqlite3.connect(str(tmp_path / "empty.db"))
    try:
        status, body = handle_scrape_request({"url": URL, "html": PAGE}, conn)
        assert status == 200
        assert body["saved"] is False
        assert body["data"]["follower_count"] == 16000000
    finally:
        conn.close()


def test_unexpected_failure_returns_500(monkeypatch):
    def _boom(url, html):
        raise RuntimeError("boom")

    monkeypatch.setattr(ExtractionCoordinator, "scrape_profile", staticmethod(_boom))
    status, body = handle_scrape_request({"url": URL, "html": PAGE})
    assert status == 500
    assert body == {"success": False, "message": "Failed to scrape profile", "error": "boom"}


def test_list_profiles(tmp_path):
    conn = _conn(tmp_path)
    try:
        handle_scrape_request({"url": URL, "html": PAGE}, conn)
        status, body = list_profiles(conn, "instagram", 10)
        assert status == 200
        assert body["count"] == 1
        assert body["data"][0]["username"] == "janedoe"

        status, body = list_profiles(conn, "linkedin")
        assert status == 200 and body["count"] == 0

        status, body = list_profiles(conn, "myspace")
        assert status == 400
        assert body["success"] is False
    finally:
        conn.close()


def test_supported_platforms_response():
    assert supported_platforms_response() == {
        "success": True,
        "platforms": ["linkedin", "instagram"],
        "count": 2,
    }
