import argparse
import json
import os
import sys
import uuid as _uuid
from pathlib import Path

from db.connection import get_connection
from db import schema
from config.settings import get_settings
from services.scrape_service import handle_scrape_request, list_profiles, supported_platforms_response
from utils.logging_setup import init_logging


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    print("Schema ready")


def cmd_scrape(args):
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex
    if args.html_file:
        html = Path(args.html_file).read_text(encoding="utf-8")
    else:
        html = sys.stdin.read()

    conn = None
    if args.write_db:
        conn = get_connection(args.db)
        schema.bootstrap(conn)
    try:
        status, body = handle_scrape_request({"url": args.url, "html": html}, conn)
    finally:
        if conn is not None:
            conn.close()
    _print_json(body)
    if status != 200:
        sys.exit(1)


def cmd_profiles(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    try:
        status, body = list_profiles(conn, args.platform, args.limit)
    finally:
        conn.close()
    _print_json(body)
    if status != 200:
        sys.exit(1)


def cmd_platforms(args):
    _print_json(supported_platforms_response())


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Social profile scraper CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create tables and indexes")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_scr = sub.add_parser("scrape", help="Extract a profile from captured page HTML")
    p_scr.add_argument("--url", required=True, help="Profile URL the HTML was captured from")
    p_scr.add_argument("--html-file", help="Path to the captured HTML (default: read stdin)")
    p_scr.add_argument("--write-db", action="store_true", help="Upsert the extracted profile into SQLite")
    p_scr.set_defaults(func=cmd_scrape)

    p_prof = sub.add_parser("profiles", help="List stored profiles for a platform, newest first")
    p_prof.add_argument("platform", help="Platform name (linkedin or instagram)")
    p_prof.add_argument("--limit", type=int, default=settings.default_list_limit)
    p_prof.set_defaults(func=cmd_profiles)

    p_plat = sub.add_parser("platforms", help="Show supported platforms")
    p_plat.set_defaults(func=cmd_platforms)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
