#!/usr/bin/env python3
"""
HarnessDB - Glenair Series 80 catalog and connector builder
============================================================

Run the API server:      python main.py
Import a catalog CSV:    python main.py import contacts pins.csv --type Pin
Derive wire mappings:    python main.py derive-mappings

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import argparse
import logging
import sys

from flask import Flask, jsonify

import config
from db import init_db, get_session, GlenairContact
from api import api_bp


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _seed_if_empty():
    """Auto-import the catalog CSVs when the contact table is empty."""
    session = get_session()
    count = session.query(GlenairContact).count()
    session.close()

    if count > 0:
        print(f"\n  Catalog has {count} contacts.")
        return

    from import_engine import run_import

    found = False
    for filename, kind, contact_type in config.CATALOG_SEED_FILES:
        path = config.CATALOG_DIR / filename
        if not path.exists():
            continue
        found = True
        print(f"  Importing {filename} ({kind}) …")
        with open(path, "rb") as fh:
            report = run_import(kind, fh.read(), contact_type=contact_type)
        _print_report(report)

    if not found:
        print(f"\n  No seed CSVs in {config.CATALOG_DIR} - starting empty.")
        return

    if config.DERIVE_WIRE_MAPPINGS:
        _derive_mappings()


def _derive_mappings() -> int:
    from services.catalog_service import CatalogService

    session = get_session()
    try:
        added = CatalogService.derive_wire_mappings(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    print(f"  Wire mappings derived from contact ranges: {added}")
    return added


def _print_report(report):
    print(f"  Done: {report.imported} added, {report.replaced} replaced, "
          f"{report.ignored} ignored, {report.skipped} skipped / {report.total_rows} rows")
    if report.errors:
        print("  First errors (max 10):")
        for err in report.errors[:10]:
            print(f"    Row {err['row']}: {err['reason']}")
    for warning in report.warnings[:10]:
        print(f"    Warning: {warning}")


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="HarnessDB catalog and connector builder")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="run the API server (default)")

    imp = sub.add_parser("import", help="import a catalog CSV")
    imp.add_argument("kind", choices=["contacts", "arrangements", "wire_contacts"])
    imp.add_argument("path")
    imp.add_argument("--replace", action="store_true", help="overwrite existing rows")
    imp.add_argument("--type", dest="contact_type", choices=["Pin", "Socket"],
                     help="contact type for files without a Type column")

    sub.add_parser("derive-mappings", help="derive wire mappings from contact ranges")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if args.command == "import":
        from import_engine import run_import

        init_db(config.DB_URL)
        with open(args.path, "rb") as fh:
            report = run_import(args.kind, fh.read(),
                                replace_existing=args.replace,
                                contact_type=args.contact_type)
        _print_report(report)
        return 1 if report.skipped else 0

    if args.command == "derive-mappings":
        init_db(config.DB_URL)
        _derive_mappings()
        return 0

    print("=" * 56)
    print("  HarnessDB - Glenair Series 80 Builder")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    _seed_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
    return 0


if __name__ == "__main__":
    sys.exit(main())
