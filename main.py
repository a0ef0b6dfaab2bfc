#!/usr/bin/env python3
"""
CATLOAD - Product catalog loader
================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging

from flask import Flask, jsonify

import config
from db import init_db, get_session, Product
from api import api_bp


def configure_logging() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)


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
    """Auto-load the seed CSV when the database is empty."""
    session = get_session()
    count = session.query(Product).count()
    session.close()

    if count > 0:
        print(f"\n  Database has {count} products.")
        return

    if not config.CSV_SEED_PATH.exists():
        print(f"\n  No seed CSV at {config.CSV_SEED_PATH} - starting empty.")
        return

    print(f"\n  Database empty → auto-loading {config.CSV_SEED_PATH.name} …")
    from loader.load_session import run_load

    with open(config.CSV_SEED_PATH, "rb") as fh:
        report = run_load(fh.read())

    summary = report.to_dict()
    print(f"  Done: {summary['loaded_count']} loaded, {summary['failed_count']} failed, "
          f"{len(summary['warnings'])} warnings / {summary['processed_count']} rows")
    for failure in report.failures[:10]:
        print(f"    Row {failure['row']}: {failure['error']}")


def main():
    configure_logging()

    print("=" * 56)
    print("  CATLOAD - Product catalog loader")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    _seed_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print(f"  Import: POST http://{config.HOST}:{config.PORT}/api/v1/import")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
