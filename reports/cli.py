from __future__ import annotations

import argparse
import logging
from pathlib import Path

from backend.config import Settings, configure_logging
from backend.connection import BackendClient
from backend.exceptions import BackendError
from backend.manager import BackendManager
from reports.builder import build_performance_report
from reports.csv_export import export_rounds_csv
from reports.pdf import render_performance_report

logger = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(
        description="Generate a PDF performance report and a CSV of rounds from the golf backend."
    )
    parser.add_argument("--token", required=True, help="Bearer token of the player")
    parser.add_argument("--player", default="Golfer", help="Player name printed on the report")
    parser.add_argument("--handicap", type=float, default=None, help="Current handicap index")
    parser.add_argument(
        "--outdir",
        default="reports/output",
        help="Directory where performance_report.pdf and rounds.csv are written",
    )
    parser.add_argument("--no-csv", action="store_true", help="Skip the CSV export")
    parser.add_argument(
        "--no-insights", action="store_true", help="Skip the backend analysis of the latest round"
    )
    parser.add_argument(
        "--base-url",
        default=settings.backend_url,
        help="Backend URL. Defaults to GOLF_BACKEND_URL.",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)
    args.timeout = settings.timeout
    args.retries = settings.retries
    return args


def main(argv=None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    client = BackendClient()
    client.initialize(args.base_url, timeout=args.timeout, retries=args.retries)
    manager = BackendManager.with_token(client, args.token)
    try:
        rounds = manager.rounds.get_rounds()
        report = build_performance_report(
            manager, args.player, handicap=args.handicap, rounds=rounds,
            with_insights=not args.no_insights,
        )
    except BackendError as e:
        logger.error("Could not load data from %s: %s", args.base_url, e)
        return 1
    finally:
        client.close()

    if report.summary is None:
        print("No rounds recorded yet; the report only contains player and goal details.")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    pdf_path = outdir / "performance_report.pdf"
    render_performance_report(report, str(pdf_path))
    written.append(pdf_path)

    if not args.no_csv:
        csv_path = outdir / "rounds.csv"
        csv_path.write_text(export_rounds_csv(rounds), encoding="utf-8")
        written.append(csv_path)

    print(f"Generated {len(written)} file(s) for {report.player_name}:")
    for path in written:
        print(path.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
