import argparse
import logging
import sys
from typing import Optional, Sequence

from pymongo import MongoClient

from recitations.core.config import load_settings
from recitations.core.errors import ConfigurationError, DatabaseConnectionError
from recitations.db.session import get_db
from recitations.services.report import build_report
from recitations.services.store import RecitationStore
from recitations.services.window import resolve_window
from recitations.services.writer import write_report

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recitation-report",
        description="Write the daily Quran recitation report as JSON.",
    )
    parser.add_argument(
        "--days-ago",
        type=int,
        default=None,
        help="report on the day this many days before today (default: DAYS_AGO_TO_REPORT)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="directory for data-DD-MM-YYYY.json (default: REPORT_OUTPUT_DIR)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, client_factory=MongoClient) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        settings = load_settings(
            days_ago_to_report=args.days_ago,
            report_output_dir=args.output_dir,
        )
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    window = resolve_window(settings.days_ago_to_report, settings.tz)

    try:
        with get_db(settings, client_factory=client_factory) as db:
            report = build_report(
                RecitationStore(db), window, max_workers=settings.report_max_workers
            )
    except DatabaseConnectionError:
        return 1

    write_report(report, settings.report_output_dir, window.report_date)
    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
