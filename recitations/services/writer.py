import logging
from datetime import date
from pathlib import Path

from recitations.schemas.report import DailyReport

logger = logging.getLogger(__name__)


def report_filename(report_date: date) -> str:
    return f"data-{report_date.strftime('%d-%m-%Y')}.json"


def write_report(report: DailyReport, output_dir: Path, report_date: date) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / report_filename(report_date)
    # same-day reruns overwrite
    path.write_text(report.to_json(), encoding="utf-8")

    logger.info("Report written to %s", path)
    return path
