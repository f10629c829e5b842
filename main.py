"""
Ward Shift Schedule Exporter

Exports the published (or draft) monthly shift schedule of the ward
to a formatted Excel workbook.
"""

import argparse
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from config.config_manager import ConfigManager
from infrastructure.logger import set_log_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export the monthly shift schedule to Excel.")
    parser.add_argument("year", type=int, help="Year, e.g. 2025")
    parser.add_argument("month", type=int, choices=range(1, 13), metavar="MONTH", help="Month (1-12)")
    parser.add_argument("--draft", action="store_true", help="Export the draft instead of the published schedule")
    parser.add_argument("--output", type=Path, help="Output directory (default: configured export_dir)")
    parser.add_argument("--config", type=Path, help="Path of config.json")
    return parser


def main(argv=None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    config = config_manager.load()
    set_log_file(config.paths.log_file)

    # Imported after the log file is set so module loggers pick it up
    from application.data_service import DataService
    from application.report_service import ScheduleReportService
    from domain.staff_roster import StaffRoster
    from infrastructure.document_store import JsonFileDocumentStore
    from infrastructure.logger import get_logger

    logger = get_logger("Main")
    project_root = Path(__file__).parent

    roster = StaffRoster.load_from_csv(Path(config.paths.roster_csv)) if config.paths.roster_csv else StaffRoster()
    store_dir = Path(config.paths.store_dir) if config.paths.store_dir else project_root / "data"
    data_service = DataService(JsonFileDocumentStore(store_dir))

    if args.draft:
        draft = data_service.load_schedule_draft()
        if draft is None:
            logger.error(f"No schedule draft found in {store_dir}")
            return 1
        schedule, custom_holidays, published_at = draft.schedule, draft.custom_holidays, None
    else:
        published = data_service.load_published()
        if published is None:
            logger.error(f"No published schedule found in {store_dir}")
            return 1
        schedule, custom_holidays = published.schedule, published.custom_holidays
        published_at = published.published_at

    service = ScheduleReportService.from_config(config, roster)
    report = service.build_monthly_report(
        args.year, args.month, schedule, custom_holidays, published_at
    )

    output_dir = args.output or (Path(config.paths.export_dir) if config.paths.export_dir else project_root)
    result = service.export_excel(report, output_dir, config.output_settings.filename_pattern)
    if not result.success:
        logger.error(f"Export failed: {result.error_message}")
        return 1

    print(result.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
