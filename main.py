import argparse
import sys
import time
from pathlib import Path

from PyPDF2 import PdfReader
from loguru import logger

import bujo_planner.settings as settings
from bujo_planner.config import load_collections, load_dates_config
from bujo_planner.dates import WEEK_STARTS
from bujo_planner.fonts import init_fonts
from bujo_planner.generator import generate_planner
from bujo_planner.logger import configure_logging
from bujo_planner.themes import available_themes
from bujo_planner.utils import parse_year


def _year_arg(value: str) -> int:
    try:
        return parse_year(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a bullet-journal planner PDF.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser("generate", help="Generate the planner for one year.")
    gen.add_argument("year", nargs="?", type=_year_arg, default=None,
                     help="Year to generate, e.g. 2025 (default: current year)")
    gen.add_argument("--theme", choices=available_themes(), default=settings.THEME,
                     help="Color theme (default: %(default)s)")
    gen.add_argument("--output", type=Path, default=None,
                     help="Output PDF path (default: planner_<year>.pdf in PLANNER_OUTPUT_DIR)")
    gen.add_argument("--week-start", choices=sorted(WEEK_STARTS), default=settings.WEEK_START,
                     help="First day of the week in the daily strip and calendars (default: %(default)s)")
    gen.add_argument("--dates", type=Path, default=settings.DATES_PATH,
                     help="Highlighted dates YAML (default: %(default)s)")
    gen.add_argument("--collections", type=Path, default=settings.COLLECTIONS_PATH,
                     help="Collections YAML (default: %(default)s)")
    gen.add_argument("--verbose", action="store_true", help="Enable logging of debug messages")
    gen.add_argument("--log-file", type=Path, default=None,
                     help="Also write logs, with tracebacks, to this file")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # 0) Set up logs
    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        log_file=str(args.log_file) if args.log_file else None,
    )

    year = args.year if args.year is not None else parse_year(None)
    output = args.output or settings.OUTPUT_DIR / f"planner_{year}.pdf"
    started = time.perf_counter()

    try:
        # 1) Fonts, then the optional YAML data
        fonts = init_fonts()
        dates_config = load_dates_config(args.dates, year)
        collections = load_collections(args.collections)

        # 2) Render and save
        generate_planner(
            year,
            output,
            theme=args.theme,
            dates_config=dates_config,
            collections=collections,
            fonts=fonts,
            first_day=args.week_start,
        )

        # 3) Read the page count back from the written file
        pages = len(PdfReader(str(output)).pages)
    except Exception:
        logger.exception("Planner generation failed for {}", year)
        return 1

    logger.info("✅ Generated {} ({} pages) in {:.2f}s", output, pages, time.perf_counter() - started)
    return 0


if __name__ == '__main__':
    sys.exit(main())
