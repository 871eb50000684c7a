#!/usr/bin/env python3
"""Command line entry point for classifying station measurements."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .data.catalog import CatalogError, StationCatalog
from .services.classification import classify
from .services.insights import build_statistics_panel, classify_statistics_frame, summarize_tiers
from .services.stations import measurement_row, pollutant_dictionary
from .utils.logging import configure_logging

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="airsense",
        description="Classify air quality measurements against WHO 2021 guideline values.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: AIRSENSE_LOG_LEVEL or INFO).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    single = commands.add_parser("classify", help="Classify a single concentration.")
    single.add_argument("pollutant", help="Pollutant symbol, e.g. PM2.5.")
    single.add_argument("value", help="Measured concentration.")
    single.add_argument("hours", help="Exposure window in hours.")
    single.add_argument("--json", action="store_true", help="Print the result as JSON.")

    panel = commands.add_parser("panel", help="Print the statistics panel for a measurement.")
    panel.add_argument("station_id", type=int)
    panel.add_argument("year", type=int)
    panel.add_argument("exposure_id", type=int)
    panel.add_argument(
        "--data-root",
        type=Path,
        default=None,
        help="Directory with the catalog CSV files (default: AIRSENSE_DATA_ROOT).",
    )

    dictionary = commands.add_parser(
        "dictionary", help="Print the active pollutant dictionary entries as JSON."
    )
    dictionary.add_argument("--data-root", type=Path, default=None)

    report = commands.add_parser("report", help="Classify every measurement in the catalog.")
    report.add_argument("--data-root", type=Path, default=None)
    report.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the classified measurements to this CSV file.",
    )
    return parser.parse_args(argv)


def _run_classify(args: argparse.Namespace) -> int:
    result = classify(args.pollutant, args.value, args.hours)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"{result.tier.value} ({result.color}): {result.description}")
        if result.reference is not None:
            ref = result.reference
            print(
                f"Good <= {ref.good_limit:g}, Moderate <= {ref.moderate_limit:g} "
                f"({ref.exposure_hours}h, source: {ref.source})"
            )
    return 0


def _run_panel(args: argparse.Namespace) -> int:
    catalog = StationCatalog.from_directory(args.data_root)
    row = measurement_row(catalog, args.station_id, args.year, args.exposure_id)
    if row is None:
        print(
            f"No measurement for station {args.station_id}, year {args.year}, "
            f"exposure {args.exposure_id}",
            file=sys.stderr,
        )
        return 1
    print(json.dumps(build_statistics_panel(row), indent=2, default=str, allow_nan=False))
    return 0


def _run_report(args: argparse.Namespace) -> int:
    catalog = StationCatalog.from_directory(args.data_root)
    frame = catalog.measurements.merge(catalog.exposures, on="exposure_id", how="left")
    classified = classify_statistics_frame(frame)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        classified.to_csv(args.output, index=False)
        LOGGER.info("Classified measurements written to %s", args.output)
    print(json.dumps(summarize_tiers(classified), indent=2))
    return 0


def _run_dictionary(args: argparse.Namespace) -> int:
    catalog = StationCatalog.from_directory(args.data_root)
    print(json.dumps(pollutant_dictionary(catalog), indent=2, ensure_ascii=False, default=str))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
    except RuntimeError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    handlers = {
        "classify": _run_classify,
        "panel": _run_panel,
        "dictionary": _run_dictionary,
        "report": _run_report,
    }
    try:
        return handlers[args.command](args)
    except CatalogError as exc:
        print(f"Catalog error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
