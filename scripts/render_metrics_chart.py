#!/usr/bin/env python3
"""Render chart payloads from a CSV export of metric rows.

The CSV needs ``metric_name``, ``metric_date`` and ``metric_value`` columns
(camel-cased headers are accepted as well).
"""
from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path
from typing import Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from metricboard.core.formatting import humanize_number
from metricboard.core.logger import get_logger, init_logging, timeit
from metricboard.schemas.metrics import MetricRow
from metricboard.services import ChartGenerator, DuplicatePolicy

logger = get_logger(__name__)


def read_rows(path: Path) -> list[MetricRow]:
    with path.open(newline="", encoding="utf-8") as f:
        return MetricRow.coerce_many(csv.DictReader(f))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("csv_path", type=Path, help="CSV file with metric rows")
    parser.add_argument(
        "--shape",
        choices=("data", "chart"),
        default="chart",
        help="Emit the generic {labels, datasets} payload or the area chart config",
    )
    parser.add_argument(
        "--metric",
        action="append",
        dest="metrics",
        help="Metric to plot (repeatable, chart shape only)",
    )
    parser.add_argument(
        "--frontend",
        action="store_true",
        help="Inline the JS formatter callbacks (chart shape only)",
    )
    parser.add_argument(
        "--reject-duplicates",
        action="store_true",
        help="Fail when a metric has two rows for the same day",
    )
    parser.add_argument("--summary", action="store_true", help="Log per-metric totals")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def log_summary(generator: ChartGenerator, rows: list[MetricRow]) -> None:
    data = generator.format_metrics_data(rows)
    for dataset in data.datasets:
        logger.info(
            "%s: total %s across %d dates",
            dataset.name,
            humanize_number(sum(dataset.data)),
            len(data.labels),
        )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    init_logging(level=args.log_level, log_dir=None)

    if not args.csv_path.exists():
        logger.error("CSV file %s does not exist", args.csv_path)
        return 1

    generator = ChartGenerator()
    if args.reject_duplicates:
        generator.duplicate_policy = DuplicatePolicy.REJECT

    with timeit(f"Render {args.shape} from {args.csv_path.name}", logger=logger, unit="rows") as timer:
        rows = read_rows(args.csv_path)
        timer.set_total(len(rows))
        if args.shape == "data":
            output = generator.format_metrics_data(rows).model_dump_json(indent=2)
        else:
            config = generator.create_area_chart_config(rows, args.metrics)
            if args.frontend:
                output = generator.format_for_frontend(config)
            else:
                output = json.dumps(config, indent=2)

    if args.summary:
        log_summary(generator, rows)

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
