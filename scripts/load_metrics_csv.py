#!/usr/bin/env python3
"""Load a CSV of metric rows into the metrics table for one tenant."""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from metricboard.core.logger import get_logger, init_logging, log_context, timeit
from metricboard.db import session_scope
from metricboard.models import Base
from metricboard.repositories import MetricsRepository
from metricboard.schemas.metrics import MetricRow

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--tenant", required=True, help="Tenant that owns the rows")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create the metrics table if it does not exist",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    init_logging()
    log_context.bind(tenant=args.tenant)

    with args.csv_path.open(newline="", encoding="utf-8") as f:
        rows = MetricRow.coerce_many(csv.DictReader(f))

    with timeit("Load metrics", logger=logger, unit="rows", total=len(rows)):
        with session_scope(args.database_url) as session:
            if args.create_tables:
                Base.metadata.create_all(session.get_bind())
            added = MetricsRepository(session).add(args.tenant, rows)

    logger.info("Loaded %d rows from %s", added, args.csv_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
