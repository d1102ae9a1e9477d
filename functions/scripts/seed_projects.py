"""
Create the portfolio tables and load the initial project catalogue.

Runs against whatever DATABASE_URL the service is configured with; does
nothing when the projects table already has rows.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio_api.dependencies import get_db_client
from portfolio_api.errors import PortfolioApiError
from portfolio_api.seed import INITIAL_PROJECTS, seed_projects

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Seed the portfolio projects table"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the projects that would be inserted without touching the database",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    if args.dry_run:
        for project in INITIAL_PROJECTS:
            logger.info("Would seed: %s", project["title"])
        return 0

    try:
        db = get_db_client()
        seeded = seed_projects(db)
    except PortfolioApiError as exc:
        logger.error("Seeding failed: %s", exc)
        return 1

    if not seeded:
        logger.info("Projects already seeded")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
