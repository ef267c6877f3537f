# main.py

import argparse
import sys
from typing import List, Optional

from src.bootstrap import build_services, select_search
from src.config import SEARCH_STRATEGIES, Settings
from src.domain.errors import DataAccessError, InvalidArgumentError
from src.interface.cli import (
    display_error,
    display_results,
    display_sync_status,
    display_welcome_banner,
)


def parse_args(argv: Optional[List[str]], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync podcast episodes into the search index, then run one query."
    )
    parser.add_argument("--query", default=settings.demo_query, help="search term")
    parser.add_argument(
        "--strategy",
        choices=SEARCH_STRATEGIES,
        default=settings.search_strategy,
        help="search strategy",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or Settings.from_env()
    args = parse_args(argv, settings)

    display_welcome_banner()

    try:
        services = build_services(settings)

        # ── 1. Ingestion: completes (or fails) before any query ──────────────
        services.sync_service.sync()
        display_sync_status(services.index_store.count())

        # ── 2. One query through the selected strategy ───────────────────────
        search = select_search(services, args.strategy)
        results = search.find(args.query)
        display_results(args.query, args.strategy, results)

    except (DataAccessError, InvalidArgumentError) as error:
        display_error(str(error))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
