#!/usr/bin/env python3
"""
Seed the product catalogue and FAQ list with the canonical sample data.

Usage:
  python scripts/init_data.py [--force]
"""
from __future__ import annotations

import argparse
import sys

from jarvis_api.core.config import get_settings
from jarvis_api.core.log import configure_logging
from jarvis_api.db.create_tables import create_all
from jarvis_api.repositories.sql_repository import StorageError
from jarvis_api.services.seed_service import SeedInProgressError, SeedService


def main() -> None:
    ap = argparse.ArgumentParser(description="Initialize sample products and FAQs")
    ap.add_argument(
        "--force",
        action="store_true",
        help="delete existing products and FAQs before inserting the sample set",
    )
    args = ap.parse_args()

    configure_logging(get_settings().log_level)
    create_all()
    try:
        result = SeedService().initialize(force=args.force)
    except SeedInProgressError as exc:
        raise SystemExit(str(exc))
    print(f"OK: {result.message}")
    if result.created:
        print(f"  Products: {result.products}")
        print(f"  FAQs: {result.faqs}")


if __name__ == "__main__":
    try:
        main()
    except StorageError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
