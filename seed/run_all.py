"""
Main seed runner script.
This script reconciles the schema and then runs all seeding operations.

Usage:
    python -m seed.run_all
    python -m seed.run_all --force
"""

import argparse

from services.schema_reconciler import SchemaReconciler
from utils.database import get_engine

from .content_seed import seed_content


def run_all_seeds(force: bool = False):
    """Run all seed operations."""
    print("=" * 60)
    print("STARTING ALL SEEDING OPERATIONS")
    print("=" * 60)
    print()

    engine = get_engine()
    SchemaReconciler(engine).run()

    seed_content(force=force, engine=engine)

    print()
    print("=" * 60)
    print("ALL SEEDING OPERATIONS COMPLETED")
    print("=" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed default site content")
    parser.add_argument("--force", action="store_true", help="Overwrite existing content")
    args = parser.parse_args()
    run_all_seeds(force=args.force)
