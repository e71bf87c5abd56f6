#!/usr/bin/env python3
"""
Prepare the translation store.

The store keeps one hash per translated field (so later syncs skip unchanged
text) and the stored language variants served by the sync API. Run once
before the first sync, or with --reset to forget every stored hash.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from data.database import DatabaseManager
from data.db_models import Base


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Create the tables of the translation store'
    )
    parser.add_argument(
        '--database-url',
        default=None,
        help=f'Store URL (default: {settings.database_url})'
    )
    parser.add_argument(
        '--reset',
        '--drop-existing',
        dest='reset',
        action='store_true',
        help='Drop stored hashes and document variants first; the next sync retranslates everything'
    )
    parser.add_argument(
        '--yes',
        action='store_true',
        help='Do not ask for confirmation with --reset'
    )
    args = parser.parse_args(argv)

    db_manager = DatabaseManager(args.database_url)
    print(f"Translation store: {db_manager.database_url}")

    if args.reset:
        confirmed = args.yes or input(
            "⚠️  Forget all stored translation hashes and document variants? (yes/no): "
        ).lower() == 'yes'
        if not confirmed:
            print("Aborted.")
            return
        db_manager.drop_tables()
        print("✗ Existing tables dropped")

    db_manager.create_tables()
    print(f"✓ Tables ready: {', '.join(sorted(Base.metadata.tables))}")
    print()
    print("Next steps:")
    print("  uvicorn serving.sync_api:sync_app --port 8002")
    print("  python sync_document.py proposal.json --target-language si")


if __name__ == '__main__':
    main()
