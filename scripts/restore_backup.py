"""
Restore the local store from the backup sheet without going through the API.

Usage:
    python -m scripts.restore_backup                 # restore the current profile name
    python -m scripts.restore_backup --name "Alice"  # restore rows saved under another name
    python -m scripts.restore_backup --show          # print the local profile and exit
"""

import argparse
import asyncio
import logging
import os
import sys

# Make ecomission package importable when run from scripts/ or repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecomission.backup.service import BackupService
from ecomission.core.config import get_settings
from ecomission.core.logging_config import setup_logging
from ecomission.core.storage import create_backend
from ecomission.core.store import LocalStore
from ecomission.gamification.rules import calculate_streak

logger = logging.getLogger("restore_backup")


def show(store: LocalStore) -> None:
    user = store.load_user()
    logs = store.load_logs()
    print(f"Name:      {user.name}")
    print(f"Points:    {user.points} (lifetime {user.lifetime_points})")
    print(f"Stage:     {user.stage}")
    print(f"Missions:  {user.total_missions_completed} ({len(logs)} logged)")
    print(f"Streak:    {calculate_streak(logs)} days")


async def restore(store: LocalStore, name: str) -> int:
    service = BackupService(store, get_settings())
    if not service.is_configured:
        logger.error("BACKUP_SHEET_URL is not set")
        return 1

    result = await service.restore(name)
    print(result.message)
    if result.success and result.data:
        show(store)
    return 0 if result.success else 1


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Restore missions and points from the backup sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--name",
        type=str,
        help="Name whose rows to restore (defaults to the local profile name)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the local profile and exit",
    )

    args = parser.parse_args()
    setup_logging()

    store = LocalStore(create_backend(get_settings()))
    if args.show:
        show(store)
        return 0

    name = args.name or store.load_user().name
    print(f"Restoring backup rows for '{name}' (this overwrites local history)...")
    return asyncio.run(restore(store, name))


if __name__ == "__main__":
    sys.exit(main())
