"""
Write the seed collections to the configured storage backend.

Collections that already hold data are left alone unless ``--reset`` is
given; the persisted session is only cleared with ``--logout``.

Usage:
    python -m scripts.seed_dashboard [--reset] [--logout]
"""
import argparse
import logging
import os
import sys

# Add parent directory to path to import dashboard modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dashboard.auth.session import SESSION_STORAGE_KEY
from dashboard.config import get_settings
from dashboard.infra.storage import create_storage
from dashboard.stores.entities import build_stores

logger = logging.getLogger("dashboard.seed")


def seed(reset: bool = False, logout: bool = False) -> dict[str, int]:
    settings = get_settings()
    storage = create_storage(settings)
    try:
        stores = build_stores(storage)
        for name, store in stores.items():
            if reset:
                store.reseed()
                logger.info("Reseeded collection kind=%s records=%d", name, store.count())
            else:
                logger.info("Collection ready kind=%s records=%d", name, store.count())

        if logout:
            storage.remove_item(SESSION_STORAGE_KEY)
            logger.info("Cleared persisted session")

        return {name: store.count() for name, store in stores.items()}
    finally:
        storage.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the admin dashboard storage")
    parser.add_argument("--reset", action="store_true", help="overwrite existing collections with the seed data")
    parser.add_argument("--logout", action="store_true", help="remove the persisted session")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    counts = seed(reset=args.reset, logout=args.logout)
    print("\n=== Seed summary ===")
    for name, count in counts.items():
        print(f"  {name}: {count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
