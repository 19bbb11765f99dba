"""
Script to rewrite legacy region names ("Central", "Western") on stored
listings. Use --dry-run to list what would change.
"""
import argparse
import logging
import os
import sys

# Add project directory to path to import core
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
from core.config import SETTINGS, configure_logging
from core.resources import rename_regions
from core.store import ResourceStore, StoreError

logger = logging.getLogger("update_region_names")


def update_region_names(store: ResourceStore, dry_run: bool = False) -> int:
    """
    Apply rename_regions() to every listing.

    Returns:
        Number of listings that needed changes
    """
    changed = 0
    for resource in store.get_resources():
        updates = rename_regions(resource)
        if not updates:
            continue
        changed += 1
        logger.info("%s %s: %s", "Would update" if dry_run else "Updating",
                    resource.get("name") or resource["id"], ", ".join(sorted(updates)))
        if not dry_run:
            store.update_resource(resource["id"], updates)
    return changed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--store", default=SETTINGS.store_path, help="Store file to update")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing")
    args = parser.parse_args(argv)
    configure_logging()

    try:
        changed = update_region_names(ResourceStore(args.store), dry_run=args.dry_run)
    except StoreError as e:
        logger.error("Update failed: %s", e)
        return 1

    print(f"✅ {changed} listing(s) {'need updating' if args.dry_run else 'updated'}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
