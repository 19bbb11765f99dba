"""
Script to export every resource listing to a timestamped JSON file
(exports/resources-<timestamp>.json by default).
"""
import argparse
import logging
import os
import sys

# Add project directory to path to import core
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
from core.config import SETTINGS, configure_logging
from core.resources import export_resources
from core.store import ResourceStore, StoreError

logger = logging.getLogger("export_resources")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--store", default=SETTINGS.store_path, help="Store file to read")
    parser.add_argument(
        "--out-dir",
        default=os.path.join(SETTINGS.DATA_DIR, "exports"),
        help="Directory for the export file",
    )
    args = parser.parse_args(argv)
    configure_logging()

    try:
        resources = ResourceStore(args.store).get_resources()
        path = export_resources(resources, args.out_dir)
    except (StoreError, OSError) as e:
        logger.error("Export failed: %s", e)
        return 1

    print(f"💾 Exported {len(resources)} resources to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
