"""
Report generation script.

Loads CSV extracts from one directory per vertical into an in-memory store
and prints the plain-text analysis report.

Usage:
    python scripts/generate_report.py --enrollment data/enrollment \
        --demographic data/demographic --biometric data/biometric
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.csv_ingestion import IngestionError, load_csv_file
from aadhaar_dashboard.services.report_builder import build_report, render_report_text
from aadhaar_dashboard.store import RecordStore

# Setup logging
logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


def load_directory(store: RecordStore, vertical: Vertical, csv_dir: str) -> int:
    """Load every CSV file in a directory into the store."""
    if not os.path.isdir(csv_dir):
        logger.warning(f"Directory not found: {csv_dir}")
        return 0

    csv_files = sorted(Path(csv_dir).glob("*.csv"))
    if not csv_files:
        logger.warning(f"No CSV files found in {csv_dir}")
        return 0

    total_records = 0
    for csv_file in tqdm(csv_files, desc=f"{vertical.value:>11}"):
        try:
            records = load_csv_file(vertical, csv_file)
        except IngestionError as e:
            logger.error(f"  Error processing {csv_file}: {e}")
            continue
        total_records += store.append(vertical, records, source=csv_file.name)

    logger.info(f"Loaded {total_records:,} {vertical.value} records")
    return total_records


def main():
    parser = argparse.ArgumentParser(description="Generate the Aadhaar analytics report")
    parser.add_argument("--enrollment", help="Directory of enrollment CSV files")
    parser.add_argument("--demographic", help="Directory of demographic update CSV files")
    parser.add_argument("--biometric", help="Directory of biometric update CSV files")
    args = parser.parse_args()

    store = RecordStore()
    for vertical in Vertical:
        csv_dir = getattr(args, vertical.value)
        if csv_dir:
            load_directory(store, vertical, csv_dir)

    records = store.snapshot()
    if not records.has_data:
        logger.error("No records loaded, nothing to report")
        sys.exit(1)

    print(render_report_text(build_report(records)))


if __name__ == "__main__":
    main()
