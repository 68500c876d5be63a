#!/usr/bin/env python3
"""run_pipeline.py

Seller report pipeline script:
- loads the sales bundle (sellers, products, purchase_records) from JSON
- builds the seller performance report with the default calculators
- saves the leaderboard as CSV ('seller_performance_report.csv')
- saves the full report, top products included, as JSON ('seller_performance_report.json')

Usage:
    python run_pipeline.py --data_json sample_data.json --output_dir .

This script is safe to run on a schedule (cron, GitHub Actions, etc.).
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from sales_report import (
    InvalidInput,
    analyze_sales_data,
    default_options,
    report_to_frame,
)

PROJ = Path(__file__).resolve().parent

REPORT_CSV = 'seller_performance_report.csv'
REPORT_JSON = 'seller_performance_report.json'

logger = logging.getLogger(__name__)


def load_bundle(path):
    with open(path, encoding='utf-8') as fh:
        bundle = json.load(fh)
    logger.info('Loaded %s', path)
    return bundle


def write_outputs(rows, output_dir):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_path = output_dir / REPORT_CSV
    report_to_frame(rows).to_csv(csv_path, index=False)
    print(f'Saved {REPORT_CSV}')

    json_path = output_dir / REPORT_JSON
    with open(json_path, 'w', encoding='utf-8') as fh:
        json.dump([row.to_dict() for row in rows], fh, ensure_ascii=False, indent=2)
    print(f'Saved {REPORT_JSON}')
    return csv_path, json_path


def main(data_json, output_dir):
    bundle = load_bundle(data_json)
    rows = analyze_sales_data(bundle, default_options())
    return write_outputs(rows, output_dir)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    parser = argparse.ArgumentParser()
    parser.add_argument('--data_json', default=str(PROJ / 'sample_data.json'))
    parser.add_argument('--output_dir', default=str(PROJ))
    args = parser.parse_args()
    try:
        main(args.data_json, args.output_dir)
    except InvalidInput as e:
        logger.error('Cannot build report: %s', e)
        sys.exit(1)
