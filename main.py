#!/usr/bin/env python3
"""
PromoScanner - Cross-Vendor Price Comparison

Usage:
    python3 main.py compare output/results.csv
    python3 main.py compare output/results.json --out reports --workers 4
    python3 main.py compare output/results.csv --config matching.json --verbose
    python3 main.py categories
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from export_matches import (
    load_records,
    write_best_deals_csv,
    write_groups_csv,
    write_groups_json,
    write_records_csv,
)
from matching.config import load_config
from matching.groups import BEST_DEALS_LIMIT
from matching.pipeline import run_matching_pipeline
from standardization.category_classifier import CategoryClassifier, get_category_name

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


def cmd_compare(args) -> int:
    """Match records across vendors and write the reports."""
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load config: {e}")
        return 1

    try:
        records = load_records(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read input {args.input}: {e}")
        return 1

    result = run_matching_pipeline(records, config=config, max_workers=args.workers)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    write_groups_csv(result.groups, out_dir / 'smart_comparison.csv')
    deals = result.best_deals(args.best_deals)
    write_best_deals_csv(deals, out_dir / 'best_deals.csv')
    write_groups_json(result.groups, out_dir / 'comparison.json', stats=result.stats)
    if result.quote_only:
        write_records_csv(result.quote_only, out_dir / 'requires_quote.csv')

    cross_site = sum(1 for g in result.groups if g.site_count >= 2)
    logger.info(f"Comparison: {len(result.groups)} groups, {cross_site} on 2+ sites")
    if deals:
        top = deals[0]
        logger.info(
            f"Top difference: {top.price_difference:.2f} {top.currency} "
            f"({top.category}, {top.min_price_vendor} vs {top.max_price_vendor})"
        )
    return 0


def cmd_categories(args) -> int:
    """List taxonomy tags in matching order."""
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load config: {e}")
        return 1

    for tag in CategoryClassifier().tags:
        print(f"{tag:<20} {get_category_name(tag):<24} {config.threshold_for(tag):.2f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='PromoScanner cross-vendor price comparison')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write the log to this file'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='JSON file with matching config overrides'
    )

    sub = parser.add_subparsers(dest='command')

    compare = sub.add_parser('compare', help='Compare products across vendors')
    compare.add_argument('input', type=str, help='Crawler output (.csv or .json)')
    compare.add_argument('--out', type=str, default='output', help='Report directory')
    compare.add_argument('--workers', type=int, default=None, help='Threads for bucket clustering')
    compare.add_argument(
        '--best-deals',
        type=int,
        default=BEST_DEALS_LIMIT,
        help='Number of rows in best_deals.csv'
    )
    compare.set_defaults(func=cmd_compare)

    categories = sub.add_parser('categories', help='List product types')
    categories.set_defaults(func=cmd_categories)

    # Accept the global options after the subcommand too
    for p in (compare, categories):
        p.add_argument('--verbose', '-v', action='store_true', default=argparse.SUPPRESS)
        p.add_argument('--log-file', type=str, default=argparse.SUPPRESS)
        p.add_argument('--config', type=str, default=argparse.SUPPRESS)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.log_file:
        handler = logging.FileHandler(args.log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
