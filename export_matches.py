#!/usr/bin/env python3
"""
Load crawler output and export comparison groups.

Reports use the column layout of the crawler's spreadsheets:
semicolon-delimited, UTF-8 with BOM, so they open cleanly in Excel
with a Turkish locale.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from matching.groups import ComparisonGroup
from standardization.schema import ProductRecord

logger = logging.getLogger(__name__)

CSV_DELIMITER = ';'
CSV_ENCODING = 'utf-8-sig'

GROUP_COLUMNS = [
    'Category', 'Capacity', 'KeyFeatures', 'ProductCount', 'SiteCount',
    'MinPrice', 'MinPriceStore', 'MinPriceUrl', 'MinPriceMinQty', 'MinPriceTotalCost',
    'MaxPrice', 'MaxPriceStore', 'MaxPriceUrl', 'MaxPriceMinQty', 'MaxPriceTotalCost',
    'PriceDifference', 'AvgPrice', 'MinOrderQty', 'SiteCostBreakdown',
    'AllProductNames', 'AllStores', 'AllUrls',
]

RECORD_COLUMNS = ['Store', 'ProductName', 'Price', 'Currency', 'Url', 'MinOrderQty', 'RequiresQuote', 'Category']

PathLike = Union[str, Path]


# === Loading ===

def load_records(path: PathLike) -> List[ProductRecord]:
    """
    Load crawler records from a .json or .csv file.

    JSON may be a list of objects or {"records": [...]}. CSV may be
    delimited with ';' or ','.

    Raises:
        OSError: file cannot be read
        ValueError: content cannot be parsed
    """
    path = Path(path)
    if path.suffix.lower() == '.json':
        rows = _load_json_rows(path)
    else:
        rows = _load_csv_rows(path)

    records = [ProductRecord.from_dict(row) for row in rows]
    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def _load_json_rows(path: Path) -> List[Dict[str, Any]]:
    with open(path, 'r', encoding='utf-8-sig') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get('records')
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise ValueError(f"{path}: expected a list of record objects")
    return data


def _load_csv_rows(path: Path) -> List[Dict[str, Any]]:
    with open(path, 'r', encoding=CSV_ENCODING, newline='') as f:
        header = f.readline()
        f.seek(0)
        # Crawler files use ';'; hand-made exports often use ','
        delimiter = CSV_DELIMITER if header.count(';') >= header.count(',') else ','
        reader = csv.DictReader(f, delimiter=delimiter)
        if not reader.fieldnames:
            raise ValueError(f"{path}: missing CSV header")
        return list(reader)


# === Export ===

def _fmt(value) -> str:
    return f"{value:.2f}"


def group_row(group: ComparisonGroup) -> Dict[str, Any]:
    """Flatten a group into one report row."""
    return {
        'Category': group.category,
        'Capacity': group.size,
        'KeyFeatures': group.key_features,
        'ProductCount': group.product_count,
        'SiteCount': group.site_count,
        'MinPrice': _fmt(group.min_price),
        'MinPriceStore': group.min_price_vendor,
        'MinPriceUrl': group.min_price_url,
        'MinPriceMinQty': group.min_price_order_qty,
        'MinPriceTotalCost': _fmt(group.min_price_total_cost),
        'MaxPrice': _fmt(group.max_price),
        'MaxPriceStore': group.max_price_vendor,
        'MaxPriceUrl': group.max_price_url,
        'MaxPriceMinQty': group.max_price_order_qty,
        'MaxPriceTotalCost': _fmt(group.max_price_total_cost),
        'PriceDifference': _fmt(group.price_difference),
        'AvgPrice': _fmt(group.avg_price),
        'MinOrderQty': group.min_order_qty,
        'SiteCostBreakdown': group.cost_breakdown,
        'AllProductNames': ' | '.join(group.product_names),
        'AllStores': ', '.join(group.vendors),
        'AllUrls': ' | '.join(group.urls),
    }


def _write_csv(path: Path, columns: List[str], rows: Iterable[Dict[str, Any]]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, 'w', encoding=CSV_ENCODING, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=columns, delimiter=CSV_DELIMITER)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
            count += 1
    return count


def write_groups_csv(groups: Iterable[ComparisonGroup], path: PathLike) -> int:
    """Write the comparison report. Returns the number of rows."""
    count = _write_csv(Path(path), GROUP_COLUMNS, (group_row(g) for g in groups))
    logger.info(f"Wrote {count} groups to {path}")
    return count


def write_best_deals_csv(deals: Iterable[ComparisonGroup], path: PathLike) -> int:
    count = _write_csv(Path(path), GROUP_COLUMNS, (group_row(g) for g in deals))
    logger.info(f"Wrote {count} best deals to {path}")
    return count


def write_records_csv(records: Iterable[ProductRecord], path: PathLike) -> int:
    """Write raw records (used for quote-only listings)."""
    rows = (
        {
            'Store': r.vendor,
            'ProductName': r.name,
            'Price': '' if r.price is None else _fmt(r.price),
            'Currency': r.currency,
            'Url': r.url,
            'MinOrderQty': r.min_order_qty,
            'RequiresQuote': r.requires_quote,
            'Category': r.category,
        }
        for r in records
    )
    count = _write_csv(Path(path), RECORD_COLUMNS, rows)
    logger.info(f"Wrote {count} records to {path}")
    return count


def write_groups_json(
    groups: Iterable[ComparisonGroup],
    path: PathLike,
    stats: Dict[str, Any] = None,
) -> int:
    """Write groups (and optional run stats) as JSON for the frontend."""
    output = [g.to_dict() for g in groups]
    payload = {'stats': stats or {}, 'groups': output}

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    logger.info(f"Exported {len(output)} groups to {path}")
    return len(output)
