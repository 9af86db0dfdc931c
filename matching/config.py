"""
Matching Configuration

Central configuration for the cross-vendor matcher. All constants were
tuned by hand against real vendor listings; override them with a JSON
file rather than editing code.

Example override file:
    {
        "price_ratio_limit": "4",
        "type_thresholds": {"kalem": 0.6},
        "max_cluster_size": 30
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'PROMOSCANNER_CONFIG'


# Small, cheap items have many near-identical variants → stricter.
# Bulky textiles and bags vary a lot in naming → looser.
DEFAULT_TYPE_THRESHOLDS: Mapping[str, float] = MappingProxyType({
    'kalem': 0.55,
    'kalem_seti': 0.55,
    'kalemtras': 0.50,
    'anahtarlik': 0.55,
    'rozet': 0.55,
    'cakmak': 0.55,
    'usb': 0.50,
    'kablo': 0.50,
    'powerbank': 0.45,
    'powerbank_defter': 0.45,
    'kablosuz_sarj': 0.45,
    'kupa': 0.45,
    'bardak': 0.45,
    'termos': 0.45,
    'defter': 0.45,
    'takvim': 0.40,
    'canta': 0.40,
    'tisort': 0.40,
    'sapka': 0.40,
    'semsiye': 0.40,
})


@dataclass(frozen=True)
class MatchingConfig:
    """Tunable constants of the matching core."""

    # Record selection
    min_name_length: int = 5

    # Similarity gates
    price_ratio_limit: Decimal = Decimal('5')
    volume_size_tolerance: Decimal = Decimal('1.15')
    size_tolerance: Decimal = Decimal('1.25')

    # Similarity adjustments
    material_conflict_penalty: float = 0.40
    premium_mismatch_penalty: float = 0.60
    feature_bonus: float = 0.03

    # Clustering
    default_threshold: float = 0.45
    type_thresholds: Mapping[str, float] = field(default_factory=lambda: DEFAULT_TYPE_THRESHOLDS)
    max_cluster_size: int = 50

    # Numerics
    epsilon: Decimal = Decimal('0.000001')

    # Parallel bucket clustering (1 = sequential)
    max_workers: int = 1

    def threshold_for(self, product_type: Optional[str]) -> float:
        """Similarity threshold for a product-type bucket."""
        return self.type_thresholds.get(product_type, self.default_threshold)

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["MatchingConfig"] = None) -> "MatchingConfig":
        """
        Build a config from overrides layered on `base` (defaults if None).

        Per-type thresholds are merged over the base thresholds.

        Raises:
            ValueError: unknown key or value of the wrong shape
        """
        base = base or cls()
        known = {f.name: f for f in fields(cls)}
        changes = {}

        for key, value in data.items():
            if key not in known:
                raise ValueError(f"Unknown matching config key: {key}")
            current = getattr(base, key)
            try:
                if isinstance(current, Decimal):
                    changes[key] = Decimal(str(value))
                elif isinstance(current, Mapping):
                    merged = dict(current)
                    merged.update({str(k): float(v) for k, v in dict(value).items()})
                    changes[key] = MappingProxyType(merged)
                elif isinstance(current, int):
                    changes[key] = int(value)
                else:
                    changes[key] = float(value)
            except (TypeError, ValueError, ArithmeticError) as e:
                raise ValueError(f"Invalid value for {key}: {value!r}") from e

        config = replace(base, **changes)
        if config.max_cluster_size < 1:
            raise ValueError("max_cluster_size must be at least 1")
        if config.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        return config


default_config = MatchingConfig()


def load_config(path: Optional[Union[str, Path]] = None) -> MatchingConfig:
    """
    Load a config override file.

    Falls back to $PROMOSCANNER_CONFIG, then to the built-in defaults.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return default_config

    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    config = MatchingConfig.from_dict(data)
    logger.info(f"Loaded matching config from {path}")
    return config
