"""
Configuration loader for the name pool service.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv

from namepool.config.regions import REGION_NAMES
from namepool.config.schemas import validate_schema, COMMON_SCHEMA, REGIONS_SCHEMA
from namepool.ingest.pool_builder import REGION_POOL_CAPACITY, RECENCY_WINDOW, WEIGHT_EXPONENT
from namepool.ingest.record_parser import NAME_FIELD_ORDER, SCORE_FIELD_ORDER
from namepool.sampling.name_resolver import SYNTHETIC_NAME_PREFIX

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Unified configuration object for pool building and name generation.
    """
    # Data sources
    data_path: Path = Path("./data/result.csv")
    data_url: Optional[str] = None

    # Random source; None follows the process-wide generator
    seed: Optional[int] = None

    # Pool building
    region_capacity: int = REGION_POOL_CAPACITY
    recency_window: int = RECENCY_WINDOW
    weight_exponent: float = WEIGHT_EXPONENT

    # Field lookup orders
    name_fields: List[int] = field(default_factory=lambda: list(NAME_FIELD_ORDER))
    score_fields: List[int] = field(default_factory=lambda: list(SCORE_FIELD_ORDER))

    # Regions
    region_names: List[str] = field(default_factory=lambda: list(REGION_NAMES))
    external_region_names: Optional[List[str]] = None

    synthetic_prefix: str = SYNTHETIC_NAME_PREFIX

    # Output control
    verbose: bool = False

    # Raw config data
    common_config: dict = field(default_factory=dict)


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def apply_env_overrides(config: Config) -> Config:
    """
    Apply NAMEPOOL_* environment variables (and a local .env file) on top
    of a Config.

    Args:
        config: Config to update in place

    Returns:
        The same Config
    """
    load_dotenv()

    seed = _env_int("NAMEPOOL_SEED")
    if seed is not None:
        config.seed = seed
    if os.getenv("NAMEPOOL_DATA_PATH"):
        config.data_path = Path(os.getenv("NAMEPOOL_DATA_PATH"))
    if os.getenv("NAMEPOOL_DATA_URL"):
        config.data_url = os.getenv("NAMEPOOL_DATA_URL")
    if os.getenv("NAMEPOOL_VERBOSE", "").lower() in ("1", "true", "yes"):
        config.verbose = True
    return config


class ConfigLoader:
    """
    Loads and validates configuration files for the name pool service.
    """

    def __init__(self, config_dir: str = "./configs"):
        """
        Initialize the configuration loader.

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = Path(config_dir)

        common_path = self.config_dir / "common.json"
        if not common_path.exists():
            raise FileNotFoundError(f"Common configuration not found: {common_path}")

        with open(common_path, 'r', encoding='utf-8') as f:
            self.common_config = json.load(f)

        errors = validate_schema(self.common_config, COMMON_SCHEMA)
        if errors:
            raise ValueError(f"Common configuration validation failed:\n" + "\n".join(errors))

        self.regions_config = self._load_regions()

    def _load_regions(self) -> Dict[str, Any]:
        regions_path = self.config_dir / "regions.json"
        if not regions_path.exists():
            return {}

        with open(regions_path, 'r', encoding='utf-8') as f:
            regions_config = json.load(f)

        errors = validate_schema(regions_config, REGIONS_SCHEMA)
        if errors:
            raise ValueError(f"Region configuration validation failed:\n" + "\n".join(errors))
        logger.debug(f"Loaded {len(regions_config['region_names'])} region names from {regions_path}")
        return regions_config

    def load(self, use_env: bool = True) -> Config:
        """
        Build a Config from the loaded files.

        Args:
            use_env: Apply NAMEPOOL_* environment overrides

        Returns:
            Config object with all settings
        """
        common = self.common_config
        config = Config(
            data_path=Path(common["data"]["path"]),
            data_url=common["data"]["url"],
            seed=common["random"]["seed"],
            region_capacity=common["pools"]["region_capacity"],
            recency_window=common["pools"]["recency_window"],
            weight_exponent=float(common["pools"]["weight_exponent"]),
            name_fields=common["parsing"]["name_fields"],
            score_fields=common["parsing"]["score_fields"],
            region_names=self.regions_config.get("region_names", list(REGION_NAMES)),
            external_region_names=self.regions_config.get("external_region_names"),
            synthetic_prefix=common["names"]["synthetic_prefix"],
            verbose=common.get("verbose", False),
            common_config=common,
        )
        if use_env:
            apply_env_overrides(config)
        return config
