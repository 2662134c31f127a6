"""
CLI command implementations for the name pool generator.
"""

import time
import logging
from pathlib import Path
from typing import Optional

from namepool.cli.utils import print_error, print_info, print_warning, print_step_header
from namepool.config.config_loader import Config, ConfigLoader, apply_env_overrides
from namepool.config.regions import region_index
from namepool.rng.daily_challenge import get_daily_challenge_params
from namepool.service import NameService
from namepool.utils.grades import get_letter_grade, get_letter_grade_ability
from namepool.utils.logging_utils import create_progress_bar, format_completion_message


logger = logging.getLogger(__name__)


def load_config(config_dir: str = "./configs", data: Optional[str] = None,
                url: Optional[str] = None, seed: Optional[int] = None,
                verbose: bool = False) -> Config:
    """
    Load configuration from ``config_dir`` (or defaults when it has no
    common.json) and apply command-line overrides on top.
    """
    if (Path(config_dir) / "common.json").exists():
        config = ConfigLoader(config_dir).load()
    else:
        logger.debug(f"No common.json in {config_dir}, using default configuration")
        config = apply_env_overrides(Config())

    if data:
        config.data_path = Path(data)
    if url:
        config.data_url = url
    if seed is not None:
        config.seed = seed
    config.verbose = config.verbose or verbose
    return config


def generate_names(config: Config, count: int = 10, region: Optional[int] = None,
                   region_name: Optional[str] = None, quiet: bool = False) -> int:
    """
    Print ``count`` unique names for one region (or random regions).

    Args:
        config: Loaded configuration
        count: Number of names to draw
        region: Internal (zero- or one-based) region key
        region_name: Region display name from the canonical list
        quiet: Suppress headers and progress output

    Returns:
        Exit code (0 for success)
    """
    service = NameService(config)
    if not service.ensure_pools():
        print_warning(f"No name data loaded from {config.data_path}; names will be synthetic")

    if region_name is not None:
        region = region_index(region_name, config.region_names)
        if region is None:
            print_error(f"Unknown region name: {region_name}")
            return 1

    session = service.new_session()
    start = time.time()
    names = []
    with create_progress_bar(count, "Drawing names", unit="names", leave=False, disable=quiet) as pbar:
        for _ in range(count):
            if region is None:
                names.append(session.draw())
            else:
                names.append(session.draw_for_region(region))
            pbar.update(1)

    if not quiet:
        print_step_header("Generated names")
    for name in names:
        print(name)

    if not quiet:
        summary = session.summary()
        print(format_completion_message(
            "Name generation", time.time() - start, summary["pooled"], len(names),
            extra_info=f"synthetic={summary['synthetic']}",
        ))
    return 0


def show_pool_stats(config: Config) -> int:
    service = NameService(config)
    if not service.ensure_pools():
        print_error(f"Could not build name pools from {config.data_path}")
        return 1

    stats = service.store.stats()
    print_step_header("Name pool statistics")
    print(f"  Region names:        {stats['total_names']}")
    print(f"  Regions with names:  {stats['regions_with_names']}")
    print(f"  Global pool entries: {stats['global_pool_size']}")
    print(f"  Global weight sum:   {stats['global_weight_sum']:.2f}")
    print("\n  Per region:")
    for key, size in stats["region_sizes"].items():
        print(f"    {key:>3} {config.region_names[key]}: {size}")
    return 0


def show_daily_challenge() -> int:
    params = get_daily_challenge_params()
    print_step_header(f"Daily challenge {params.display_date}")
    print(f"  Date:        {params.date}")
    print(f"  Province id: {params.province_id}")
    print(f"  Difficulty:  {params.difficulty}")
    print(f"  Seed:        {params.seed}")
    return 0


def show_grade(value: float) -> int:
    print(f"{value}: grade {get_letter_grade(value)}, ability grade {get_letter_grade_ability(value)}")
    return 0


def validate_config(config_dir: str = "./configs") -> int:
    """
    Validate the configuration directory and data source.

    Args:
        config_dir: Configuration directory

    Returns:
        Exit code (0 for success)
    """
    try:
        print_info(f"Validating configuration in {config_dir}...")
        config = ConfigLoader(config_dir).load()
    except (FileNotFoundError, ValueError) as e:
        print_error(str(e))
        return 1

    status = "✓" if config.data_path.exists() else "✗"
    print(f"  {status} Data file: {config.data_path}")
    print(f"  • Data URL: {config.data_url or '(none)'}")
    print(f"  • Seed: {config.seed if config.seed is not None else '(process default)'}")
    print(f"  • Regions: {len(config.region_names)}")
    print(f"  • Region capacity: {config.region_capacity}")
    return 0
