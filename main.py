#!/usr/bin/env python3
"""
Name Pool Generator - Main Entry Point

Draws plausible, performance-weighted names per region from historical
participation records, with seedable output for replayable game runs.
"""

import argparse
import sys
import os

# Add src to Python path
src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')
sys.path.insert(0, src_path)

from namepool.cli.commands import (
    load_config,
    generate_names,
    show_pool_stats,
    show_daily_challenge,
    show_grade,
    validate_config,
)
from namepool.cli.utils import setup_logging, print_banner, print_error
from namepool.rng.daily_challenge import get_daily_challenge_params


def main():
    """Main entry point for the name pool generator."""
    parser = argparse.ArgumentParser(
        description='Generate weighted names from participation records',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --count 20                          # 20 names from random regions
  %(prog)s --region 4 --seed 42                # Replayable names for region 4
  %(prog)s --region-name 浙江 --count 5         # Names for a region by name
  %(prog)s --data other.csv --stats            # Pool statistics for a data file
  %(prog)s --daily --count 10                  # Today's challenge names
  %(prog)s --grade 87.5                        # Letter grade for a rating
        """
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        default='./configs',
        help='Directory containing configuration files (default: ./configs)'
    )

    parser.add_argument(
        '--data', '-d',
        type=str,
        help='Participation CSV file (overrides configuration)'
    )

    parser.add_argument(
        '--url',
        type=str,
        help='URL to fetch participation CSV from when the data file is missing'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for reproducible names (-1 for platform random)'
    )

    parser.add_argument(
        '--region', '-r',
        type=int,
        help='Region key (zero-based, one-based keys fall back automatically)'
    )

    parser.add_argument(
        '--region-name',
        type=str,
        help='Region display name from the canonical region list'
    )

    parser.add_argument(
        '--count', '-n',
        type=int,
        default=10,
        help='Number of unique names to draw (default: 10)'
    )

    parser.add_argument(
        '--daily',
        action='store_true',
        help="Use today's challenge seed and province"
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Show name pool statistics and exit'
    )

    parser.add_argument(
        '--grade',
        type=float,
        metavar='VALUE',
        help='Show the letter grade for a rating and exit'
    )

    parser.add_argument(
        '--validate-config',
        action='store_true',
        help='Validate the configuration directory and exit'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Print only the names'
    )

    args = parser.parse_args()

    log_level = 'DEBUG' if args.verbose else 'WARNING' if args.quiet else 'INFO'
    setup_logging(level=log_level)

    if not args.quiet:
        print_banner()

    if args.grade is not None:
        return show_grade(args.grade)

    if args.validate_config:
        return validate_config(args.config_dir)

    try:
        config = load_config(args.config_dir, data=args.data, url=args.url,
                             seed=args.seed, verbose=args.verbose)
    except (FileNotFoundError, ValueError) as e:
        print_error(str(e))
        return 1

    if args.stats:
        return show_pool_stats(config)

    region = args.region
    if args.daily:
        params = get_daily_challenge_params()
        if not args.quiet:
            show_daily_challenge()
        config.seed = params.seed
        if region is None and args.region_name is None:
            region = params.province_id

    try:
        return generate_names(config, count=args.count, region=region,
                              region_name=args.region_name, quiet=args.quiet)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
