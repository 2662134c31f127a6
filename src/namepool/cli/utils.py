"""
CLI utility functions for the name pool generator.
"""

import logging
import sys


def setup_logging(level: str = 'INFO'):
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keep httpx request logs from cluttering name output
    httpx_logger = logging.getLogger('httpx')
    httpx_logger.setLevel(logging.WARNING)


def print_banner():
    """Print the application banner."""
    banner = """
╔══════════════════════════════════════════════════════════╗
║        Name Pool Generator                               ║
║        Weighted Names From Participation Records         ║
╚══════════════════════════════════════════════════════════╝
"""
    print(banner)


def print_step_header(step_name: str):
    print(f"\n{'='*60}")
    print(f"  {step_name.upper()}")
    print(f"{'='*60}\n")


def print_error(message: str):
    print(f"ERROR: {message}", file=sys.stderr)


def print_warning(message: str):
    print(f"WARNING: {message}")


def print_info(message: str):
    print(f"INFO: {message}")
