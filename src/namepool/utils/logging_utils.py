"""
Logging utilities for verbosity-gated output and progress bars.
"""

import logging
import sys
from tqdm import tqdm


class ConditionalLogger:
    """
    Logger wrapper that only emits info output in verbose mode
    unless forced.
    """

    def __init__(self, name: str, verbose: bool = False):
        """
        Initialize conditional logger.

        Args:
            name: Logger name
            verbose: Whether to show verbose output
        """
        self.logger = logging.getLogger(name)
        self.verbose = verbose

    def info(self, message: str, force: bool = False):
        if self.verbose or force:
            self.logger.info(message)

    def success(self, message: str, force: bool = False):
        """
        Log success message with checkmark.

        Args:
            message: Message to log
            force: Log even in non-verbose mode
        """
        if self.verbose or force:
            self.logger.info(f"✓ {message}")


def create_progress_bar(total: int, desc: str, unit: str = "it", leave: bool = True,
                        disable: bool = False) -> tqdm:
    """
    Create a standardized progress bar.

    Args:
        total: Total number of items
        desc: Description for the progress bar
        unit: Unit name for progress bar
        leave: Whether to keep progress bar after completion
        disable: Suppress the bar entirely

    Returns:
        Configured tqdm progress bar
    """
    return tqdm(
        total=total,
        desc=desc,
        unit=unit,
        ncols=80,
        leave=leave,
        disable=disable,
        file=sys.stdout,
        position=0,
        bar_format='{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} {unit} [{elapsed}<{remaining}]'
    )


def format_completion_message(operation: str, duration: float, success_count: int,
                              total_count: int, extra_info: str = "") -> str:
    """
    Format a standardized completion message.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        success_count: Number of successful items
        total_count: Total number of items
        extra_info: Additional information to include

    Returns:
        Formatted completion message
    """
    success_rate = f"({success_count}/{total_count})" if success_count != total_count else ""
    extra = f" {extra_info}" if extra_info else ""
    return f"{operation} completed in {duration:.2f} seconds {success_rate}{extra}"
