"""
Shared utilities for the Guess League.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
import math
import re
import shutil
import tempfile
from pathlib import Path

from guess_league.errors import InvalidInput

# --- Shared Regex Patterns for Guess Parsing ---
# A guess number: digits, at most one "," or "." separator, optional trailing "%"
# Matches: 12, 12.5, 12,5, 12,5%, 7.
NUMBER_TOKEN_RE = re.compile(r"^\d+(?:[.,]\d*)?%?$")


def normalize_number(token: str) -> float:
    """Convert a locale-tolerant number token ("12,5%") to a float."""
    return float(token.replace(",", ".").replace("%", "").strip())


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- File Operations ---
def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Write a DataFrame to CSV atomically using a temporary file.

    This prevents data corruption if the write is interrupted.

    Args:
        df: pandas DataFrame to write
        path: Destination path for the CSV file
        **kwargs: Additional arguments to pass to df.to_csv()
    """
    logger = setup_logging(__name__)

    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            delete=False,
            suffix='.csv',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp_path = Path(tmp.name)
        df.to_csv(tmp_path, **kwargs)

        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote {len(df)} rows to {path}")

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


# --- Validation ---
def validate_input_size(text: str, max_size: int) -> None:
    """
    Validate that input text does not exceed maximum size.

    Args:
        text: Input text to validate
        max_size: Maximum allowed size in bytes

    Raises:
        InvalidInput: If input exceeds max_size
    """
    if len(text) > max_size:
        raise InvalidInput(
            f"Input too large: {len(text):,} bytes. "
            f"Maximum allowed: {max_size:,} bytes"
        )


def validate_finite(value: float, label: str) -> float:
    """
    Validate that a number is finite.

    Raises:
        InvalidInput: If value is NaN or infinite
    """
    if math.isnan(value) or math.isinf(value):
        raise InvalidInput(f"{label} must be a finite number, got {value}")
    return value


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'atomic_write_csv',
    # Validation
    'validate_input_size',
    'validate_finite',
    # Guess parsing
    'NUMBER_TOKEN_RE',
    'normalize_number',
]
