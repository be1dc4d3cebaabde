"""
Central configuration for the Guess League.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from datetime import date
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
ROUNDS_FILE = DATA_FOLDER / "rounds.csv"

# --- Season Configuration ---
SEASON_EPOCH = date(2025, 7, 31)  # First day of season 1
SEASON_LENGTH_WEEKS = 12
SEASON_LENGTH_DAYS = SEASON_LENGTH_WEEKS * 7

# --- Scoring Configuration ---
# Points awarded by rank (index 0 = rank 1). Ranks beyond the schema score 0.
POINTS_SCHEMA = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1)

# --- Round Store Configuration ---
# One CSV row per scored entry
ROUND_COLUMNS = [
    "season_id",
    "round_number",
    "winning_number",
    "participant_name",
    "value",
    "deviation",
    "rank",
    "points",
]
MAX_APPEND_RETRIES = 3  # Re-derive the round number this often on conflict

# --- Input Validation ---
MAX_INPUT_SIZE = 50_000  # Maximum pasted guess text size in bytes (~50KB)

# --- Display ---
DATE_DISPLAY_FORMAT = "%d.%m.%Y"
