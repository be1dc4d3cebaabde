"""
Record types shared across the Guess League.

Records are plain named tuples so they can be fed straight into
``pd.DataFrame`` and compared by value in tests.
"""

from typing import NamedTuple


class Guess(NamedTuple):
    """One participant's guess, as parsed from a submission line."""
    participant_name: str
    value: float


class ScoredEntry(NamedTuple):
    """A guess after scoring against the round's winning number."""
    participant_name: str
    value: float
    deviation: float
    rank: int
    points: int


class Round(NamedTuple):
    season_id: int
    round_number: int
    winning_number: float
    entries: tuple[ScoredEntry, ...]


class RoundSummary(NamedTuple):
    round_number: int
    winning_number: float


class DeletedRound(NamedTuple):
    round_number: int
    deleted_entry_count: int


class StandingsEntry(NamedTuple):
    """Season totals for one participant. Always derived, never stored."""
    participant_name: str
    total_points: int
    total_deviation: float
