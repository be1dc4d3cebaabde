"""
Round Store

Durable, append-only log of scored rounds, kept as a single CSV file with one
row per scored entry (see ROUND_COLUMNS). Rounds are keyed by
(season_id, round_number); round numbers restart at 1 in every season.

Standings are never stored here. They are re-derived from the stored rounds
by the leaderboard aggregator on every call to standings().

Usage:
    from guess_league.storage.round_store import RoundStore
    store = RoundStore()                      # data/rounds.csv
    n = store.append(season_id, 50, entries)
    store.standings(season_id)
"""

import threading
from pathlib import Path

import pandas as pd

from guess_league.config import ROUNDS_FILE, ROUND_COLUMNS
from guess_league.errors import ConflictError, NotFound, StoreUnavailable
from guess_league.models import (
    DeletedRound,
    Round,
    RoundSummary,
    ScoredEntry,
    StandingsEntry,
)
from guess_league.scoring.leaderboard import aggregate
from guess_league.utils import atomic_write_csv, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

# One lock per resolved store path, shared by every RoundStore in the process
_path_locks: dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _path_locks_guard:
        return _path_locks.setdefault(key, threading.Lock())


def _entry_from_row(row) -> ScoredEntry:
    return ScoredEntry(
        participant_name=str(row.participant_name),
        value=float(row.value),
        deviation=float(row.deviation),
        rank=int(row.rank),
        points=int(row.points),
    )


class RoundStore:
    """CSV-backed round log. Appends and deletes are serialised per file path."""

    def __init__(self, path: Path | str = ROUNDS_FILE):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    # --- Raw access ---
    def _read(self) -> pd.DataFrame:
        """Load all stored rows (empty frame if nothing was written yet)."""
        if not self.path.exists():
            return pd.DataFrame(columns=ROUND_COLUMNS)

        try:
            df = pd.read_csv(
                self.path,
                dtype={"participant_name": str},
                na_filter=False,
                float_precision="round_trip",
            )
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Could not read round store {self.path}: {e}")
            raise StoreUnavailable(f"Could not read round store: {e}") from e

        missing = set(ROUND_COLUMNS) - set(df.columns)
        if missing:
            raise StoreUnavailable(f"Round store {self.path} is missing columns: {sorted(missing)}")

        return df[ROUND_COLUMNS]

    def _write(self, df: pd.DataFrame) -> None:
        try:
            atomic_write_csv(df[ROUND_COLUMNS], self.path, index=False)
        except OSError as e:
            logger.error(f"Could not write round store {self.path}: {e}")
            raise StoreUnavailable(f"Could not write round store: {e}") from e

    @staticmethod
    def _season_rows(df: pd.DataFrame, season_id: int) -> pd.DataFrame:
        return df[df["season_id"] == season_id]

    # --- Writes ---
    def _next_round_number(self, df: pd.DataFrame, season_id: int) -> int:
        season_rows = self._season_rows(df, season_id)
        if season_rows.empty:
            return 1
        return int(season_rows["round_number"].max()) + 1

    def append(self, season_id: int, winning_number: float, entries) -> int:
        """
        Store a scored round under the next free round number of its season.

        Args:
            season_id: Season the round belongs to
            winning_number: The round's winning number
            entries: ScoredEntry sequence (the whole round)

        Returns:
            The assigned round number

        Raises:
            ConflictError: If another writer stored the same round number
                between reading the log and writing it
            StoreUnavailable: If the backing file cannot be read or written
        """
        entries = list(entries)

        with self._lock:
            df = self._read()
            round_number = self._next_round_number(df, season_id)

            rows = pd.DataFrame([
                {
                    "season_id": season_id,
                    "round_number": round_number,
                    "winning_number": float(winning_number),
                    **entry._asdict(),
                }
                for entry in entries
            ], columns=ROUND_COLUMNS)

            # Re-read right before writing to catch writers outside this process
            latest = self._read()
            if len(latest) != len(df) or self._next_round_number(latest, season_id) != round_number:
                raise ConflictError(
                    f"Round {round_number} of season {season_id} was written concurrently"
                )

            combined = rows if df.empty else pd.concat([df, rows], ignore_index=True)
            self._write(combined)

        logger.info(f"Stored round {round_number} of season {season_id} ({len(entries)} entries)")
        return round_number

    def delete_last_round(self, season_id: int) -> DeletedRound:
        """
        Delete the most recent round of a season, with all its entries.

        Raises:
            NotFound: If the season has no rounds
        """
        with self._lock:
            df = self._read()
            season_rows = self._season_rows(df, season_id)
            if season_rows.empty:
                raise NotFound(f"No rounds to delete in season {season_id}")

            last_round = int(season_rows["round_number"].max())
            mask = (df["season_id"] == season_id) & (df["round_number"] == last_round)
            deleted = int(mask.sum())
            self._write(df[~mask])

        logger.info(f"Deleted round {last_round} of season {season_id} ({deleted} entries)")
        return DeletedRound(round_number=last_round, deleted_entry_count=deleted)

    # --- Queries ---
    def list_rounds(self, season_id: int) -> list[RoundSummary]:
        """Rounds of a season, newest first."""
        season_rows = self._season_rows(self._read(), season_id)
        summary = (
            season_rows[["round_number", "winning_number"]]
            .drop_duplicates(subset="round_number")
            .sort_values("round_number", ascending=False)
        )
        return [
            RoundSummary(int(row.round_number), float(row.winning_number))
            for row in summary.itertuples(index=False)
        ]

    def get_round(self, season_id: int, round_number: int) -> list[ScoredEntry]:
        """Scored entries of one round, ordered by rank (empty if unknown)."""
        df = self._read()
        rows = df[(df["season_id"] == season_id) & (df["round_number"] == round_number)]
        return [_entry_from_row(row) for row in rows.sort_values("rank").itertuples(index=False)]

    def load_rounds(self, season_id: int) -> list[Round]:
        """All rounds of a season as Round records, oldest first."""
        season_rows = self._season_rows(self._read(), season_id)
        rounds = []
        for round_number, group in season_rows.groupby("round_number", sort=True):
            group = group.sort_values("rank")
            rounds.append(Round(
                season_id=season_id,
                round_number=int(round_number),
                winning_number=float(group["winning_number"].iloc[0]),
                entries=tuple(_entry_from_row(row) for row in group.itertuples(index=False)),
            ))
        return rounds

    def list_seasons(self) -> list[int]:
        """Seasons that have at least one stored round, newest first."""
        df = self._read()
        return sorted({int(s) for s in df["season_id"].unique()}, reverse=True)

    def participants(self, season_id: int | None = None) -> list[str]:
        """Distinct participant names, optionally limited to one season."""
        df = self._read()
        if season_id is not None:
            df = self._season_rows(df, season_id)
        return sorted(set(df["participant_name"].astype(str)))

    def standings(self, season_id: int) -> list[StandingsEntry]:
        """Season leaderboard, recomputed from the stored rounds."""
        return aggregate(self.load_rounds(season_id))
