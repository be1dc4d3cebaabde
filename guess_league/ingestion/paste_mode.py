"""
Paste-Mode Round Submission

This module handles submitting a round from pasted guess text, and deleting
the most recent round of the current season.

Usage:
    python -m guess_league.ingestion.paste_mode
    python -m guess_league.ingestion.paste_mode --delete-last
    OR
    python guess_league/ingestion/paste_mode.py

    Programmatic usage:
        from guess_league.ingestion.paste_mode import submit_round
        result = submit_round(text, winning_number=50)
"""

import sys
from pathlib import Path

# Add project root to path for direct script execution
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse
from collections import Counter

from guess_league.config import MAX_APPEND_RETRIES, MAX_INPUT_SIZE
from guess_league.errors import (
    ConflictError,
    GuessLeagueError,
    InvalidInput,
    NotFound,
    ParseError,
    StoreUnavailable,
)
from guess_league.ingestion.guess_parser import parse_guesses, parse_winning_number
from guess_league.models import DeletedRound
from guess_league.scoring.scorer import score_round, round_winner
from guess_league.scoring.season import current_season
from guess_league.storage.round_store import RoundStore
from guess_league.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def check_duplicate_names(guesses) -> list[str]:
    """
    Soft check for participants who guessed more than once.

    Duplicates are scored independently and summed in the standings, so
    they are reported as warnings rather than rejected.
    """
    counts = Counter(g.participant_name for g in guesses)
    return [
        f"{name} guessed {count} times; all guesses count"
        for name, count in counts.items()
        if count > 1
    ]


def append_with_retry(store: RoundStore, season_id: int, winning_number: float,
                      entries, max_retries: int = MAX_APPEND_RETRIES) -> int:
    """
    Append a round, re-deriving the round number if another writer got there first.

    Raises:
        ConflictError: If every attempt conflicted
    """
    for attempt in range(1, max_retries + 1):
        try:
            return store.append(season_id, winning_number, entries)
        except ConflictError as e:
            logger.warning(f"  Round number conflict (attempt {attempt}/{max_retries}): {e}")
            if attempt == max_retries:
                raise
    # max_retries < 1
    raise ConflictError("No append attempts were made")


def submit_round(
    text: str,
    winning_number,
    store: RoundStore | None = None,
    now=None,
    dry_run: bool = False,
) -> dict:
    """
    Main entry point for submitting a round.

    Everything is parsed and validated before the store is touched, so a
    rejected submission never leaves a partial round behind.

    Args:
        text: Pasted guess text, one "Name Number" per line
        winning_number: The round's winning number (number or "12,5%" string)
        store: Round store to write to (default: data/rounds.csv)
        now: Point in time that selects the season (default: now)
        dry_run: If True, validate and score only without saving

    Returns:
        Dictionary with:
            - success: bool
            - season_id: season the round belongs to
            - round_number: assigned round number (None on dry run)
            - entries: scored entries, by rank
            - winner: rank-1 entry
            - warnings: list of warning messages
            - dry_run: bool

    Raises:
        InvalidInput: If the winning number or guess set is invalid
        ParseError: If a guess line is malformed
        ConflictError: If the round number could not be assigned
        StoreUnavailable: If the store cannot be read or written
    """
    result = {
        'success': False,
        'season_id': None,
        'round_number': None,
        'entries': [],
        'winner': None,
        'warnings': [],
        'dry_run': dry_run,
    }

    # Step 1: Validate winning number and parse guesses
    logger.info("Parsing guesses...")
    winning = parse_winning_number(winning_number)
    guesses = parse_guesses(text, MAX_INPUT_SIZE)
    if not guesses:
        raise InvalidInput("No guesses found in text")
    logger.info(f"  Parsed {len(guesses)} guesses, winning number {winning:g}")

    result['warnings'] = check_duplicate_names(guesses)
    for w in result['warnings']:
        logger.warning(f"  Warning: {w}")

    # Step 2: Score
    entries = score_round(winning, guesses)
    result['entries'] = entries
    result['winner'] = round_winner(entries)
    result['season_id'] = current_season(now)

    if dry_run:
        logger.info("[DRY RUN] Validation complete. No data was saved.")
        result['success'] = True
        return result

    # Step 3: Persist
    store = store if store is not None else RoundStore()
    logger.info(f"Storing round for season {result['season_id']}...")
    result['round_number'] = append_with_retry(store, result['season_id'], winning, entries)

    result['success'] = True
    logger.info(
        f"Round {result['round_number']} (season {result['season_id']}) saved, "
        f"winner: {result['winner'].participant_name}"
    )
    return result


def delete_last_round(store: RoundStore | None = None, now=None) -> DeletedRound:
    """
    Delete the most recent round of the current season.

    Raises:
        NotFound: If the current season has no rounds
    """
    store = store if store is not None else RoundStore()
    season_id = current_season(now)
    logger.info(f"Deleting last round of season {season_id}...")
    return store.delete_last_round(season_id)


def _read_pasted_text() -> str:
    """Read lines until two consecutive empty lines (or EOF)."""
    lines = []
    empty_count = 0

    try:
        while True:
            line = input()
            if line == "":
                empty_count += 1
                if empty_count >= 2:
                    break
                lines.append(line)
            else:
                empty_count = 0
                lines.append(line)
    except EOFError:
        pass

    return "\n".join(lines)


def _run_delete(store: RoundStore) -> None:
    confirm = input("Really delete the last round? This cannot be undone. [y/N]: ").strip().lower()
    if confirm != 'y':
        print("Deletion cancelled.")
        return

    deleted = delete_last_round(store)
    print(f"\nRound {deleted.round_number} deleted ({deleted.deleted_entry_count} entries).")


def _run_submit(store: RoundStore) -> None:
    season_id = current_season()
    known = store.participants(season_id)
    if known:
        print(f"Participants this season: {', '.join(known)}")

    winning_number = input("Winning number: ").strip()

    print("\nPaste the guesses below, one \"Name Number\" per line.")
    print("When finished, press Enter twice (empty line) to process.\n")
    print("-" * 60)

    text = _read_pasted_text()
    if not text.strip():
        print("\nNo input received. Exiting.")
        sys.exit(1)

    print("-" * 60)

    # First do a dry run to validate
    print("\nStep 1: Validation (dry run)")
    result = submit_round(text, winning_number, store, dry_run=True)
    for entry in result['entries']:
        print(f"  #{entry.rank:<3} {entry.participant_name:<25} {entry.value:>10g} "
              f"(off by {entry.deviation:g}) {entry.points:>3} pts")

    confirm = input(f"\nSave this round to season {result['season_id']}? [y/N]: ").strip().lower()
    if confirm != 'y':
        print("Submission cancelled.")
        sys.exit(0)

    print("\nStep 2: Saving")
    result = submit_round(text, winning_number, store)

    print("\n" + "=" * 60)
    print("SUCCESS!")
    print(f"  Season: {result['season_id']}")
    print(f"  Round: {result['round_number']}")
    print(f"  Winner: {result['winner'].participant_name}")
    if result['warnings']:
        print(f"  Warnings: {len(result['warnings'])}")
    print("=" * 60)


def main():
    """CLI interface for paste-mode submission."""
    parser = argparse.ArgumentParser(description="Submit or delete a Guess League round")
    parser.add_argument("--delete-last", action="store_true",
                        help="Delete the most recent round of the current season")
    parser.add_argument("--store", type=Path, default=None,
                        help="Round store CSV (default: data/rounds.csv)")
    args = parser.parse_args()

    store = RoundStore(args.store) if args.store else RoundStore()

    print("=" * 60)
    print("Guess League Paste-Mode Submission")
    print("=" * 60)

    try:
        if args.delete_last:
            _run_delete(store)
        else:
            _run_submit(store)

    except ParseError as e:
        print(f"\nPARSE ERROR: {e}")
        sys.exit(1)
    except InvalidInput as e:
        print(f"\nINPUT ERROR: {e}")
        sys.exit(1)
    except NotFound as e:
        print(f"\nNOT FOUND: {e}")
        sys.exit(1)
    except (ConflictError, StoreUnavailable) as e:
        print(f"\nSTORE ERROR: {e}")
        sys.exit(1)
    except GuessLeagueError as e:
        print(f"\nERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
