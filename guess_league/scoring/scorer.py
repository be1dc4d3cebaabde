"""
Round Scorer

Turns a winning number and a set of guesses into a ranked, scored round.
Participants are ordered by absolute deviation from the winning number, with
the participant name as tie-break, so every round has a strict total order
and ranks are never shared.

Usage:
    from guess_league.scoring.scorer import score_round
    entries = score_round(50, [Guess("Anna", 45), Guess("Ben", 55)])
"""

from guess_league.config import POINTS_SCHEMA
from guess_league.errors import InvalidInput
from guess_league.models import Guess, ScoredEntry
from guess_league.utils import validate_finite


def _as_number(value, label: str) -> float:
    """Coerce to a finite float, raising InvalidInput for anything else."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{label} must be a number, got {value!r}")
    return validate_finite(number, label)


def points_for_rank(rank: int, schema=POINTS_SCHEMA) -> int:
    """Points awarded for a 1-based rank; 0 beyond the end of the schema."""
    if 1 <= rank <= len(schema):
        return schema[rank - 1]
    return 0


def score_round(winning_number: float, guesses, schema=POINTS_SCHEMA) -> list[ScoredEntry]:
    """
    Score one round.

    Args:
        winning_number: The number declared when the round closed
        guesses: Non-empty iterable of Guess
        schema: Points by rank (index 0 = rank 1)

    Returns:
        ScoredEntry list ordered by rank (1..N)

    Raises:
        InvalidInput: If there are no guesses or a number is missing,
            non-numeric or not finite
    """
    winning_number = _as_number(winning_number, "Winning number")
    guesses = [Guess(*g) for g in guesses]
    if not guesses:
        raise InvalidInput("A round needs at least one guess")

    scored = [
        (abs(_as_number(g.value, f"Guess of {g.participant_name}") - winning_number), g)
        for g in guesses
    ]
    scored.sort(key=lambda item: (item[0], item[1].participant_name))

    return [
        ScoredEntry(
            participant_name=guess.participant_name,
            value=_as_number(guess.value, "Guess"),
            deviation=deviation,
            rank=position + 1,
            points=points_for_rank(position + 1, schema),
        )
        for position, (deviation, guess) in enumerate(scored)
    ]


def round_winner(entries) -> ScoredEntry | None:
    """The rank-1 entry of a scored round, or None for an empty round."""
    for entry in entries:
        if entry.rank == 1:
            return entry
    return None
