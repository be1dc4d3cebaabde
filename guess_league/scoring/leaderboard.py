"""
Leaderboard Aggregator

Folds every stored round of a season into a standings table. Standings are
recomputed from the stored rounds on every query instead of being kept as
running totals, so deleting a round and re-aggregating always yields the
correct prior leaderboard.
"""

import math

import pandas as pd

from guess_league.models import StandingsEntry


def aggregate(rounds) -> list[StandingsEntry]:
    """
    Fold scored rounds into season standings.

    Sorted by total points (descending), then total deviation (ascending).
    Remaining ties keep first-seen order.

    Args:
        rounds: Iterable of Round

    Returns:
        StandingsEntry list, best participant first
    """
    # dicts preserve first-seen order; the sort below is stable
    points: dict[str, int] = {}
    deviations: dict[str, list[float]] = {}
    for rnd in rounds:
        for entry in rnd.entries:
            name = entry.participant_name
            points[name] = points.get(name, 0) + int(entry.points)
            deviations.setdefault(name, []).append(float(entry.deviation))

    # fsum is exactly rounded, so totals do not depend on round order
    standings = [
        StandingsEntry(name, total, math.fsum(deviations[name]))
        for name, total in points.items()
    ]
    standings.sort(key=lambda s: (-s.total_points, s.total_deviation))
    return standings


def standings_dataframe(standings) -> pd.DataFrame:
    """
    Render standings as a DataFrame with a 1-based position column.

    Args:
        standings: StandingsEntry list as returned by aggregate()

    Returns:
        DataFrame with columns: position, participant_name, total_points, total_deviation
    """
    df = pd.DataFrame(list(standings), columns=list(StandingsEntry._fields))
    df.insert(0, "position", range(1, len(df) + 1))
    return df
