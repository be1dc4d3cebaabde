"""
Scoring Engine

Modules:
- season: Season clock (instant -> season id, season id -> date range)
- scorer: Round scoring and ranking
- leaderboard: Season standings aggregation
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "season_for":
        from guess_league.scoring.season import season_for
        return season_for
    if name == "date_range_for":
        from guess_league.scoring.season import date_range_for
        return date_range_for
    if name == "score_round":
        from guess_league.scoring.scorer import score_round
        return score_round
    if name == "aggregate":
        from guess_league.scoring.leaderboard import aggregate
        return aggregate
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
