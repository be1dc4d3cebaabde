"""
Round Persistence

Modules:
- round_store: CSV-backed append-only round log
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "RoundStore":
        from guess_league.storage.round_store import RoundStore
        return RoundStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
