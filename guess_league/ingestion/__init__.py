"""
Round Ingestion

Modules:
- guess_parser: Parse pasted guess text
- paste_mode: Round submission / deletion and the interactive CLI
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_guesses":
        from guess_league.ingestion.guess_parser import parse_guesses
        return parse_guesses
    if name == "submit_round":
        from guess_league.ingestion.paste_mode import submit_round
        return submit_round
    if name == "delete_last_round":
        from guess_league.ingestion.paste_mode import delete_last_round
        return delete_last_round
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
