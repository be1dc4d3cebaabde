"""
Error taxonomy for the Guess League.

Parsing and validation errors are raised before anything is written, so a
caller that catches them never has to clean up a partial round.
"""


class GuessLeagueError(Exception):
    """Base class for all Guess League errors"""
    pass


class ParseError(GuessLeagueError):
    """A guess line could not be parsed"""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f'{reason}: "{line}"')


class InvalidInput(GuessLeagueError):
    """Missing or malformed input rejected before any persistence attempt"""
    pass


class NotFound(GuessLeagueError):
    """Requested round does not exist"""
    pass


class ConflictError(GuessLeagueError):
    """Another writer claimed the same (season, round) key first"""
    pass


class StoreUnavailable(GuessLeagueError):
    """The round store could not be read or written"""
    pass
