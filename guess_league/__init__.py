"""
Guess League - Core Package

This package contains the core modules for:
- Scoring, season and leaderboard computation (guess_league.scoring)
- Guess parsing and round submission (guess_league.ingestion)
- Round persistence (guess_league.storage)
- Shared configuration, record types and utilities
"""

from guess_league.config import *
