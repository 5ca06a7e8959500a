"""
Handlers package.
"""
from .standings_handler import StandingsHandler

__all__ = ["StandingsHandler"]
