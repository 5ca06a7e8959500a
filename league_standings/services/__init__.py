"""
Services package exports.
"""
from .draft_service import DraftService
from .standings_service import StandingsService

__all__ = ["DraftService", "StandingsService"]
