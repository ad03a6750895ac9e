"""Scrape the watch page and query the internal player endpoint."""

from .fetcher import TranscriptListFetcher
from .player_data import PlayerData

__all__ = [
    "PlayerData",
    "TranscriptListFetcher",
]
