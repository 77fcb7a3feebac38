"""Per-game state kept in step with the server's position updates."""

from ficsclient.game.sync import GameSync, HistoryEntry, SyncEvents

__all__ = ["GameSync", "HistoryEntry", "SyncEvents"]
