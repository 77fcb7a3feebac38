"""Exception hierarchy.

Bad network data and illegal moves never raise; they degrade to
``Unclassified`` events and ``MoveRejection`` values.  Only broken
integrations and local/server desynchronisation are exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ficsclient.core.move import MoveRejection


class FicsClientError(Exception):
    """Base class for all ficsclient errors."""


class UnsupportedCategoryError(FicsClientError, ValueError):
    """Raised when a game category name cannot be interpreted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported game category: {name!r}")
        self.name = name


class DesyncError(FicsClientError):
    """The locally tracked position no longer matches the server.

    The caller should re-request the authoritative move list.
    """

    def __init__(
        self, game_id: int, move: str, rejection: MoveRejection | None = None
    ) -> None:
        detail = f": {rejection.reason}" if rejection is not None else ""
        super().__init__(f"Game {game_id}: cannot replay {move!r}{detail}")
        self.game_id = game_id
        self.move = move
        self.rejection = rejection
