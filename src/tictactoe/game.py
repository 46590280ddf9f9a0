"""Core rules for classic 3x3 Tic-Tac-Toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

BOARD_SIZE = 9
DRAW = "draw"


class Mark(str, Enum):
    EMPTY = ""
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("Empty cells have no opponent")


# ---------- Errors ----------


class GameError(ValueError):
    """Base class for rejected moves; ``code`` lets callers branch on kind."""

    code = "game_error"
    message = "Move rejected"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)


class GameOverError(GameError):
    code = "game_over"
    message = "Game is over"


class InvalidIndexError(GameError):
    code = "invalid_index"
    message = "Invalid move index"


class CellOccupiedError(GameError):
    code = "cell_occupied"
    message = "Cell already occupied"


# ---------- State ----------


@dataclass
class GameState:
    board: List[Mark] = field(default_factory=lambda: [Mark.EMPTY] * BOARD_SIZE)
    current_player: Mark = Mark.X
    # "" while in progress, then "X", "O" or "draw"
    winner: str = ""
    game_over: bool = False

    def is_full(self) -> bool:
        return all(c is not Mark.EMPTY for c in self.board)

    def has_line(self, player: Mark) -> bool:
        return any(
            self.board[a] is player and self.board[b] is player and self.board[c] is player
            for a, b, c in WINNING_LINES
        )

    def to_dict(self) -> Dict[str, object]:
        """Wire shape consumed by the front end."""
        return {
            "board": [c.value for c in self.board],
            "currentPlayer": self.current_player.value,
            "winner": self.winner,
            "gameOver": self.game_over,
        }


# ---------- Engine ----------


class GameEngine:
    """Owns the single live :class:`GameState` and applies moves to it.

    The engine does no locking; callers that share it between threads must
    serialize access themselves.
    """

    def __init__(self) -> None:
        self._state = GameState()

    def new_game(self) -> GameState:
        self._state = GameState()
        logger.debug("Started a new game")
        return self._state

    def get_initial_state(self) -> GameState:
        return self._state

    def get_state(self) -> GameState:
        return self._state

    def reset_game(self) -> GameState:
        return self.new_game()

    def make_move(self, index: int) -> GameState:
        """Place the current player's mark on ``index``.

        Validation order is game over, then index range, then occupancy; on
        any failure the state is untouched. After placement a win is checked
        before a draw, so a full board with a completed line is a win.
        """
        state = self._state
        if state.game_over:
            raise GameOverError()
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndexError()
        if not 0 <= index < BOARD_SIZE:
            raise InvalidIndexError()
        if state.board[index] is not Mark.EMPTY:
            raise CellOccupiedError()

        mover = state.current_player
        state.board[index] = mover
        logger.debug("%s played cell %d", mover.value, index)

        if state.has_line(mover):
            state.winner = mover.value
            state.game_over = True
            logger.info("Player %s wins", mover.value)
        elif state.is_full():
            state.winner = DRAW
            state.game_over = True
            logger.info("Game ended in a draw")
        else:
            state.current_player = mover.opponent()
        return state
