"""Tic-Tac-Toe package exposing the rules engine and the web backend."""

from .game import (
    CellOccupiedError,
    GameEngine,
    GameError,
    GameOverError,
    GameState,
    InvalidIndexError,
    Mark,
)
from .ui import app, create_app

__all__ = [
    "CellOccupiedError",
    "GameEngine",
    "GameError",
    "GameOverError",
    "GameState",
    "InvalidIndexError",
    "Mark",
    "app",
    "create_app",
]
