"""
Logic module for TicTacToe.
Handles game state, rules, the AI opponent and the game controller.
"""

__version__ = "1.0.0"

from .game_state import GameState, Move, Outcome, OutcomeKind, Player
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker, WINNING_LINES
from .ai_player import (
    AIPlayer,
    Difficulty,
    HeuristicPlayer,
    MinimaxPlayer,
    NoLegalMovesError,
    RandomPlayer,
    create_ai_player,
)
from .config import GameConfig
from .game_controller import ControllerState, GameController, GameListener
