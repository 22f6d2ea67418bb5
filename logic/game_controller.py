"""
Game controller for TicTacToe.

Runs one game between a human (X) and the computer (O):
- Human submits a cell index
- Controller validates and applies it, then checks for a winner
- Computer answers with the strategy for the current difficulty
- Listeners hear about every board change, the game result and resets
"""

import logging
import random
import threading
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .ai_player import AIPlayer, Difficulty, create_ai_player
from .config import GameConfig
from .game_state import Cell, GameState, Outcome
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker

LOGGER = logging.getLogger(__name__)

# scheduler(delay_seconds, callback)
Scheduler = Callable[[float, Callable[[], None]], None]


def run_immediately(delay: float, callback: Callable[[], None]) -> None:
    """Scheduler that ignores the delay, for tests and headless play."""
    callback()


class ControllerState(Enum):
    """Where the controller is in a game."""
    AWAITING_HUMAN = "awaiting_human"
    COMPUTER_THINKING = "computer_thinking"
    GAME_OVER = "game_over"


class GameListener:
    """
    Receives game events from the controller.

    Subclass and override what you need; every hook does nothing by default.
    """

    def on_board_changed(self, board: Tuple[Cell, ...]) -> None:
        pass

    def on_game_over(self, outcome: Outcome) -> None:
        pass

    def on_reset(self) -> None:
        pass


class GameController:
    """
    Main controller for a TicTacToe game.

    Game flow:
    1. Human (X) picks an empty cell
    2. If the game is not over, the computer (O) thinks and moves
    3. Repeat until someone wins or it's a draw
    4. The host calls reset() to start over

    Requests that do not fit the current state (occupied cell, computer's
    turn, game over) are ignored and reported through the returned
    ValidationResult instead of an exception.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        players: Optional[Dict[Difficulty, AIPlayer]] = None
    ):
        """
        Initialize the game controller.

        Args:
            config: Game settings (defaults to GameConfig()).
            listener: Receives board, game over and reset events.
            scheduler: Runs the computer's move after the display delay.
                Defaults to running it right away.
            rng: Random generator for EASY and MEDIUM.
            players: Strategies to use instead of the built-in ones, by difficulty.
        """
        self.config = config or GameConfig()
        self.listener = listener or GameListener()
        self.scheduler = scheduler or run_immediately

        self.human_player = self.config.HUMAN_PLAYER
        self.computer_player = self.config.COMPUTER_PLAYER

        self._rng = rng if rng is not None else random.Random(self.config.RANDOM_SEED)
        self._players: Dict[Difficulty, AIPlayer] = dict(players or {})
        self._difficulty = self.config.DEFAULT_DIFFICULTY

        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        # Every read and write of the game state goes through this lock
        self._lock = threading.RLock()
        self.game_state = GameState(current_player=self.human_player)
        self.state = ControllerState.AWAITING_HUMAN

        # Bumped on reset so a computer move scheduled for an old game is dropped
        self._game_id = 0

    # ==================== CONFIGURATION ====================

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: Difficulty) -> None:
        if isinstance(value, str):
            value = Difficulty.from_name(value)
        LOGGER.info("Difficulty set to: %s", value.value)
        self._difficulty = value

    def _ai_for(self, difficulty: Difficulty) -> AIPlayer:
        if difficulty not in self._players:
            self._players[difficulty] = create_ai_player(
                difficulty, self.computer_player, rng=self._rng
            )
        return self._players[difficulty]

    # ==================== QUERIES ====================

    @property
    def board(self) -> Tuple[Cell, ...]:
        with self._lock:
            return self.game_state.snapshot()

    @property
    def outcome(self) -> Outcome:
        with self._lock:
            return self.game_state.outcome

    # ==================== COMMANDS ====================

    def submit_human_move(self, index: int) -> ValidationResult:
        """
        Apply the human's move and, if the game goes on, trigger the reply.

        Args:
            index: Cell index (0-8).

        Returns:
            ValidationResult; invalid requests leave the game untouched.
        """
        with self._lock:
            if self.state != ControllerState.AWAITING_HUMAN:
                result = ValidationResult(
                    is_valid=False,
                    error_message=f"Not accepting moves while {self.state.value}"
                )
            else:
                result = self.validator.validate_move(self.game_state, index, self.human_player)

            if not result.is_valid:
                LOGGER.debug("Ignoring human move %r: %s", index, result.error_message)
                return result

            LOGGER.info("Human placed %s at %d", self.human_player.value, index)
            self._apply(index)

            if self.state == ControllerState.GAME_OVER:
                return result

            self.state = ControllerState.COMPUTER_THINKING
            game_id = self._game_id

        self.scheduler(
            self.config.COMPUTER_MOVE_DELAY,
            lambda: self._scheduled_computer_move(game_id)
        )
        return result

    def _scheduled_computer_move(self, game_id: int) -> Optional[int]:
        with self._lock:
            if game_id != self._game_id:
                LOGGER.debug("Dropping computer move scheduled for an earlier game")
                return None
            return self.play_computer_move()

    def play_computer_move(self) -> Optional[int]:
        """
        Let the computer move with the current difficulty.

        Returns:
            The index played, or None when it is not the computer's turn.
        """
        with self._lock:
            if self.state != ControllerState.COMPUTER_THINKING:
                LOGGER.debug("Computer move requested while %s, ignoring", self.state.value)
                return None

            ai = self._ai_for(self._difficulty)
            index = ai.get_best_move(self.game_state.snapshot())

            if not self._apply(index):
                LOGGER.error(
                    "Strategy for %s chose unplayable cell %r, still waiting for a move",
                    self._difficulty.value, index
                )
                return None

            LOGGER.info(
                "Computer (%s) placed %s at %d",
                self._difficulty.value, self.computer_player.value, index
            )

            if self.state != ControllerState.GAME_OVER:
                self.state = ControllerState.AWAITING_HUMAN
            return index

    def reset(self) -> None:
        """Start a new game with a cleared board."""
        with self._lock:
            LOGGER.info("Resetting game")
            self._game_id += 1
            self.game_state = GameState(current_player=self.human_player)
            self.state = ControllerState.AWAITING_HUMAN
            self.listener.on_reset()

    def _apply(self, index: int) -> bool:
        """
        Place the current player's mark and check for the end of the game.

        Returns:
            False if the move could not be made; nothing changes then.
        """
        if not self.game_state.make_move(index):
            return False

        self.win_checker.update_game_state(self.game_state)
        self.listener.on_board_changed(self.game_state.snapshot())

        if self.game_state.is_game_over:
            self.state = ControllerState.GAME_OVER
            LOGGER.info("Game over: %s", self.game_state.outcome.describe())
            self.listener.on_game_over(self.game_state.outcome)
        return True
