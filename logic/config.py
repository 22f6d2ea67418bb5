"""
Game configuration for TicTacToe.
Difficulty, players and display pacing.
"""

from .ai_player import Difficulty
from .game_state import Player


class GameConfig:
    """
    Configuration class for game settings.

    Values live on the class; pass keyword arguments to override them
    for one instance, e.g. GameConfig(COMPUTER_MOVE_DELAY=0).
    """

    # ==================== PLAYERS ====================
    # The human always plays X and moves first
    HUMAN_PLAYER = Player.X
    COMPUTER_PLAYER = Player.O

    # ==================== AI SETTINGS ====================
    DEFAULT_DIFFICULTY = Difficulty.EASY

    # Seed for the EASY/MEDIUM random choices (None = unpredictable)
    RANDOM_SEED = None

    # ==================== PACING (seconds) ====================
    # Pause before the computer answers, purely for the player's benefit
    COMPUTER_MOVE_DELAY = 0.1

    # How long the result stays on screen before a new game starts
    RESET_DELAY = 2.0

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not name.isupper() or not hasattr(type(self), name):
                raise ValueError(f"Unknown setting: {name}")
            setattr(self, name, value)

        if isinstance(self.DEFAULT_DIFFICULTY, str):
            self.DEFAULT_DIFFICULTY = Difficulty.from_name(self.DEFAULT_DIFFICULTY)
        if self.COMPUTER_MOVE_DELAY < 0 or self.RESET_DELAY < 0:
            raise ValueError("Delays must not be negative")
        if self.HUMAN_PLAYER != Player.X or self.COMPUTER_PLAYER != Player.O:
            raise ValueError("The human plays X and the computer plays O")
