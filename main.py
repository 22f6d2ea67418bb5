"""
Console front-end for TicTacToe.

This script ties together:
- The game controller (rules, turns, AI opponent)
- A text board printed after every move
- Keyboard commands for moves, difficulty and reset

Run this script to play TicTacToe against the computer!
"""

import argparse
import logging
import sys
import time
from typing import Callable, Optional, Tuple

from logic.ai_player import Difficulty
from logic.config import GameConfig
from logic.game_controller import ControllerState, GameController, GameListener
from logic.game_state import Cell, GameState, Outcome, OutcomeKind


HELP_TEXT = (
    "Commands: 0-8 place your mark, easy/medium/hard change difficulty, "
    "r reset, q quit"
)


def sleep_then_run(delay: float, callback: Callable[[], None]) -> None:
    """Scheduler that waits for the delay on the calling thread."""
    if delay > 0:
        time.sleep(delay)
    callback()


class ConsoleListener(GameListener):
    """Prints game events to the console."""

    def __init__(self, out: Callable[[str], None] = print):
        self.out = out
        self.last_board: Tuple[Cell, ...] = ()
        self.last_outcome: Optional[Outcome] = None

    def on_board_changed(self, board: Tuple[Cell, ...]) -> None:
        self.last_board = board
        self.out("")
        self.out(GameState(board=list(board)).render(show_indices=True))

    def on_game_over(self, outcome: Outcome) -> None:
        self.last_outcome = outcome
        self.out("\n" + "=" * 40)
        self.out("   GAME OVER!")
        self.out("=" * 40)

        if outcome.kind == OutcomeKind.WIN:
            # Winning cells are drawn in brackets
            self.out(GameState(board=list(self.last_board), outcome=outcome).render())
            line = ", ".join(str(i) for i in outcome.winning_line)
            self.out(f"\n{outcome.describe()} (cells {line})")
        else:
            self.out(f"\n{outcome.describe()}")

    def on_reset(self) -> None:
        self.last_board = ()
        self.last_outcome = None
        self.out("\nNew game! You are X.")


class TicTacToeConsole:
    """
    Console game loop.

    Game flow:
    1. Human (X) types a cell number
    2. Computer (O) answers after a short pause
    3. Repeat until someone wins or it's a draw
    4. The result stays up for RESET_DELAY seconds, then a new game starts
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        input_func: Callable[[str], str] = input,
        out: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep,
        pace: bool = True
    ):
        """
        Initialize the console game.

        Args:
            config: Game settings.
            input_func: Reads a line from the player.
            out: Writes a line to the player.
            sleep: Used for the reset pause.
            pace: If False, skip every display delay.
        """
        self.config = config or GameConfig()
        self.input_func = input_func
        self.out = out
        self.sleep = sleep
        self.pace = pace

        self.listener = ConsoleListener(out)
        self.controller = GameController(
            self.config,
            listener=self.listener,
            scheduler=sleep_then_run if pace else None
        )
        self.is_running = False

    def start(self):
        """Start playing until the player quits."""
        self.out("=" * 40)
        self.out("   TicTacToe - You are X, computer is O")
        self.out(f"   Difficulty: {self.controller.difficulty.value}")
        self.out("=" * 40)
        self.out(HELP_TEXT)
        self.out("")
        self.out(self.controller.game_state.render(show_indices=True))

        self.is_running = True
        while self.is_running:
            if self.controller.state == ControllerState.GAME_OVER:
                self._reset_after_delay()
                continue

            try:
                command = self.input_func("\nYour move: ")
            except EOFError:
                self.is_running = False
                break

            self.handle_command(command)

    def handle_command(self, command: str) -> None:
        """Run one line typed by the player."""
        command = command.strip().lower()

        if not command:
            return

        if command in ("q", "quit", "exit"):
            self.out("Game quit by user.")
            self.is_running = False
        elif command in ("r", "reset"):
            self.controller.reset()
            self.out(self.controller.game_state.render(show_indices=True))
        elif command in {d.value for d in Difficulty}:
            self.controller.difficulty = Difficulty.from_name(command)
            self.out(f"Difficulty set to: {command}")
        elif command.isdigit():
            result = self.controller.submit_human_move(int(command))
            if not result.is_valid:
                self.out(f"Ignored: {result.error_message}")
        else:
            self.out(HELP_TEXT)

    def _reset_after_delay(self):
        """Leave the result on screen for a moment, then start over."""
        if self.pace:
            self.sleep(self.config.RESET_DELAY)
        self.controller.reset()
        self.out(self.controller.game_state.render(show_indices=True))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play TicTacToe against the computer")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY.value,
        help="Computer strength"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random choices of easy and medium"
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the pauses before the computer's move and after a game"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging from the game engine"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = GameConfig(
        DEFAULT_DIFFICULTY=Difficulty.from_name(args.difficulty),
        RANDOM_SEED=args.seed
    )
    game = TicTacToeConsole(config, pace=not args.no_delay)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
