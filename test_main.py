"""
Tests for the console front-end.
"""

from logic.ai_player import AIPlayer, Difficulty
from logic.config import GameConfig
from logic.game_controller import ControllerState, GameController
from logic.game_state import Player

from main import HELP_TEXT, TicTacToeConsole, parse_args


class ScriptedPlayer(AIPlayer):
    def __init__(self, moves):
        super().__init__(Player.O)
        self.moves = list(moves)

    def _choose_move(self, board, empty_cells):
        return self.moves.pop(0)


def make_console(commands, difficulty="hard"):
    lines = []
    feed = iter(commands)

    def read(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    console = TicTacToeConsole(
        GameConfig(DEFAULT_DIFFICULTY=difficulty),
        input_func=read,
        out=lines.append,
        pace=False
    )
    return console, lines


def test_parse_args_defaults():
    args = parse_args([])
    assert args.difficulty == "easy"
    assert args.seed is None
    assert not args.no_delay


def test_parse_args_options():
    args = parse_args(["--difficulty", "hard", "--seed", "3", "--no-delay", "--verbose"])
    assert args.difficulty == "hard"
    assert args.seed == 3
    assert args.no_delay
    assert args.verbose


def test_human_move_gets_an_answer():
    console, lines = make_console(["4", "q"])
    console.start()

    assert console.controller.board[4] == Player.X
    assert console.controller.board[0] == Player.O
    assert "Game quit by user." in lines
    assert not console.is_running


def test_bad_input_is_reported():
    console, lines = make_console(["hello", "9"])
    console.start()

    # Once in the banner, once for "hello"
    assert lines.count(HELP_TEXT) == 2
    assert any(line.startswith("Ignored:") for line in lines)
    assert console.controller.board == (None,) * 9


def test_difficulty_command():
    console, lines = make_console(["medium"], difficulty="easy")
    console.start()

    assert console.controller.difficulty == Difficulty.MEDIUM
    assert "Difficulty set to: medium" in lines


def test_reset_command():
    console, lines = make_console(["4", "r"])
    console.start()

    assert console.controller.board == (None,) * 9
    assert "\nNew game! You are X." in lines


def test_game_over_prints_result_and_starts_over():
    console, lines = make_console(["0", "1", "2"], difficulty="easy")
    console.controller = GameController(
        console.config,
        listener=console.listener,
        players={Difficulty.EASY: ScriptedPlayer([3, 4])}
    )
    console.start()

    assert "\nX wins! (cells 0, 1, 2)" in lines
    assert any(line.startswith("[X]|[X]|[X]") for line in lines)
    assert console.controller.state == ControllerState.AWAITING_HUMAN
    assert console.controller.board == (None,) * 9
