"""
Tests for the AI players (easy, medium and hard).
"""

import random

import pytest

from logic.ai_player import (
    Difficulty,
    HeuristicPlayer,
    MinimaxPlayer,
    NoLegalMovesError,
    RandomPlayer,
    create_ai_player,
)
from logic.game_state import Player, parse_board
from logic.win_checker import WinChecker

FULL_BOARD = parse_board(["X", "O", "X",
                          "X", "O", "O",
                          "O", "X", "X"])


# ==================== DIFFICULTY ====================

def test_difficulty_from_name():
    assert Difficulty.from_name("easy") == Difficulty.EASY
    assert Difficulty.from_name(" MEDIUM ") == Difficulty.MEDIUM
    assert Difficulty.from_name("Hard") == Difficulty.HARD
    with pytest.raises(ValueError):
        Difficulty.from_name("expert")


@pytest.mark.parametrize("difficulty, expected", [
    (Difficulty.EASY, RandomPlayer),
    (Difficulty.MEDIUM, HeuristicPlayer),
    (Difficulty.HARD, MinimaxPlayer),
])
def test_create_ai_player(difficulty, expected):
    ai = create_ai_player(difficulty)
    assert type(ai) is expected
    assert ai.player == Player.O


@pytest.mark.parametrize("ai", [RandomPlayer(), HeuristicPlayer(), MinimaxPlayer()])
def test_full_board_has_no_moves(ai):
    with pytest.raises(NoLegalMovesError):
        ai.get_best_move(FULL_BOARD)


# ==================== EASY ====================

def test_random_player_only_picks_empty_cells():
    board = parse_board(["X", "O", "X", "", "O", "", "X", "", ""])
    ai = RandomPlayer(seed=7)
    picks = {ai.get_best_move(board) for _ in range(200)}
    assert picks == {3, 5, 7, 8}


def test_random_player_is_reproducible_with_seed():
    board = [None] * 9
    first = RandomPlayer(seed=42)
    second = RandomPlayer(seed=42)
    assert [first.get_best_move(board) for _ in range(20)] == \
        [second.get_best_move(board) for _ in range(20)]


def test_random_player_single_empty_cell():
    board = list(FULL_BOARD)
    board[5] = None
    assert RandomPlayer(seed=1).get_best_move(board) == 5


# ==================== MEDIUM ====================

def test_heuristic_completes_own_line():
    board = parse_board(["", "", "", "O", "O", "", "", "", ""])
    assert HeuristicPlayer(seed=0).get_best_move(board) == 5


def test_heuristic_prefers_win_over_block():
    board = parse_board(["X", "X", "",
                         "O", "O", "",
                         "", "", ""])
    assert HeuristicPlayer(seed=0).get_best_move(board) == 5


def test_heuristic_blocks_threat():
    board = parse_board(["X", "X", "",
                         "", "O", "",
                         "", "", ""])
    assert HeuristicPlayer(seed=0).get_best_move(board) == 2


def test_heuristic_blocks_diagonal():
    board = parse_board(["X", "O", "",
                         "", "X", "",
                         "", "", ""])
    assert HeuristicPlayer(seed=0).get_best_move(board) == 8


def test_heuristic_first_line_wins_ties():
    # O can win on row 0 (cell 2) and column 0 (cell 6)
    board = parse_board(["O", "O", "",
                         "O", "X", "",
                         "", "X", "X"])
    assert HeuristicPlayer(seed=0).get_best_move(board) == 2


def test_heuristic_falls_back_to_random():
    board = parse_board(["X", "", "", "", "", "", "", "", ""])
    heuristic = HeuristicPlayer(seed=3)
    reference = RandomPlayer(seed=3)
    for _ in range(10):
        assert heuristic.get_best_move(board) == reference.get_best_move(board)


def test_heuristic_shares_rng():
    rng = random.Random(5)
    ai = HeuristicPlayer(rng=rng)
    assert ai.fallback._rng is rng


def test_heuristic_plays_for_x_too():
    board = parse_board(["X", "", "X", "O", "O", "", "", "", ""])
    assert HeuristicPlayer(Player.X, seed=0).get_best_move(board) == 1


# ==================== HARD ====================

def test_minimax_answers_center_with_first_corner():
    board = parse_board(["", "", "", "", "X", "", "", "", ""])
    assert MinimaxPlayer().get_best_move(board) == 0


def test_minimax_scores_after_center_opening():
    board = parse_board(["", "", "", "", "X", "", "", "", ""])
    scores = MinimaxPlayer().score_moves(board)
    assert {scores[i] for i in (0, 2, 6, 8)} == {0}
    assert {scores[i] for i in (1, 3, 5, 7)} == {-10}


def test_minimax_takes_the_win():
    board = parse_board(["O", "O", "",
                         "X", "X", "",
                         "X", "", ""])
    assert MinimaxPlayer().get_best_move(board) == 2


def test_minimax_blocks():
    board = parse_board(["X", "X", "",
                         "", "O", "",
                         "", "", ""])
    assert MinimaxPlayer().get_best_move(board) == 2


def test_minimax_is_deterministic_and_leaves_board_alone():
    board = parse_board(["X", "", "", "", "", "", "", "", "O"])
    board[5] = Player.X
    before = list(board)

    ai = MinimaxPlayer()
    first = ai.get_best_move(board)
    second = ai.get_best_move(board)

    assert first == second
    assert board == before
    assert ai.moves_evaluated > 0


@pytest.mark.parametrize("cells", [
    ["", "", "", "", "X", "", "", "", ""],
    ["", "X", "", "", "O", "", "", "X", ""],
    ["X", "", "", "", "O", "", "", "", "X"],
    ["X", "O", "", "", "X", "", "", "", ""],
])
def test_transposition_table_does_not_change_choice(cells):
    board = parse_board(cells)
    plain = MinimaxPlayer()
    cached = MinimaxPlayer(use_transposition=True)
    assert plain.get_best_move(board) == cached.get_best_move(board)
    assert plain.score_moves(board) == cached.score_moves(board)


def test_minimax_never_loses():
    """Play every possible X line against the hard AI."""
    checker = WinChecker()
    ai = MinimaxPlayer(use_transposition=True)
    replies = {}
    results = {Player.X: 0, Player.O: 0, None: 0}

    def play_x(board):
        for index in checker.get_empty_cells(board):
            board[index] = Player.X
            try:
                if checker.is_terminal(board):
                    results[checker.check_winner(board)] += 1
                else:
                    play_o(board)
            finally:
                board[index] = None

    def play_o(board):
        key = tuple(board)
        if key not in replies:
            replies[key] = ai.get_best_move(board)
        index = replies[key]
        assert board[index] is None

        board[index] = Player.O
        try:
            if checker.is_terminal(board):
                results[checker.check_winner(board)] += 1
            else:
                play_x(board)
        finally:
            board[index] = None

    play_x([None] * 9)

    assert results[Player.X] == 0
    assert results[Player.O] > 0
    assert results[None] > 0
