"""
AI players for TicTacToe.
One strategy per difficulty level: random, win-or-block, and Minimax.
"""

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Sequence, List, Tuple
from .game_state import Cell, Player
from .win_checker import WinChecker

LOGGER = logging.getLogger(__name__)

# Leaf scores, from the AI player's point of view
WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


class NoLegalMovesError(RuntimeError):
    """A strategy was asked to move on a board with no empty cell."""


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"        # Random moves
    MEDIUM = "medium"    # Win if possible, else block, else random
    HARD = "hard"        # Full minimax

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """
        Parse a difficulty name such as "easy" or "HARD".

        Raises:
            ValueError: if the name is not a known difficulty.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {name!r} (choose from {choices})") from None


class AIPlayer(ABC):
    """
    Base class for the computer's move selection.

    Strategies never touch the caller's board: they get a read-only
    sequence of cells and return the index of an empty cell.
    """

    def __init__(self, player: Player = Player.O):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (default: O)
        """
        self.player = player
        self.opponent = player.opposite()
        self.win_checker = WinChecker()

    def get_best_move(self, board: Sequence[Cell]) -> int:
        """
        Choose a move for the current position.

        Args:
            board: The 9 cells of the board.

        Returns:
            Index of the chosen empty cell.

        Raises:
            NoLegalMovesError: if the board has no empty cell.
        """
        empty_cells = self.win_checker.get_empty_cells(board)
        if not empty_cells:
            raise NoLegalMovesError("No legal moves available.")

        return self._choose_move(board, empty_cells)

    @abstractmethod
    def _choose_move(self, board: Sequence[Cell], empty_cells: List[int]) -> int:
        """Pick one of empty_cells, which is never empty."""
        raise NotImplementedError


class RandomPlayer(AIPlayer):
    """Easy: picks uniformly among the empty cells."""

    def __init__(
        self,
        player: Player = Player.O,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        super().__init__(player)
        self._rng = rng if rng is not None else random.Random(seed)

    def _choose_move(self, board: Sequence[Cell], empty_cells: List[int]) -> int:
        move = self._rng.choice(empty_cells)
        LOGGER.debug("%s picked random cell %d", self.player.value, move)
        return move


class HeuristicPlayer(AIPlayer):
    """
    Medium: take a win, else block the opponent's win, else play randomly.

    When several lines offer a win (or need a block), the first one in
    WINNING_LINES order is used, so the choice is reproducible.
    """

    def __init__(
        self,
        player: Player = Player.O,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        super().__init__(player)
        self.fallback = RandomPlayer(player, seed=seed, rng=rng)

    def find_completing_cell(self, board: Sequence[Cell], player: Player) -> Optional[int]:
        """
        Find the empty cell that would complete a line for player.

        Returns:
            The index of the missing cell, or None if player has no
            line with two marks and a gap.
        """
        for line in self.win_checker.WINNING_LINES:
            cells = [board[index] for index in line]
            if cells.count(player) == 2 and cells.count(None) == 1:
                return line[cells.index(None)]
        return None

    def _choose_move(self, board: Sequence[Cell], empty_cells: List[int]) -> int:
        move = self.find_completing_cell(board, self.player)
        if move is not None:
            LOGGER.debug("%s takes the win at %d", self.player.value, move)
            return move

        move = self.find_completing_cell(board, self.opponent)
        if move is not None:
            LOGGER.debug("%s blocks %s at %d", self.player.value, self.opponent.value, move)
            return move

        return self.fallback.get_best_move(board)


class MinimaxPlayer(AIPlayer):
    """
    Hard: an AI that plays TicTacToe using the Minimax algorithm.

    The search is exhaustive. A finished game scores +10 when the AI won,
    -10 when it lost and 0 for a draw, with no bonus for winning sooner.
    Moves are tried in board order and a later move only replaces the
    current best when it is strictly better, so the lowest index wins ties
    and the same board always yields the same move.
    """

    def __init__(self, player: Player = Player.O, use_transposition: bool = False):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (default: O)
            use_transposition: Remember the result of every position searched.
                The answer for a position depends only on the position and the
                side to move, so the chosen moves are the same either way.
        """
        super().__init__(player)
        self.use_transposition = use_transposition
        self._ttable: Dict[Tuple[Tuple[Cell, ...], Player], Tuple[int, Optional[int]]] = {}

        # Keep track of how many positions we've evaluated (for debugging)
        self.moves_evaluated = 0

    def _choose_move(self, board: Sequence[Cell], empty_cells: List[int]) -> int:
        self.moves_evaluated = 0

        # Search on a private copy, the caller's board stays untouched
        scratch = list(board)
        score, move = self._minimax(scratch, self.player)

        LOGGER.debug(
            "AI evaluated %d positions. Best move: %s (score: %s)",
            self.moves_evaluated, move, score
        )
        return move

    def score_moves(self, board: Sequence[Cell]) -> Dict[int, int]:
        """
        Score every empty cell as a move for the AI.

        Returns:
            {index: minimax score}, useful for explaining a choice.
        """
        scratch = list(board)
        scores = {}
        for index in self.win_checker.get_empty_cells(scratch):
            scratch[index] = self.player
            try:
                scores[index], _ = self._minimax(scratch, self.opponent)
            finally:
                scratch[index] = None
        return scores

    def _minimax(self, board: List[Cell], to_move: Player) -> Tuple[int, Optional[int]]:
        """
        Minimax over the game tree below board.

        Each candidate mark is placed on board and removed again before the
        next one is tried, so board is unchanged when this returns.

        Args:
            board: Scratch board, mutated and restored during the search.
            to_move: The player whose turn it is on board.

        Returns:
            (score, best index). The index is None on a finished board.
        """
        self.moves_evaluated += 1

        if self.use_transposition:
            key = (tuple(board), to_move)
            cached = self._ttable.get(key)
            if cached is not None:
                return cached

        winner = self.win_checker.check_winner(board)
        empty_cells = self.win_checker.get_empty_cells(board)

        if winner == self.player:
            result = (WIN_SCORE, None)
        elif winner is not None:
            result = (LOSS_SCORE, None)
        elif not empty_cells:
            result = (DRAW_SCORE, None)
        else:
            result = self._search_children(board, to_move, empty_cells)

        if self.use_transposition:
            self._ttable[key] = result
        return result

    def _search_children(
        self,
        board: List[Cell],
        to_move: Player,
        empty_cells: List[int]
    ) -> Tuple[int, int]:
        maximizing = to_move == self.player
        best_score: Optional[int] = None
        best_move = empty_cells[0]

        for index in empty_cells:
            board[index] = to_move
            try:
                score, _ = self._minimax(board, to_move.opposite())
            finally:
                board[index] = None

            if best_score is None:
                better = True
            elif maximizing:
                better = score > best_score
            else:
                better = score < best_score

            if better:
                best_score = score
                best_move = index

        return best_score, best_move


def create_ai_player(
    difficulty: Difficulty,
    player: Player = Player.O,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> AIPlayer:
    """
    Build the strategy for a difficulty level.

    Args:
        difficulty: EASY, MEDIUM or HARD.
        player: Which player the AI controls.
        seed: Seed for the random choices of EASY and MEDIUM.
        rng: Shared random generator, takes precedence over seed.
    """
    if difficulty == Difficulty.EASY:
        return RandomPlayer(player, seed=seed, rng=rng)
    if difficulty == Difficulty.MEDIUM:
        return HeuristicPlayer(player, seed=seed, rng=rng)
    return MinimaxPlayer(player)
