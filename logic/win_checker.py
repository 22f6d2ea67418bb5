"""
Win checker for TicTacToe.
Checks if a player has won or if the game is a draw.
"""

from typing import Optional, List, Sequence, Tuple
from .game_state import Cell, GameState, Line, Outcome, Player


# All possible winning lines, in scan order
WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 marks of the same player in a row
    (horizontally, vertically, or diagonally).

    Every check is pure over the board it is given. Lines are scanned
    in WINNING_LINES order and the first match wins.
    """

    WINNING_LINES = WINNING_LINES

    def find_win(self, board: Sequence[Cell]) -> Optional[Tuple[Player, Line]]:
        """
        Find the first completed line.

        Args:
            board: The 9 cells of the board.

        Returns:
            (winner, line), or None if no line is complete.
        """
        for line in self.WINNING_LINES:
            a, b, c = line
            if board[a] is not None and board[a] == board[b] == board[c]:
                return board[a], line
        return None

    def check_winner(self, board: Sequence[Cell]) -> Optional[Player]:
        """Return the winning Player, or None if no winner yet."""
        found = self.find_win(board)
        return found[0] if found else None

    def get_winning_line(self, board: Sequence[Cell]) -> Optional[Line]:
        """Return the winning line, or None."""
        found = self.find_win(board)
        return found[1] if found else None

    def get_empty_cells(self, board: Sequence[Cell]) -> List[int]:
        """Indices of the empty cells, in board order."""
        return [index for index, cell in enumerate(board) if cell is None]

    def is_full(self, board: Sequence[Cell]) -> bool:
        return all(cell is not None for cell in board)

    def is_terminal(self, board: Sequence[Cell]) -> bool:
        """True if someone has won or no cell is left."""
        return self.find_win(board) is not None or self.is_full(board)

    def check_draw(self, board: Sequence[Cell]) -> bool:
        """
        Check if the game is a draw.

        A draw occurs when all cells are filled AND there is no winner.
        """
        return self.is_full(board) and self.find_win(board) is None

    def evaluate(self, board: Sequence[Cell]) -> Outcome:
        """Classify the board as a win, a draw, or still in progress."""
        found = self.find_win(board)
        if found is not None:
            return Outcome.win(*found)
        if self.is_full(board):
            return Outcome.draw()
        return Outcome.in_progress()

    def update_game_state(self, game_state: GameState) -> GameState:
        """
        Update the game state with winner/draw information.

        Args:
            game_state: The game state to update.

        Returns:
            Updated game state.
        """
        game_state.outcome = self.evaluate(game_state.board)
        return game_state
