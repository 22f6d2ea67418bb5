"""
Game state management for TicTacToe.
Tracks the board, current player, move history and outcome.
"""

import logging
from enum import Enum
from typing import Optional, List, Sequence, Tuple
from dataclasses import dataclass, field

LOGGER = logging.getLogger(__name__)

# The board is a flat, row-major list of 9 cells
BOARD_SIZE = 3
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


# A cell holds a Player, or None when empty
Cell = Optional[Player]
Line = Tuple[int, int, int]


class OutcomeKind(Enum):
    """Status of a game."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    A WIN carries the winning player and the line that made it, so the
    display can highlight those cells.
    """
    kind: OutcomeKind = OutcomeKind.IN_PROGRESS
    winner: Optional[Player] = None
    winning_line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls()

    @classmethod
    def win(cls, player: Player, line: Line) -> "Outcome":
        return cls(OutcomeKind.WIN, player, tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS

    def describe(self) -> str:
        """Human-readable summary, e.g. 'X wins!'."""
        if self.kind == OutcomeKind.WIN:
            return f"{self.winner.value} wins!"
        if self.kind == OutcomeKind.DRAW:
            return "It's a tie!"
        return "In progress"


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Player          # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Which move this is in the game (0-8)


def index_to_cell(index: int) -> Tuple[int, int]:
    """Convert a board index to (row, col)."""
    return divmod(index, BOARD_SIZE)


def cell_to_index(row: int, col: int) -> int:
    """Convert (row, col) to a board index."""
    return row * BOARD_SIZE + col


def empty_board() -> List[Cell]:
    return [None] * BOARD_CELLS


def parse_board(cells: Sequence[str]) -> List[Cell]:
    """
    Build a board from marks like ["X", "", "O", ...].

    Empty strings, spaces and None all mean an empty cell.

    Raises:
        ValueError: on a wrong length or an unknown mark.
    """
    if len(cells) != BOARD_CELLS:
        raise ValueError(f"A board has {BOARD_CELLS} cells, got {len(cells)}")

    board = []
    for mark in cells:
        if mark is None or not mark.strip():
            board.append(None)
        else:
            board.append(Player(mark.strip().upper()))
    return board


@dataclass
class GameState:
    """
    The complete state of the TicTacToe game.

    Tracks:
    - The 3x3 board (which player holds each cell)
    - Current player
    - Move history
    - Game outcome (in progress, won, draw)
    """

    # Row-major board - None means empty
    board: List[Cell] = field(default_factory=empty_board)

    # Current player's turn (X always starts)
    current_player: Player = Player.X

    # Move history
    moves: List[Move] = field(default_factory=list)

    # Game result, kept up to date by WinChecker.update_game_state
    outcome: Outcome = field(default_factory=Outcome.in_progress)

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def winner(self) -> Optional[Player]:
        return self.outcome.winner

    def make_move(self, index: int) -> bool:
        """
        Place the current player's mark at the given index.

        Args:
            index: Cell index (0-8).

        Returns:
            True if move was successful, False otherwise.
        """
        if self.is_game_over:
            LOGGER.debug("Game is already over, ignoring move at %d", index)
            return False

        if not 0 <= index < BOARD_CELLS:
            LOGGER.debug("Index %d is off the board", index)
            return False

        if self.board[index] is not None:
            LOGGER.debug("Cell %d is already occupied by %s", index, self.board[index].value)
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves)
        ))

        # Winner detection is done by WinChecker, just switch turns here
        self.current_player = self.current_player.opposite()

        return True

    def get_empty_cells(self) -> List[int]:
        """Get the indices of all empty cells, in board order."""
        return [index for index, cell in enumerate(self.board) if cell is None]

    def snapshot(self) -> Tuple[Cell, ...]:
        """Read-only copy of the board."""
        return tuple(self.board)

    def copy(self) -> "GameState":
        """Create a copy of the game state."""
        return GameState(
            board=list(self.board),
            current_player=self.current_player,
            moves=list(self.moves),
            outcome=self.outcome
        )

    def render(self, show_indices: bool = False) -> str:
        """
        Draw the board as text.

        Cells on the winning line are wrapped in brackets. With show_indices,
        empty cells show their index so a player knows what to type.
        """
        highlight = self.outcome.winning_line or ()
        lines = []

        for row in range(BOARD_SIZE):
            parts = []
            for col in range(BOARD_SIZE):
                index = cell_to_index(row, col)
                cell = self.board[index]
                if cell is not None:
                    text = cell.value
                elif show_indices:
                    text = str(index)
                else:
                    text = " "
                parts.append(f"[{text}]" if index in highlight else f" {text} ")
            lines.append("|".join(parts))
            if row < BOARD_SIZE - 1:
                lines.append("---+---+---")

        return "\n".join(lines)
