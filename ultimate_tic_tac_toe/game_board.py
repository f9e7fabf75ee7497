from enum import IntEnum
import numpy as np
from typing import Tuple, Optional, List


EMPTY = 0  # Value of an unoccupied slot in numeric snapshots


class Mark(IntEnum):
    FIRST = 1  # The initiator, drawn as X
    SECOND = 2  # The other player, drawn as O

    def opponent(self) -> "Mark":
        return Mark.SECOND if self == Mark.FIRST else Mark.FIRST

    def __str__(self):
        return "X" if self == Mark.FIRST else "O"


class Position(IntEnum):
    """
    One of the 9 slots of a 3x3 grid, row-major.
    Addresses a cell within a sub-board as well as a sub-board within the super-board.
    """
    TOP_LEFT = 0
    TOP = 1
    TOP_RIGHT = 2
    LEFT = 3
    MIDDLE = 4
    RIGHT = 5
    BOTTOM_LEFT = 6
    BOTTOM = 7
    BOTTOM_RIGHT = 8

    @property
    def row(self) -> int:
        return self // 3

    @property
    def column(self) -> int:
        return self % 3

    @classmethod
    def from_coordinate(cls, row: int, column: int) -> "Position":
        if not (row in range(3) and column in range(3)):
            raise ValueError("Invalid coordinate: ({}, {}).".format(row, column))
        return cls(row * 3 + column)

    def __str__(self):
        return self.name.replace("_", " ").title()


# Rows top-to-bottom, columns left-to-right, then both diagonals
WINNING_LINES = np.array([
    (Position.TOP_LEFT, Position.TOP, Position.TOP_RIGHT),
    (Position.LEFT, Position.MIDDLE, Position.RIGHT),
    (Position.BOTTOM_LEFT, Position.BOTTOM, Position.BOTTOM_RIGHT),
    (Position.TOP_LEFT, Position.LEFT, Position.BOTTOM_LEFT),
    (Position.TOP, Position.MIDDLE, Position.BOTTOM),
    (Position.TOP_RIGHT, Position.RIGHT, Position.BOTTOM_RIGHT),
    (Position.TOP_LEFT, Position.MIDDLE, Position.BOTTOM_RIGHT),
    (Position.TOP_RIGHT, Position.MIDDLE, Position.BOTTOM_LEFT),
], dtype=np.intp)


def find_line_winner(outcomes: np.ndarray) -> Optional[Mark]:
    """
    Scan the 8 winning lines over 9 slot outcomes.
    :param outcomes: array of length 9 holding EMPTY or a Mark value for each Position.
    :return: the mark of the first complete line in declaration order, None if there's none.
    """
    candidates = outcomes[WINNING_LINES]
    complete = (candidates[:, 0] != EMPTY) \
        & (candidates[:, 0] == candidates[:, 1]) \
        & (candidates[:, 1] == candidates[:, 2])
    hits = np.flatnonzero(complete)
    if hits.size == 0:
        return None
    return Mark(int(candidates[hits[0], 0]))


def _as_position(value) -> Position:
    try:
        return Position(value)
    except ValueError:
        raise ValueError("Invalid coordinate: {!r}.".format(value)) from None


def _as_mark(value) -> Mark:
    try:
        return Mark(value)
    except ValueError:
        raise ValueError("Invalid input for side: {!r}.".format(value)) from None


class Cell:
    __slots__ = ("_mark",)

    def __init__(self, mark: Optional[Mark] = None):
        self._mark: Optional[Mark] = mark

    def is_empty(self) -> bool:
        return self._mark is None

    @property
    def mark(self) -> Optional[Mark]:
        return self._mark

    def place(self, mark: Mark) -> bool:
        """
        Occupy the cell.
        :return: True if the cell was empty and now holds the mark, False if it was already taken.
        """
        if self._mark is not None:
            return False
        self._mark = mark
        return True

    def label(self, token1="X", token2="O") -> str:
        if self._mark is None:
            return " "
        return token1 if self._mark == Mark.FIRST else token2

    def __eq__(self, other):
        return isinstance(other, Cell) and self._mark == other._mark

    def __repr__(self):
        return "Cell({})".format(self._mark)


class SuperBoard:
    class SubBoard:
        """A standard 3x3 tic-tac-toe board. Frozen as soon as a line is completed."""

        def __init__(self, cells: Optional[Tuple[Cell, ...]] = None, winner: Optional[Mark] = None):
            if cells is None:
                cells = tuple(Cell() for _ in Position)
            assert len(cells) == 9
            self._cells: Tuple[Cell, ...] = cells
            self._winner: Optional[Mark] = winner

        def is_empty(self, pos) -> bool:
            return self._cells[_as_position(pos)].is_empty()

        def is_full(self) -> bool:
            return all(not cell.is_empty() for cell in self._cells)

        def cell(self, pos) -> Optional[Mark]:
            return self._cells[_as_position(pos)].mark

        def place_move(self, mark, pos) -> bool:
            """
            Place a mark on a cell.
            :param mark: Mark.FIRST or Mark.SECOND
            :param pos: Position of the cell
            :return: bool. False if the board is already won or the cell is occupied, in which case
            nothing changes. True otherwise.
            """
            mark, pos = _as_mark(mark), _as_position(pos)
            if self._winner is not None:
                return False
            if not self._cells[pos].place(mark):
                return False
            self._winner = self.find_winner()
            return True

        @property
        def winner(self) -> Optional[Mark]:
            return self._winner

        def find_winner(self) -> Optional[Mark]:
            return find_line_winner(self.marks)

        @property
        def marks(self) -> np.ndarray:
            return np.array([EMPTY if cell.mark is None else int(cell.mark) for cell in self._cells],
                            dtype=np.int32)

        @property
        def valid_actions(self) -> List[Position]:
            """
            Return the positions that still accept a mark.
            :return: a list of Positions, empty once the board is won.
            """
            if self._winner is not None:
                return []
            return [pos for pos in Position if self._cells[pos].is_empty()]

        def copy(self):
            return SuperBoard.SubBoard(cells=tuple(Cell(cell.mark) for cell in self._cells),
                                       winner=self._winner)

        def lines(self, token1="X", token2="O") -> List[str]:
            if self._winner == Mark.FIRST:
                return [pattern.replace("#", token1) for pattern in ("#   #", " # # ", "  #  ", " # # ", "#   #")]
            if self._winner == Mark.SECOND:
                return [pattern.replace("#", token2) for pattern in (" ### ", "#   #", "#   #", "#   #", " ### ")]
            labels = [cell.label(token1, token2) for cell in self._cells]
            lines = []
            for row in range(3):
                if row > 0:
                    lines.append("─┼─┼─")
                lines.append("│".join(labels[row * 3:row * 3 + 3]))
            return lines

        def __eq__(self, other):
            return isinstance(other, SuperBoard.SubBoard) \
                and self._cells == other._cells and self._winner == other._winner

        def __repr__(self):
            return self.marks.reshape(3, 3).__repr__()

    def __init__(self, boards: Optional[Tuple[SubBoard, ...]] = None, winner: Optional[Mark] = None):
        if boards is None:
            boards = tuple(SuperBoard.SubBoard() for _ in Position)
        assert len(boards) == 9
        self._boards: Tuple[SuperBoard.SubBoard, ...] = boards
        self._winner: Optional[Mark] = winner

    def place_move(self, mark, board_pos, cell_pos) -> bool:
        """
        Place a mark on a cell of one sub-board.
        Which sub-board the player is allowed to target is up to the caller.
        :param mark: Mark.FIRST or Mark.SECOND
        :param board_pos: Position of the sub-board
        :param cell_pos: Position of the cell within that sub-board
        :return: bool. The sub-board's verdict: False means nothing changed.
        """
        board = self._boards[_as_position(board_pos)]
        if not board.place_move(mark, cell_pos):
            return False
        if board.winner is not None and self._winner is None:
            self._winner = self.find_winner()
        return True

    @property
    def winner(self) -> Optional[Mark]:
        return self._winner

    def find_winner(self) -> Optional[Mark]:
        return find_line_winner(self.board_winners)

    def board_is_won(self, pos) -> bool:
        return self._boards[_as_position(pos)].winner is not None

    def board_is_full(self, pos) -> bool:
        return self._boards[_as_position(pos)].is_full()

    def board_is_open(self, pos) -> bool:
        """True if the sub-board still accepts marks, i.e. it is neither won nor full."""
        return not (self.board_is_won(pos) or self.board_is_full(pos))

    def board(self, pos) -> SubBoard:
        return self._boards[_as_position(pos)].copy()

    def cell(self, board_pos, cell_pos) -> Optional[Mark]:
        return self._boards[_as_position(board_pos)].cell(cell_pos)

    @property
    def board_winners(self) -> np.ndarray:
        return np.array([EMPTY if board.winner is None else int(board.winner) for board in self._boards],
                        dtype=np.int32)

    @property
    def slots(self) -> np.ndarray:
        """
        Snapshot of all 81 cells laid out as the physical grid.
        :return: a 9x9 int32 array, slots[board_row * 3 + cell_row, board_column * 3 + cell_column].
        """
        slots = np.zeros([9, 9], dtype=np.int32)
        for pos, board in zip(Position, self._boards):
            row, column = pos.row * 3, pos.column * 3
            slots[row:row + 3, column:column + 3] = board.marks.reshape(3, 3)
        return slots

    def copy(self):
        return SuperBoard(boards=tuple(board.copy() for board in self._boards), winner=self._winner)

    def __repr__(self):
        return self.slots.__repr__()

    def as_str(self, token1="X", token2="O"):
        """

        :param token1: token for the initiator
        :param token2: token for the counterpart
        :return: the board drawn with box-drawing characters, one line per row
        """
        spacer = "       ║       ║       "
        lines = []
        for board_row in range(3):
            if board_row > 0:
                lines.append("═══════╬═══════╬═══════")
            lines.append(spacer)
            row_lines = [self._boards[board_row * 3 + column].lines(token1, token2) for column in range(3)]
            for parts in zip(*row_lines):
                lines.append(" {} ║ {} ║ {} ".format(*parts))
            lines.append(spacer)
        return "\n".join(lines)
