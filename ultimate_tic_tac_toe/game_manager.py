from typing import Callable, List, Optional, Tuple
from ultimate_tic_tac_toe.game_board import SuperBoard, Mark, Position
from ultimate_tic_tac_toe.notation import parse_position, format_position


class GameManager:
    def __init__(self, first: Mark = Mark.FIRST, token1: str = "X", token2: str = "O", verbose: int = 0):
        """
        Two-player game on a single SuperBoard.
        :param first: the mark that moves first
        :param token1: token drawn for Mark.FIRST
        :param token2: token drawn for Mark.SECOND
        :param verbose: 0 for no trace, 1 to announce each move, 2 to print the board after each move as well
        """
        self._board = SuperBoard()
        self._next_mark: Mark = Mark(first)
        self._required_board: Optional[Position] = None  # None: any open board
        self._history: List[Tuple[Mark, Position, Position]] = []
        self._token1 = token1
        self._token2 = token2
        self._verbose = verbose
        self._output_fn: Callable[[str], None] = print

    @property
    def board(self) -> SuperBoard:
        return self._board.copy()

    @property
    def next_mark(self) -> Mark:
        return self._next_mark

    @property
    def required_board(self) -> Optional[Position]:
        return self._required_board

    @property
    def history(self) -> List[Tuple[Mark, Position, Position]]:
        return list(self._history)

    @property
    def winner(self) -> Optional[Mark]:
        return self._board.winner

    @property
    def is_draw(self) -> bool:
        return self._board.winner is None and not self.valid_actions

    @property
    def is_terminal(self) -> bool:
        return self._board.winner is not None or not self.valid_actions

    def token(self, mark: Mark) -> str:
        return self._token1 if mark == Mark.FIRST else self._token2

    def board_is_playable(self, board_pos) -> bool:
        """True if the mark to move may target this sub-board right now."""
        board_pos = Position(board_pos)
        if self._board.winner is not None or not self._board.board_is_open(board_pos):
            return False
        return self._required_board is None or board_pos == self._required_board

    @property
    def valid_actions(self) -> List[Tuple[Position, Position]]:
        """
        Return the legal moves for the mark to move.
        :return: a list of (board_position, cell_position), empty once the game is over.
        """
        if self._board.winner is not None:
            return []
        boards = list(Position) if self._required_board is None else [self._required_board]
        return [(board_pos, cell_pos) for board_pos in boards
                for cell_pos in self._board.board(board_pos).valid_actions]

    def take(self, board_pos, cell_pos) -> bool:
        """
        Play the mark to move.
        :return: bool. False if the move breaks a rule, in which case nothing changes.
        """
        board_pos, cell_pos = Position(board_pos), Position(cell_pos)
        if not self.board_is_playable(board_pos):
            return False
        mark = self._next_mark
        if not self._board.place_move(mark, board_pos, cell_pos):
            return False
        self._history.append((mark, board_pos, cell_pos))
        self._next_mark = mark.opponent()
        # The next move goes to the board matching the cell just played, unless that board is closed
        self._required_board = cell_pos if self._board.board_is_open(cell_pos) else None
        if self._verbose >= 1:
            self._output_fn("Player {} took {} {}.".format(
                self.token(mark), format_position(board_pos), format_position(cell_pos)))
            if self._board.board_is_won(board_pos):
                self._output_fn("Player {} claimed board {}.".format(self.token(mark), format_position(board_pos)))
        if self._verbose >= 2:
            self._output_fn(self.as_str())
        return True

    def as_str(self) -> str:
        return self._board.as_str(token1=self._token1, token2=self._token2)

    def play_in_terminal(self, input_fn: Optional[Callable[[str], str]] = None,
                         output_fn: Optional[Callable[[str], None]] = None) -> Optional[Mark]:
        """
        Read-evaluate-print loop until the game is won or no move is left.
        :param input_fn: prompt -> line of user input, defaults to input
        :param output_fn: sink for every line of output, defaults to print
        :return: the winner, None for a draw.
        """
        if input_fn is None:
            input_fn = input
        if output_fn is None:
            output_fn = print
        self._output_fn = output_fn
        selected: Optional[Position] = None
        while not self.is_terminal:
            output_fn("")
            output_fn(self.as_str())
            output_fn("\n{}'s turn\n".format(self.token(self._next_mark)))
            if self._required_board is not None:
                selected = self._required_board
            elif selected is None:
                try:
                    selected = parse_position(input_fn("Enter the board location:\n"))
                except ValueError:
                    output_fn("\nInvalid board location")
                    continue
                if not self.board_is_playable(selected):
                    output_fn("\nInvalid board location")
                    selected = None
                    continue
            try:
                cell = parse_position(input_fn("Enter the {} cell location:\n".format(format_position(selected))))
            except ValueError:
                output_fn("\nInvalid cell location")
                continue
            if not self.take(selected, cell):
                output_fn("\nInvalid move")
                continue
            selected = None

        if self.winner is not None:
            output_fn("\n{} wins!\n".format(self.token(self.winner)))
        else:
            output_fn("\nDraw!\n")
        output_fn(self.as_str())
        return self.winner
