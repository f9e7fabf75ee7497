"""Tests for the two-player driver and its terminal loop."""

from ultimate_tic_tac_toe.game_board import Mark, Position
from ultimate_tic_tac_toe.game_manager import GameManager


def scripted(lines):
    """Return an input function that replays the given lines and records the prompts."""
    feed = iter(lines)
    prompts = []

    def input_fn(prompt):
        prompts.append(prompt)
        return next(feed)
    input_fn.prompts = prompts
    return input_fn


def test_first_move_is_free():
    game = GameManager()
    assert game.next_mark == Mark.FIRST
    assert game.required_board is None
    assert len(game.valid_actions) == 81


def test_move_sends_opponent_to_matching_board():
    game = GameManager()
    assert game.take(Position.TOP_LEFT, Position.MIDDLE)
    assert game.next_mark == Mark.SECOND
    assert game.required_board == Position.MIDDLE
    assert all(board_pos == Position.MIDDLE for board_pos, _ in game.valid_actions)
    assert len(game.valid_actions) == 9


def test_move_in_wrong_board_is_rejected():
    game = GameManager()
    game.take(Position.TOP_LEFT, Position.MIDDLE)
    assert not game.take(Position.TOP, Position.MIDDLE)
    assert game.next_mark == Mark.SECOND
    assert game.board.cell(Position.TOP, Position.MIDDLE) is None
    assert len(game.history) == 1


def test_occupied_cell_is_rejected():
    game = GameManager()
    game.take(Position.MIDDLE, Position.MIDDLE)
    assert not game.take(Position.MIDDLE, Position.MIDDLE)
    assert game.next_mark == Mark.SECOND
    assert game.required_board == Position.MIDDLE


def test_won_board_frees_the_next_move():
    game = GameManager()
    # Every X move sends O back to the top-left board, where O builds the bottom row
    moves = [
        (Position.TOP_LEFT, Position.MIDDLE),    # X -> O to middle
        (Position.MIDDLE, Position.TOP_LEFT),    # O -> X to top-left
        (Position.TOP_LEFT, Position.TOP_LEFT),  # X -> O to top-left
        (Position.TOP_LEFT, Position.BOTTOM),    # O -> X to bottom
        (Position.BOTTOM, Position.TOP_LEFT),    # X -> O to top-left
        (Position.TOP_LEFT, Position.LEFT),      # O -> X to left
        (Position.LEFT, Position.TOP_LEFT),      # X -> O to top-left
        (Position.TOP_LEFT, Position.RIGHT),     # O -> X to right
        (Position.RIGHT, Position.TOP_LEFT),     # X -> O to top-left
        (Position.TOP_LEFT, Position.BOTTOM_LEFT),  # O -> X to bottom-left
        (Position.BOTTOM_LEFT, Position.TOP_LEFT),  # X -> O to top-left
        (Position.TOP_LEFT, Position.BOTTOM_RIGHT),  # O -> X to bottom-right
        (Position.BOTTOM_RIGHT, Position.TOP_LEFT),  # X -> O to top-left
    ]
    for board_pos, cell_pos in moves:
        assert game.take(board_pos, cell_pos), (board_pos, cell_pos)
    # O completed the bottom row of the top-left board on its last move
    assert game.board.board_is_won(Position.TOP_LEFT)
    assert game.board.board(Position.TOP_LEFT).winner == Mark.SECOND
    assert game.required_board is None
    assert game.next_mark == Mark.SECOND
    assert all(board_pos != Position.TOP_LEFT for board_pos, _ in game.valid_actions)
    assert not game.take(Position.TOP_LEFT, Position.TOP)


def test_full_board_frees_the_next_move():
    game = GameManager()
    # Fill the middle board without a line: X O X / X O O / O X X
    layout = [Mark.FIRST, Mark.SECOND, Mark.FIRST,
              Mark.FIRST, Mark.SECOND, Mark.SECOND,
              Mark.SECOND, Mark.FIRST, Mark.FIRST]
    board = game._board
    for cell_pos, mark in zip(Position, layout):
        assert board.place_move(mark, Position.MIDDLE, cell_pos)
    assert game.take(Position.TOP, Position.MIDDLE)
    assert game.required_board is None
    assert not game.take(Position.MIDDLE, Position.TOP)


def test_game_won_stops_play():
    game = GameManager()
    board = game._board
    for board_pos in (Position.TOP_LEFT, Position.TOP, Position.TOP_RIGHT):
        for cell_pos in (Position.LEFT, Position.MIDDLE, Position.RIGHT):
            board.place_move(Mark.FIRST, board_pos, cell_pos)
    assert game.winner == Mark.FIRST
    assert game.is_terminal
    assert not game.is_draw
    assert game.valid_actions == []
    assert not game.take(Position.BOTTOM, Position.BOTTOM)


def test_verbose_trace():
    lines = []
    game = GameManager(verbose=1)
    game._output_fn = lines.append
    game.take(Position.TOP_LEFT, Position.MIDDLE)
    assert lines == ["Player X took nw c."]


def test_second_mark_can_start():
    game = GameManager(first=Mark.SECOND, token1="A", token2="B")
    assert game.next_mark == Mark.SECOND
    game.take(Position.MIDDLE, Position.MIDDLE)
    assert game.board.cell(Position.MIDDLE, Position.MIDDLE) == Mark.SECOND
    assert game.history == [(Mark.SECOND, Position.MIDDLE, Position.MIDDLE)]
    assert "B" in game.as_str()


def test_play_in_terminal_until_win():
    game = GameManager()
    board = game._board
    # X already owns the top-left and top boards
    for board_pos in (Position.TOP_LEFT, Position.TOP):
        for cell_pos in (Position.LEFT, Position.MIDDLE, Position.RIGHT):
            board.place_move(Mark.FIRST, board_pos, cell_pos)
    input_fn = scripted([
        "ne", "c",      # X: top-right board, center -> O sent to middle
        "nw",           # O: middle board, top-left -> X sent to top-left (won, so free)
        "ne", "w",      # X: top-right board, left -> O sent to left
        "c",            # O: left board, center -> X sent to middle
        "zz",           # X: bad cell
        "e",            # X: middle board, right -> O sent to right
        "c",            # O: right board, center -> X sent to middle
        "nw",           # X: occupied cell -> invalid move
        "s",            # X: middle board, bottom -> O sent to bottom
        "c",            # O: bottom board, center -> X sent to middle
        "n",            # X: middle board, top -> O sent to top (won, so free)
        "ne",           # O picks the top-right board
        "nw",           # O: top-right board, top-left -> X sent to top-left (won, so free)
        "ne", "e",      # X: top-right board, right -> completes left-center-right row
    ])
    output = []
    winner = game.play_in_terminal(input_fn=input_fn, output_fn=output.append)
    assert winner == Mark.FIRST
    assert "\nInvalid cell location" in output
    assert "\nInvalid move" in output
    assert "\nX wins!\n" in output
    assert game.board.board_is_won(Position.TOP_RIGHT)


def test_play_in_terminal_finished_game():
    game = GameManager()
    board = game._board
    for cell_pos in (Position.TOP_LEFT, Position.TOP, Position.TOP_RIGHT):
        board.place_move(Mark.SECOND, Position.MIDDLE, cell_pos)
    for board_pos in (Position.LEFT, Position.RIGHT):
        for cell_pos in (Position.TOP_LEFT, Position.MIDDLE, Position.BOTTOM_RIGHT):
            board.place_move(Mark.SECOND, board_pos, cell_pos)
    assert game.winner == Mark.SECOND
    output = []
    assert game.play_in_terminal(input_fn=scripted([]), output_fn=output.append) == Mark.SECOND
    assert "\nO wins!\n" in output


def test_play_in_terminal_board_prompt_validation():
    game = GameManager()
    for cell_pos in (Position.TOP_LEFT, Position.TOP, Position.TOP_RIGHT):
        game._board.place_move(Mark.SECOND, Position.MIDDLE, cell_pos)
    input_fn = scripted(["??", "c", "nw", "c"])
    output = []
    try:
        game.play_in_terminal(input_fn=input_fn, output_fn=output.append)
    except StopIteration:
        pass
    assert output.count("\nInvalid board location") == 2
    assert game.history == [(Mark.FIRST, Position.TOP_LEFT, Position.MIDDLE)]
    assert input_fn.prompts[:4] == [
        "Enter the board location:\n",
        "Enter the board location:\n",
        "Enter the board location:\n",
        "Enter the nw cell location:\n",
    ]


def test_draw_when_no_move_is_left():
    game = GameManager()
    layout = [Mark.FIRST, Mark.SECOND, Mark.FIRST,
              Mark.FIRST, Mark.SECOND, Mark.SECOND,
              Mark.SECOND, Mark.FIRST, Mark.FIRST]
    for board_pos in Position:
        for cell_pos, mark in zip(Position, layout):
            game._board.place_move(mark, board_pos, cell_pos)
    assert game.winner is None
    assert game.is_draw
    assert game.is_terminal
    output = []
    assert game.play_in_terminal(input_fn=scripted([]), output_fn=output.append) is None
    assert "\nDraw!\n" in output
