"""
Textual notation for board and cell locations.
Each Position has one compass token, e.g. "nw" for the top-left slot and "c" for the center.
"""
from typing import Dict
from ultimate_tic_tac_toe.game_board import Position


POSITION_TOKENS: Dict[Position, str] = {
    Position.TOP_LEFT: "nw",
    Position.TOP: "n",
    Position.TOP_RIGHT: "ne",
    Position.LEFT: "w",
    Position.MIDDLE: "c",
    Position.RIGHT: "e",
    Position.BOTTOM_LEFT: "sw",
    Position.BOTTOM: "s",
    Position.BOTTOM_RIGHT: "se",
}

TOKEN_POSITIONS: Dict[str, Position] = {token: pos for pos, token in POSITION_TOKENS.items()}

# Spelled-out names accepted on input, e.g. "top left", "top-left", "middle"
_ALIASES: Dict[str, Position] = {pos.name.lower(): pos for pos in Position}


def parse_position(text: str) -> Position:
    key = text.strip().lower()
    if key in TOKEN_POSITIONS:
        return TOKEN_POSITIONS[key]
    key = key.replace("-", "_").replace(" ", "_")
    if key in _ALIASES:
        return _ALIASES[key]
    raise ValueError('Unknown location "{}". Expected one of: {}'.format(
        text.strip(), " ".join(POSITION_TOKENS.values())))


def format_position(pos) -> str:
    return POSITION_TOKENS[Position(pos)]
