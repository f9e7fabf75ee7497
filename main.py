from ultimate_tic_tac_toe import game_manager
from ultimate_tic_tac_toe.game_board import Mark
import configparser
import argparse
import os

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config")


def parse_side(token: str) -> Mark:
    side = token.strip().lower()
    if side in ("x", "1", "first"):
        return Mark.FIRST
    elif side in ("o", "2", "second"):
        return Mark.SECOND
    raise ValueError('Expected either X or O for the first player, got "{}"'.format(token))


def load_settings(config_parser, args=None):
    """
    Merge the [game_config] section with command line overrides.
    :param config_parser: a ConfigParser, possibly without any section
    :param args: parsed arguments, None to use the config alone
    :return: dict of keyword arguments for GameManager
    """
    first = config_parser.get("game_config", "first_player", fallback="X")
    verbose = config_parser.getint("game_config", "verbose", fallback=0)
    if args is not None:
        if args.first is not None:
            first = args.first
        if args.verbose is not None:
            verbose = args.verbose
    return {
        "first": parse_side(first),
        "token1": config_parser.get("game_config", "token_first", fallback="X"),
        "token2": config_parser.get("game_config", "token_second", fallback="O"),
        "verbose": verbose,
    }


def lets_play(settings):
    print("Welcome!")
    print("Locations: nw n ne / w c e / sw s se")
    time_to_say_goodbye = False
    while not time_to_say_goodbye:
        game = game_manager.GameManager(**settings)
        game.play_in_terminal()
        while True:
            restart_request = input("Start another round?[Y/n]").strip().lower()
            if restart_request in ("y", ""):
                print("Let's try again! ")
                break
            elif restart_request == "n":
                time_to_say_goodbye = True
                print("Bye! ")
                break
            else:
                print("Unrecognized input, please try again. ")


def build_arg_parser():
    arg_parser = argparse.ArgumentParser(description="Ultimate Tic-Tac-Toe for two players in a terminal. ")
    arg_parser.add_argument("--config", action="store", type=str, default=DEFAULT_CONFIG_PATH,
                            help="Path of the INI config file. ")
    arg_parser.add_argument("--first", action="store", type=str, default=None,
                            help='Which side moves first, either "X" or "O". ')
    arg_parser.add_argument("--verbose", action="store", type=int, default=None,
                            help="Specify the verbosity level of the move trace. ")
    return arg_parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    config_parser = configparser.ConfigParser()
    config_parser.read(args.config)
    settings = load_settings(config_parser, args)
    try:
        lets_play(settings)
    except (EOFError, KeyboardInterrupt):
        print("\nBye! ")


if __name__ == "__main__":
    main()
