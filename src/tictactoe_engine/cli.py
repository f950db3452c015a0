from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Optional

from .board import Board, Token
from .errors import InvalidBoard, TicTacToeError
from .game import Game
from .human import HumanPlayer, choose_token
from .paths import simulations_dir
from .simulation import SimulationArgs, run_simulation
from .strategies import STRATEGY_NAMES, make_player
from .tracking import maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the random strategy")

    p_play = sub.add_parser("play", help="Play a game against the computer")
    p_play.add_argument(
        "--token",
        type=str.upper,
        choices=["X", "O"],
        default=None,
        help="Token to play (prompted for when omitted); X goes first",
    )
    p_play.add_argument(
        "--opponent", choices=STRATEGY_NAMES, default="optimal", help="Computer strategy (default: optimal)"
    )

    p_sim = sub.add_parser("simulate", help="Play many computer-vs-computer games")
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_sim.add_argument("--x", dest="player_x", choices=STRATEGY_NAMES, default="random", help="Strategy for X")
    p_sim.add_argument("--o", dest="player_o", choices=STRATEGY_NAMES, default="random", help="Strategy for O")
    p_sim.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Directory for per-game records (default: $TTT_SIMULATIONS_DIR or data_raw/simulations)",
    )
    p_sim.add_argument("--no-export", action="store_true", help="Only log the summary; write no files")
    p_sim.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_sim.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_sim.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_move = sub.add_parser("move", help="Show the move a strategy picks for a board")
    p_move.add_argument("--board", help="Board string, e.g. XO-/OO-/XX- (omit with --stdin)")
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )
    p_move.add_argument("--strategy", choices=STRATEGY_NAMES, default="optimal", help="Strategy to ask")

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _play(ns: argparse.Namespace, rng: random.Random) -> int:
    token = choose_token() if ns.token is None else Token(ns.token)
    human = HumanPlayer()
    computer = make_player(ns.opponent, rng)
    players = {token: human, token.other: computer}
    game = Game(players[Token.X], players[Token.O])
    result = game.play()
    print(game.board)
    print(f"Result: {result}")
    return 0


def _move(ns: argparse.Namespace, rng: random.Random) -> int:
    import csv as _csv

    player = make_player(ns.strategy, rng)
    if ns.stdin:
        w = _csv.writer(sys.stdout)
        w.writerow(["board", "to_move", "row", "column", "cell"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                board = Board.from_string(raw)
            except TicTacToeError as e:
                logging.debug("skipping %r: %s", raw, e)
                continue
            if board.get_game_result().is_terminal:
                continue
            pos = player.take_turn(board)
            w.writerow([board.to_string(), board.whose_turn(), pos.row, pos.column, pos.cell_number])
        return 0

    if not ns.board:
        logging.error("Provide --board or --stdin.")
        return 2
    board = Board.from_string(ns.board)
    result = board.get_game_result()
    if result.is_terminal:
        logging.error("Board is already finished: %s", result)
        return 2
    pos = player.take_turn(board)
    logging.info(
        "to_move=%s row=%d column=%d cell=%d",
        board.whose_turn(),
        pos.row,
        pos.column,
        pos.cell_number,
    )
    return 0


def _simulate(ns: argparse.Namespace, argv: Optional[list[str]]) -> int:
    if ns.games < 0:
        logging.error("--games must be non-negative: %s", ns.games)
        return 2
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="simulate", log_dir=ns.log_dir):
        summary = run_simulation(SimulationArgs(
            games=ns.games,
            player_x=ns.player_x,
            player_o=ns.player_o,
            seed=ns.seed,
            out=None if ns.no_export else (ns.out or simulations_dir()),
            format=ns.format,
            cli_argv=list(argv) if argv is not None else None,
        ))
    logging.info(
        "games=%d x_wins=%d o_wins=%d draws=%d",
        summary.games,
        summary.x_wins,
        summary.o_wins,
        summary.draws,
    )
    if summary.out is not None:
        logging.info("Exported game records to: %s", summary.out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if ns.version:
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("tictactoe-engine"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    rng = random.Random(ns.seed)
    try:
        if ns.cmd == "play":
            return _play(ns, rng)
        if ns.cmd == "move":
            return _move(ns, rng)
        if ns.cmd == "simulate":
            return _simulate(ns, argv)
    except InvalidBoard as e:
        logging.error("Invalid board string: %s", e)
        return 2
    except TicTacToeError as e:
        logging.error("%s: %s", type(e).__name__, e)
        return 2
    except (EOFError, KeyboardInterrupt):
        logging.error("Input closed, game abandoned.")
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
