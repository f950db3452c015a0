"""
Batch simulation: play many independent games between two strategies.

Every game gets its own board; strategies are built once per run and carry no
game state. Per-game records can be exported to CSV and/or Parquet together with
a manifest describing how they were produced.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import random
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .board import Outcome, Token
from .game import Game
from .paths import get_git_commit, get_git_is_dirty
from .strategies import make_player
from .tracking import log_artifact, log_metrics, log_params

SIMULATION_FORMAT_VERSION = "1.0.0"
RECORD_FIELDS = ["game", "player_x", "player_o", "winner", "plies", "moves", "final_board"]


@dataclass
class SimulationArgs:
    games: int = 100
    player_x: str = "random"
    player_o: str = "random"
    seed: Optional[int] = None
    out: Optional[Path] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    cli_argv: Optional[List[str]] = None


@dataclass
class SimulationSummary:
    games: int
    x_wins: int
    o_wins: int
    draws: int
    mean_plies: float
    std_plies: float
    out: Optional[Path] = None

    @property
    def rates(self) -> Dict[str, float]:
        if self.games == 0:
            return {"x_win_rate": 0.0, "o_win_rate": 0.0, "draw_rate": 0.0}
        return {
            "x_win_rate": self.x_wins / self.games,
            "o_win_rate": self.o_wins / self.games,
            "draw_rate": self.draws / self.games,
        }


def _winner_label(game: Game) -> str:
    result = game.result()
    if result.outcome is Outcome.WIN:
        return str(result.winner)
    return "draw"


def play_games(args: SimulationArgs) -> List[Dict[str, Any]]:
    """Play ``args.games`` games and return one record per game."""
    if args.games < 0:
        raise ValueError(f"games must be non-negative, got {args.games}")
    rng = random.Random(args.seed)
    player_x = make_player(args.player_x, rng)
    player_o = make_player(args.player_o, rng)
    records: List[Dict[str, Any]] = []
    for i in range(args.games):
        game = Game(player_x, player_o)
        game.play()
        records.append({
            "game": i,
            "player_x": args.player_x,
            "player_o": args.player_o,
            "winner": _winner_label(game),
            "plies": len(game.moves),
            "moves": " ".join(str(m.position.cell_number) for m in game.moves),
            "final_board": game.board.to_string(),
        })
    return records


def summarize(records: List[Dict[str, Any]]) -> SimulationSummary:
    winners = np.array([r["winner"] for r in records], dtype=object)
    plies = np.array([r["plies"] for r in records], dtype=float)
    return SimulationSummary(
        games=len(records),
        x_wins=int(np.sum(winners == Token.X.value)),
        o_wins=int(np.sum(winners == Token.O.value)),
        draws=int(np.sum(winners == "draw")),
        mean_plies=float(plies.mean()) if plies.size else 0.0,
        std_plies=float(plies.std()) if plies.size else 0.0,
    )


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def write_records(args: SimulationArgs, records: List[Dict[str, Any]], summary: SimulationSummary) -> Path:
    """Write records and ``manifest.json`` under ``args.out``; returns the directory."""
    if args.out is None:
        raise ValueError("SimulationArgs.out is required to write records")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")

    have_parquet = (
        importlib.util.find_spec("pandas") is not None
        and importlib.util.find_spec("pyarrow") is not None
    )
    parquet_msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # nothing is written when only parquet was requested
        raise RuntimeError(parquet_msg)

    args.out.mkdir(parents=True, exist_ok=True)
    csv_path = args.out / "games.csv"
    parquet_path = args.out / "games.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with csv_path.open("w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=RECORD_FIELDS)
            w.writeheader()
            w.writerows(records)
        wrote_csv = True
        logging.info("Wrote %s (%d rows)", csv_path, len(records))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(records, columns=RECORD_FIELDS).to_parquet(parquet_path)
            wrote_parquet = True
            logging.info("Wrote %s (%d rows)", parquet_path, len(records))
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.",
                            parquet_msg)

    files = {
        "games_csv": csv_path if wrote_csv else None,
        "games_parquet": parquet_path if wrote_parquet else None,
    }
    manifest = {
        "format_version": SIMULATION_FORMAT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "games": args.games,
            "player_x": args.player_x,
            "player_o": args.player_o,
            "seed": args.seed,
            "format": fmt,
        },
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "cli_argv": args.cli_argv,
        "summary": {k: v for k, v in asdict(summary).items() if k != "out"},
        "files": {k: str(p) if p else None for k, p in files.items()},
        "checksums": {k: _sha256_file(p) for k, p in files.items() if p is not None},
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote %s", manifest_path)

    log_artifact(manifest_path)
    for p in files.values():
        if p is not None:
            log_artifact(p)
    return args.out


def run_simulation(args: SimulationArgs) -> SimulationSummary:
    logging.info("Simulating %d games: X=%s vs O=%s (seed=%s)",
                 args.games, args.player_x, args.player_o, args.seed)
    log_params({
        "games": args.games,
        "player_x": args.player_x,
        "player_o": args.player_o,
        "seed": args.seed,
    })
    records = play_games(args)
    summary = summarize(records)
    logging.info("X won %d, O won %d, %d draws (mean plies %.2f)",
                 summary.x_wins, summary.o_wins, summary.draws, summary.mean_plies)
    log_metrics({**summary.rates, "mean_plies": summary.mean_plies, "std_plies": summary.std_plies})
    if args.out is not None:
        summary.out = write_records(args, records, summary)
    return summary
