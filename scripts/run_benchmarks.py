#!/usr/bin/env python3
from __future__ import annotations

import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from tictactoe_engine.board import Board, Position, Token
from tictactoe_engine.optimal import OptimalPlayer
from tictactoe_engine.simulation import SimulationArgs, run_simulation
from tictactoe_engine.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    games: int = 100
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    cfg = Config()
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats, "games": cfg.games})
        # X in the center, O to move: the deepest search the center shortcut allows
        board = Board()
        board.add_move(Token.X, Position(1, 1))
        turn_times: List[float] = []
        sim_times: List[float] = []
        for s in range(cfg.repeats):
            t0 = time.perf_counter()
            OptimalPlayer().take_turn(board)
            t1 = time.perf_counter()
            turn_times.append(t1 - t0)
            t2 = time.perf_counter()
            run_simulation(SimulationArgs(games=cfg.games, player_x="optimal", player_o="random", seed=s))
            t3 = time.perf_counter()
            sim_times.append(t3 - t2)
        m_turn, h_turn = ci95(turn_times)
        m_sim, h_sim = ci95(sim_times)
        log_metrics({
            "optimal_turn2_mean_s": m_turn,
            "optimal_turn2_ci95_half_s": h_turn,
            "simulate_mean_s": m_sim,
            "simulate_ci95_half_s": h_sim,
        })
        print(f"optimal_player turn #2 (cold cache): mean={m_turn:.4f}s ± {h_turn:.4f}s (95% CI)")
        print(f"simulate optimal vs random x{cfg.games}: mean={m_sim:.4f}s ± {h_sim:.4f}s (95% CI)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
