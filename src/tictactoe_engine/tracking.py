"""
Experiment tracking for simulations and benchmarks (optional MLflow backend).

MLflow is imported only when tracking is requested, so the engine itself does
not depend on it. Tracking problems are logged and never stop a simulation.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def _mlflow():
    import mlflow  # type: ignore

    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Open an MLflow run when ``enabled``; yields whether a run is active."""
    if not enabled:
        yield False
        return
    try:
        mlflow = _mlflow()
        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("Tracking disabled, could not start MLflow run: %s: %s", type(e).__name__, e)
        yield False
        return
    with run:
        yield True


def _active() -> bool:
    try:
        return _mlflow().active_run() is not None
    except ImportError:
        return False


def log_params(params: Dict[str, object]) -> None:
    if not _active():
        return
    try:
        _mlflow().log_params(params)
    except Exception as e:
        logging.warning("Failed to log params: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    if not _active():
        return
    try:
        _mlflow().log_metrics(metrics)
    except Exception as e:
        logging.warning("Failed to log metrics: %s", e)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    if not _active():
        return
    try:
        _mlflow().log_artifact(str(path), artifact_path=artifact_path)
    except Exception as e:
        logging.warning("Failed to log artifact %s: %s", path, e)
