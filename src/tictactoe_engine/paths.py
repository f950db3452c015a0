"""Locations for simulation output, plus git metadata for manifests.

Environment variables win; otherwise paths resolve under the repository root,
which falls back to the current working directory when installed as a package.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    for cur in [start, *start.parents][:5]:
        if (cur / ".git").exists():
            return cur
    return None


def repo_root() -> Path:
    """Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD."""
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    return git_root if git_root is not None else Path.cwd()


def simulations_dir() -> Path:
    p = os.getenv("TTT_SIMULATIONS_DIR")
    return Path(p) if p else repo_root() / "data_raw" / "simulations"


def _git(*args: str) -> str | None:
    try:
        return subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logging.debug("git %s unavailable: %s", " ".join(args), e)
        return None


def get_git_commit() -> str | None:
    """Current commit hash, or None outside a git checkout."""
    out = _git("rev-parse", "HEAD")
    return out.strip() if out else None


def get_git_is_dirty() -> bool | None:
    """True with uncommitted changes, False if clean, None if unknown."""
    out = _git("status", "--porcelain")
    return None if out is None else len(out.strip()) > 0
