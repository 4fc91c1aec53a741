from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)


def _project_root() -> Path:
    env = os.getenv("PAGEFLOWS_ROOT")
    if env:
        return Path(env)
    # In source layout, this file is under <root>/pageflows/core
    return Path(__file__).resolve().parents[2]


def _work_dir() -> Path:
    return _project_root() / "pageflows" / "work"


def ensure_work_dirs() -> dict[str, Path]:
    base = _work_dir()
    tmp = base / "tmp"
    logs = base / "logs"
    shot = logs / "shot"
    for p in (tmp, logs, shot):
        p.mkdir(parents=True, exist_ok=True)
    return {"tmp": tmp, "logs": logs, "shot": shot}


def resolve_config_path(path: str | Path) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    cwd_candidate = Path.cwd() / p
    if cwd_candidate.exists():
        return cwd_candidate
    return _project_root() / p
