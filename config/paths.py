# config/paths.py
"""
Centralized, cross-platform path management for the Cuckoo tracker.

- Single source of truth for the data root (session journal) and logs root
- Honors these env vars:
    CUCKOO_DATA_ROOT, CUCKOO_LOGS_ROOT
- Sensible OS defaults when env vars are not provided
- Safe directory creation with writeability checks
"""

from __future__ import annotations

import errno
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

JOURNAL_NAME = "sessions.jsonl"


# ---------- OS defaults (used only if env vars not set) ----------

def _platform_default_base() -> Path:
    """
    Returns an OS-specific base directory for user data:
    - Windows: %LOCALAPPDATA%/Cuckoo
    - macOS:   ~/Library/Application Support/Cuckoo
    - Linux:   ~/.local/share/cuckoo
    """
    if sys.platform.startswith("win"):
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base) / "Cuckoo"
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Cuckoo"
    else:
        return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")) / "cuckoo"


def _env_or_default_data_root() -> Path:
    return Path(os.getenv("CUCKOO_DATA_ROOT", _platform_default_base() / "data"))


def _env_or_default_logs_root() -> Path:
    return Path(os.getenv("CUCKOO_LOGS_ROOT", _platform_default_base() / "logs"))


# ---------- Core dataclass ----------

@dataclass(frozen=True)
class Paths:
    """
    Canonical path container.

    Most callers should obtain a cached instance via get_paths().
    """
    data_root: Path
    logs_root: Path

    @staticmethod
    def from_env() -> "Paths":
        return Paths(_env_or_default_data_root(), _env_or_default_logs_root())

    @property
    def journal_path(self) -> Path:
        # JsonlSessionStore appends one line per register/update/remove
        return self.data_root / JOURNAL_NAME

    def ensure_all(self) -> None:
        for p in (self.data_root, self.logs_root):
            p.mkdir(parents=True, exist_ok=True)

    def verify_writeable(self) -> None:
        """
        Raise OSError if the data or logs root is not writeable.
        """
        for p in (self.data_root, self.logs_root):
            try:
                p.mkdir(parents=True, exist_ok=True)
                test = p / ".write_test"
                test.write_text("ok", encoding="utf-8")
                test.unlink(missing_ok=True)
            except OSError as e:
                raise OSError(errno.EACCES, f"Not writeable: {p}") from e


# ---------- Cached access ----------

_paths_singleton: Optional[Paths] = None

def get_paths(force_refresh: bool = False) -> Paths:
    """
    Return a cached Paths instance, creating its directories on first use.
    """
    global _paths_singleton
    if force_refresh or _paths_singleton is None:
        _paths_singleton = Paths.from_env()
        _paths_singleton.ensure_all()
    return _paths_singleton


if __name__ == "__main__":
    p = get_paths(force_refresh=True)
    try:
        p.verify_writeable()
    except OSError as e:
        print(f"[WARN] Writeability check failed: {e}")

    print("Data root: ", p.data_root)
    print("Logs root: ", p.logs_root)
    print("Journal:   ", p.journal_path)
