from __future__ import annotations
import logging
from importlib import import_module
from typing import Optional
from .config import AppConfig, DEFAULT_STORES

logger = logging.getLogger(__name__)

class Registry:
    def __init__(self, targets: Optional[dict[str, str]] = None):
        self._map: dict[str, str] = dict(targets or {})
    def register(self, key: str, target: str) -> None:
        self._map[key] = target
    def targets(self) -> dict[str, str]:
        return dict(self._map)
    def target(self, key: str) -> str:
        return self._map.get(key, key)
    def create(self, key: str, *args, **kwargs):
        target = self.target(key)
        mod_path, _, obj = target.partition(":")
        mod = import_module(mod_path)
        cls = getattr(mod, obj) if obj else mod
        return cls(*args, **kwargs)
REGISTRY = Registry(DEFAULT_STORES)

def build_store(cfg: AppConfig, paths=None, registry: Optional[Registry] = None):
    """Instantiate the session store selected by ``cfg.store``."""
    reg = registry or Registry({**REGISTRY.targets(), **cfg.stores})
    logger.info("using session store %s (%s)", cfg.store, reg.target(cfg.store))
    if cfg.store == "store.jsonl":
        from config.paths import get_paths
        paths = paths or get_paths()
        return reg.create(cfg.store, paths.journal_path, fsync=cfg.journal_fsync)
    return reg.create(cfg.store)
