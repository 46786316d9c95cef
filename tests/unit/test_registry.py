# tests/unit/test_registry.py
import pytest

from config.paths import Paths
from plugins.stores.jsonl.impl import JsonlSessionStore
from plugins.stores.memory.impl import InMemorySessionStore
from sdk.config import AppConfig, load_config
from sdk.registry import REGISTRY, Registry, build_store


def test_default_targets_cover_shipped_stores():
    assert REGISTRY.target("store.memory") == "plugins.stores.memory.impl:InMemorySessionStore"
    assert REGISTRY.target("store.jsonl") == "plugins.stores.jsonl.impl:JsonlSessionStore"


def test_unknown_key_is_used_as_target():
    reg = Registry()
    assert isinstance(reg.create("plugins.stores.memory.impl:InMemorySessionStore"), InMemorySessionStore)


def test_create_missing_module_raises():
    with pytest.raises(ModuleNotFoundError):
        Registry().create("plugins.stores.nope.impl:Store")


def test_config_reads_env(monkeypatch):
    monkeypatch.setenv("CUCKOO_STORE", "store.memory")
    monkeypatch.setenv("CUCKOO_LOG_LEVEL", "DEBUG")
    cfg = load_config()
    assert cfg.store == "store.memory"
    assert cfg.log_level == "DEBUG"
    assert cfg.serialize_per_identifier is True


def test_build_memory_store():
    assert isinstance(build_store(AppConfig(store="store.memory")), InMemorySessionStore)


def test_build_jsonl_store_uses_journal_path(tmp_path):
    paths = Paths(data_root=tmp_path / "data", logs_root=tmp_path / "logs")
    store = build_store(AppConfig(store="store.jsonl", journal_fsync=False), paths)
    assert isinstance(store, JsonlSessionStore)
    assert store.path == paths.journal_path
    assert store.fsync is False


def test_config_can_register_extra_store():
    cfg = AppConfig(store="store.custom", stores={"store.custom": "plugins.stores.memory.impl:InMemorySessionStore"})
    assert isinstance(build_store(cfg), InMemorySessionStore)


def test_resolve_level():
    import logging

    from sdk.log import resolve_level

    assert resolve_level("info") == logging.INFO
    assert resolve_level(15) == 15
    with pytest.raises(ValueError):
        resolve_level("LOUD")
