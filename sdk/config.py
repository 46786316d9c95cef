from __future__ import annotations
from pydantic import BaseModel, Field
import os

DEFAULT_STORES = {
    "store.memory": "plugins.stores.memory.impl:InMemorySessionStore",
    "store.jsonl": "plugins.stores.jsonl.impl:JsonlSessionStore",
}

class AppConfig(BaseModel):
    store: str = Field(default_factory=lambda: os.getenv('CUCKOO_STORE', 'store.jsonl'))
    log_level: str = Field(default_factory=lambda: os.getenv('CUCKOO_LOG_LEVEL', 'WARNING'))
    serialize_per_identifier: bool = True
    journal_fsync: bool = True
    stores: dict = Field(default_factory=lambda: dict(DEFAULT_STORES))

def load_config(**overrides) -> AppConfig:
    return AppConfig(**overrides)
