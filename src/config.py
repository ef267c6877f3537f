"""
Runtime configuration, read from the environment (and a .env file if present).

Variables:
    DATABASE_URL              relational store (SQLAlchemy URL)
    INDEX_BACKEND             "chroma" (persistent) or "memory"
    CHROMA_PERSIST_DIRECTORY  on-disk location of the Chroma index
    INDEX_NAME                index / collection name
    MAX_RESULTS               full-text result cap
    SEARCH_STRATEGY           "fulltext" or "relational"
    DEMO_QUERY                query issued by main.py after syncing
    LOG_FILE, VERBOSE         logging
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


INDEX_BACKENDS = ("chroma", "memory")
SEARCH_STRATEGIES = ("fulltext", "relational")


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///data/podcasts.db"
    index_backend: str = "chroma"
    chroma_persist_directory: str = "./data/chroma_db"
    index_name: str = "documents"
    max_results: int = 1000
    search_strategy: str = "fulltext"
    demo_query: str = "vaadin"
    log_file: str = "logs/app.log"
    verbose: bool = False

    def __post_init__(self):
        if self.index_backend not in INDEX_BACKENDS:
            raise ValueError(
                f"INDEX_BACKEND must be one of {INDEX_BACKENDS}, got '{self.index_backend}'"
            )
        if self.search_strategy not in SEARCH_STRATEGIES:
            raise ValueError(
                f"SEARCH_STRATEGY must be one of {SEARCH_STRATEGIES}, got '{self.search_strategy}'"
            )
        if self.max_results <= 0:
            raise ValueError(f"MAX_RESULTS must be positive, got {self.max_results}")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        defaults = cls()
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            index_backend=os.getenv("INDEX_BACKEND", defaults.index_backend).lower(),
            chroma_persist_directory=os.getenv(
                "CHROMA_PERSIST_DIRECTORY", defaults.chroma_persist_directory
            ),
            index_name=os.getenv("INDEX_NAME", defaults.index_name),
            max_results=int(os.getenv("MAX_RESULTS", str(defaults.max_results))),
            search_strategy=os.getenv("SEARCH_STRATEGY", defaults.search_strategy).lower(),
            demo_query=os.getenv("DEMO_QUERY", defaults.demo_query),
            log_file=os.getenv("LOG_FILE", defaults.log_file),
            verbose=_flag(os.getenv("VERBOSE", "false")),
        )
