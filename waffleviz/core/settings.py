from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass
class Settings:
    square_size: float
    gap: float
    num_columns: int
    num_rows: int
    load_timeout: float
    storage_root: Path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    root = Path(os.getenv("WAFFLEVIZ_STORAGE_ROOT", "runs")).resolve()
    return Settings(
        square_size=float(os.getenv("WAFFLEVIZ_SQUARE_SIZE", "25")),
        gap=float(os.getenv("WAFFLEVIZ_GAP", "1")),
        num_columns=int(os.getenv("WAFFLEVIZ_NUM_COLUMNS", "20")),
        num_rows=int(os.getenv("WAFFLEVIZ_NUM_ROWS", "5")),
        load_timeout=float(os.getenv("WAFFLEVIZ_LOAD_TIMEOUT", "30")),
        storage_root=root,
    )
