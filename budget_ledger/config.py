"""Environment driven settings for the budget ledger."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

STATE_FILENAME = "bp_mobile_v1.json"


class Settings:
    def __init__(
        self,
        data_dir: Path,
        state_file: Path,
        export_dir: Path,
        log_level: str,
    ) -> None:
        self.data_dir = data_dir
        self.state_file = state_file
        self.export_dir = export_dir
        self.log_level = log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    data_dir = Path(os.getenv("BUDGET_LEDGER_DATA_DIR", "./data")).resolve()
    state_file = Path(
        os.getenv("BUDGET_LEDGER_STATE_FILE", data_dir / STATE_FILENAME)
    ).resolve()
    export_dir = Path(
        os.getenv("BUDGET_LEDGER_EXPORT_DIR", data_dir / "exports")
    ).resolve()
    log_level = os.getenv("BUDGET_LEDGER_LOG_LEVEL", "WARNING").upper()
    return Settings(
        data_dir=data_dir,
        state_file=state_file,
        export_dir=export_dir,
        log_level=log_level,
    )
