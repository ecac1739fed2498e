from __future__ import annotations
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

from app.core import config


def attempt_log_dir() -> Optional[Path]:
    # read at call time so tests can point it at tmp_path
    return Path(config.ATTEMPT_LOG_DIR) if config.ATTEMPT_LOG_DIR else None


def write_event(event: Dict[str, Any]) -> Optional[Path]:
    """
    Append one attempt record to a day-partitioned .jsonl file.
    No-op unless ATTEMPT_LOG_DIR is configured.
    """
    target = attempt_log_dir()
    if target is None:
        return None
    target.mkdir(parents=True, exist_ok=True)
    fp = target / f"{datetime.now().strftime('%Y-%m-%d')}.jsonl"
    with fp.open("a", encoding="utf-8") as fh:
        json.dump(event, fh, ensure_ascii=False)
        fh.write("\n")
    return fp
