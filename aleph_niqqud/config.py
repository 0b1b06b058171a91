"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_DEBOUNCE_SECONDS, DEFAULT_MAX_LEN, DEFAULT_MODEL_FILENAME
from .utils import (
    env_flag,
    parse_float_env,
    parse_int_env,
    parse_optional_int_env,
    resolve_path,
)


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    model_path: str
    repo_id: str
    model_filename: str
    max_len: int
    debounce_seconds: float
    use_gpu: bool = True
    fold_final_forms: bool = False
    prewarm_enabled: bool = False
    torch_num_threads: Optional[int] = None


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"niqqud_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    model_filename = (
        os.getenv("NIQQUD_MODEL_FILENAME", DEFAULT_MODEL_FILENAME).strip()
        or DEFAULT_MODEL_FILENAME
    )
    model_path = resolve_path(
        os.getenv("NIQQUD_MODEL_PATH", f"models/{model_filename}").strip(),
        base_dir,
    )
    repo_id = os.getenv("NIQQUD_REPO_ID", "").strip()
    max_len = parse_int_env("NIQQUD_MAX_LEN", DEFAULT_MAX_LEN, min_value=2, max_value=100000)
    debounce_seconds = parse_float_env(
        "NIQQUD_DEBOUNCE_SECONDS",
        DEFAULT_DEBOUNCE_SECONDS,
        min_value=0.0,
        max_value=10.0,
    )
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        model_path=model_path,
        repo_id=repo_id,
        model_filename=model_filename,
        max_len=max_len,
        debounce_seconds=debounce_seconds,
        use_gpu=env_flag("NIQQUD_USE_GPU", "1"),
        fold_final_forms=env_flag("NIQQUD_FOLD_FINAL_FORMS", "0"),
        prewarm_enabled=env_flag("NIQQUD_PREWARM_ENABLED", "0"),
        torch_num_threads=parse_optional_int_env("TORCH_NUM_THREADS", max_value=512),
    )
