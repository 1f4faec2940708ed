from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_SOURCE = "data/dados.csv"


def load_config(path: str | os.PathLike | None = None) -> Dict[str, Any]:
    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    with open(cfg_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def configure_logging(cfg: Dict[str, Any]) -> None:
    log_cfg = cfg.get("logging", {}) or {}
    level = str(log_cfg.get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


__all__ = ["load_config", "configure_logging", "DEFAULT_CONFIG_PATH", "DEFAULT_SOURCE"]
