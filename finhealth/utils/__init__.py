from __future__ import annotations
from pathlib import Path
import logging
import logging.config
import os

import yaml

from .env_tools import load_env_once

# Small logger so modules can do: from finhealth.utils import log
def get_logger(name: str = "finhealth"):
    logger = logging.getLogger(name)
    if logging.getLogger().handlers:
        return logger
    load_env_once()
    cfg = _find_project_root() / "config" / "logging_config.yaml"
    if cfg.exists():
        with open(cfg, "r") as f:
            logging.config.dictConfig(yaml.safe_load(f))
    else:
        lvl = os.getenv("LOG_LEVEL", "INFO").upper()
        logging.basicConfig(level=getattr(logging, lvl, logging.INFO),
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return logger

def _find_project_root() -> Path:
    # start at this file and walk up looking for a 'config' directory
    here = Path(__file__).resolve()
    for parent in [here.parent] + list(here.parents):
        if (parent / "config" / "config.yaml").exists():
            return parent
    # fallback: assume two levels up (project root)
    return here.parents[2]


log = get_logger()


DEFAULT_CONFIG = {
    "projections": {
        "equity_return": 0.12,
        "debt_return": 0.07,
        "inflation": 0.06,
        "withdrawal_rate": 0.04,
        "default_retirement_age": 60,
    },
    "protection": {
        "ideal_life_cover_multiple": 12,
        "ideal_health_cover": 1_500_000,
        "ideal_emergency_months": 6,
    },
    "fire": {
        "multiple": 25,
        "growth_rate": 0.10,
        "optimised_uplift": 1.35,
    },
}


def load_config(path: str | Path | None = None) -> dict:
    """Load YAML config, backfilling every missing key from DEFAULT_CONFIG.

    Resolution order: explicit ``path``, then ``$FINHEALTH_CONFIG``, then
    ``config/config.yaml`` at the project root. A missing file yields the
    defaults; a malformed file raises ``yaml.YAMLError``.
    """
    load_env_once()
    if path:
        cfg_path = Path(path)
    elif os.getenv("FINHEALTH_CONFIG"):
        cfg_path = Path(os.environ["FINHEALTH_CONFIG"])
    else:
        cfg_path = _find_project_root() / "config" / "config.yaml"

    cfg: dict = {}
    if cfg_path.exists():
        with cfg_path.open("r") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        log.debug("config %s not found; using defaults", cfg_path)

    for section, values in DEFAULT_CONFIG.items():
        cfg.setdefault(section, {})
        for key, default in values.items():
            cfg[section].setdefault(key, default)
    return cfg


__all__ = ["get_logger", "log", "load_config", "DEFAULT_CONFIG"]
