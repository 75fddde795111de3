from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os
import sys


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    db_path: Path
    logs_dir: Path


@dataclass(frozen=True)
class LedgerSettings:
    enforce_stock_on_sale: bool = False
    low_stock_threshold: int = 5


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "PosLedger") -> AppPaths:
    override = os.environ.get("POSLEDGER_HOME", "").strip()
    if override:
        base = Path(override)
    elif sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    db = base / "ledger.db"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, db_path=db, logs_dir=logs)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> LedgerSettings:
    env = os.environ if environ is None else environ

    enforce = env.get("POSLEDGER_ENFORCE_STOCK", "").strip().lower() in _TRUTHY

    raw_threshold = env.get("POSLEDGER_LOW_STOCK_THRESHOLD", "").strip()
    threshold = LedgerSettings.low_stock_threshold
    if raw_threshold:
        threshold = int(raw_threshold)
        if threshold < 0:
            raise ValueError(f"POSLEDGER_LOW_STOCK_THRESHOLD must be >= 0. Received: {threshold}")

    return LedgerSettings(enforce_stock_on_sale=enforce, low_stock_threshold=threshold)
