from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import yaml

def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

@dataclass(frozen=True)
class LoadedConfig:
    seed: Dict[str, Any]
    settings: Dict[str, Any]

def load_all(
    seed_path: str | Path = "config/ledger.yaml",
    settings_path: str | Path = "config/settings.yaml",
) -> LoadedConfig:
    settings: Dict[str, Any] = {}
    if Path(settings_path).exists():
        settings = load_yaml(settings_path)
    return LoadedConfig(
        seed=load_yaml(seed_path),
        settings=settings,
    )
