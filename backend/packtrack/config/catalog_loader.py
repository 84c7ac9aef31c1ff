"""
Utilities for loading the integration catalog configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

CONFIG_PATH = Path(__file__).resolve().parent / "integrations.yaml"


@dataclass(frozen=True)
class IntegrationSource:
    id: str
    name: str
    category: str  # "carrier" | "marketplace"
    active: bool = False
    connected_since: Optional[str] = None


@dataclass(frozen=True)
class SyncPhase:
    key: str
    label: str
    progress: int


@lru_cache()
def load_catalog_config() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return {}
    with open(CONFIG_PATH, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def get_integration_sources() -> List[IntegrationSource]:
    return [
        IntegrationSource(
            id=item["id"],
            name=item["name"],
            category=item.get("category", "carrier"),
            active=bool(item.get("active", False)),
            connected_since=item.get("connected_since"),
        )
        for item in load_catalog_config().get("integrations", [])
    ]


def get_sync_phases() -> List[SyncPhase]:
    phases = [
        SyncPhase(key=item["key"], label=item["label"], progress=int(item["progress"]))
        for item in load_catalog_config().get("sync_phases", [])
    ]
    progress = [p.progress for p in phases]
    if progress and (progress != sorted(progress) or progress[-1] != 100):
        raise ValueError("sync_phases progress must increase and end at 100")
    return phases


def get_demo_source() -> Optional[str]:
    return load_catalog_config().get("demo_source")


def get_carrier_name(carrier: str) -> str:
    return load_catalog_config().get("carriers", {}).get(carrier, carrier)
