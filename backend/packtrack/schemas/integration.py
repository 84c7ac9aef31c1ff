"""
Integration and sync schemas.
"""
from typing import List, Optional
from packtrack.schemas.shipment import CamelModel


class IntegrationResponse(CamelModel):
    id: str
    name: str
    category: str
    active: bool
    connected_since: Optional[str] = None


class Toast(CamelModel):
    message: str
    kind: str  # "success" | "info"


class SyncSummary(CamelModel):
    imported: int = 0  # added + simulated status updates
    added: int = 0
    skipped: int = 0
    failed: int = 0
    status_updates: int = 0
    sources: List[str] = []
    last_sync: Optional[str] = None
    toast: Optional[Toast] = None


class SyncStatus(CamelModel):
    state: str  # "idle" | "running" | "done" | "cancelled" | "failed"
    phase: Optional[str] = None
    label: Optional[str] = None
    progress: int = 0
    summary: Optional[SyncSummary] = None


class IntegrationOverview(CamelModel):
    integrations: List[IntegrationResponse]
    active_count: int
    last_sync: Optional[str] = None
    sync: SyncStatus
