"""
Integration sync workflow.

A run walks a fixed list of phases (connecting, scanning each source,
importing, done), each shown for a fixed delay. The animated phases do no
real work; when they finish the run fetches candidates from the active
sources, skips tracking codes the owner already has, inserts the rest through
the state controller and applies one simulated pickup event.

Only one run per owner may be in flight: the duplicate check before insert is
not atomic, so overlapping runs could import the same tracking code twice.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional

from packtrack.config.catalog_loader import (
    IntegrationSource,
    SyncPhase,
    get_demo_source,
    get_integration_sources,
    get_sync_phases,
)
from packtrack.db.database import settings as app_settings
from packtrack.models.shipment import ShipmentStatus
from packtrack.schemas.integration import IntegrationResponse, SyncStatus, SyncSummary, Toast
from packtrack.services.errors import RemoteError, SyncAlreadyRunning
from packtrack.services.integration_sources import (
    SOURCE_FETCHERS,
    Fetcher,
    fetch_all_integration_shipments,
)
from packtrack.services.shipment_state import ShipmentStateController
from packtrack.services.shipment_store import DEFAULT_LAST_UPDATE, ShipmentStore

logger = logging.getLogger(__name__)

# Simulated webhook: a parcel with this marker waiting at a pickup point gets collected
PICKUP_MARKER = "Nike"


class IntegrationSettings:
    """Per-owner integration toggles, seeded from the catalog defaults."""

    def __init__(self, sources: Optional[List[IntegrationSource]] = None):
        self._sources: Dict[str, IntegrationSource] = {
            s.id: s for s in (sources if sources is not None else get_integration_sources())
        }
        self.last_sync: Optional[str] = None

    def list(self) -> List[IntegrationSource]:
        return list(self._sources.values())

    def get(self, source_id: str) -> IntegrationSource:
        if source_id not in self._sources:
            raise ValueError(f"Integration {source_id} not found")
        return self._sources[source_id]

    def toggle(self, source_id: str) -> IntegrationSource:
        source = self.get(source_id)
        self._sources[source_id] = replace(source, active=not source.active)
        return self._sources[source_id]

    def active_ids(self) -> List[str]:
        return [s.id for s in self._sources.values() if s.active]

    def mark_connected(self, source_ids: List[str]) -> None:
        for source_id in source_ids:
            source = self._sources.get(source_id)
            if source:
                self._sources[source_id] = replace(
                    source, active=True, connected_since=source.connected_since or DEFAULT_LAST_UPDATE
                )

    def to_response(self) -> List[IntegrationResponse]:
        return [
            IntegrationResponse(
                id=s.id,
                name=s.name,
                category=s.category,
                active=s.active,
                connected_since=s.connected_since,
            )
            for s in self._sources.values()
        ]


def build_toast(imported: int, skipped: int) -> Optional[Toast]:
    if imported > 0:
        noun = "parcel" if imported == 1 else "parcels"
        return Toast(message=f"{imported} {noun} imported successfully", kind="success")
    if skipped > 0:
        return Toast(message="All parcels were already in your overview", kind="info")
    return None


class IntegrationSyncWorkflow:
    def __init__(
        self,
        controller: ShipmentStateController,
        integration_settings: IntegrationSettings,
        phases: Optional[List[SyncPhase]] = None,
        phase_delay: Optional[float] = None,
        final_delay: Optional[float] = None,
        latency_scale: Optional[float] = None,
        fetchers: Optional[Dict[str, Fetcher]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.controller = controller
        self.integration_settings = integration_settings
        self.phases = phases if phases is not None else get_sync_phases()
        self.phase_delay = app_settings.sync_phase_delay if phase_delay is None else phase_delay
        self.final_delay = app_settings.sync_final_delay if final_delay is None else final_delay
        self.latency_scale = app_settings.sync_source_latency_scale if latency_scale is None else latency_scale
        self.fetchers = SOURCE_FETCHERS if fetchers is None else fetchers
        self.clock = clock

        self.state = "idle"
        self.phase_index = 0
        self.summary: Optional[SyncSummary] = None
        self.error: Optional[str] = None
        self.task: Optional[asyncio.Task] = None
        self._cancelled = False
        self._importing = False
        self._in_progress = False

    @property
    def is_running(self) -> bool:
        return self.state == "running"

    @property
    def phase(self) -> Optional[SyncPhase]:
        if self.state == "idle" or not self.phases:
            return None
        return self.phases[self.phase_index]

    def status(self) -> SyncStatus:
        phase = self.phase
        return SyncStatus(
            state=self.state,
            phase=phase.key if phase else None,
            label=phase.label if phase else None,
            progress=phase.progress if phase else 0,
            summary=self.summary,
        )

    def cancel(self) -> bool:
        """Stop a run that is still animating. Once importing started the run completes."""
        if not self.is_running or self._importing:
            return False
        self._cancelled = True
        return True

    def _stop_if_cancelled(self) -> bool:
        if self._cancelled:
            self.state = "cancelled"
            logger.info("Sync for owner %s cancelled at phase %s", self.controller.owner_id, self.phase and self.phase.key)
            return True
        return False

    async def run(self) -> Optional[SyncSummary]:
        """Run every phase, then import. Returns None when the run was cancelled."""
        if self._in_progress:
            raise SyncAlreadyRunning(self.controller.owner_id)
        self._in_progress = True
        try:
            return await self._run_phases()
        finally:
            self._in_progress = False
            self._importing = False
            self._cancelled = False

    async def _run_phases(self) -> Optional[SyncSummary]:
        self.state = "running"
        self.phase_index = 0
        self.summary = None
        self.error = None

        # The last phase is "done"; it is entered only after the import
        last_animated = max(len(self.phases) - 2, 0)
        while self.phase_index < last_animated:
            await asyncio.sleep(self.phase_delay)
            if self._stop_if_cancelled():
                return None
            self.phase_index += 1
            logger.debug("Sync phase %s (%d%%)", self.phase.key, self.phase.progress)

        await asyncio.sleep(self.final_delay)
        if self._stop_if_cancelled():
            return None

        self._importing = True
        try:
            self.summary = await self._import()
        except Exception as e:
            self.state = "failed"
            self.error = str(e)
            logger.exception("Sync for owner %s failed", self.controller.owner_id)
            raise
        self.phase_index = len(self.phases) - 1
        self.state = "done"
        return self.summary

    async def _import(self) -> SyncSummary:
        start = time.perf_counter()
        controller = self.controller
        if not controller.is_loaded:
            controller.load()

        active_ids = self.integration_settings.active_ids()
        demo_source = get_demo_source()
        if demo_source and demo_source not in active_ids:
            active_ids.append(demo_source)

        candidates, sources = await fetch_all_integration_shipments(
            active_ids, self.latency_scale, fetchers=self.fetchers
        )

        added = skipped = failed = 0
        for candidate in candidates:
            try:
                exists = controller.store.exists(controller.owner_id, candidate.tracking_code)
            except RemoteError as e:
                logger.error("[PackTrack] Duplicate check failed for %s: %s", candidate.tracking_code, e)
                failed += 1
                continue
            if exists:
                skipped += 1
                continue
            fresh = candidate.model_copy(update={"id": f"{candidate.id}-{int(time.time() * 1000)}"})
            if controller.add(fresh):
                added += 1
            else:
                failed += 1

        status_updates = 1 if self._simulate_pickup() else 0
        imported = added + status_updates
        last_sync = self.clock().strftime("%H:%M")

        controller.refresh()
        self.integration_settings.mark_connected([sid for sid in active_ids if sid in self.fetchers])
        self.integration_settings.last_sync = last_sync

        logger.info(
            "Sync for owner %s: %d added, %d skipped, %d failed, %d status update(s) from %s in %.2fs",
            controller.owner_id,
            added,
            skipped,
            failed,
            status_updates,
            ", ".join(sources) or "no sources",
            time.perf_counter() - start,
        )
        return SyncSummary(
            imported=imported,
            added=added,
            skipped=skipped,
            failed=failed,
            status_updates=status_updates,
            sources=sources,
            last_sync=last_sync,
            toast=build_toast(imported, skipped),
        )

    def _simulate_pickup(self) -> bool:
        for shipment in self.controller.shipments:
            if PICKUP_MARKER in shipment.item_name and shipment.status == ShipmentStatus.READY_FOR_PICKUP:
                return self.controller.update(
                    shipment.id,
                    {"status": ShipmentStatus.PICKED_UP, "last_update": DEFAULT_LAST_UPDATE},
                )
        return False


class SyncRegistry:
    """
    Integration settings and the current sync run of every owner.

    One instance lives on the application state; runs get their own database
    session because they outlive the request that started them.
    """

    def __init__(self, session_factory, **workflow_options):
        self.session_factory = session_factory
        self.workflow_options = workflow_options
        self._settings: Dict[str, IntegrationSettings] = {}
        self._runs: Dict[str, IntegrationSyncWorkflow] = {}

    def settings_for(self, owner_id: str) -> IntegrationSettings:
        if owner_id not in self._settings:
            self._settings[owner_id] = IntegrationSettings()
        return self._settings[owner_id]

    def current(self, owner_id: str) -> Optional[IntegrationSyncWorkflow]:
        return self._runs.get(owner_id)

    def status(self, owner_id: str) -> SyncStatus:
        run = self.current(owner_id)
        return run.status() if run else SyncStatus(state="idle")

    def start(self, owner_id: str) -> IntegrationSyncWorkflow:
        current = self.current(owner_id)
        if current and current.is_running:
            raise SyncAlreadyRunning(owner_id)

        db = self.session_factory()
        controller = ShipmentStateController(ShipmentStore(db), owner_id)
        controller.load()
        workflow = IntegrationSyncWorkflow(controller, self.settings_for(owner_id), **self.workflow_options)
        # Running from now on, so a second start is rejected before the task gets scheduled
        workflow.state = "running"
        self._runs[owner_id] = workflow
        workflow.task = asyncio.create_task(self._run(workflow, db))
        return workflow

    async def _run(self, workflow: IntegrationSyncWorkflow, db) -> Optional[SyncSummary]:
        try:
            return await workflow.run()
        except Exception:
            # Logged and recorded as failed by the workflow; nothing awaits this task
            return None
        finally:
            workflow.controller.close()
            db.close()

    def cancel(self, owner_id: str) -> bool:
        run = self.current(owner_id)
        return run.cancel() if run else False
