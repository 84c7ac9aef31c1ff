"""
Integration settings and sync API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from packtrack.api.deps import get_current_owner, get_sync_registry
from packtrack.schemas.integration import IntegrationOverview, IntegrationResponse, SyncStatus
from packtrack.services.errors import SyncAlreadyRunning
from packtrack.services.integration_sync import SyncRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=IntegrationOverview)
async def list_integrations(
    owner_id: str = Depends(get_current_owner),
    registry: SyncRegistry = Depends(get_sync_registry)
):
    """Connected carriers and marketplaces, with the latest sync state."""
    integration_settings = registry.settings_for(owner_id)
    integrations = integration_settings.to_response()
    return IntegrationOverview(
        integrations=integrations,
        active_count=sum(1 for i in integrations if i.active),
        last_sync=integration_settings.last_sync,
        sync=registry.status(owner_id),
    )


@router.post("/{integration_id}/toggle", response_model=IntegrationResponse)
async def toggle_integration(
    integration_id: str,
    owner_id: str = Depends(get_current_owner),
    registry: SyncRegistry = Depends(get_sync_registry)
):
    try:
        source = registry.settings_for(owner_id).toggle(integration_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info(f"Integration {integration_id} {'enabled' if source.active else 'disabled'} for owner {owner_id}")
    return IntegrationResponse(
        id=source.id,
        name=source.name,
        category=source.category,
        active=source.active,
        connected_since=source.connected_since,
    )


@router.post("/sync", response_model=SyncStatus, status_code=status.HTTP_202_ACCEPTED)
async def start_sync(
    wait: bool = False,
    owner_id: str = Depends(get_current_owner),
    registry: SyncRegistry = Depends(get_sync_registry)
):
    """
    Start a sync run for the signed-in owner.

    The run continues in the background; poll GET /sync for its progress.
    With wait=true the response is sent once the run has finished.
    """
    try:
        workflow = registry.start(owner_id)
    except SyncAlreadyRunning as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if wait:
        await workflow.task
        if workflow.state == "failed":
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Sync failed: {workflow.error}"
            )
    return workflow.status()


@router.get("/sync", response_model=SyncStatus)
async def get_sync_status(
    owner_id: str = Depends(get_current_owner),
    registry: SyncRegistry = Depends(get_sync_registry)
):
    return registry.status(owner_id)


@router.delete("/sync", response_model=SyncStatus)
async def cancel_sync(
    owner_id: str = Depends(get_current_owner),
    registry: SyncRegistry = Depends(get_sync_registry)
):
    """Cancel the running sync while it is still scanning; an import in progress always completes."""
    if not registry.cancel(owner_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No sync to cancel"
        )
    return registry.status(owner_id)
