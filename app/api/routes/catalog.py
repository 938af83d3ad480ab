"""API routes for the session/service catalogs and the provider list."""
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies.services import get_catalog_service
from app.api.routes.dependencies import get_current_user_id
from app.schemas.catalog import (
    CatalogCounts,
    ProviderSummary,
    ServiceAsset,
    ServicePayload,
    ServiceResponse,
    SessionAsset,
    SessionPayload,
    SessionResponse,
)
from app.services.catalog import CatalogService

router = APIRouter()


@router.get("/sessions", response_model=list[SessionAsset])
async def list_sessions(
    search: str | None = Query(None, description="Case-insensitive title filter"),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.list_sessions(search)


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: SessionPayload,
    service: CatalogService = Depends(get_catalog_service),
    user_id: str = Depends(get_current_user_id),
):
    return await service.save_session(payload, acting_user_id=user_id)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.get_session(session_id)


@router.put("/sessions/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: str,
    payload: SessionPayload,
    service: CatalogService = Depends(get_catalog_service),
):
    """Overwrite a session's editable fields. The creator is kept."""
    return await service.save_session(payload, session_id=session_id)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    await service.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/services", response_model=list[ServiceAsset])
async def list_services(
    search: str | None = Query(None, description="Case-insensitive title filter"),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.list_services(search)


@router.post("/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServicePayload,
    service: CatalogService = Depends(get_catalog_service),
    user_id: str = Depends(get_current_user_id),
):
    return await service.save_service(payload, acting_user_id=user_id)


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.get_service(service_id)


@router.put("/services/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    payload: ServicePayload,
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.save_service(payload, service_id=service_id)


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    await service.delete_service(service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/providers", response_model=list[ProviderSummary])
async def list_providers(
    service: CatalogService = Depends(get_catalog_service),
):
    """Partners of type provider or dual, ordered by name."""
    return await service.list_providers()


@router.get("/counts", response_model=CatalogCounts)
async def get_counts(
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.counts()
