"""API routes for the business partner directory."""
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies.services import get_partner_service
from app.models.enums import PartnerType
from app.schemas.partner import PartnerPayload, PartnerResponse
from app.services.partner import PartnerDirectoryService

router = APIRouter()


@router.get("", response_model=list[PartnerResponse])
async def list_partners(
    type: PartnerType | None = Query(None),
    service: PartnerDirectoryService = Depends(get_partner_service),
):
    """Partners ordered by name, optionally of one type."""
    return await service.list_partners(type)


@router.post("", response_model=PartnerResponse, status_code=status.HTTP_201_CREATED)
async def create_partner(
    payload: PartnerPayload,
    service: PartnerDirectoryService = Depends(get_partner_service),
):
    return await service.save_partner(payload)


@router.get("/{partner_id}", response_model=PartnerResponse)
async def get_partner(
    partner_id: str,
    service: PartnerDirectoryService = Depends(get_partner_service),
):
    return await service.get_partner(partner_id)


@router.put("/{partner_id}", response_model=PartnerResponse)
async def update_partner(
    partner_id: str,
    payload: PartnerPayload,
    service: PartnerDirectoryService = Depends(get_partner_service),
):
    return await service.save_partner(payload, partner_id=partner_id)


@router.delete("/{partner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_partner(
    partner_id: str,
    service: PartnerDirectoryService = Depends(get_partner_service),
):
    """Delete a partner. Partners with centers under them are kept (409)."""
    await service.delete_partner(partner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
