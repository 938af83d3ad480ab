"""API routes for program composition."""
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies.services import get_program_service
from app.api.routes.dependencies import get_current_user_id
from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.models.enums import ProgramStatus
from app.schemas.program import (
    ItemCountResponse,
    ItemValidationRequest,
    ItemValidationResponse,
    ProgramDetailResponse,
    ProgramItemView,
    ProgramListEntry,
    ProgramPlanResponse,
    ProgramResponse,
    ProgramSaveRequest,
)
from app.services.item_builder import validate_item
from app.services.program import ProgramComposition, ProgramCompositionService

router = APIRouter()
logger = get_logger(__name__)


def _detail_response(composition: ProgramComposition) -> ProgramDetailResponse:
    return ProgramDetailResponse.model_validate(
        {
            "program": composition.program,
            "plan": composition.plan,
            "items": composition.items,
        },
        from_attributes=True,
    )


@router.get("", response_model=list[ProgramListEntry])
async def list_programs(
    provider_id: str | None = Query(None),
    status: ProgramStatus | None = Query(None),
    service: ProgramCompositionService = Depends(get_program_service),
):
    """List programs, newest first, with provider name and item count."""
    summaries = await service.list_programs(provider_id=provider_id, status=status)
    return [
        ProgramListEntry(
            **ProgramResponse.model_validate(summary.program).model_dump(),
            provider_name=summary.provider_name,
            item_count=summary.item_count,
        )
        for summary in summaries
    ]


@router.post("", response_model=ProgramDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_program(
    request: ProgramSaveRequest,
    service: ProgramCompositionService = Depends(get_program_service),
    user_id: str = Depends(get_current_user_id),
):
    """Create a program with its plan and items."""
    composition = await service.save_program(
        request.program, request.items, acting_user_id=user_id
    )
    return _detail_response(composition)


@router.post("/items/validate", response_model=ItemValidationResponse)
async def validate_program_item(request: ItemValidationRequest):
    """Check one item draft against a program duration without saving it."""
    validate_item(request.item, request.program_duration)
    return ItemValidationResponse(valid=True)


@router.get("/{program_id}", response_model=ProgramDetailResponse)
async def get_program(
    program_id: str,
    service: ProgramCompositionService = Depends(get_program_service),
):
    """Get a program with its active plan and items."""
    return _detail_response(await service.get_program_composition(program_id))


@router.put("/{program_id}", response_model=ProgramDetailResponse)
async def update_program(
    program_id: str,
    request: ProgramSaveRequest,
    service: ProgramCompositionService = Depends(get_program_service),
    user_id: str = Depends(get_current_user_id),
):
    """Save an existing program.

    An empty ``items`` list keeps the stored items.
    """
    composition = await service.save_program(
        request.program, request.items, program_id=program_id, acting_user_id=user_id
    )
    return _detail_response(composition)


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program(
    program_id: str,
    service: ProgramCompositionService = Depends(get_program_service),
    user_id: str = Depends(get_current_user_id),
):
    """Delete a program after its plans and items."""
    await service.delete_program(program_id)
    logger.info("program_delete_requested", program_id=program_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{program_id}/plan", response_model=ProgramPlanResponse)
async def get_program_plan(
    program_id: str,
    service: ProgramCompositionService = Depends(get_program_service),
):
    await service.get_program(program_id)
    plan = await service.get_program_plan(program_id)
    if plan is None:
        raise NotFoundError(
            "ProgramPlan",
            f"Program {program_id} has no active plan",
            {"program_id": program_id},
        )
    return plan


@router.get("/{program_id}/items", response_model=list[ProgramItemView])
async def get_program_items(
    program_id: str,
    service: ProgramCompositionService = Depends(get_program_service),
):
    """Builder rows sorted by day and sequence, with asset details where the asset exists."""
    return await service.get_builder_view(program_id)


@router.get("/{program_id}/items/count", response_model=ItemCountResponse)
async def get_program_item_count(
    program_id: str,
    service: ProgramCompositionService = Depends(get_program_service),
):
    await service.get_program(program_id)
    return ItemCountResponse(
        program_id=program_id,
        item_count=await service.get_program_item_count(program_id),
    )
