"""Service dependencies for API routes."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.services.catalog import CatalogService
from app.services.partner import PartnerDirectoryService
from app.services.program import ProgramCompositionService


async def get_program_service(
    db: AsyncSession = Depends(get_db),
) -> ProgramCompositionService:
    """Dependency that provides a ProgramCompositionService bound to the request session.

    Example:
        ```python
        @router.delete("/{program_id}")
        async def delete_program(
            program_id: str,
            service: ProgramCompositionService = Depends(get_program_service),
        ):
            await service.delete_program(program_id)
        ```
    """
    return ProgramCompositionService(db)


async def get_catalog_service(
    db: AsyncSession = Depends(get_db),
) -> CatalogService:
    return CatalogService(db)


async def get_partner_service(
    db: AsyncSession = Depends(get_db),
) -> PartnerDirectoryService:
    return PartnerDirectoryService(db)
