"""Repositories package."""
from app.repositories.base import Repository
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.partner_repository import PartnerRepository
from app.repositories.program_plan_repository import ProgramPlanRepository
from app.repositories.program_repository import ProgramRepository

__all__ = [
    "Repository",
    "CatalogRepository",
    "PartnerRepository",
    "ProgramPlanRepository",
    "ProgramRepository",
]
