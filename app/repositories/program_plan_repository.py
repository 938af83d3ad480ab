"""Plan and item persistence for program composition."""
from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PlanStatus
from app.models.program import ProgramItem, ProgramPlan


class ProgramPlanRepository:
    """Repository for the plan/item record pair owned by a program."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_active_plan(self, program_id: str) -> ProgramPlan | None:
        """Return the active plan of a program, or None.

        The partial unique index guarantees at most one row matches.
        """
        result = await self._session.execute(
            select(ProgramPlan).where(
                ProgramPlan.program_id == program_id,
                ProgramPlan.status == PlanStatus.ACTIVE,
            )
        )
        return result.scalar_one_or_none()

    async def create_plan(self, plan: ProgramPlan) -> ProgramPlan:
        self._session.add(plan)
        await self._session.flush()
        return plan

    async def update_plan(self, plan: ProgramPlan, updates: dict) -> ProgramPlan:
        for key, value in updates.items():
            setattr(plan, key, value)
        await self._session.flush()
        return plan

    async def list_items(self, plan_id: str) -> list[ProgramItem]:
        result = await self._session.execute(
            select(ProgramItem)
            .where(ProgramItem.plan_id == plan_id)
            .order_by(ProgramItem.day_no, ProgramItem.sequence_no)
        )
        return list(result.scalars().all())

    async def count_items(self, plan_id: str) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(ProgramItem).where(ProgramItem.plan_id == plan_id)
        )
        return result.scalar_one()

    async def count_items_by_program(self, program_ids: list[str]) -> dict[str, int]:
        """Item counts of the active plans of several programs."""
        if not program_ids:
            return {}
        result = await self._session.execute(
            select(ProgramPlan.program_id, func.count(ProgramItem.id))
            .join(ProgramItem, ProgramItem.plan_id == ProgramPlan.id)
            .where(
                ProgramPlan.program_id.in_(program_ids),
                ProgramPlan.status == PlanStatus.ACTIVE,
            )
            .group_by(ProgramPlan.program_id)
        )
        return {program_id: count for program_id, count in result.all()}

    async def replace_items(self, plan_id: str, items: list[ProgramItem]) -> list[ProgramItem]:
        """Delete every item of the plan, then insert the new set in one batch."""
        await self._session.execute(
            delete(ProgramItem).where(ProgramItem.plan_id == plan_id)
        )
        for item in items:
            item.plan_id = plan_id
        self._session.add_all(items)
        await self._session.flush()
        return items

    async def delete_plans_for_program(self, program_id: str) -> int:
        """Delete all plans of a program, active or not, and their items."""
        plan_ids = select(ProgramPlan.id).where(ProgramPlan.program_id == program_id)
        await self._session.execute(
            delete(ProgramItem).where(ProgramItem.plan_id.in_(plan_ids))
        )
        result = await self._session.execute(
            delete(ProgramPlan).where(ProgramPlan.program_id == program_id)
        )
        await self._session.flush()
        return result.rowcount or 0
