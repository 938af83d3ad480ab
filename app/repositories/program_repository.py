from __future__ import annotations
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.models.program import Program
from app.repositories.base import Repository


class ProgramRepository(Repository[Program, str]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: str) -> Program | None:
        result = await self._session.execute(
            select(Program).where(Program.id == id)
        )
        return result.scalar_one_or_none()

    async def list(self, filter: dict | None = None) -> list[Program]:
        query = select(Program)
        filter = filter or {}

        if 'provider_id' in filter:
            query = query.where(Program.provider_id == filter['provider_id'])

        if 'status' in filter:
            query = query.where(Program.status == filter['status'])

        query = query.order_by(Program.created_at.desc())
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def create(self, entity: Program) -> Program:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, id: str, updates: dict) -> Program | None:
        program = await self.get(id)
        if program:
            for key, value in updates.items():
                setattr(program, key, value)
            await self._session.flush()
        return program

    async def delete(self, id: str) -> bool:
        program = await self.get(id)
        if program:
            await self._session.delete(program)
            await self._session.flush()
            return True
        return False

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Program))
        return result.scalar_one()

