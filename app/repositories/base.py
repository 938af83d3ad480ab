from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Minimal CRUD contract shared by entity repositories."""

    @abstractmethod
    async def get(self, id: ID) -> T | None: ...

    @abstractmethod
    async def create(self, entity: T) -> T: ...

    @abstractmethod
    async def update(self, id: ID, updates: dict) -> T | None: ...

    @abstractmethod
    async def delete(self, id: ID) -> bool: ...
