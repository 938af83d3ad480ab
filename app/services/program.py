"""
ProgramCompositionService - Saves and deletes programs together with their plan and items.

Responsible for:
- Validating program fields and item drafts before any write
- Upserting the program record, its single active plan and the plan's item set
- Deleting a program after its plans and items
- Read helpers for the program list, plan, items and the item builder view

Saves are not transactional: the record, the plan and the items are
committed as three separate steps. A failing step stops the remaining ones
and earlier steps stay applied.
"""
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import get_settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models.enums import PlanStatus, PlanType, ProgramStatus
from app.models.program import Program, ProgramItem, ProgramPlan
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.partner_repository import PartnerRepository
from app.repositories.program_plan_repository import ProgramPlanRepository
from app.repositories.program_repository import ProgramRepository
from app.schemas.program import ProgramItemDraft, ProgramItemView, ProgramPayload
from app.services.asset_resolver import AssetReferenceResolver
from app.services.base import BaseService
from app.services.item_builder import ItemDraftBuilder

logger = get_logger(__name__)
settings = get_settings()

UNKNOWN_PROVIDER = "Unknown"


@dataclass
class ProgramComposition:
    """A program with its active plan and that plan's items."""
    program: Program
    plan: ProgramPlan | None = None
    items: list[ProgramItem] = field(default_factory=list)


@dataclass
class ProgramSummary:
    program: Program
    provider_name: str = UNKNOWN_PROVIDER
    item_count: int = 0


class ProgramCompositionService(BaseService):
    """
    Owns the program record / plan / item triple.

    A program has at most one active plan. The plan type follows the program
    type (sequential programs get a Day plan, modular ones a Step plan). On
    every save carrying items, the item set of the plan is replaced in full.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self._programs = ProgramRepository(session)
        self._plans = ProgramPlanRepository(session)
        self._catalog = CatalogRepository(session)
        self._partners = PartnerRepository(session)
        self._resolver = AssetReferenceResolver(session)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_program(self, payload: ProgramPayload) -> None:
        """Check required fields and the price invariant."""
        if not payload.title.strip():
            raise ValidationError("title", "title is required")
        if not payload.short_description.strip():
            raise ValidationError("short_description", "short description is required")
        if not payload.provider_id:
            raise ValidationError("provider_id", "provider is required")
        if payload.duration <= 0:
            raise ValidationError(
                "duration", "duration must be a positive number of days",
                {"field": "duration", "duration": payload.duration},
            )
        if payload.base_price < 0:
            raise ValidationError(
                "base_price", "base price must not be negative",
                {"field": "base_price", "base_price": payload.base_price},
            )
        if payload.offer_price is not None and payload.offer_price >= payload.base_price:
            raise ValidationError(
                "offer_price",
                "offer price must be less than base price",
                {"field": "offer_price", "offer_price": payload.offer_price, "base_price": payload.base_price},
            )

    async def _check_asset_references(self, items: list[ProgramItemDraft]) -> None:
        """Every draft must point at an existing session or service of its asset type."""
        wanted: dict = {}
        for draft in items:
            wanted.setdefault(draft.asset_type, set()).add(draft.asset_id)

        found: dict = {}
        async with self._persistence_step("load_assets", commit=False):
            for asset_type, asset_ids in wanted.items():
                found[asset_type] = await self._catalog.get_assets(asset_type, asset_ids)

        for position, draft in enumerate(items):
            if draft.asset_id not in found[draft.asset_type]:
                raise ValidationError(
                    "asset_id",
                    f"{draft.asset_type.value} {draft.asset_id} does not exist",
                    {"field": "asset_id", "asset_type": draft.asset_type.value,
                     "asset_id": draft.asset_id, "position": position},
                )

    async def _check_stored_items(self, program_id: str, program_duration: int) -> None:
        """Items kept by a save without drafts must still fit the new duration."""
        plan = await self.get_program_plan(program_id)
        if plan is None:
            return
        async with self._persistence_step("load_program_items", commit=False, program_id=program_id):
            stored = await self._plans.list_items(plan.id)

        kept = ItemDraftBuilder.from_items(stored, program_duration)
        for position, draft in enumerate(kept.items):
            kept.validate_item(draft, position)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    async def save_program(
        self,
        payload: ProgramPayload,
        items: list[ProgramItemDraft],
        program_id: str | None = None,
        acting_user_id: str | None = None,
    ) -> ProgramComposition:
        """
        Persist a program, upsert its active plan and replace the plan's items.

        Args:
            payload: Program fields; every scalar field is written
            items: Working item list; an empty list keeps stored items, which must
                still fit the new duration
            program_id: Id of the program being edited, None to create one
            acting_user_id: Creator of new records, defaults to settings.default_user_id

        Raises:
            ValidationError: Before any write, when fields or items are invalid
            NotFoundError: When program_id is unknown
            PersistenceError: When a write fails; earlier steps stay committed
        """
        acting_user_id = acting_user_id or settings.default_user_id

        existing = None
        if program_id:
            existing = await self._get_or_404(Program, program_id, f"Program {program_id} not found")

        self.validate_program(payload)
        builder = ItemDraftBuilder(payload.duration)
        for draft in items:
            builder.add_item(draft)
        if existing is not None and not len(builder):
            await self._check_stored_items(existing.id, payload.duration)
        await self._check_asset_references(builder.items)

        fields = payload.model_dump()
        async with self._persistence_step("save_program", program_id=program_id):
            if existing is not None:
                program = await self._programs.update(existing.id, fields)
            else:
                program = await self._programs.create(Program(**fields, created_by=acting_user_id))

        async with self._persistence_step("save_program_plan", program_id=program.id):
            plan = await self._upsert_plan(program)

        if len(builder):
            async with self._persistence_step("save_program_items", program_id=program.id, plan_id=plan.id):
                saved_items = await self._plans.replace_items(
                    plan.id,
                    [
                        ProgramItem(**draft.model_dump(), created_by=program.created_by)
                        for draft in builder.items
                    ],
                )
            saved_items = sorted(saved_items, key=lambda item: (item.day_no, item.sequence_no))
        else:
            async with self._persistence_step("load_program_items", commit=False, plan_id=plan.id):
                saved_items = await self._plans.list_items(plan.id)

        logger.info(
            "program_saved",
            program_id=program.id,
            plan_id=plan.id,
            created=existing is None,
            item_count=len(saved_items),
            items_replaced=bool(len(builder)),
        )
        return ProgramComposition(program=program, plan=plan, items=saved_items)

    async def _upsert_plan(self, program: Program) -> ProgramPlan:
        """Update the active plan of the program in place, or create it."""
        existing_plan = await self._plans.get_active_plan(program.id)
        fields = {
            "plan_type": PlanType.for_program_type(program.program_type),
            "sequence_order": 1,
            "title": f"{program.title} - Plan",
            "description": f"Execution plan for {program.title}",
            "status": PlanStatus.ACTIVE,
        }
        if existing_plan is not None:
            return await self._plans.update_plan(existing_plan, fields)

        return await self._plans.create_plan(
            ProgramPlan(program_id=program.id, created_by=program.created_by, **fields)
        )

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_program(self, program_id: str) -> None:
        """Delete the plans and items of a program, then the program.

        The record is only removed once the plan step has committed, so item
        rows never outlive their program.
        """
        await self._get_or_404(Program, program_id, f"Program {program_id} not found")

        async with self._persistence_step("delete_program_plan", program_id=program_id):
            removed_plans = await self._plans.delete_plans_for_program(program_id)

        async with self._persistence_step("delete_program", program_id=program_id):
            await self._programs.delete(program_id)

        logger.info("program_deleted", program_id=program_id, removed_plans=removed_plans)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_program(self, program_id: str) -> Program:
        return await self._get_or_404(Program, program_id, f"Program {program_id} not found")

    async def get_program_plan(self, program_id: str) -> ProgramPlan | None:
        async with self._persistence_step("load_program_plan", commit=False, program_id=program_id):
            return await self._plans.get_active_plan(program_id)

    async def get_program_items(self, program_id: str) -> list[ProgramItem]:
        """Items of the active plan ordered by day then sequence; [] without a plan."""
        plan = await self.get_program_plan(program_id)
        if plan is None:
            return []
        async with self._persistence_step("load_program_items", commit=False, program_id=program_id):
            return await self._plans.list_items(plan.id)

    async def get_program_item_count(self, program_id: str) -> int:
        plan = await self.get_program_plan(program_id)
        if plan is None:
            return 0
        async with self._persistence_step("count_program_items", commit=False, program_id=program_id):
            return await self._plans.count_items(plan.id)

    async def get_program_composition(self, program_id: str) -> ProgramComposition:
        program = await self.get_program(program_id)
        plan = await self.get_program_plan(program_id)
        items = []
        if plan is not None:
            async with self._persistence_step("load_program_items", commit=False, program_id=program_id):
                items = await self._plans.list_items(plan.id)
        return ProgramComposition(program=program, plan=plan, items=items)

    async def list_programs(
        self, provider_id: str | None = None, status: ProgramStatus | None = None
    ) -> list[ProgramSummary]:
        """All programs, newest first, with provider name and item count."""
        filter = {}
        if provider_id:
            filter["provider_id"] = provider_id
        if status:
            filter["status"] = status

        async with self._persistence_step("list_programs", commit=False):
            programs = await self._programs.list(filter)
            provider_names = await self._partners.names_by_id({p.provider_id for p in programs})
            item_counts = await self._plans.count_items_by_program([p.id for p in programs])

        return [
            ProgramSummary(
                program=program,
                provider_name=provider_names.get(program.provider_id, UNKNOWN_PROVIDER),
                item_count=item_counts.get(program.id, 0),
            )
            for program in programs
        ]

    async def get_builder_view(self, program_id: str) -> list[ProgramItemView]:
        """Stored items as builder rows, sorted for display and enriched with asset details."""
        composition = await self.get_program_composition(program_id)
        builder = ItemDraftBuilder.from_items(composition.items, composition.program.duration)
        assets = await self._resolver.resolve_many(builder.items)

        return [
            ProgramItemView(
                position=position,
                item=draft,
                asset=assets.get((draft.asset_type, draft.asset_id)),
            )
            for position, draft in builder.display_rows()
        ]
