"""
Working list of program item drafts, edited before a program is saved.

Drafts carry no id; ids are assigned when the save orchestrator inserts the
batch. Ordering by (day_no, sequence_no) is only applied for display, the
working list itself keeps insertion order.
"""
from collections.abc import Iterable

from app.core.exceptions import ValidationError
from app.schemas.program import ProgramItemDraft


def validate_item(draft: ProgramItemDraft, program_duration: int, position: int | None = None) -> None:
    """Raise ValidationError unless the draft can be scheduled in the program.

    Args:
        draft: Item draft to check
        program_duration: Program length in days, bounds ``draft.day_no``
        position: Index of the draft in its list, echoed in error details
    """
    details = {} if position is None else {"position": position}

    if not draft.asset_id:
        raise ValidationError(
            "asset_id", "select a session or service", {"field": "asset_id", **details}
        )

    if draft.day_no < 1 or draft.day_no > program_duration:
        raise ValidationError(
            "day_no",
            f"day number out of range, must be between 1 and {program_duration}",
            {
                "field": "day_no",
                "day_no": draft.day_no,
                "program_duration": program_duration,
                **details,
            },
        )

    if not draft.title.strip():
        raise ValidationError("title", "title is required", {"field": "title", **details})


class ItemDraftBuilder:
    """In-memory item list for one program, bound to its duration."""

    def __init__(self, program_duration: int, items: Iterable[ProgramItemDraft] = ()):
        self.program_duration = program_duration
        self._items: list[ProgramItemDraft] = list(items)

    @classmethod
    def from_items(cls, items: Iterable, program_duration: int) -> "ItemDraftBuilder":
        """Seed a builder from persisted items (or anything with draft attributes)."""
        return cls(program_duration, [ProgramItemDraft.model_validate(item) for item in items])

    @property
    def items(self) -> list[ProgramItemDraft]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def validate_item(self, draft: ProgramItemDraft, position: int | None = None) -> None:
        validate_item(draft, self.program_duration, position)

    def add_item(self, draft: ProgramItemDraft) -> int:
        """Append a draft and return its position."""
        position = len(self._items)
        self.validate_item(draft, position)
        self._items.append(draft)
        return position

    def edit_item(self, index: int, draft: ProgramItemDraft) -> None:
        self._check_index(index)
        self.validate_item(draft, index)
        self._items[index] = draft

    def remove_item(self, index: int) -> ProgramItemDraft:
        self._check_index(index)
        return self._items.pop(index)

    def display_rows(self) -> list[tuple[int, ProgramItemDraft]]:
        """(position, draft) pairs sorted by day then sequence.

        Positions index the unsorted working list, so they stay valid for
        edit_item and remove_item.
        """
        return sorted(
            enumerate(self._items),
            key=lambda row: (row[1].day_no, row[1].sequence_no),
        )

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise ValidationError(
                "index",
                f"no item at position {index}",
                {"field": "index", "index": index, "item_count": len(self._items)},
            )
